# =============================================================================
# core/metrics.py - Prometheus Metrics Registry
# =============================================================================
# Holds every metric the service exposes:
# - http_request_duration_seconds: histogram of request latency
# - http_requests_total: counter of completed requests
# - active_users_total: gauge recomputed from the store on every scrape
#
# One RequestMetrics instance is created per application at start-up and
# shared by the metrics middleware and the /metrics endpoint. Each instance
# owns its own CollectorRegistry; nothing is registered globally.
# Metric objects are internally locked, so concurrent observe/inc calls from
# the thread pool never lose updates.
# =============================================================================

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Gauge,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

# Latency buckets in seconds
REQUEST_DURATION_BUCKETS = (0.1, 0.5, 1, 2, 5)

# Labels shared by the request histogram and counter
REQUEST_LABELS = ("method", "route", "status_code")

# Route label for requests that matched no route
UNMATCHED_ROUTE = "unmatched"


class RequestMetrics:
    """
    Process-scoped metrics registry.

    Example:
        metrics = RequestMetrics()
        metrics.observe_request("GET", "/api/users", 200, 0.012)
        metrics.set_active_users(3)
        body = metrics.render()
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, include_default_collectors: bool = True):
        self.registry = CollectorRegistry(auto_describe=True)

        if include_default_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            labelnames=REQUEST_LABELS,
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            labelnames=REQUEST_LABELS,
            registry=self.registry,
        )
        self.active_users = Gauge(
            "active_users_total",
            "Total number of active users",
            registry=self.registry,
        )

    def observe_request(
        self,
        method: str,
        route: str,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        """Record one completed request in both the histogram and the counter."""
        labels = (method.upper(), route, str(status_code))
        self.request_duration.labels(*labels).observe(max(duration_seconds, 0.0))
        self.requests_total.labels(*labels).inc()

    def set_active_users(self, count: int) -> None:
        self.active_users.set(count)

    def render(self) -> bytes:
        """Serialize the whole registry in the Prometheus text format."""
        return generate_latest(self.registry)
