# =============================================================================
# app/routers/metrics.py - Prometheus Exposition Endpoint
# =============================================================================
# Scraped by Prometheus. Refreshes the active user gauge from the store, then
# serializes the whole registry. If the count fails nothing is serialized.
# =============================================================================

import logging

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from app.dependencies import MetricsDep, UserServiceDep
from app.exceptions import UserDirectoryException

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/metrics", response_class=Response)
def metrics(service: UserServiceDep, registry: MetricsDep):
    """
    Prometheus metrics endpoint.

    Returns text exposition format, or a 500 JSON error if the user count
    cannot be read.
    """
    try:
        registry.set_active_users(service.count_users())
    except UserDirectoryException as e:
        logger.error(f"Failed to refresh metrics: {e.message}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to get metrics", "code": "METRICS_ERROR"},
        )

    return Response(content=registry.render(), media_type=registry.content_type)
