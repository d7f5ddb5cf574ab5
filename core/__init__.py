# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: User operations on top of the store adapter
# - metrics.py: Prometheus registry shared by middleware and exporter
# - runtime.py: Process uptime and memory figures
# =============================================================================
