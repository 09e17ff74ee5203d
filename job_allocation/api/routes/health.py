"""
Health check endpoints for the application.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from job_allocation.config.logging import get_logger
from job_allocation.config.settings import settings
from job_allocation.infrastructure.monitoring.health_checks import (
    get_application_health,
    health_checker,
)
from job_allocation.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return await get_application_health()


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """Readiness check for Kubernetes."""
    readiness = await health_checker.check_readiness()

    if not readiness.is_healthy:
        logger.warning("Readiness check failed", checks=readiness.checks)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )

    return {"status": "ready", "timestamp": readiness.timestamp}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled"
        )

    logger.debug("Prometheus metrics requested")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
