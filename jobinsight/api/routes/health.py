"""
Health check endpoints for the application.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from jobinsight.config.logging import get_logger
from jobinsight.config.settings import settings
from jobinsight.domain.value_objects.date_window import utcnow
from jobinsight.infrastructure.monitoring.health_checks import HealthChecker
from jobinsight.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _timestamp() -> str:
    return utcnow().isoformat() + "Z"


def get_health_checker(request: Request) -> HealthChecker:
    return HealthChecker(scheduler=getattr(request.app.state, "scheduler", None))


@router.get("")
async def health_check(request: Request) -> Dict[str, Any]:
    """Component health, including the precomputation scheduler."""
    return await get_health_checker(request).get_overall_health(_timestamp())


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check for Kubernetes."""
    if await get_health_checker(request).check_readiness():
        return {"status": "ready", "timestamp": _timestamp()}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "timestamp": _timestamp()},
    )


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive", "timestamp": _timestamp()}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled"
        )

    try:
        metrics_data = get_metrics()
    except Exception as e:
        logger.error("Failed to generate Prometheus metrics", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate metrics",
        )

    return Response(content=metrics_data, media_type=get_metrics_content_type())
