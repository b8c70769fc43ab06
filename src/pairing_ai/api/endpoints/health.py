"""Health check endpoints.

Provides liveness and readiness checks for Kubernetes and load balancers.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from pairing_ai.api.dependencies import get_app_settings
from pairing_ai.core.config import Settings
from pairing_ai.schemas.health import ReadinessResponse
from pairing_ai.storage.redis import check_redis_health


router = APIRouter(tags=["health"])

HEALTH_TEXT: Final[str] = "OK - ia-service"


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running.",
)
async def health_check() -> str:
    """Plain-text liveness check; does not check external dependencies."""
    return HEALTH_TEXT


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check reporting the status of external dependencies.",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests.

    Redis only backs the audit log, so an unavailable Redis reports
    ``degraded`` rather than failing the check.
    """
    dependencies = await check_redis_health()
    all_healthy = all(state == "healthy" for state in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
