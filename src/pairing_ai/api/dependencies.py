"""FastAPI dependencies for service access.

Components are initialized during application startup and stored in
app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from pairing_ai.core.config import Settings, get_settings


if TYPE_CHECKING:
    from pairing_ai.services.pairing.service import PairingService


async def get_pairing_service(request: Request) -> PairingService:
    """Get the pairing service from app state.

    Raises:
        HTTPException: 503 if the service is not initialized.
    """
    service: PairingService | None = getattr(request.app.state, "pairing_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pairing service not available",
        )
    return service


async def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()
