"""Pairing endpoints.

Provides:
- POST /chat for a wine and/or cheese recommendation
- GET /history for a user's most recent recommendations
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from pairing_ai.api.dependencies import get_pairing_service
from pairing_ai.core.exceptions import BadRequestException, ServiceUnavailableException
from pairing_ai.observability.logging import bind_context, get_logger
from pairing_ai.schemas.pairing import (
    PairingChatRequest,
    PairingChatResponse,
    PairingHistoryItem,
)
from pairing_ai.services.audit.exceptions import PairingLogStoreError
from pairing_ai.services.pairing.service import PairingService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["Pairings"])


@router.post(
    "/chat",
    response_model=PairingChatResponse,
    status_code=status.HTTP_200_OK,
    summary="Recommend wines and/or cheeses",
    description=(
        "Answers a free-text pairing request using the in-stock catalog. "
        "Always returns 200; collaborator failures degrade to a fallback answer."
    ),
)
async def chat(
    body: PairingChatRequest,
    service: Annotated[PairingService, Depends(get_pairing_service)],
) -> PairingChatResponse:
    if body.user_id:
        bind_context(user_id=body.user_id)
    return await service.chat(body)


@router.get(
    "/history",
    response_model=list[PairingHistoryItem],
    summary="Pairing history of a user",
    description="Most recent pairing interactions of the user, newest first.",
    responses={
        400: {"description": "Blank userId"},
        503: {"description": "Audit log store unavailable"},
    },
)
async def history(
    user_id: Annotated[str, Query(alias="userId", description="User ID")],
    service: Annotated[PairingService, Depends(get_pairing_service)],
) -> list[PairingHistoryItem]:
    if not user_id.strip():
        msg = "userId must not be blank"
        raise BadRequestException(msg)

    try:
        return await service.history(user_id)
    except PairingLogStoreError as e:
        logger.warning("Pairing history unavailable", user_id=user_id, error=str(e))
        raise ServiceUnavailableException("Pairing history is not available") from e
