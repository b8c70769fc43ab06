"""Pydantic schemas for the API, collaborators and stored documents."""

from pairing_ai.schemas.catalog import (
    CatalogCheese,
    CatalogItem,
    CatalogSnapshot,
    CatalogWine,
)
from pairing_ai.schemas.health import ReadinessResponse
from pairing_ai.schemas.pairing import (
    PairingChatRequest,
    PairingChatResponse,
    PairingHistoryItem,
    PairingLogRecord,
)


__all__ = [
    "CatalogCheese",
    "CatalogItem",
    "CatalogSnapshot",
    "CatalogWine",
    "PairingChatRequest",
    "PairingChatResponse",
    "PairingHistoryItem",
    "PairingLogRecord",
    "ReadinessResponse",
]
