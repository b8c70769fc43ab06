"""Pairing chat and history schemas.

Contains the inbound chat request, the outbound chat response, the audit log
document written once per chat request and its history projection.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Final

from pydantic import BeforeValidator, Field

from pairing_ai.schemas.base import APIRequest, APIResponse, StoredDocument


DEFAULT_LOCALE: Final[str] = "en"
PROMPT_SOURCE: Final[str] = "prompt"


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


IdList = Annotated[list[str], BeforeValidator(_none_as_empty)]


def _none_as_blank(value: Any) -> Any:
    return "" if value is None else value


# Missing and null messages read as an empty message
MessageText = Annotated[str, BeforeValidator(_none_as_blank)]


class PairingChatRequest(APIRequest):
    """Free-text pairing request sent by the BFF."""

    message: MessageText = Field(
        default="",
        description="Free-text user request (may be empty, null or absent)",
        examples=["Recommend me two wines for a cheese board"],
    )
    locale: str | None = Field(
        default=None,
        description="Answer language; defaults to 'en'",
        examples=["en", "es"],
    )
    user_id: str | None = Field(default=None, description="Caller user ID")
    selected_wine_ids: list[str] | None = Field(
        default=None,
        description="Wines the user already picked in the UI",
    )
    selected_cheese_ids: list[str] | None = Field(
        default=None,
        description="Cheeses the user already picked in the UI",
    )

    @property
    def resolved_locale(self) -> str:
        """Locale used for the answer; blank or missing falls back to English."""
        if self.locale and self.locale.strip():
            return self.locale.strip()
        return DEFAULT_LOCALE

    @property
    def has_selected_wine(self) -> bool:
        return bool(self.selected_wine_ids)

    @property
    def has_selected_cheese(self) -> bool:
        return bool(self.selected_cheese_ids)


class PairingChatResponse(APIResponse):
    """Sanitized recommendation returned to the chat UI."""

    answer: str = Field(..., description="Natural-language answer")
    recommended_wine_ids: list[str] = Field(default_factory=list)
    recommended_cheese_ids: list[str] = Field(default_factory=list)


class PairingLogRecord(StoredDocument):
    """Audit document persisted once per chat request.

    ``created_at`` is assigned by the repository at save time; any caller
    supplied value is overwritten.
    """

    user_id: str | None = None
    locale: str | None = DEFAULT_LOCALE
    source: str | None = PROMPT_SOURCE
    message: str | None = None
    selected_wine_ids: list[str] | None = None
    selected_cheese_ids: list[str] | None = None
    answer: str | None = None
    recommended_wine_ids: IdList = Field(default_factory=list)
    recommended_cheese_ids: IdList = Field(default_factory=list)
    created_at: datetime | None = None


class PairingHistoryItem(APIResponse):
    """History projection of a ``PairingLogRecord``."""

    user_id: str | None = None
    locale: str | None = None
    source: str | None = None
    message: str | None = None
    selected_wine_ids: list[str] | None = None
    selected_cheese_ids: list[str] | None = None
    answer: str | None = None
    recommended_wine_ids: IdList = Field(default_factory=list)
    recommended_cheese_ids: IdList = Field(default_factory=list)
    created_at: str | None = Field(
        default=None,
        description="ISO-8601 creation timestamp",
        examples=["2025-03-01T18:42:07.123456+00:00"],
    )

    @classmethod
    def from_record(cls, record: PairingLogRecord) -> PairingHistoryItem:
        """Project a stored record, rendering ``created_at`` as ISO-8601."""
        return cls(
            user_id=record.user_id,
            locale=record.locale,
            source=record.source,
            message=record.message,
            selected_wine_ids=record.selected_wine_ids,
            selected_cheese_ids=record.selected_cheese_ids,
            answer=record.answer,
            recommended_wine_ids=record.recommended_wine_ids,
            recommended_cheese_ids=record.recommended_cheese_ids,
            created_at=record.created_at.isoformat() if record.created_at else None,
        )
