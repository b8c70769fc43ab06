"""Recommendation mode and quantity resolution.

Pure functions over the chat request. The resolved values are written into
the prompt as ``MODE`` / ``MAX_WINE_COUNT`` / ``MAX_CHEESE_COUNT`` markers and
enforced again by the sanitizer.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pairing_ai.services.pairing.constants import (
    CHEESE_KEYWORDS,
    DEFAULT_MAX_WINE_CEILING,
    MIN_WINE_COUNT,
    ONLY_CHEESE_PHRASES,
    ONLY_WINE_PHRASES,
    THREE_CHEESES_PHRASES,
    THREE_WINES_PHRASES,
    TWO_CHEESES_PHRASES,
    TWO_WINES_PHRASES,
    WINE_COUNT_PATTERN,
    WINE_KEYWORDS,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from pairing_ai.schemas.pairing import PairingChatRequest


class PairingMode(StrEnum):
    """What the model is allowed to recommend."""

    WINE_ONLY = "WINE_ONLY"
    CHEESE_ONLY = "CHEESE_ONLY"
    PAIRING = "PAIRING"


def _normalized_message(request: PairingChatRequest) -> str:
    return (request.message or "").lower()


def _contains_any(text: str, phrases: Iterable[str]) -> bool:
    return any(phrase in text for phrase in phrases)


def detect_mode(request: PairingChatRequest) -> PairingMode:
    """Resolve the recommendation mode; the first matching rule wins.

    1. A wine selected without a cheese asks for cheeses (and vice versa).
    2. Explicit "only cheese" / "only wine" phrases, cheese checked first.
    3. A message mentioning wine but not cheese (or the reverse).
    4. Anything else is a full pairing.
    """
    if request.has_selected_wine and not request.has_selected_cheese:
        return PairingMode.CHEESE_ONLY
    if request.has_selected_cheese and not request.has_selected_wine:
        return PairingMode.WINE_ONLY

    message = _normalized_message(request)

    if _contains_any(message, ONLY_CHEESE_PHRASES):
        return PairingMode.CHEESE_ONLY
    if _contains_any(message, ONLY_WINE_PHRASES):
        return PairingMode.WINE_ONLY

    mentions_wine = _contains_any(message, WINE_KEYWORDS)
    mentions_cheese = _contains_any(message, CHEESE_KEYWORDS)

    if mentions_wine and not mentions_cheese:
        return PairingMode.WINE_ONLY
    if mentions_cheese and not mentions_wine:
        return PairingMode.CHEESE_ONLY

    return PairingMode.PAIRING


def compute_max_wine_count(
    request: PairingChatRequest,
    mode: PairingMode,
    *,
    ceiling: int = DEFAULT_MAX_WINE_CEILING,
) -> int:
    """Maximum number of wines the model may return.

    An explicit number before "wine(s)" wins and is clamped into
    ``[1, ceiling]``. Otherwise spelled-out quantities are checked, then the
    mode default applies (one wine unless the mode is cheese only).
    """
    message = _normalized_message(request)

    match = WINE_COUNT_PATTERN.search(message)
    if match:
        return max(MIN_WINE_COUNT, min(int(match.group(1)), ceiling))

    if _contains_any(message, TWO_WINES_PHRASES):
        return 2
    if _contains_any(message, THREE_WINES_PHRASES):
        return 3

    return 0 if mode == PairingMode.CHEESE_ONLY else 1


def compute_max_cheese_count(request: PairingChatRequest, mode: PairingMode) -> int:
    """Maximum number of cheeses the model may return.

    Only spelled-out phrases are recognised; there is no numeric extraction
    for cheeses.
    """
    message = _normalized_message(request)

    if _contains_any(message, TWO_CHEESES_PHRASES):
        return 2
    if _contains_any(message, THREE_CHEESES_PHRASES):
        return 3

    return 0 if mode == PairingMode.WINE_ONLY else 1
