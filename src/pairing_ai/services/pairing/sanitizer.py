"""Post-processing of the model's completion text.

The model is asked for a single JSON object but nothing guarantees it. This
module turns whatever came back into a bounded recommendation:

- no text at all: canned apology in the user's language
- text that is not the expected JSON object: the text itself, no products
- a parsed object: lists clamped to the resolved maxima and emptied for the
  category the mode excludes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pairing_ai.llm.prompts.pairing import AiPairingResult, PairingPrompt
from pairing_ai.observability.logging import get_logger
from pairing_ai.schemas.pairing import PairingChatResponse
from pairing_ai.services.pairing.constants import FALLBACK_ANSWER_EN, FALLBACK_ANSWER_ES
from pairing_ai.services.pairing.modes import PairingMode


if TYPE_CHECKING:
    from collections.abc import Collection


logger = get_logger(__name__)

_PROMPT = PairingPrompt()


class FallbackReason(StrEnum):
    """Why the recommendation was degraded."""

    NO_COMPLETION = "no_completion"
    UNPARSEABLE = "unparseable"
    MISSING_ANSWER = "missing_answer"


@dataclass(frozen=True)
class SanitizedRecommendation:
    """Final answer and product IDs, shared by the response and the audit log."""

    answer: str
    recommended_wine_ids: list[str] = field(default_factory=list)
    recommended_cheese_ids: list[str] = field(default_factory=list)
    fallback_reason: FallbackReason | None = None

    def to_response(self) -> PairingChatResponse:
        return PairingChatResponse(
            answer=self.answer,
            recommended_wine_ids=list(self.recommended_wine_ids),
            recommended_cheese_ids=list(self.recommended_cheese_ids),
        )


def fallback_answer(locale: str) -> str:
    """Canned apology; Spanish for any ``es*`` locale, English otherwise."""
    return FALLBACK_ANSWER_ES if locale.startswith("es") else FALLBACK_ANSWER_EN


def fallback_result(
    locale: str,
    reason: FallbackReason = FallbackReason.NO_COMPLETION,
) -> SanitizedRecommendation:
    return SanitizedRecommendation(answer=fallback_answer(locale), fallback_reason=reason)


def _restrict(ids: list[str], allowed: Collection[str] | None) -> list[str]:
    if allowed is None:
        return ids
    return [item_id for item_id in ids if item_id in allowed]


def sanitize_completion(
    raw: str | None,
    *,
    mode: PairingMode,
    max_wine_count: int,
    max_cheese_count: int,
    locale: str,
    allowed_wine_ids: Collection[str] | None = None,
    allowed_cheese_ids: Collection[str] | None = None,
) -> SanitizedRecommendation:
    """Turn raw completion text into a bounded recommendation.

    Args:
        raw: Completion text, or None when the provider gave nothing.
        mode: Resolved recommendation mode.
        max_wine_count: Upper bound for recommended wines.
        max_cheese_count: Upper bound for recommended cheeses.
        locale: Answer language, used for the canned fallback.
        allowed_wine_ids: When given, wine IDs outside it are dropped.
        allowed_cheese_ids: When given, cheese IDs outside it are dropped.

    Returns:
        The sanitized recommendation; never raises.
    """
    if raw is None or not raw.strip():
        return fallback_result(locale, FallbackReason.NO_COMPLETION)

    try:
        parsed: AiPairingResult = _PROMPT.parse(raw)
    except ValidationError as e:
        logger.warning(
            "Completion is not the expected JSON object, returning it as text",
            error_count=e.error_count(),
            raw_length=len(raw),
        )
        return SanitizedRecommendation(
            answer=raw,
            fallback_reason=FallbackReason.UNPARSEABLE,
        )

    if parsed.answer is None:
        return fallback_result(locale, FallbackReason.MISSING_ANSWER)

    wine_ids = _restrict(parsed.recommended_wine_ids or [], allowed_wine_ids)
    cheese_ids = _restrict(parsed.recommended_cheese_ids or [], allowed_cheese_ids)

    wine_ids = wine_ids[: max(max_wine_count, 0)]
    cheese_ids = cheese_ids[: max(max_cheese_count, 0)]

    if mode == PairingMode.WINE_ONLY:
        cheese_ids = []
    elif mode == PairingMode.CHEESE_ONLY:
        wine_ids = []

    return SanitizedRecommendation(
        answer=parsed.answer,
        recommended_wine_ids=wine_ids,
        recommended_cheese_ids=cheese_ids,
    )
