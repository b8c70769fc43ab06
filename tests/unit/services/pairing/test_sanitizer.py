"""Unit tests for completion sanitization."""

from __future__ import annotations

import pytest

from pairing_ai.services.pairing.constants import FALLBACK_ANSWER_EN, FALLBACK_ANSWER_ES
from pairing_ai.services.pairing.modes import PairingMode
from pairing_ai.services.pairing.sanitizer import (
    FallbackReason,
    fallback_answer,
    fallback_result,
    sanitize_completion,
)
from tests.fixtures.llm_responses import create_pairing_content


pytestmark = pytest.mark.unit


def _sanitize(
    raw: str | None,
    mode: PairingMode = PairingMode.PAIRING,
    max_wine_count: int = 1,
    max_cheese_count: int = 1,
    locale: str = "en",
    **kwargs: object,
):
    return sanitize_completion(
        raw,
        mode=mode,
        max_wine_count=max_wine_count,
        max_cheese_count=max_cheese_count,
        locale=locale,
        **kwargs,  # type: ignore[arg-type]
    )


class TestFallback:
    """Tests for the canned fallback answer."""

    @pytest.mark.parametrize("locale", ["es", "es-AR", "es_MX"])
    def test_spanish_locales(self, locale: str) -> None:
        assert fallback_answer(locale) == FALLBACK_ANSWER_ES

    @pytest.mark.parametrize("locale", ["en", "fr", "pt-BR", "ES"])
    def test_other_locales(self, locale: str) -> None:
        assert fallback_answer(locale) == FALLBACK_ANSWER_EN

    def test_fallback_result_has_no_products(self) -> None:
        result = fallback_result("en")

        assert result.answer == "Sorry, I could not generate a recommendation at this time."
        assert result.recommended_wine_ids == []
        assert result.recommended_cheese_ids == []
        assert result.fallback_reason == FallbackReason.NO_COMPLETION


class TestSanitizeCompletion:
    """Tests for sanitize_completion."""

    @pytest.mark.parametrize("raw", [None, "", "   \n\t"])
    def test_no_completion_returns_fallback(self, raw: str | None) -> None:
        result = _sanitize(raw, locale="es")

        assert result.answer == "Lo siento, no pude generar una recomendación en este momento."
        assert result.recommended_wine_ids == []
        assert result.recommended_cheese_ids == []
        assert result.fallback_reason == FallbackReason.NO_COMPLETION

    def test_invalid_json_returns_text_verbatim(self) -> None:
        raw = "Try a Pinot Noir with Brie."

        result = _sanitize(raw)

        assert result.answer == raw
        assert result.recommended_wine_ids == []
        assert result.recommended_cheese_ids == []
        assert result.fallback_reason == FallbackReason.UNPARSEABLE

    def test_markdown_fenced_json_is_not_unwrapped(self) -> None:
        raw = '```json\n{"answer": "Chablis.", "recommendedWineIds": ["w-2"]}\n```'

        result = _sanitize(raw)

        assert result.answer == raw
        assert result.recommended_wine_ids == []

    @pytest.mark.parametrize(
        "raw",
        [
            '["w-1", "c-1"]',
            '"just a string"',
            '{"answer": 42}',
            '{"answer": "ok", "recommendedWineIds": "w-1"}',
        ],
    )
    def test_wrong_shapes_return_text_verbatim(self, raw: str) -> None:
        result = _sanitize(raw)

        assert result.answer == raw
        assert result.fallback_reason == FallbackReason.UNPARSEABLE

    @pytest.mark.parametrize(
        "raw",
        [
            '{"recommendedWineIds": ["w-1"]}',
            '{"answer": null, "recommendedWineIds": ["w-1"]}',
        ],
    )
    def test_missing_answer_returns_fallback(self, raw: str) -> None:
        result = _sanitize(raw)

        assert result.answer == FALLBACK_ANSWER_EN
        assert result.recommended_wine_ids == []
        assert result.fallback_reason == FallbackReason.MISSING_ANSWER

    def test_null_lists_become_empty(self) -> None:
        raw = create_pairing_content("Nothing fits, sorry.")

        result = _sanitize(raw)

        assert result.answer == "Nothing fits, sorry."
        assert result.recommended_wine_ids == []
        assert result.recommended_cheese_ids == []
        assert result.fallback_reason is None

    def test_extra_fields_are_ignored(self) -> None:
        raw = '{"answer": "Sauternes!", "recommendedWineIds": ["w-3"], "confidence": 0.9}'

        result = _sanitize(raw, mode=PairingMode.WINE_ONLY)

        assert result.answer == "Sauternes!"
        assert result.recommended_wine_ids == ["w-3"]

    def test_lists_clamped_to_maxima(self) -> None:
        raw = create_pairing_content(
            "A feast.",
            wine_ids=["w-1", "w-2", "w-3"],
            cheese_ids=["c-1", "c-2", "c-3"],
        )

        result = _sanitize(raw, max_wine_count=2, max_cheese_count=1)

        assert result.recommended_wine_ids == ["w-1", "w-2"]
        assert result.recommended_cheese_ids == ["c-1"]

    def test_wine_only_drops_cheeses(self) -> None:
        raw = create_pairing_content("Wine.", wine_ids=["w-1"], cheese_ids=["c-1"])

        result = _sanitize(raw, mode=PairingMode.WINE_ONLY, max_cheese_count=0)

        assert result.recommended_wine_ids == ["w-1"]
        assert result.recommended_cheese_ids == []

    def test_cheese_only_drops_wines(self) -> None:
        raw = create_pairing_content("Cheese.", wine_ids=["w-1"], cheese_ids=["c-1"])

        result = _sanitize(raw, mode=PairingMode.CHEESE_ONLY, max_wine_count=0)

        assert result.recommended_wine_ids == []
        assert result.recommended_cheese_ids == ["c-1"]

    def test_cheese_only_drops_wines_even_with_wine_allowance(self) -> None:
        raw = create_pairing_content("Cheese.", wine_ids=["w-1"], cheese_ids=["c-1"])

        result = _sanitize(raw, mode=PairingMode.CHEESE_ONLY, max_wine_count=3)

        assert result.recommended_wine_ids == []

    def test_pairing_keeps_both(self) -> None:
        raw = create_pairing_content("Both.", wine_ids=["w-1"], cheese_ids=["c-1"])

        result = _sanitize(raw, mode=PairingMode.PAIRING)

        assert result.recommended_wine_ids == ["w-1"]
        assert result.recommended_cheese_ids == ["c-1"]

    def test_unknown_ids_kept_without_catalog_restriction(self) -> None:
        raw = create_pairing_content("Both.", wine_ids=["w-99"], cheese_ids=["c-99"])

        result = _sanitize(raw)

        assert result.recommended_wine_ids == ["w-99"]
        assert result.recommended_cheese_ids == ["c-99"]

    def test_catalog_restriction_runs_before_clamping(self) -> None:
        raw = create_pairing_content(
            "Both.",
            wine_ids=["w-99", "w-1", "w-2"],
            cheese_ids=["c-99", "c-1"],
        )

        result = _sanitize(
            raw,
            max_wine_count=1,
            max_cheese_count=1,
            allowed_wine_ids={"w-1", "w-2"},
            allowed_cheese_ids={"c-1"},
        )

        assert result.recommended_wine_ids == ["w-1"]
        assert result.recommended_cheese_ids == ["c-1"]

    def test_to_response_copies_fields(self) -> None:
        raw = create_pairing_content("Both.", wine_ids=["w-1"], cheese_ids=["c-1"])

        response = _sanitize(raw).to_response()

        assert response.model_dump() == {
            "answer": "Both.",
            "recommendedWineIds": ["w-1"],
            "recommendedCheeseIds": ["c-1"],
        }
