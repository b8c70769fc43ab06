"""Wine and cheese pairing prompt.

This module defines the sommelier system prompt, the per-request user
instruction (mode, limits, catalog listing) and the JSON object the model is
asked to answer with.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from pairing_ai.schemas.base import DownstreamResponse
from pairing_ai.schemas.catalog import CatalogCheese, CatalogWine

from .base import BasePrompt


Shuffle = Callable[[list[Any]], None]


class AiPairingResult(DownstreamResponse):
    """JSON object returned by the model.

    Every field is optional here; the sanitizer decides what a missing answer
    or a missing list means.
    """

    answer: str | None = Field(
        default=None,
        description="Final answer text in the user's language",
    )
    recommended_wine_ids: list[str] | None = Field(default=None)
    recommended_cheese_ids: list[str] | None = Field(default=None)


class PairingPrompt(BasePrompt[AiPairingResult]):
    """Prompt asking for wine and/or cheese recommendations from the catalog.

    Example output:
        {
            "answer": "Try the Pinot Noir Reserve 2022 with your Brie.",
            "recommendedWineIds": ["w-12"],
            "recommendedCheeseIds": []
        }
    """

    output_schema: ClassVar[type[BaseModel]] = AiPairingResult

    system_prompt: ClassVar[str | None] = """\
You are the AI sommelier of the Saveurs Maison app.

Your job is to recommend wine and/or cheese using ONLY products from our catalog.

VERY IMPORTANT:
- The user message includes a line "MODE: WINE_ONLY", "MODE: CHEESE_ONLY" or "MODE: PAIRING".
- You MUST respect this MODE. Do NOT try to infer a different mode.
- The user message also includes:
  - "MAX_WINE_COUNT: N"
  - "MAX_CHEESE_COUNT: M"
  You MUST NEVER return more than N wines or more than M cheeses.

BEHAVIOUR BY MODE:

1) MODE = CHEESE_ONLY
- Recommend ONLY cheeses from the catalog.
- "recommendedCheeseIds" must contain one or more IDs (up to MAX_CHEESE_COUNT).
- "recommendedWineIds" MUST be an empty array [].
- In the textual "answer" you can mention the wine the user already gave
  (e.g. "your Pinot Noir"), but you MUST NOT introduce any new wine product
  from the catalog by ID or by name beyond what is strictly necessary.

2) MODE = WINE_ONLY
- Recommend ONLY wines from the catalog.
- "recommendedWineIds" must contain one or more IDs (up to MAX_WINE_COUNT).
- "recommendedCheeseIds" MUST be an empty array [].
- In the textual "answer" you can mention the cheese the user already gave,
  but you MUST NOT introduce any new cheese product from the catalog beyond
  what is strictly necessary.

3) MODE = PAIRING
- Recommend BOTH wine(s) and cheese(s).
- In this case, both "recommendedWineIds" and "recommendedCheeseIds" can contain IDs,
  but never more than MAX_WINE_COUNT / MAX_CHEESE_COUNT respectively.

Diversity rules:
- If several wines fit the request, DO NOT always recommend the same product.
- Alternate between different products of the same style, region or grape when possible.
- Avoid repeating the exact same wine or cheese if there are other suitable options.

General rules:
- Answer in a friendly but concise tone.
- ONLY use wines and cheeses that appear in the catalog list provided.
- In the "answer" text you MUST NOT show product IDs.
  Use only the product names (e.g. "Pinot Noir Reserve 2022", "Brie de Meaux AOP").
- In "recommendedWineIds" and "recommendedCheeseIds" you MUST include the correct
  catalog product IDs that match the products you mention in the answer.
- If the user asks for something we don't have, suggest the closest style using our catalog.

OUTPUT FORMAT (VERY IMPORTANT):
- You MUST respond ONLY with a single JSON object.
- Do NOT include any markdown, explanation, or extra text.
- The JSON MUST have exactly these fields:
  {
    "answer": "final answer text in the user's language",
    "recommendedWineIds": ["id1", "id2"],
    "recommendedCheeseIds": ["id3", "id4"]
  }
- If you do not want to recommend any wine or any cheese,
  use an empty array [] for that field.
- Do NOT add any other fields.
"""

    temperature: ClassVar[float] = 0.3
    max_tokens: ClassVar[int | None] = 600

    def __init__(
        self,
        *,
        listing_limit: int = 50,
        shuffle: Shuffle | None = None,
    ) -> None:
        self.listing_limit = listing_limit
        self._shuffle: Shuffle = shuffle or random.shuffle

    def format(self, **kwargs: Any) -> str:
        """Build the user instruction for one chat request.

        Args:
            **kwargs: Must contain 'locale', 'mode', 'max_wine_count',
                'max_cheese_count' and 'message'. May contain
                'selected_wine_ids', 'selected_cheese_ids', 'wines' and
                'cheeses'.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If a required key is missing.
        """
        required = ("locale", "mode", "max_wine_count", "max_cheese_count", "message")
        missing = [key for key in required if key not in kwargs]
        if missing:
            msg = f"Missing required argument(s): {', '.join(missing)}"
            raise ValueError(msg)

        selected_wine_ids: Sequence[str] | None = kwargs.get("selected_wine_ids")
        selected_cheese_ids: Sequence[str] | None = kwargs.get("selected_cheese_ids")

        lines = [
            f"User language (use this language in 'answer'): {kwargs['locale']}",
            f"MODE: {kwargs['mode']}",
            f"MAX_WINE_COUNT: {kwargs['max_wine_count']}",
            f"MAX_CHEESE_COUNT: {kwargs['max_cheese_count']}",
            f"User message: {kwargs['message']}",
            "",
        ]

        if selected_wine_ids:
            lines.append(f"Selected wine IDs: {_format_ids(selected_wine_ids)}")
        if selected_cheese_ids:
            lines.append(f"Selected cheese IDs: {_format_ids(selected_cheese_ids)}")

        lines.append("")
        lines.append(
            "Here is the list of AVAILABLE WINES in the catalog (ID, name, type, price):"
        )
        lines.extend(self.format_wine(wine) for wine in self._listing(kwargs.get("wines")))
        lines.append("")
        lines.append("Here is the list of AVAILABLE CHEESES in the catalog (ID, name, price):")
        lines.extend(
            self.format_cheese(cheese) for cheese in self._listing(kwargs.get("cheeses"))
        )
        lines.append("")
        lines.append(_TASK)

        return "\n".join(lines)

    def _listing[I](self, items: Sequence[I] | None) -> list[I]:
        """Shuffle a copy of the catalog items and keep the first ``listing_limit``."""
        listing = list(items or [])
        self._shuffle(listing)
        return listing[: self.listing_limit]

    @staticmethod
    def format_wine(wine: CatalogWine) -> str:
        return (
            f"- id={wine.id} | name={wine.display_name} | "
            f"type={wine.type or 'unknown'} | price={wine.display_price:.2f}"
        )

    @staticmethod
    def format_cheese(cheese: CatalogCheese) -> str:
        return (
            f"- id={cheese.id} | name={cheese.display_name} | "
            f"price={cheese.display_price:.2f}"
        )


def _format_ids(ids: Sequence[str]) -> str:
    return "[" + ", ".join(ids) + "]"


_TASK = """\
TASK:
You MUST respect the MODE above (WINE_ONLY, CHEESE_ONLY or PAIRING) when deciding whether to recommend wines, cheeses, or both.
You MUST also respect MAX_WINE_COUNT and MAX_CHEESE_COUNT:
- Never return more than MAX_WINE_COUNT items in "recommendedWineIds".
- Never return more than MAX_CHEESE_COUNT items in "recommendedCheeseIds".
Please recommend using ONLY the products above.
You MUST respond ONLY with a single JSON object with this structure:
{
  "answer": "final answer text in the user's language",
  "recommendedWineIds": ["id1", "id2"],
  "recommendedCheeseIds": ["id3", "id4"]
}
If you don't want to recommend any product, use an empty array [].
Do NOT include any extra text outside the JSON."""
