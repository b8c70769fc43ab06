"""Constants for the pairing pipeline.

Contains:
- Keywords driving mode detection
- Quantity phrases and limits
- Fallback answers
"""

from __future__ import annotations

import re
from typing import Final


# =============================================================================
# Mode Detection Keywords
# =============================================================================

WINE_KEYWORDS: Final[tuple[str, ...]] = ("wine", "vino")
CHEESE_KEYWORDS: Final[tuple[str, ...]] = ("cheese", "queso")

ONLY_CHEESE_PHRASES: Final[tuple[str, ...]] = ("only cheese", "just cheese", "solo queso")
ONLY_WINE_PHRASES: Final[tuple[str, ...]] = ("only wine", "just wine", "solo vino")


# =============================================================================
# Quantity Extraction
# =============================================================================

# "<n> [words...] wine(s)", e.g. "3 wines", "2 bold red wines"
WINE_COUNT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(\d+)\s+\w*(?:\s+\w+)*\s*wines?",
    re.ASCII,
)

MIN_WINE_COUNT: Final[int] = 1
DEFAULT_MAX_WINE_CEILING: Final[int] = 5

TWO_WINES_PHRASES: Final[tuple[str, ...]] = (
    "two wines",
    "two red wines",
    "2 wines",
    "2 red wines",
    "dos vinos",
)
THREE_WINES_PHRASES: Final[tuple[str, ...]] = (
    "three wines",
    "three red wines",
    "3 wines",
    "3 red wines",
    "tres vinos",
)

TWO_CHEESES_PHRASES: Final[tuple[str, ...]] = ("two cheeses", "2 cheeses", "dos quesos")
THREE_CHEESES_PHRASES: Final[tuple[str, ...]] = (
    "three cheeses",
    "3 cheeses",
    "tres quesos",
)


# =============================================================================
# Fallback Answers
# =============================================================================

FALLBACK_ANSWER_ES: Final[str] = (
    "Lo siento, no pude generar una recomendación en este momento."
)
FALLBACK_ANSWER_EN: Final[str] = "Sorry, I could not generate a recommendation at this time."

