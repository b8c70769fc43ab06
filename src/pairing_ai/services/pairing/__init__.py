"""Pairing service package.

Provides LLM-powered wine and cheese recommendations drawn from the in-stock
catalog.
"""

from pairing_ai.services.pairing.modes import (
    PairingMode,
    compute_max_cheese_count,
    compute_max_wine_count,
    detect_mode,
)
from pairing_ai.services.pairing.sanitizer import (
    FallbackReason,
    SanitizedRecommendation,
    fallback_result,
    sanitize_completion,
)
from pairing_ai.services.pairing.service import PairingService


__all__ = [
    "FallbackReason",
    "PairingMode",
    "PairingService",
    "SanitizedRecommendation",
    "compute_max_cheese_count",
    "compute_max_wine_count",
    "detect_mode",
    "fallback_result",
    "sanitize_completion",
]
