"""LLM prompt templates."""

from pairing_ai.llm.prompts.base import BasePrompt
from pairing_ai.llm.prompts.pairing import AiPairingResult, PairingPrompt


__all__ = [
    "AiPairingResult",
    "BasePrompt",
    "PairingPrompt",
]
