"""LLM integration module.

Provides a client for OpenAI-compatible chat completion providers and the
prompt used to ask them for wine and cheese recommendations.
"""

from pairing_ai.llm.client.openai import OpenAIClient
from pairing_ai.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pairing_ai.llm.models import LLMCompletionResult
from pairing_ai.llm.prompts.base import BasePrompt


__all__ = [
    "BasePrompt",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OpenAIClient",
]
