"""Chat completion client exceptions.

Raised by ``OpenAIClient.generate``. ``OpenAIClient.complete`` converts all
of them into a ``None`` result so the pairing pipeline can fall back to its
canned answer.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """The provider cannot be reached (connection refused, DNS, reset)."""


class LLMTimeoutError(LLMUnavailableError):
    """The provider did not answer within the configured timeout."""


class LLMResponseError(LLMError):
    """The provider answered with an HTTP error or an unreadable envelope."""


class LLMRateLimitError(LLMError):
    """The provider rejected the request with HTTP 429."""


class LLMConfigurationError(LLMError):
    """The client is misconfigured (e.g. missing API key)."""
