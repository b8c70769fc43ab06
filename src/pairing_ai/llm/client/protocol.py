"""Chat completion client protocol.

The pairing service depends on this interface only, so tests and alternative
providers can stand in for ``OpenAIClient``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from pairing_ai.llm.models import LLMCompletionResult


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Protocol for chat completion clients."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Run one completion.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: HTTP error or malformed envelope.
            LLMRateLimitError: Provider rate limit hit.
        """
        ...

    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        options: dict[str, Any] | None = None,
    ) -> str | None:
        """Run one completion, returning the text or None on any failure."""
        ...
