"""Chat completion wire models (OpenAI-compatible ``/chat/completions``)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str | None = Field(default=None, description="Message content")


class ChatCompletionRequest(BaseModel):
    """Request body for ``POST /chat/completions``."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    max_tokens: int | None = Field(
        default=None,
        description="Maximum tokens to generate",
    )
    temperature: float = Field(default=0.3, description="Sampling temperature")


class ChatUsage(BaseModel):
    """Token usage reported by the provider."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatChoice(BaseModel):
    """Single choice in a completion response."""

    index: int = 0
    message: ChatMessage = Field(..., description="Generated message")
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response from ``POST /chat/completions``.

    Only ``choices`` matters to the pipeline; everything else is optional so
    that OpenAI-compatible providers with leaner envelopes still parse.
    """

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] | None = Field(default_factory=list)
    usage: ChatUsage | None = None


class LLMCompletionResult(BaseModel):
    """Internal result of one completion call."""

    raw_response: str | None = Field(
        default=None,
        description="Content of the first choice, None when there were no choices",
    )
    model: str | None = Field(default=None, description="Model that answered")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )

    model_config = {"frozen": True}
