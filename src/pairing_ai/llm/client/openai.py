"""HTTP client for OpenAI-compatible chat completion providers.

Talks to ``POST {base_url}/chat/completions`` with bearer authentication.
``generate`` raises the ``LLMError`` family; ``complete`` is the
pipeline-facing wrapper that reports any failure as ``None``.
"""

from __future__ import annotations

from typing import Any

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from pairing_ai.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from pairing_ai.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    LLMCompletionResult,
)
from pairing_ai.observability.logging import get_logger


logger = get_logger(__name__)


class OpenAIClient:
    """Async HTTP client for an OpenAI-compatible chat completion API.

    A single ``httpx.AsyncClient`` is shared by all in-flight requests.

    Attributes:
        base_url: Provider base URL (e.g. https://api.openai.com/v1).
        model: Default model identifier.
        api_key: Bearer token.
        timeout: HTTP request timeout in seconds.
        max_tokens: Default ``max_tokens`` sent with each request.
        temperature: Default sampling temperature.
        max_retries: Extra attempts on transport failures (0 = single attempt).
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_tokens: int | None = 600,
        temperature: float = 0.3,
        max_retries: int = 0,
        requests_per_minute: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_retries = max_retries
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._rate_limiter = (
            AsyncLimiter(requests_per_minute, 60.0) if requests_per_minute else None
        )

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Create the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        if not self.api_key:
            logger.warning("LLM API key not set - completion calls will be rejected")

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=50,
            ),
        )
        logger.info(
            "OpenAIClient initialized",
            model=self.model,
            base_url=self.base_url,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client if owned and release connections."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            logger.debug("OpenAIClient shutdown")
        self._http_client = None

    async def _execute(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """POST the request, retrying transport failures up to ``max_retries``."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            if self._rate_limiter is not None:
                await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(
                    self.chat_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"LLM rate limit exceeded, retry after {retry_after}s"
                    raise LLMRateLimitError(msg)

                if response.status_code in (401, 403):
                    msg = f"LLM provider rejected credentials ({response.status_code})"
                    raise LLMConfigurationError(msg)

                response.raise_for_status()
                return ChatCompletionResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "LLM request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"LLM timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.warning(
                    "LLM request failed",
                    status_code=e.response.status_code,
                    url=self.chat_url,
                )
                msg = f"LLM provider returned {e.response.status_code}"
                raise LLMResponseError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "LLM connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to LLM provider: {e}"
                raise LLMUnavailableError(msg) from e

            except (ValueError, ValidationError) as e:
                msg = f"Unreadable completion envelope: {e}"
                raise LLMResponseError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Run one chat completion.

        Args:
            prompt: User message content.
            system: Optional system message content, sent first.
            model: Model override (defaults to the client's model).
            options: ``temperature`` / ``max_tokens`` overrides.

        Returns:
            LLMCompletionResult whose ``raw_response`` is the first choice's
            content, or None when the provider returned no choices.

        Raises:
            LLMUnavailableError: If the provider cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: If the provider returns an error or bad envelope.
            LLMRateLimitError: If the provider rate limits the request.
        """
        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        options = options or {}
        request = ChatCompletionRequest(
            model=model or self.model,
            messages=messages,
            max_tokens=options.get("max_tokens", self.max_tokens),
            temperature=options.get("temperature", self.temperature),
        )

        response = await self._execute(request)

        raw_response = response.choices[0].message.content if response.choices else None
        usage = response.usage

        return LLMCompletionResult(
            raw_response=raw_response,
            model=response.model or request.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )

    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        options: dict[str, Any] | None = None,
    ) -> str | None:
        """Run one completion and return its text, or None on any failure.

        Blank content and empty ``choices`` are reported as None as well, so
        callers have a single "no completion" signal.
        """
        try:
            result = await self.generate(prompt, system=system, options=options)
        except LLMError as e:
            logger.warning(
                "Completion failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

        content = (result.raw_response or "").strip()
        if not content:
            logger.warning("Completion returned no content", model=result.model)
            return None

        logger.debug(
            "Completion received",
            model=result.model,
            prompt_tokens=result.prompt_tokens,
            completion_tokens=result.completion_tokens,
        )
        return content
