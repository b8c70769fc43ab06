"""Unit tests for OpenAIClient.

Tests cover:
- HTTP request construction
- Response parsing
- Error handling
- Retry policy
- The non-raising complete() wrapper
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from pairing_ai.llm.client.openai import OpenAIClient
from pairing_ai.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from tests.fixtures.llm_responses import (
    EMPTY_CHOICES_RESPONSE,
    PAIRING_RESPONSE,
    create_chat_response,
)


pytestmark = pytest.mark.unit

BASE_URL = "https://llm.test/v1"
CHAT_URL = f"{BASE_URL}/chat/completions"


def _client(**kwargs: object) -> OpenAIClient:
    options: dict[str, object] = {
        "api_key": "test-api-key",
        "model": "test-model",
        "base_url": BASE_URL,
    }
    options.update(kwargs)
    return OpenAIClient(**options)  # type: ignore[arg-type]


class TestOpenAIClientInitialization:
    """Tests for client initialization and lifecycle."""

    async def test_initialize_creates_http_client(self) -> None:
        client = _client()

        await client.initialize()

        assert client._http_client is not None
        await client.shutdown()

    async def test_shutdown_closes_http_client(self) -> None:
        client = _client()

        await client.initialize()
        await client.shutdown()

        assert client._http_client is None

    async def test_initialize_idempotent(self) -> None:
        client = _client()

        await client.initialize()
        first_client = client._http_client
        await client.initialize()

        assert client._http_client is first_client
        await client.shutdown()

    def test_chat_url_default(self) -> None:
        client = OpenAIClient(api_key="test-api-key")

        assert client.chat_url == "https://api.openai.com/v1/chat/completions"

    def test_chat_url_strips_trailing_slash(self) -> None:
        client = _client(base_url="https://custom.llm/v1/")

        assert client.chat_url == "https://custom.llm/v1/chat/completions"


class TestOpenAIClientGenerate:
    """Tests for generate method."""

    @respx.mock
    async def test_generate_success(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("Hello, world!"))
        )
        client = _client()

        result = await client.generate("Say hello")

        assert result.raw_response == "Hello, world!"
        assert result.model == "test-model"
        assert result.prompt_tokens == 10
        assert result.completion_tokens == 5

        await client.shutdown()

    @respx.mock
    async def test_request_body(self) -> None:
        route = respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=PAIRING_RESPONSE)
        )
        client = _client()

        await client.generate(
            "User instruction",
            system="System instruction",
            options={"temperature": 0.3, "max_tokens": 600},
        )

        assert route.called
        request = route.calls[0].request
        assert request.headers["Authorization"] == "Bearer test-api-key"
        body = json.loads(request.content)
        assert body == {
            "model": "test-model",
            "messages": [
                {"role": "system", "content": "System instruction"},
                {"role": "user", "content": "User instruction"},
            ],
            "max_tokens": 600,
            "temperature": 0.3,
        }

        await client.shutdown()

    @respx.mock
    async def test_client_defaults_used_without_options(self) -> None:
        route = respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("ok"))
        )
        client = _client(max_tokens=123, temperature=0.8)

        await client.generate("Hello")

        body = json.loads(route.calls[0].request.content)
        assert body["max_tokens"] == 123
        assert body["temperature"] == 0.8
        assert [m["role"] for m in body["messages"]] == ["user"]

        await client.shutdown()

    @respx.mock
    async def test_generate_empty_choices(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=EMPTY_CHOICES_RESPONSE)
        )
        client = _client()

        result = await client.generate("Hello")

        assert result.raw_response is None

        await client.shutdown()

    @respx.mock
    async def test_generate_null_choices(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json={"choices": None})
        )
        client = _client()

        result = await client.generate("Hello")

        assert result.raw_response is None

        await client.shutdown()


class TestOpenAIClientErrors:
    """Tests for error handling."""

    @respx.mock
    async def test_rate_limit_error(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(429, headers={"retry-after": "0"})
        )
        client = _client()

        with pytest.raises(LLMRateLimitError, match="rate limit"):
            await client.generate("Hello")

        await client.shutdown()

    @respx.mock
    async def test_unauthorized(self) -> None:
        respx.post(CHAT_URL).mock(return_value=httpx.Response(401, json={}))
        client = _client()

        with pytest.raises(LLMConfigurationError, match="401"):
            await client.generate("Hello")

        await client.shutdown()

    @respx.mock
    async def test_http_error(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(500, json={"error": "Internal error"})
        )
        client = _client()

        with pytest.raises(LLMResponseError, match="500"):
            await client.generate("Hello")

        await client.shutdown()

    @respx.mock
    async def test_malformed_envelope(self) -> None:
        respx.post(CHAT_URL).mock(return_value=httpx.Response(200, text="<html>"))
        client = _client()

        with pytest.raises(LLMResponseError, match="envelope"):
            await client.generate("Hello")

        await client.shutdown()

    @respx.mock
    async def test_timeout_error(self) -> None:
        respx.post(CHAT_URL).mock(side_effect=httpx.TimeoutException("Timeout"))
        client = _client()

        with pytest.raises(LLMTimeoutError, match="timeout"):
            await client.generate("Hello")

        await client.shutdown()

    @respx.mock
    async def test_connection_error(self) -> None:
        respx.post(CHAT_URL).mock(side_effect=httpx.ConnectError("Connection refused"))
        client = _client()

        with pytest.raises(LLMUnavailableError, match="Cannot connect"):
            await client.generate("Hello")

        await client.shutdown()


class TestOpenAIClientRetry:
    """Tests for retry behavior."""

    @respx.mock
    async def test_single_attempt_by_default(self) -> None:
        route = respx.post(CHAT_URL).mock(side_effect=httpx.ConnectError("refused"))
        client = _client()

        with pytest.raises(LLMUnavailableError):
            await client.generate("Hello")

        assert route.call_count == 1

        await client.shutdown()

    @respx.mock
    async def test_retry_on_timeout(self) -> None:
        call_count = 0

        def response_handler(_request: httpx.Request) -> httpx.Response:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise httpx.TimeoutException("Timeout")
            return httpx.Response(200, json=create_chat_response("Success"))

        respx.post(CHAT_URL).mock(side_effect=response_handler)
        client = _client(max_retries=2)

        result = await client.generate("Hello")

        assert result.raw_response == "Success"
        assert call_count == 2

        await client.shutdown()

    @respx.mock
    async def test_no_retry_on_http_error(self) -> None:
        route = respx.post(CHAT_URL).mock(
            return_value=httpx.Response(400, json={"error": "Bad request"})
        )
        client = _client(max_retries=2)

        with pytest.raises(LLMResponseError):
            await client.generate("Hello")

        assert route.call_count == 1

        await client.shutdown()


class TestOpenAIClientComplete:
    """Tests for the non-raising complete wrapper."""

    @respx.mock
    async def test_returns_stripped_content(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("  {\"a\": 1}\n"))
        )
        client = _client()

        assert await client.complete("system", "user") == '{"a": 1}'

        await client.shutdown()

    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_blank_content_is_none(self, content: str | None) -> None:
        with respx.mock:
            respx.post(CHAT_URL).mock(
                return_value=httpx.Response(200, json=create_chat_response(content))
            )
            client = _client()

            assert await client.complete("system", "user") is None

        await client.shutdown()

    @respx.mock
    async def test_empty_choices_is_none(self) -> None:
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=EMPTY_CHOICES_RESPONSE)
        )
        client = _client()

        assert await client.complete("system", "user") is None

        await client.shutdown()

    @pytest.mark.parametrize(
        "route_kwargs",
        [
            {"return_value": httpx.Response(503)},
            {"return_value": httpx.Response(429)},
            {"side_effect": httpx.ConnectError("refused")},
            {"side_effect": httpx.ReadTimeout("slow")},
        ],
    )
    async def test_provider_failure_is_none(self, route_kwargs: dict[str, object]) -> None:
        with respx.mock:
            respx.post(CHAT_URL).mock(**route_kwargs)  # type: ignore[arg-type]
            client = _client()

            assert await client.complete("system", "user") is None

        await client.shutdown()
