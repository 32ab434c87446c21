"""Unit tests for the chat-completions integration client.

Tests cover:
- Construction without an API key (available=False, failure deferred to call time)
- Request shape: model, system/user messages, JSON response mode
- Text extraction from choices[0].message.content (including empty choices)
- Error mapping: 401/403 -> OpenAIAuthError, 429 -> OpenAIRateLimitError,
  other 4xx/5xx -> OpenAIError, timeouts -> OpenAITimeoutError,
  transport errors and non-JSON bodies -> OpenAIError
- Global client init/close lifecycle

Uses httpx.MockTransport so the real httpx request/response path runs.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from brandshift.integrations import openai as openai_module
from brandshift.integrations.openai import (
    OpenAIAuthError,
    OpenAIClient,
    OpenAIError,
    OpenAIRateLimitError,
    OpenAITimeoutError,
    close_openai,
    get_openai,
    init_openai,
)

BASE_URL = "https://llm.test/v1"


def _completion_body(content: str | None, finish_reason: str = "stop") -> dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
        "usage": {"prompt_tokens": 120, "completion_tokens": 40, "total_tokens": 160},
    }


def _client_with(handler: Callable[[httpx.Request], httpx.Response]) -> OpenAIClient:
    """Build a client whose HTTP traffic goes to the given handler."""
    client = OpenAIClient(api_key="sk-test", base_url=BASE_URL, model="gpt-test")
    client._client = httpx.AsyncClient(
        base_url=BASE_URL,
        headers={"Authorization": "Bearer sk-test"},
        transport=httpx.MockTransport(handler),
    )
    return client


class TestOpenAIClientInit:
    """Tests for client construction."""

    def test_available_with_api_key(self) -> None:
        client = OpenAIClient(api_key="sk-test", model="gpt-test")

        assert client.available is True
        assert client.model == "gpt-test"

    def test_missing_api_key_constructs_unavailable(self) -> None:
        client = OpenAIClient(api_key=None)

        assert client.available is False

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_at_call_time(self) -> None:
        client = OpenAIClient(api_key=None)

        with pytest.raises(OpenAIAuthError):
            await client.complete("Generate a scheme")

        assert client._client is None


class TestOpenAIClientComplete:
    """Tests for OpenAIClient.complete()."""

    @pytest.mark.asyncio
    async def test_success_returns_text_and_usage(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=_completion_body('{"primary": "#111"}'),
                headers={"x-request-id": "req-1"},
            )

        client = _client_with(handler)
        result = await client.complete("Generate a scheme")

        assert result.text == '{"primary": "#111"}'
        assert result.finish_reason == "stop"
        assert result.input_tokens == 120
        assert result.output_tokens == 40
        assert result.request_id == "req-1"
        await client.close()

    @pytest.mark.asyncio
    async def test_request_body_shape(self) -> None:
        captured: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers.get("Authorization")
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion_body("{}"))

        client = _client_with(handler)
        await client.complete(
            "Generate a scheme",
            system_prompt="You are a design expert.",
            json_response=True,
        )

        body = captured["body"]
        assert captured["url"] == f"{BASE_URL}/chat/completions"
        assert captured["auth"] == "Bearer sk-test"
        assert body["model"] == "gpt-test"
        assert body["response_format"] == {"type": "json_object"}
        assert body["messages"] == [
            {"role": "system", "content": "You are a design expert."},
            {"role": "user", "content": "Generate a scheme"},
        ]
        await client.close()

    @pytest.mark.asyncio
    async def test_plain_request_has_no_response_format(self) -> None:
        captured: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion_body("hello"))

        client = _client_with(handler)
        await client.complete("Say hello")

        assert "response_format" not in captured["body"]
        assert captured["body"]["messages"] == [{"role": "user", "content": "Say hello"}]
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_choices_returns_empty_text(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        client = _client_with(handler)
        result = await client.complete("Generate a scheme")

        assert result.text == ""
        assert result.finish_reason is None
        await client.close()

    @pytest.mark.asyncio
    async def test_null_content_returns_empty_text(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_completion_body(None, "length"))

        client = _client_with(handler)
        result = await client.complete("Generate a scheme")

        assert result.text == ""
        assert result.finish_reason == "length"
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_auth_failure(self, status_code: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code, json={"error": {"message": "Incorrect API key"}}
            )

        client = _client_with(handler)
        with pytest.raises(OpenAIAuthError) as exc_info:
            await client.complete("Generate a scheme")

        assert exc_info.value.status_code == status_code
        await client.close()

    @pytest.mark.asyncio
    async def test_rate_limit(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                429,
                json={"error": {"message": "You exceeded your current quota"}},
                headers={"retry-after": "20"},
            )

        client = _client_with(handler)
        with pytest.raises(OpenAIRateLimitError) as exc_info:
            await client.complete("Generate a scheme")

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 20.0
        assert exc_info.value.response_body == {
            "error": {"message": "You exceeded your current quota"}
        }
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 500, 503])
    async def test_api_error(self, status_code: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code, json={"error": {"message": "Something broke"}}
            )

        client = _client_with(handler)
        with pytest.raises(OpenAIError) as exc_info:
            await client.complete("Generate a scheme")

        assert type(exc_info.value) is OpenAIError
        assert exc_info.value.status_code == status_code
        assert "Something broke" in str(exc_info.value)
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client_with(handler)
        with pytest.raises(OpenAITimeoutError):
            await client.complete("Generate a scheme")
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client_with(handler)
        with pytest.raises(OpenAIError) as exc_info:
            await client.complete("Generate a scheme")

        assert not isinstance(exc_info.value, OpenAITimeoutError)
        assert exc_info.value.status_code is None
        await client.close()

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        client = _client_with(handler)
        with pytest.raises(OpenAIError, match="Invalid response body"):
            await client.complete("Generate a scheme")
        await client.close()


class TestGenerationLogging:
    """Tests for what a call writes to the generation logger."""

    @pytest.mark.asyncio
    async def test_success_logs_token_usage(self, caplog: pytest.LogCaptureFixture) -> None:
        client = _client_with(lambda request: httpx.Response(200, json=_completion_body("{}")))

        with caplog.at_level(logging.INFO, logger="generation"):
            await client.complete("Generate a scheme")

        record = next(
            r for r in caplog.records if r.getMessage() == "Generation response received"
        )
        assert record.input_tokens == 120
        assert record.output_tokens == 40
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "level"), [(400, logging.WARNING), (503, logging.ERROR)]
    )
    async def test_failure_level_follows_status(
        self, caplog: pytest.LogCaptureFixture, status_code: int, level: int
    ) -> None:
        client = _client_with(lambda request: httpx.Response(status_code, json={}))

        with caplog.at_level(logging.DEBUG, logger="generation"):
            with pytest.raises(OpenAIError):
                await client.complete("Generate a scheme")

        failures = [
            r for r in caplog.records if r.getMessage() == "Generation request failed"
        ]
        assert [r.levelno for r in failures] == [level]
        assert "sk-test" not in caplog.text
        await client.close()


class TestGlobalClient:
    """Tests for init_openai/get_openai/close_openai."""

    @pytest.mark.asyncio
    async def test_lifecycle(self) -> None:
        await close_openai()

        client = await init_openai()
        assert await get_openai() is client
        assert await init_openai() is client

        await close_openai()
        assert openai_module.openai_client is None

    @pytest.mark.asyncio
    async def test_get_openai_initializes_lazily(self) -> None:
        await close_openai()

        client = await get_openai()

        assert isinstance(client, OpenAIClient)
        assert client.available is False
        await close_openai()
