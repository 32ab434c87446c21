"""OpenAI-compatible chat-completions client for color scheme generation.

One POST to ``/chat/completions`` per call, optionally in JSON-object mode.
The client never retries and never swallows provider errors. Timeouts,
rate limits and auth failures have their own OpenAIError subclass; any
other failure raises OpenAIError itself.
Calls are logged through ``generation_logger``; the API key only ever
travels in the Authorization header.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from brandshift.core.config import get_settings
from brandshift.core.logging import generation_logger, get_logger

logger = get_logger(__name__)


@dataclass
class CompletionResult:
    """Result of a chat-completions request."""

    text: str
    finish_reason: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None
    duration_ms: float = 0.0
    request_id: str | None = None


class OpenAIError(Exception):
    """Base exception for chat-completions API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.request_id = request_id


class OpenAITimeoutError(OpenAIError):
    """Raised when a request times out."""

    pass


class OpenAIRateLimitError(OpenAIError):
    """Raised when rate limited or out of quota (429)."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        response_body: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            message, status_code=429, response_body=response_body, request_id=request_id
        )
        self.retry_after = retry_after


class OpenAIAuthError(OpenAIError):
    """Raised when authentication fails (401/403) or no API key is configured."""

    pass


class OpenAIClient:
    """Async client for an OpenAI-compatible chat-completions API.

    Constructing the client never fails when the API key is missing; the
    client reports ``available = False`` and raises OpenAIAuthError at call
    time instead.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Provider API key. Defaults to settings.
            base_url: API base URL. Defaults to settings.
            model: Model to use. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            max_tokens: Maximum response tokens. Defaults to settings.
            temperature: Sampling temperature. Defaults to settings.
        """
        settings = get_settings()

        self._api_key = api_key or settings.openai_api_key
        self._base_url = base_url or settings.openai_base_url
        self._model = model or settings.openai_model
        self._timeout = timeout or settings.openai_timeout
        self._max_tokens = max_tokens or settings.openai_max_tokens
        self._temperature = (
            temperature if temperature is not None else settings.openai_temperature
        )

        # HTTP client (created lazily)
        self._client: httpx.AsyncClient | None = None
        self._available = bool(self._api_key)

        logger.info(
            "OpenAIClient instantiated",
            extra={
                "available": self._available,
                "model": self._model,
                "base_url": self._base_url,
            },
        )

    @property
    def available(self) -> bool:
        """Check if an API key is configured."""
        return self._available

    @property
    def model(self) -> str:
        """Get the model being used."""
        return self._model

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers: dict[str, str] = {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(self._timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.info("OpenAI client closed")

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        json_response: bool = False,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Send a chat-completions request and return the first choice's text.

        Args:
            user_prompt: The user message
            system_prompt: Optional system message
            json_response: Constrain the response to a single JSON object
            max_tokens: Maximum response tokens (overrides default)

        Returns:
            CompletionResult whose ``text`` may be empty

        Raises:
            OpenAIAuthError: Missing API key or 401/403
            OpenAIRateLimitError: 429 (rate limit or exhausted quota)
            OpenAITimeoutError: Request timed out
            OpenAIError: Any other transport or API error
        """
        if not self._available:
            generation_logger.request_failed(self._model, 0.0, "missing API key")
            raise OpenAIAuthError("OpenAI not configured (missing API key)")

        client = await self._get_client()

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        request_body: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens or self._max_tokens,
            "temperature": self._temperature,
        }
        if json_response:
            request_body["response_format"] = {"type": "json_object"}

        generation_logger.request_sent(
            self._model, user_prompt, system_prompt, json_response
        )

        start_time = time.monotonic()
        try:
            response = await client.post("/chat/completions", json=request_body)
        except httpx.TimeoutException as e:
            generation_logger.request_failed(
                self._model, self._elapsed_ms(start_time), "timeout"
            )
            raise OpenAITimeoutError(
                f"Request timed out after {self._timeout}s"
            ) from e
        except httpx.RequestError as e:
            generation_logger.request_failed(
                self._model, self._elapsed_ms(start_time), type(e).__name__
            )
            raise OpenAIError(f"Request failed: {e}") from e

        duration_ms = self._elapsed_ms(start_time)
        request_id = response.headers.get("x-request-id")

        if response.status_code == 429:
            retry_after_str = response.headers.get("retry-after")
            retry_after = float(retry_after_str) if retry_after_str else None
            generation_logger.request_failed(
                self._model,
                duration_ms,
                "rate limited",
                status_code=429,
                request_id=request_id,
                retry_after=retry_after,
            )
            raise OpenAIRateLimitError(
                "Rate limit or quota exceeded",
                retry_after=retry_after,
                response_body=self._error_body(response),
                request_id=request_id,
            )

        if response.status_code in (401, 403):
            generation_logger.request_failed(
                self._model,
                duration_ms,
                "authentication failed",
                status_code=response.status_code,
                request_id=request_id,
            )
            raise OpenAIAuthError(
                f"Authentication failed ({response.status_code})",
                status_code=response.status_code,
                request_id=request_id,
            )

        if response.status_code >= 400:
            error_body = self._error_body(response)
            error_msg = (
                error_body.get("error", {}).get("message", str(error_body))
                if error_body
                else "Request failed"
            )
            generation_logger.request_failed(
                self._model,
                duration_ms,
                error_msg,
                status_code=response.status_code,
                request_id=request_id,
            )
            raise OpenAIError(
                f"API error ({response.status_code}): {error_msg}",
                status_code=response.status_code,
                response_body=error_body,
                request_id=request_id,
            )

        try:
            response_data = response.json()
        except ValueError as e:
            generation_logger.request_failed(
                self._model,
                duration_ms,
                "response body is not JSON",
                request_id=request_id,
            )
            raise OpenAIError(
                "Invalid response body from API",
                status_code=response.status_code,
                request_id=request_id,
            ) from e

        choices = response_data.get("choices") or []
        text = ""
        finish_reason = None
        if choices:
            text = (choices[0].get("message") or {}).get("content") or ""
            finish_reason = choices[0].get("finish_reason")

        usage = response_data.get("usage") or {}
        input_tokens = usage.get("prompt_tokens")
        output_tokens = usage.get("completion_tokens")

        generation_logger.response_received(
            self._model,
            duration_ms,
            text,
            finish_reason,
            input_tokens,
            output_tokens,
            request_id,
        )

        return CompletionResult(
            text=text,
            finish_reason=finish_reason,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_ms=duration_ms,
            request_id=request_id,
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.monotonic() - start_time) * 1000

    @staticmethod
    def _error_body(response: httpx.Response) -> dict[str, Any] | None:
        """Decode an error response body, if it is JSON."""
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None


# Global client instance
openai_client: OpenAIClient | None = None


async def init_openai() -> OpenAIClient:
    """Initialize the global OpenAI client.

    Returns:
        Initialized OpenAIClient instance (possibly unavailable)
    """
    global openai_client
    if openai_client is None:
        openai_client = OpenAIClient()
        if openai_client.available:
            logger.info(
                "OpenAI client initialized",
                extra={"model": openai_client.model},
            )
        else:
            logger.info("OpenAI not configured (missing API key)")
    return openai_client


async def close_openai() -> None:
    """Close the global OpenAI client."""
    global openai_client
    if openai_client:
        await openai_client.close()
        openai_client = None


async def get_openai() -> OpenAIClient:
    """FastAPI dependency returning the shared client, created on first use."""
    global openai_client
    if openai_client is None:
        await init_openai()
    return openai_client  # type: ignore[return-value]
