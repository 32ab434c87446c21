"""Integrations layer - External service clients.

Integrations handle communication with external APIs and services.
They abstract the details of external service protocols.
"""

from brandshift.integrations.openai import (
    CompletionResult,
    OpenAIAuthError,
    OpenAIClient,
    OpenAIError,
    OpenAIRateLimitError,
    OpenAITimeoutError,
    close_openai,
    get_openai,
    init_openai,
)

__all__ = [
    "CompletionResult",
    "OpenAIAuthError",
    "OpenAIClient",
    "OpenAIError",
    "OpenAIRateLimitError",
    "OpenAITimeoutError",
    "close_openai",
    "get_openai",
    "init_openai",
]
