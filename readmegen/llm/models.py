"""Pydantic models for the LLM subsystem."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

RATE_LIMIT_MARKERS = ("429", "RATE_LIMIT_EXCEEDED", "RESOURCE_EXHAUSTED")


class LLMError(Exception):
    """Wraps provider-specific exceptions with context."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause


def is_rate_limit(error: BaseException) -> bool:
    """True for errors carrying a 429 status or a rate-limit marker."""
    if isinstance(error, LLMError):
        return error.retryable
    if getattr(error, "code", None) == 429 or getattr(error, "status_code", None) == 429:
        return True
    message = str(error)
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


class LLMConfig(BaseModel):
    """Configuration for an LLM provider: credentials and sampling."""

    provider: Literal["google"] = "google"
    api_key: str | None = None
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    max_output_tokens: int = 8192


class TokenUsage(BaseModel):
    """Token usage stats from a single LLM call."""

    input_tokens: int
    output_tokens: int


class LLMResponse(BaseModel):
    """Structured response from an LLM provider."""

    content: str
    usage: TokenUsage
    model: str
