"""LLM provider abstraction layer."""

import os

from readmegen.config.models import LLMSettings
from readmegen.llm.base import LLMProvider
from readmegen.llm.gemini import GeminiProvider
from readmegen.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "google": GeminiProvider,
}


def create_llm_provider(config: LLMSettings) -> LLMProvider:
    """Create an LLM provider from app-level settings.

    Resolves the API key from the env var in config.api_key_env, then
    bridges the app-level LLMSettings to the provider-level LLMConfig.
    """
    cls = _PROVIDER_MAP.get(config.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {config.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )
    api_key = os.environ.get(config.api_key_env)
    if not api_key:
        raise ValueError(
            f"Missing API key: set environment variable {config.api_key_env!r}"
        )
    llm_config = LLMConfig(
        provider=config.provider,
        api_key=api_key,
        temperature=config.temperature,
        top_p=config.top_p,
        top_k=config.top_k,
        max_output_tokens=config.max_output_tokens,
    )
    return cls(llm_config)


__all__ = [
    "GeminiProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "TokenUsage",
    "create_llm_provider",
]
