"""Google Gemini adapter for readmegen."""

from __future__ import annotations

from google import genai
from google.genai import types

from readmegen.llm.base import LLMProvider
from readmegen.llm.models import (
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
    is_rate_limit,
)


class GeminiProvider(LLMProvider):
    """Gemini adapter using the google-genai async client."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = genai.Client(api_key=config.api_key)

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            max_output_tokens=self.config.max_output_tokens,
        )

    async def generate(self, prompt: str, model: str) -> LLMResponse:
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=self._generation_config(),
            )
            if not response.text:
                raise ValueError("No text content in Gemini response")
            usage = response.usage_metadata
            return LLMResponse(
                content=response.text,
                usage=TokenUsage(
                    input_tokens=(usage.prompt_token_count or 0) if usage else 0,
                    output_tokens=(usage.candidates_token_count or 0) if usage else 0,
                ),
                model=model,
            )
        except Exception as e:
            raise LLMError("gemini", "generate", e, retryable=is_rate_limit(e)) from e
