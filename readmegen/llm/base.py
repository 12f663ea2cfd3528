"""Abstract LLM interface for readmegen."""

from __future__ import annotations

from abc import ABC, abstractmethod

from readmegen.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for one-shot document generation.

    The model is chosen per call because the generation orchestrator
    walks a priority list of models against a single set of credentials.
    Implementations raise LLMError, with ``retryable`` set for rate limits.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(self, prompt: str, model: str) -> LLMResponse:
        """Generate a complete response for prompt with the named model."""
        ...
