"""Results and errors of README generation."""

from __future__ import annotations

from pydantic import BaseModel


class GenerationResult(BaseModel):
    """Generated README text and the model that wrote it."""

    text: str
    model: str


class GenerationError(Exception):
    """Base class for terminal generation failures."""


class QuotaExhaustedError(GenerationError):
    """Every configured model has used up its daily quota."""

    def __init__(self) -> None:
        super().__init__(
            "Daily quota exceeded for all available models. "
            "Please try again tomorrow or upgrade to a paid plan."
        )


class GenerationFailedError(GenerationError):
    """Every candidate model was tried and none produced a README."""

    def __init__(self, errors: dict[str, Exception]) -> None:
        self.errors = errors
        detail = "; ".join(f"{model}: {err}" for model, err in errors.items())
        message = (
            "All Gemini models failed. Please check your API key and quota, "
            "or try again later."
        )
        super().__init__(f"{message} ({detail})" if detail else message)


class GenerationInProgressError(GenerationError):
    """A generation is already running on this orchestrator."""

    def __init__(self) -> None:
        super().__init__("A README generation is already in progress")
