"""Generator subsystem: README text from a repository digest."""

from readmegen.generator.models import (
    GenerationError,
    GenerationFailedError,
    GenerationInProgressError,
    GenerationResult,
    QuotaExhaustedError,
)
from readmegen.generator.orchestrator import GenerationOrchestrator

__all__ = [
    "GenerationError",
    "GenerationFailedError",
    "GenerationInProgressError",
    "GenerationOrchestrator",
    "GenerationResult",
    "QuotaExhaustedError",
]
