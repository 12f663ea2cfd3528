"""Generation orchestrator: model fallback, rate-limit backoff and quota accounting."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from readmegen.config.models import LLMSettings
from readmegen.generator.models import (
    GenerationFailedError,
    GenerationInProgressError,
    GenerationResult,
    QuotaExhaustedError,
)
from readmegen.generator.prompts import build_readme_prompt
from readmegen.generator.state import AttemptState, Outcome, advance, backoff_delay
from readmegen.generator.template import TEMPLATE_MODEL, render_template_readme
from readmegen.llm.base import LLMProvider
from readmegen.llm.models import is_rate_limit
from readmegen.quota.ledger import QuotaLedger

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class GenerationOrchestrator:
    """Turns a digest into README text using the first model that works.

    Candidates are the configured models in priority order, minus those
    the quota ledger has marked exhausted for today. Each candidate runs
    through its own AttemptState: rate limits are retried with linear
    backoff up to ``max_attempts``, any other failure moves on to the next
    model at once. Only a successful call is recorded against the quota.

    One generation at a time: a second ``generate`` while the first is
    still running raises GenerationInProgressError.
    """

    def __init__(
        self,
        llm: LLMProvider,
        ledger: QuotaLedger,
        models: Sequence[str],
        *,
        max_attempts: int = 3,
        base_delay: float = 5.0,
        template_fallback: bool = False,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.llm = llm
        self.ledger = ledger
        self.models = list(models)
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.template_fallback = template_fallback
        self._sleep = sleep
        self._in_flight = False

    @classmethod
    def from_settings(
        cls, llm: LLMProvider, ledger: QuotaLedger, settings: LLMSettings, **kwargs
    ) -> GenerationOrchestrator:
        return cls(
            llm,
            ledger,
            settings.model_names,
            max_attempts=settings.max_retries,
            base_delay=settings.retry_base_delay,
            template_fallback=settings.template_fallback,
            **kwargs,
        )

    @property
    def busy(self) -> bool:
        return self._in_flight

    def candidate_models(self) -> list[str]:
        return [m for m in self.models if self.ledger.can_use_model(m)]

    async def generate(self, digest: str) -> GenerationResult:
        if self._in_flight:
            raise GenerationInProgressError()
        self._in_flight = True
        try:
            return await self._generate(digest)
        finally:
            self._in_flight = False

    async def _generate(self, digest: str) -> GenerationResult:
        candidates = self.candidate_models()
        if not candidates:
            raise QuotaExhaustedError()

        prompt = build_readme_prompt(digest)
        errors: dict[str, Exception] = {}
        for model in candidates:
            result, error = await self._run_model(model, prompt)
            if result is not None:
                self.ledger.record_usage(model)
                return result
            if error is not None:
                errors[model] = error

        if self.template_fallback:
            logger.warning("All models failed; falling back to template README")
            return GenerationResult(
                text=render_template_readme(digest), model=TEMPLATE_MODEL
            )
        raise GenerationFailedError(errors)

    async def _run_model(
        self, model: str, prompt: str
    ) -> tuple[GenerationResult | None, Exception | None]:
        """Drive one model to SUCCEEDED or EXHAUSTED."""
        state = AttemptState()
        last_error: Exception | None = None

        while not state.terminal:
            delay = backoff_delay(state, self.base_delay)
            if delay:
                logger.info(
                    "Rate limited on %s, retrying in %.1fs (attempt %d/%d)",
                    model, delay, state.attempts + 1, self.max_attempts,
                )
                await self._sleep(delay)

            try:
                response = await self.llm.generate(prompt, model)
            except Exception as e:
                last_error = e
                outcome = Outcome.RATE_LIMITED if is_rate_limit(e) else Outcome.FAILED
                logger.warning(
                    "Model %s, attempt %d failed: %s", model, state.attempts + 1, e
                )
                state = advance(state, outcome, self.max_attempts)
                continue

            state = advance(state, Outcome.SUCCESS, self.max_attempts)
            logger.info("Generated README with %s", model)
            return GenerationResult(text=response.content, model=model), None

        logger.warning("Giving up on %s after %d attempt(s)", model, state.attempts)
        return None, last_error
