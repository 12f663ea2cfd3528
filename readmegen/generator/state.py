"""Per-model attempt state machine for the generation orchestrator.

    PENDING ──success──▶ SUCCEEDED
       │  └──failure──▶ EXHAUSTED
       └──rate limited──▶ RETRYING(n) ──▶ ... ──▶ EXHAUSTED (n == max)

``advance`` is pure: the orchestrator performs the call, classifies the
outcome and asks for the next state.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Phase(str, Enum):
    PENDING = "pending"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"
    SUCCEEDED = "succeeded"


class Outcome(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


class AttemptState(BaseModel):
    """Where one model stands; ``attempts`` counts calls already made."""

    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.PENDING
    attempts: int = 0

    @property
    def terminal(self) -> bool:
        return self.phase in (Phase.EXHAUSTED, Phase.SUCCEEDED)


def advance(state: AttemptState, outcome: Outcome, max_attempts: int) -> AttemptState:
    """Return the state after one more call ended with ``outcome``."""
    if state.terminal:
        raise ValueError(f"Cannot advance from terminal state {state.phase.value}")

    attempts = state.attempts + 1
    if outcome is Outcome.SUCCESS:
        return AttemptState(phase=Phase.SUCCEEDED, attempts=attempts)
    if outcome is Outcome.RATE_LIMITED and attempts < max_attempts:
        return AttemptState(phase=Phase.RETRYING, attempts=attempts)
    return AttemptState(phase=Phase.EXHAUSTED, attempts=attempts)


def backoff_delay(state: AttemptState, base_delay: float) -> float:
    """Linear backoff before the next call: base, 2 * base, 3 * base..."""
    if state.phase is not Phase.RETRYING:
        return 0.0
    return base_delay * state.attempts
