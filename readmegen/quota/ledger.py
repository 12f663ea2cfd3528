"""Per-model daily request quotas, persisted across sessions."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta

from pydantic import BaseModel

from readmegen.quota.storage import KeyValueStorage

logger = logging.getLogger(__name__)

KEY_PREFIX = "quota_"


class ModelQuota(BaseModel):
    """Daily usage of one model."""

    model: str
    daily_limit: int
    used: int = 0
    reset_at: datetime

    @property
    def remaining(self) -> int:
        return max(0, self.daily_limit - self.used)

    @property
    def exhausted(self) -> bool:
        return self.used >= self.daily_limit


def next_midnight(now: datetime) -> datetime:
    """Return the local midnight following ``now``."""
    return (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


def storage_key(model: str, day: str) -> str:
    return f"{KEY_PREFIX}{model}_{day}"


class QuotaLedger:
    """Tracks how many requests each model has served today.

    Counts are written to ``storage`` under ``quota_<model>_<YYYY-MM-DD>``
    after every recorded use and read back for the current day when the
    ledger is constructed. A model's count drops to zero once the clock
    passes its ``reset_at`` (the next local midnight).

    Models missing from ``limits`` are never blocked.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        limits: Mapping[str, int],
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._quotas: dict[str, ModelQuota] = {}

        now = clock()
        today = now.date().isoformat()
        reset_at = next_midnight(now)
        for model, limit in limits.items():
            self._quotas[model] = ModelQuota(
                model=model,
                daily_limit=limit,
                used=self._read_count(model, today),
                reset_at=reset_at,
            )

    def _read_count(self, model: str, day: str) -> int:
        raw = self._storage.get(storage_key(model, day))
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring corrupt quota count %r for %s", raw, model)
            return 0

    def _refresh(self, quota: ModelQuota, now: datetime) -> None:
        if now >= quota.reset_at:
            logger.debug("Daily quota for %s reset", quota.model)
            quota.used = 0
            quota.reset_at = next_midnight(now)

    def can_use_model(self, model: str) -> bool:
        quota = self._quotas.get(model)
        if quota is None:
            return True
        self._refresh(quota, self._clock())
        return not quota.exhausted

    def record_usage(self, model: str) -> None:
        quota = self._quotas.get(model)
        if quota is None:
            return
        # One clock read so the reset check and the dated key agree.
        now = self._clock()
        self._refresh(quota, now)
        quota.used += 1
        self._storage.set(storage_key(model, now.date().isoformat()), str(quota.used))
        logger.debug("Recorded use of %s (%d/%d)", model, quota.used, quota.daily_limit)

    def remaining_quota(self, model: str) -> int | float:
        """Requests left today; ``math.inf`` for models without a limit entry."""
        quota = self._quotas.get(model)
        if quota is None:
            return math.inf
        self._refresh(quota, self._clock())
        return quota.remaining

    def recommended_model(self, default: str | None = None) -> str | None:
        """The usable model with the most remaining quota."""
        best, best_remaining = default, 0
        for model in self._quotas:
            if not self.can_use_model(model):
                continue
            remaining = self.remaining_quota(model)
            if remaining > best_remaining:
                best, best_remaining = model, remaining
        return best

    def snapshot(self) -> list[ModelQuota]:
        now = self._clock()
        for quota in self._quotas.values():
            self._refresh(quota, now)
        return [q.model_copy() for q in self._quotas.values()]
