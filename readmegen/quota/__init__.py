"""Quota subsystem: per-model daily usage and the storage it persists to."""

from readmegen.quota.ledger import ModelQuota, QuotaLedger
from readmegen.quota.storage import InMemoryStorage, JsonFileStorage, KeyValueStorage

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "ModelQuota",
    "QuotaLedger",
]
