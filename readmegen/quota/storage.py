"""Key-value storage backends for quota counters and the saved GitHub token."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """Durable string-to-string storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Storage persisted as a flat JSON object on disk.

    Every ``set`` re-reads the file before writing so that keys written by
    another process in the meantime are kept. Two processes writing the
    same key still race, last write wins. A file that is not a JSON object
    is moved to ``<name>.bak`` before the first write replaces it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    @property
    def backup_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".bak")

    def _load(self, set_aside_corrupt: bool = False) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return self._discard_corrupt(set_aside_corrupt)
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: not a JSON object", self.path)
            return self._discard_corrupt(set_aside_corrupt)
        return {str(k): str(v) for k, v in data.items()}

    def _discard_corrupt(self, set_aside: bool) -> dict[str, str]:
        if set_aside:
            os.replace(self.path, self.backup_path)
            logger.warning("Moved corrupt state file to %s", self.backup_path)
        return {}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load(set_aside_corrupt=True)
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("stored %s in %s", key, self.path)
