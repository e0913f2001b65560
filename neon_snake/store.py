"""Key-value storage for the high score."""

import json
import logging
import os
from typing import Optional, Protocol

from .constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """String values kept in a single JSON object on disk.

    A missing or unreadable file reads as empty; every set rewrites the file.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


def load_high_score(store: KeyValueStore, key: str = HIGH_SCORE_KEY) -> int:
    raw = store.get(key)
    if raw is None:
        return 0
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Stored high score %r is not an integer, using 0", raw)
        return 0
    if value < 0:
        logger.warning("Stored high score %d is negative, using 0", value)
        return 0
    return value
