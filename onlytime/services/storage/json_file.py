"""
JSON File Storage Implementation

The whole store is one JSON object on disk mapping key -> JSON text.
Personal expense data is small, so every operation reads the file and every
mutation rewrites it. Two processes writing at once: last write wins.

A missing, unreadable or corrupt file reads as an empty store. Write
failures raise StorageWriteError.
"""

import json
from pathlib import Path
from typing import Iterable, Optional

import structlog

from onlytime.services.storage.interface import (
    KeyValueStorageInterface,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorageInterface):
    """Key-value store persisted to a single JSON file."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("storage_file_unreadable", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_file_unexpected_shape", path=str(self._path))
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}") from e

    def get_raw(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_raw(self, key: str, text: str) -> None:
        data = self._load()
        data[key] = text
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def keys(self) -> Iterable[str]:
        return list(self._load())

    def clear_by_prefix(self, prefix: str) -> int:
        data = self._load()
        kept = {key: value for key, value in data.items() if not key.startswith(prefix)}
        removed = len(data) - len(kept)
        if removed:
            self._save(kept)
        return removed
