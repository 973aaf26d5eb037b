"""In-memory storage backend, used for tests and throwaway sessions."""

from typing import Iterable, Optional

from onlytime.services.storage.interface import KeyValueStorageInterface


class InMemoryStorage(KeyValueStorageInterface):
    """Dict-backed store. Values are kept as JSON text like any other backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_raw(self, key: str, text: str) -> None:
        self._data[key] = text

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)
