"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The engine persists everything in a flat key-value store
of JSON documents, the same shape as browser localStorage:
- values are stored as JSON *text*, so a backend can hold malformed data
- get() never raises on malformed data, it returns None
- there are no transactions; the last write to a key wins

Backends only implement the raw text operations; the JSON layer and
clear-by-prefix are shared.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

import structlog


logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """The backend could not persist a value."""
    pass


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for the key-value store.

    Any backend (JSON file, in-memory, something else later)
    must implement the raw methods below.
    """

    @abstractmethod
    def get_raw(self, key: str) -> Optional[str]:
        """
        Return the stored text for a key.

        Returns:
            The text if the key exists, None otherwise
        """
        pass

    @abstractmethod
    def set_raw(self, key: str, text: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the backend can't persist the value
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """All keys currently stored."""
        pass

    def get(self, key: str) -> Optional[Any]:
        """
        Load and parse the JSON value for a key.

        Returns:
            The parsed value, or None if the key is missing or its
            content isn't valid JSON
        """
        raw = self.get_raw(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("storage_value_corrupt", key=key)
            return None

    def set(self, key: str, value: Any) -> None:
        """Serialize a JSON-compatible value and store it."""
        self.set_raw(key, json.dumps(value, ensure_ascii=False))

    def clear_by_prefix(self, prefix: str) -> int:
        """
        Remove every key starting with prefix.

        Returns:
            Number of keys removed
        """
        doomed = [key for key in self.keys() if key.startswith(prefix)]
        for key in doomed:
            self.remove(key)
        return len(doomed)
