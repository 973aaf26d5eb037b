"""
Storage Services Package

Provides the abstract key-value interface and two backends: a JSON file
on disk and an in-memory dict.
"""

from onlytime.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)
from onlytime.services.storage.json_file import JsonFileStorage
from onlytime.services.storage.keys import StorageKeys
from onlytime.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    "StorageKeys",
    # Exceptions
    "StorageError",
    "StorageWriteError",
    # Backends
    "InMemoryStorage",
    "JsonFileStorage",
]
