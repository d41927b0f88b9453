"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The app uses a JSON file on the device; tests use memory.
"""

from anthaathi.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from anthaathi.services.storage.json_file import JsonFileStorage
from anthaathi.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
