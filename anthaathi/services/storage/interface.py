"""
Abstract Storage Interface

DESIGN DECISION: Stores talk to a tiny key-value interface, the same
shape as a phone's local storage: string keys, string values.
This allows us to:
1. Keep everything in one JSON file on the device
2. Use in-memory storage for testing
3. Swap in another backend without touching the stores

Each store owns exactly one key and serialises its own values.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for on-device key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend could not be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value could not be persisted
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is a no-op.

        Raises:
            StorageWriteError: If the change could not be persisted
        """
        pass

    async def keys(self) -> list[str]:
        """List stored keys. Backends may override for efficiency."""
        return []


class StorageError(Exception):
    """Base exception for storage operations."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class StorageReadError(StorageError):
    """Stored data could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be persisted."""
    pass
