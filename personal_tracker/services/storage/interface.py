"""
Abstract Storage Interface

DESIGN DECISION: The tracker persists through a plain string key-value
store, the same shape as a browser's localStorage. This allows us to:
1. Keep state in JSON files on disk for everyday use
2. Use in-memory storage for testing
3. Swap in another backend without touching the engines

Values are opaque strings at this layer. JSON encoding and decoding, and
the fail-soft fallback on bad data, live in TrackerRepository.

KNOWN GAP: There is no locking. Two processes writing the same store can
lose each other's updates (last whole-collection write wins). Running
more than one tracker against one store needs a single-writer lock or a
transactional backend first.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for the tracker's key-value store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under ``key``.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StoreReadError: If the value exists but cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under ``key``.

        Raises:
            StoreWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove ``key``.

        Returns:
            True if something was removed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreReadError(StorageError):
    """A stored value could not be read or decoded."""
    pass


class StoreWriteError(StorageError):
    """A value could not be written."""
    pass
