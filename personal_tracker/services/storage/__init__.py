"""
Storage Services Package

Provides the abstract key-value store interface, its file and in-memory
implementations, and the fail-soft repository the tracker loads and
saves its state through.
"""

from personal_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
    StoreReadError,
    StoreWriteError,
)
from personal_tracker.services.storage.json_file import JsonFileStore
from personal_tracker.services.storage.memory import InMemoryStore
from personal_tracker.services.storage.repository import TrackerRepository

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
    "TrackerRepository",
]
