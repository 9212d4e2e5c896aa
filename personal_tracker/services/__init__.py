"""Services package."""

from personal_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    StorageError,
    StoreReadError,
    StoreWriteError,
    TrackerRepository,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStoreInterface",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    "TrackerRepository",
]
