"""Storage port and its backends."""

from qtrack.storage.base import StoragePort
from qtrack.storage.memory import InMemoryStorage
from qtrack.storage.sqlite import SQLiteStorage

__all__ = [
    "InMemoryStorage",
    "SQLiteStorage",
    "StoragePort",
    "create_storage",
]


def create_storage(backend: str, db_path: str = "") -> StoragePort:
    """Build the backend named in configuration."""
    if backend == "memory":
        return InMemoryStorage()
    if backend == "sqlite":
        return SQLiteStorage(db_path)
    raise ValueError(f"Unknown storage backend: {backend}")
