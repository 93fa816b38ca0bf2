"""Storage port — the key-value interface repositories are written against."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StoragePort(ABC):
    """Collections of JSON-compatible records, addressed by (collection, id).

    ``scan`` returns records in insertion order; replacing an existing record
    keeps its position.
    """

    async def init(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @abstractmethod
    async def get(self, collection: str, record_id: str) -> dict | None:
        ...

    @abstractmethod
    async def put(self, collection: str, record_id: str, record: dict) -> None:
        ...

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        ...

    @abstractmethod
    async def scan(self, collection: str) -> list[dict]:
        ...
