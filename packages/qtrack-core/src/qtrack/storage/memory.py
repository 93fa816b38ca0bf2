"""In-memory storage backend. Used for tests and ephemeral runs."""

from __future__ import annotations

import copy

from qtrack.storage.base import StoragePort


class InMemoryStorage(StoragePort):
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}

    async def get(self, collection: str, record_id: str) -> dict | None:
        record = self._collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def put(self, collection: str, record_id: str, record: dict) -> None:
        if collection not in self._collections:
            self._collections[collection] = {}
        self._collections[collection][record_id] = copy.deepcopy(record)

    async def delete(self, collection: str, record_id: str) -> bool:
        return self._collections.get(collection, {}).pop(record_id, None) is not None

    async def scan(self, collection: str) -> list[dict]:
        return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]
