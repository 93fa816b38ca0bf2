"""Generic typed repository over the storage port."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Generic, Mapping, TypeVar

from qtrack.models import Record, utcnow
from qtrack.storage.base import StoragePort

T = TypeVar("T", bound=Record)


class Repository(Generic[T]):
    """CRUD over one collection. Queries are linear scans."""

    model: type[T]
    collection: str

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    def _load(self, raw: dict) -> T:
        return self.model.model_validate(raw)

    def _dump(self, item: T) -> dict:
        return item.model_dump(mode="json", by_alias=True)

    async def get_all(self) -> list[T]:
        return [self._load(r) for r in await self._storage.scan(self.collection)]

    async def get_by_id(self, record_id: str) -> T | None:
        raw = await self._storage.get(self.collection, record_id)
        return self._load(raw) if raw is not None else None

    async def create(self, data: Mapping[str, Any]) -> T:
        now = utcnow()
        item = self.model.model_validate(
            {**data, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        await self._storage.put(self.collection, item.id, self._dump(item))
        return item

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> T | None:
        existing = await self.get_by_id(record_id)
        if existing is None:
            return None
        merged = {**existing.model_dump(), **changes, "id": existing.id, "updated_at": utcnow()}
        item = self.model.model_validate(merged)
        await self._storage.put(self.collection, item.id, self._dump(item))
        return item

    async def delete(self, record_id: str) -> bool:
        return await self._storage.delete(self.collection, record_id)

    async def query(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in await self.get_all() if predicate(item)]
