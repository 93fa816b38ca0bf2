"""SQLite-backed storage. One table holds every collection as JSON bodies."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import aiosqlite

from qtrack.storage.base import StoragePort

logger = logging.getLogger(__name__)


class SQLiteStorage(StoragePort):
    """Persistent record storage on top of aiosqlite."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def init(self) -> None:
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self.db_path)
        await self._db.executescript("""
            CREATE TABLE IF NOT EXISTS records (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                collection TEXT NOT NULL,
                id TEXT NOT NULL,
                body TEXT NOT NULL,
                UNIQUE (collection, id)
            );
            CREATE INDEX IF NOT EXISTS idx_records_collection ON records(collection, seq);
        """)
        await self._db.commit()
        logger.info("SQLite storage opened at %s", self.db_path)

    def _conn(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("SQLiteStorage.init() has not been called")
        return self._db

    async def get(self, collection: str, record_id: str) -> dict | None:
        cursor = await self._conn().execute(
            "SELECT body FROM records WHERE collection = ? AND id = ?",
            (collection, record_id),
        )
        row = await cursor.fetchone()
        return json.loads(row[0]) if row else None

    async def put(self, collection: str, record_id: str, record: dict) -> None:
        db = self._conn()
        await db.execute(
            """INSERT INTO records (collection, id, body) VALUES (?, ?, ?)
               ON CONFLICT(collection, id) DO UPDATE SET body=excluded.body""",
            (collection, record_id, json.dumps(record)),
        )
        await db.commit()

    async def delete(self, collection: str, record_id: str) -> bool:
        db = self._conn()
        cursor = await db.execute(
            "DELETE FROM records WHERE collection = ? AND id = ?",
            (collection, record_id),
        )
        await db.commit()
        return cursor.rowcount > 0

    async def scan(self, collection: str) -> list[dict]:
        cursor = await self._conn().execute(
            "SELECT body FROM records WHERE collection = ? ORDER BY seq ASC",
            (collection,),
        )
        rows = await cursor.fetchall()
        return [json.loads(r[0]) for r in rows]

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None
