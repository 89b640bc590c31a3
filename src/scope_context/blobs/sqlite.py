"""SQLiteBlobStore — durable, single-file blob storage using aiosqlite."""

from __future__ import annotations

import sqlite3

try:
    import aiosqlite
except ImportError as exc:
    raise ImportError(
        "SQLiteBlobStore requires the 'aiosqlite' package. "
        "Install it with: pip install scope-context[sqlite]"
    ) from exc

from scope_context.blobs.base import BlobStore
from scope_context.exceptions import BlobNotFoundError, BlobStoreError

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS blobs (
    path         TEXT NOT NULL PRIMARY KEY,
    data         BLOB NOT NULL,
    content_type TEXT NOT NULL
)
"""


class SQLiteBlobStore(BlobStore):
    """Persistent blob store backed by a single SQLite file.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
    """

    def __init__(self, db_path: str = "scope_context.db") -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is None:
            self._db = await aiosqlite.connect(self._db_path)
            await self._db.execute(_CREATE_TABLE)
            await self._db.commit()
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── BlobStore protocol ───────────────────────────────────

    async def fetch(self, path: str) -> bytes:
        try:
            db = await self._connect()
            cursor = await db.execute("SELECT data FROM blobs WHERE path = ?", (path,))
            row = await cursor.fetchone()
        except sqlite3.Error as exc:
            raise BlobStoreError("fetch", path, str(exc)) from exc
        if row is None:
            raise BlobNotFoundError("fetch", path, "no such blob")
        return bytes(row[0])

    async def store(self, path: str, data: bytes, content_type: str) -> None:
        try:
            db = await self._connect()
            await db.execute(
                "INSERT OR REPLACE INTO blobs (path, data, content_type) VALUES (?, ?, ?)",
                (path, data, content_type),
            )
            await db.commit()
        except sqlite3.Error as exc:
            raise BlobStoreError("store", path, str(exc)) from exc

    async def remove(self, path: str) -> None:
        try:
            db = await self._connect()
            cursor = await db.execute("DELETE FROM blobs WHERE path = ?", (path,))
            await db.commit()
        except sqlite3.Error as exc:
            raise BlobStoreError("remove", path, str(exc)) from exc
        if cursor.rowcount == 0:
            raise BlobNotFoundError("remove", path, "no such blob")
