"""Tests for SQLiteBlobStore."""

import pytest

from scope_context import BlobNotFoundError, ScopeContext
from scope_context.blobs import SQLiteBlobStore


@pytest.fixture
async def store():
    s = SQLiteBlobStore(":memory:")
    yield s
    await s.close()


async def test_fetch_nonexistent(store):
    with pytest.raises(BlobNotFoundError):
        await store.fetch("p/context/s.json")


async def test_store_and_fetch(store):
    await store.store("p/context/s.json", b'{"a":1}', "application/json")
    assert await store.fetch("p/context/s.json") == b'{"a":1}'


async def test_overwrite(store):
    await store.store("k", b"one", "text/plain")
    await store.store("k", b"two", "text/plain")
    assert await store.fetch("k") == b"two"


async def test_remove(store):
    await store.store("k", b"x", "text/plain")
    await store.remove("k")
    with pytest.raises(BlobNotFoundError):
        await store.fetch("k")


async def test_remove_nonexistent(store):
    with pytest.raises(BlobNotFoundError):
        await store.remove("nope")


async def test_persists_across_connections(tmp_path):
    db_path = str(tmp_path / "ctx.db")

    first = SQLiteBlobStore(db_path)
    await first.store("k", b"durable", "text/plain")
    await first.close()

    second = SQLiteBlobStore(db_path)
    assert await second.fetch("k") == b"durable"
    await second.close()


async def test_scope_context_on_sqlite(store):
    ctx = ScopeContext(bucket="unused", prefix="p", blob_store=store)

    await ctx.set("s", ["a", "b"], [1, {"c": True}])
    assert await ctx.get("s", ["a", "b"]) == [1, {"c": True}]

    await ctx.delete("s")
    await ctx.delete("s")
    assert await ctx.keys("s") == []
