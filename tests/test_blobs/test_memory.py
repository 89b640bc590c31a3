"""Tests for InMemoryBlobStore."""

import pytest

from scope_context import BlobNotFoundError, ErrorKind
from scope_context.blobs import InMemoryBlobStore


@pytest.fixture
def store():
    return InMemoryBlobStore()


async def test_fetch_nonexistent(store):
    with pytest.raises(BlobNotFoundError) as exc_info:
        await store.fetch("a/b.json")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.is_not_found
    assert exc_info.value.path == "a/b.json"


async def test_store_and_fetch(store):
    await store.store("p", b"data", "application/json")
    assert await store.fetch("p") == b"data"
    assert store.content_type("p") == "application/json"


async def test_overwrite(store):
    await store.store("p", b"one", "text/plain")
    await store.store("p", b"two", "text/plain")
    assert await store.fetch("p") == b"two"


async def test_remove(store):
    await store.store("p", b"x", "text/plain")
    await store.remove("p")
    assert store.paths() == []
    assert store.content_type("p") is None


async def test_remove_nonexistent_strict(store):
    with pytest.raises(BlobNotFoundError):
        await store.remove("nope")


async def test_remove_nonexistent_lenient():
    store = InMemoryBlobStore(strict_remove=False)
    await store.remove("nope")  # should not raise


async def test_paths_are_isolated(store):
    await store.store("a", b"1", "text/plain")
    await store.store("b", b"2", "text/plain")
    assert sorted(store.paths()) == ["a", "b"]
    assert await store.fetch("a") == b"1"
