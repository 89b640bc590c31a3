"""Shared test fixtures."""

import os

import pytest

from scope_context import ScopeContext
from scope_context.blobs import InMemoryBlobStore


class RecordingBlobStore(InMemoryBlobStore):
    """InMemoryBlobStore that records every call as ``(operation, path)``."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    async def fetch(self, path):
        self.calls.append(("fetch", path))
        return await super().fetch(path)

    async def store(self, path, data, content_type):
        self.calls.append(("store", path))
        await super().store(path, data, content_type)

    async def remove(self, path):
        self.calls.append(("remove", path))
        await super().remove(path)

    def count(self, operation):
        return sum(1 for op, _ in self.calls if op == operation)

    def blob(self, path):
        """Return the stored bytes at *path* without recording a call."""
        return self._blobs.get(path)

    def seed(self, path, data):
        self._blobs[path] = data
        self._content_types[path] = "application/json"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep SCOPE_CONTEXT_* variables and stray .env files out of the tests."""
    for name in list(os.environ):
        if name.startswith("SCOPE_CONTEXT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def blob_store():
    return RecordingBlobStore()


@pytest.fixture
def ctx(blob_store):
    return ScopeContext(bucket="test-bucket", prefix="test-prefix", blob_store=blob_store)
