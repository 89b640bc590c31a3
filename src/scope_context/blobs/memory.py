"""InMemoryBlobStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from scope_context.blobs.base import BlobStore
from scope_context.exceptions import BlobNotFoundError


class InMemoryBlobStore(BlobStore):
    """In-memory blob store using a plain dict.  Data is lost on process exit.

    Parameters:
        strict_remove: Raise ``BlobNotFoundError`` when removing an absent path
                       (object stores differ here; S3 silently succeeds).
    """

    def __init__(self, *, strict_remove: bool = True) -> None:
        self._blobs: dict[str, bytes] = {}
        self._content_types: dict[str, str] = {}
        self._strict_remove = strict_remove

    async def fetch(self, path: str) -> bytes:
        try:
            return self._blobs[path]
        except KeyError:
            raise BlobNotFoundError("fetch", path, "no such blob") from None

    async def store(self, path: str, data: bytes, content_type: str) -> None:
        self._blobs[path] = bytes(data)
        self._content_types[path] = content_type

    async def remove(self, path: str) -> None:
        if path not in self._blobs:
            if self._strict_remove:
                raise BlobNotFoundError("remove", path, "no such blob")
            return
        del self._blobs[path]
        self._content_types.pop(path, None)

    def paths(self) -> list[str]:
        """Return every stored path."""
        return list(self._blobs)

    def content_type(self, path: str) -> str | None:
        return self._content_types.get(path)
