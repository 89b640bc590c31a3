"""BlobStore protocol — byte-blob persistence addressed by path."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base for all backing-store adapters.

    A blob store is completely agnostic to what is being stored — it just
    persists opaque ``bytes`` keyed by a string path.

    Failures are reported through the structured error types:
    :class:`~scope_context.exceptions.BlobNotFoundError` when the path does
    not exist, :class:`~scope_context.exceptions.BlobStoreError` otherwise.
    """

    @abstractmethod
    async def fetch(self, path: str) -> bytes:
        """Return the blob at *path*.  Raises ``BlobNotFoundError`` if absent."""
        ...

    @abstractmethod
    async def store(self, path: str, data: bytes, content_type: str) -> None:
        """Create or fully overwrite the blob at *path*."""
        ...

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete the blob at *path*.  May raise ``BlobNotFoundError`` if absent."""
        ...

    async def close(self) -> None:  # noqa: B027
        """Release backend resources.  Default is a no-op."""
