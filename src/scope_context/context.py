"""ScopeContext — cached, scope-partitioned key/value documents on a blob store.

Each scope is persisted as one JSON object at ``{prefix}/context/{scope}.json``.
Reads are served from an in-process cache once a scope has been loaded;
every successful write invalidates the scope so the next read reconciles
with the backing store.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Final

from scope_context.blobs.s3 import S3BlobStore
from scope_context.codec import CONTENT_TYPE, decode_document, document_path, encode_document
from scope_context.exceptions import BlobNotFoundError, ContextValidationError
from scope_context.settings import ContextSettings, load_settings

if TYPE_CHECKING:
    from types import TracebackType

    from scope_context.blobs.base import BlobStore

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel type for "no value stored under this key"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Final = _Missing()
"""Returned by :meth:`ScopeContext.get` for keys absent from the scope.

Distinct from ``None``, which is a legitimate stored (JSON ``null``) value.
"""


def _key_list(keys: str | Iterable[str]) -> list[str]:
    names = [keys] if isinstance(keys, str) else list(keys)
    for name in names:
        if not isinstance(name, str):
            raise ContextValidationError(f"Keys must be strings, got {type(name).__name__}")
    return names


class ScopeContext:
    """Scope cache manager.

    Owns two pieces of state: the materialized document of each scope and
    the set of scopes whose document is *loaded*, i.e. authoritative.  A
    document can stay resident after it stops being authoritative; only the
    loaded marker decides whether a read may be served from memory.

    Concurrent calls on the same scope are not serialized.  Callers needing
    ordering must await operations in sequence.

    Parameters:
        settings:   :class:`ContextSettings` or a plain mapping of settings.
        blob_store: Backing store.  Defaults to an :class:`S3BlobStore`
                    for ``settings.bucket``.
        **overrides: Individual settings merged over *settings*.

    Raises:
        ContextConfigError: If the settings are invalid (e.g. no bucket).
    """

    def __init__(
        self,
        settings: ContextSettings | Mapping[str, Any] | None = None,
        blob_store: BlobStore | None = None,
        **overrides: Any,
    ) -> None:
        self._settings = load_settings(settings, **overrides)
        self._owns_blob_store = blob_store is None
        self._blobs: BlobStore = blob_store or S3BlobStore(
            self._settings.bucket, **self._settings.client_options()
        )
        self._documents: dict[str, dict[str, Any]] = {}
        self._loaded: set[str] = set()

    # ── lifecycle ────────────────────────────────────────────

    async def open(self) -> None:
        """Prepare the context for use.  Nothing to do today; kept for symmetry."""

    async def close(self) -> None:
        """Release the backing store if this context created it."""
        if self._owns_blob_store:
            await self._blobs.close()

    async def __aenter__(self) -> ScopeContext:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ── reads ────────────────────────────────────────────────

    async def get(self, scope: str, keys: str | Iterable[str]) -> list[Any]:
        """Return the values of *keys* in *scope*, in request order.

        A single key is treated as a one-element list.  Keys absent from the
        scope come back as :data:`MISSING`; an absent scope is an empty one.
        """
        self._check_scope(scope)
        names = _key_list(keys)
        document = await self._ensure_loaded(scope)
        return [copy.deepcopy(document.get(name, MISSING)) for name in names]

    async def get_value(self, scope: str, key: str, default: Any = MISSING) -> Any:
        """Return the value of a single *key*, or *default* if it is not stored."""
        (value,) = await self.get(scope, key)
        return default if value is MISSING else value

    async def keys(self, scope: str) -> list[str]:
        """Return the key names stored in *scope* (document order, not sorted)."""
        self._check_scope(scope)
        document = await self._ensure_loaded(scope)
        return list(document)

    # ── writes ───────────────────────────────────────────────

    async def set(self, scope: str, keys: str | Iterable[str], values: Any) -> None:
        """Assign *values* to *keys* in *scope* and persist the whole document.

        With a single string key, *values* is that key's value (a list is
        stored as a list).  With a sequence of keys, *values* must be a
        sequence of equal length; the last of duplicate keys wins.

        The update is applied to a copy of the resident document.  Only after
        the store accepts it does the copy replace the cached document, and
        the scope is then invalidated so the next read reloads it.  A failed
        store call leaves the cache exactly as it was.

        Raises:
            ContextValidationError: On mismatched lengths, non-string keys, or
                values that cannot be encoded.  Nothing is written.
            StoreError: If the backing store rejects the write.
        """
        self._check_scope(scope)
        if isinstance(keys, str):
            names, items = [keys], [values]
        else:
            names = _key_list(keys)
            items = list(values) if isinstance(values, list | tuple) else [values]
        if len(names) != len(items):
            raise ContextValidationError(
                f"Keys and values must have the same length ({len(names)} != {len(items)})"
            )

        updated = dict(self._documents.get(scope, {}))
        updated.update(zip(names, items, strict=True))
        payload = encode_document(updated)

        path = self._path(scope)
        await self._blobs.store(path, payload, CONTENT_TYPE)

        # resident copy is decoded from the payload so callers cannot alias it
        self._documents[scope] = decode_document(payload, path)
        self._loaded.discard(scope)
        logger.debug("Persisted %d key(s) to scope %s; cache invalidated", len(names), scope)

    async def delete(self, scope: str) -> None:
        """Remove *scope* from the backing store and from the cache.

        Deleting an absent scope succeeds.
        """
        self._check_scope(scope)
        try:
            await self._blobs.remove(self._path(scope))
        except BlobNotFoundError as exc:
            logger.warning("Scope %s not found during deletion: %s", scope, exc)

        self._documents.pop(scope, None)
        self._loaded.discard(scope)

    async def clean(self, scopes: str | Iterable[str]) -> None:
        """Delete each scope in order.  Stops at the first failure."""
        for scope in [scopes] if isinstance(scopes, str) else list(scopes):
            await self.delete(scope)

    def clear_cache(self) -> None:
        """Forget every cached document.  The backing store is untouched."""
        self._documents.clear()
        self._loaded.clear()

    # ── introspection ────────────────────────────────────────

    def is_loaded(self, scope: str) -> bool:
        """Return ``True`` if *scope* will be served from memory on next read."""
        return scope in self._loaded

    def cached_scopes(self) -> list[str]:
        """Return the scopes currently marked as loaded."""
        return list(self._loaded)

    def path_for(self, scope: str) -> str:
        """Return the backing-store path of *scope*'s document."""
        self._check_scope(scope)
        return self._path(scope)

    @property
    def settings(self) -> ContextSettings:
        return self._settings

    @property
    def blob_store(self) -> BlobStore:
        return self._blobs

    # ── internals ────────────────────────────────────────────

    def _path(self, scope: str) -> str:
        return document_path(self._settings.prefix, scope)

    @staticmethod
    def _check_scope(scope: str) -> None:
        if not isinstance(scope, str) or not scope:
            raise ContextValidationError(f"Scope must be a non-empty string, got {scope!r}")

    async def _ensure_loaded(self, scope: str) -> dict[str, Any]:
        if scope in self._loaded:
            logger.debug("Cache hit for scope %s", scope)
            return self._documents[scope]

        path = self._path(scope)
        try:
            data = await self._blobs.fetch(path)
        except BlobNotFoundError as exc:
            logger.warning("Scope %s not found in backing store: %s", scope, exc)
            document: dict[str, Any] = {}
        else:
            document = decode_document(data, path)

        self._documents[scope] = document
        self._loaded.add(scope)
        logger.debug("Loaded scope %s from %s (%d key(s))", scope, path, len(document))
        return document
