"""scope_context — Scoped key/value context documents on an object store.

Every scope is one JSON document.  Reads are cached per scope; every write
persists the whole document and invalidates the scope's cache entry.
"""

from scope_context.context import MISSING, ScopeContext
from scope_context.exceptions import (
    BlobNotFoundError,
    BlobStoreError,
    ContextConfigError,
    ContextError,
    ContextValidationError,
    DocumentDecodeError,
    ErrorKind,
    StoreError,
)
from scope_context.settings import ContextSettings

__all__ = [
    "MISSING",
    "BlobNotFoundError",
    "BlobStoreError",
    "ContextConfigError",
    "ContextError",
    "ContextSettings",
    "ContextValidationError",
    "DocumentDecodeError",
    "ErrorKind",
    "ScopeContext",
    "StoreError",
]
