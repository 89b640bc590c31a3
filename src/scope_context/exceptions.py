"""Custom exceptions for the scope_context package."""

from __future__ import annotations

from enum import Enum


class ContextError(Exception):
    """Base exception for all scope-context errors."""


class ContextValidationError(ContextError):
    """Raised when call input is malformed.  No store interaction happens."""


class ContextConfigError(ContextValidationError):
    """Raised when the context settings are invalid."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid setting '{field}': {message}")


class StoreError(ContextError):
    """Raised when a backing store operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class DocumentDecodeError(StoreError):
    """Raised when a fetched scope document is not a JSON object."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__("decode", f"{path}: {detail}")


class ErrorKind(str, Enum):
    """Structured classification of blob store failures."""

    NOT_FOUND = "not_found"
    OTHER = "other"


class BlobStoreError(StoreError):
    """Raised by a :class:`~scope_context.blobs.BlobStore` backend.

    Callers branch on :attr:`kind` (or on :class:`BlobNotFoundError`), never
    on the message text.
    """

    kind: ErrorKind = ErrorKind.OTHER

    def __init__(self, operation: str, path: str, detail: str = "") -> None:
        self.path = path
        super().__init__(operation, f"{path}: {detail}" if detail else path)

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND


class BlobNotFoundError(BlobStoreError):
    """Raised when the requested path does not exist in the backing store."""

    kind = ErrorKind.NOT_FOUND
