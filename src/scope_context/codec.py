"""Scope document codec: path layout and JSON wire format."""

from __future__ import annotations

import json
from typing import Any

from scope_context.exceptions import ContextValidationError, DocumentDecodeError

CONTENT_TYPE = "application/json"


def document_path(prefix: str, scope: str) -> str:
    """Return the object path of *scope*'s document: ``{prefix}/context/{scope}.json``."""
    return f"{prefix}/context/{scope}.json"


def encode_document(document: dict[str, Any]) -> bytes:
    """Serialize a scope document as compact UTF-8 JSON.

    Raises:
        ContextValidationError: If a value is not JSON-serializable.
    """
    try:
        text = json.dumps(document, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ContextValidationError(f"Scope document is not JSON-serializable: {exc}") from exc
    return text.encode("utf-8")


def decode_document(data: bytes | str, path: str = "") -> dict[str, Any]:
    """Parse a fetched document.  A JSON ``null`` body is an empty document.

    Raises:
        DocumentDecodeError: On invalid UTF-8, invalid JSON, or a non-object
            top-level value.
    """
    try:
        text = data.decode("utf-8") if isinstance(data, bytes | bytearray) else data
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DocumentDecodeError(path, str(exc)) from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise DocumentDecodeError(path, f"expected a JSON object, got {type(parsed).__name__}")
    return parsed
