# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of
``python -m scope_context.runner``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

OperationName = Literal["get", "set", "keys", "delete", "clean", "clear_cache"]


class BlobStoreConfigSchema(BaseModel):
    """Backing store configuration.

    Attributes:
        type: Store type ("s3", "memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
    """

    type: str = "s3"
    path: str = ""


class OperationSchema(BaseModel):
    """A single context operation.

    Attributes:
        op: Operation name
        scope: Target scope (all operations except clean and clear_cache)
        scopes: Target scopes for clean
        keys: Keys to read or write
        values: Values to write, aligned with keys (set only)
    """

    op: OperationName
    scope: str | None = None
    scopes: list[str] = Field(default_factory=list)
    keys: list[str] = Field(default_factory=list)
    values: list[Any] = Field(default_factory=list)


class RunnerInput(BaseModel):
    """Complete runner input read from stdin.

    Attributes:
        settings: Context settings (bucket, prefix, S3 client options)
        store: Backing store configuration
        operations: Operations to run, in order
    """

    settings: dict[str, Any] = Field(default_factory=dict)
    store: BlobStoreConfigSchema = Field(default_factory=BlobStoreConfigSchema)
    operations: list[OperationSchema] = Field(default_factory=list)


class OperationResultSchema(BaseModel):
    """Result of one completed operation.

    Attributes:
        op: Operation name
        scope: Scope the operation targeted, if any
        values: Key/value pairs read by ``get``; absent keys map to null
        missing: Keys requested by ``get`` that are not stored
        keys: Key names listed by ``keys``
    """

    op: OperationName
    scope: str | None = None
    values: dict[str, Any] = Field(default_factory=dict)
    missing: list[str] = Field(default_factory=list)
    keys: list[str] = Field(default_factory=list)


class RunnerOutput(BaseModel):
    """Complete runner output written to stdout.

    The runner always outputs valid JSON matching this schema,
    even on errors.

    Attributes:
        success: Whether every operation completed
        results: Results of the operations that completed
        error: Error message (on failure)
        error_type: Error class name (on failure)
        failed_index: Index of the failing operation, if one failed
    """

    success: bool
    results: list[OperationResultSchema] = Field(default_factory=list)
    error: str = ""
    error_type: str = ""
    failed_index: int | None = None
