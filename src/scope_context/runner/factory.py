# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Blob store factory for creating backends from configuration.

Uses the Registry pattern to map type strings to store builders,
allowing extensibility without modifying factory code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from scope_context.blobs import BlobStore, InMemoryBlobStore, S3BlobStore, SQLiteBlobStore
from scope_context.settings import ContextSettings

from .schema import BlobStoreConfigSchema

StoreBuilder = Callable[[BlobStoreConfigSchema, ContextSettings], BlobStore]


class BlobStoreFactoryError(Exception):
    """Raised when blob store creation fails."""

    pass


def _build_s3(config: BlobStoreConfigSchema, settings: ContextSettings) -> BlobStore:
    return S3BlobStore(settings.bucket, **settings.client_options())


def _build_memory(config: BlobStoreConfigSchema, settings: ContextSettings) -> BlobStore:
    return InMemoryBlobStore()


def _build_sqlite(config: BlobStoreConfigSchema, settings: ContextSettings) -> BlobStore:
    if not config.path:
        raise BlobStoreFactoryError("SQLite store requires 'path' configuration")
    return SQLiteBlobStore(config.path)


class BlobStoreFactory:
    """Creates blob store instances from configuration.

    Store types are registered at class level and can be extended via
    the `register` class method.

    Example:
        store = BlobStoreFactory.create(
            BlobStoreConfigSchema(type="sqlite", path="ctx.db"),
            ContextSettings(bucket="b"),
        )
    """

    _registry: ClassVar[dict[str, StoreBuilder]] = {
        "s3": _build_s3,
        "memory": _build_memory,
        "sqlite": _build_sqlite,
    }

    @classmethod
    def register(cls, type_name: str, builder: StoreBuilder) -> None:
        """Register a custom store type.

        Args:
            type_name: Type string to use in configuration
            builder: Callable taking (config, settings) and returning a BlobStore

        Example:
            BlobStoreFactory.register("gcs", build_gcs_store)
        """
        cls._registry[type_name] = builder

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered store type names."""
        return list(cls._registry.keys())

    @classmethod
    def create(cls, config: BlobStoreConfigSchema, settings: ContextSettings) -> BlobStore:
        """Create a blob store.

        Raises:
            BlobStoreFactoryError: If the type is unknown or misconfigured
        """
        builder = cls._registry.get(config.type)
        if builder is None:
            raise BlobStoreFactoryError(
                f"Unknown store type '{config.type}'. "
                f"Available types: {', '.join(sorted(cls.registered_types()))}"
            )
        return builder(config, settings)
