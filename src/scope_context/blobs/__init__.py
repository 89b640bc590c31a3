"""Backing-store adapters for scope documents."""

from scope_context.blobs.base import BlobStore
from scope_context.blobs.memory import InMemoryBlobStore
from scope_context.blobs.s3 import S3BlobStore
from scope_context.blobs.sqlite import SQLiteBlobStore

__all__ = ["BlobStore", "InMemoryBlobStore", "S3BlobStore", "SQLiteBlobStore"]
