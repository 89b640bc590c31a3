"""S3BlobStore — Amazon S3 (or S3-compatible) backend.

Keeps boto3 out of the cache manager.  boto3 is blocking, so every call is
dispatched to a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from scope_context.blobs.base import BlobStore
from scope_context.exceptions import BlobNotFoundError, BlobStoreError

logger = logging.getLogger(__name__)

# Error codes S3 uses for an absent key or bucket; 404 appears for HEAD-style calls.
NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404", "NotFound"})


def _classify(operation: str, path: str, exc: ClientError | BotoCoreError) -> BlobStoreError:
    if isinstance(exc, ClientError):
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in NOT_FOUND_CODES:
            return BlobNotFoundError(operation, path, code)
    return BlobStoreError(operation, path, str(exc))


class S3BlobStore(BlobStore):
    """Blob store that keeps each path as an object in one S3 bucket.

    Parameters:
        bucket: Bucket name.
        client: Pre-built boto3 S3 client.  Built from *client_options* when omitted.
        client_options: Keyword arguments for ``boto3.client("s3", ...)``.
    """

    def __init__(
        self,
        bucket: str,
        *,
        client: Any | None = None,
        **client_options: Any,
    ) -> None:
        self._bucket = bucket
        self._s3 = client if client is not None else boto3.client("s3", **client_options)

    @property
    def bucket(self) -> str:
        return self._bucket

    async def fetch(self, path: str) -> bytes:
        def _get() -> bytes:
            response = self._s3.get_object(Bucket=self._bucket, Key=path)
            body = response["Body"]
            try:
                data: bytes = body.read()
            finally:
                body.close()
            return data

        try:
            return await asyncio.to_thread(_get)
        except (ClientError, BotoCoreError) as exc:
            raise _classify("fetch", path, exc) from exc

    async def store(self, path: str, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self._s3.put_object,
                Bucket=self._bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise _classify("store", path, exc) from exc
        logger.debug("Stored s3://%s/%s (%d bytes)", self._bucket, path, len(data))

    async def remove(self, path: str) -> None:
        try:
            await asyncio.to_thread(self._s3.delete_object, Bucket=self._bucket, Key=path)
        except (ClientError, BotoCoreError) as exc:
            raise _classify("remove", path, exc) from exc
        logger.debug("Removed s3://%s/%s", self._bucket, path)

    async def close(self) -> None:
        close = getattr(self._s3, "close", None)
        if close is not None:
            await asyncio.to_thread(close)
