"""
Storage adapter - S3-compatible object storage for uploaded photos.

Provides:
- Bucket bootstrap at startup
- Object put/get/delete
- Presigned GET URLs

Works against AWS S3 or a MinIO endpoint (STORAGE_ENDPOINT_URL). boto3 is
blocking, so every call runs in the default executor and never stalls the
event loop. Failures surface as StorageError; a missing key on get surfaces
as StoredObjectNotFoundError.
"""

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ...config.settings import settings
from ..core.exceptions import StorageError, StoredObjectNotFoundError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class StoredObject:
    """Object fetched from storage."""

    key: str
    data: bytes
    content_type: str
    size: int


class ObjectStorage(Protocol):
    """Interface the media service depends on (S3ObjectStorage in production)."""

    async def put_object(self, key: str, data: bytes, content_type: str) -> None: ...

    async def get_object(self, key: str) -> StoredObject: ...

    async def delete_object(self, key: str) -> None: ...


class S3ObjectStorage:
    """
    Adapter for S3 / MinIO object storage.

    Handles:
    - Ensuring the media bucket exists
    - Uploading, fetching and deleting photo objects
    - Presigned download URLs
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        region: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        """
        Initialize storage adapter.

        Args:
            bucket: Bucket holding uploaded media
            endpoint_url: S3-compatible endpoint (None for AWS S3)
            region: Bucket region
            access_key: Access key id
            secret_key: Secret access key
        """
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.endpoint_url = endpoint_url if endpoint_url is not None else settings.STORAGE_ENDPOINT_URL
        self.region = region or settings.STORAGE_REGION
        self.access_key = access_key or settings.STORAGE_ACCESS_KEY
        self.secret_key = secret_key or settings.STORAGE_SECRET_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url or None,
                region_name=self.region,
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
                config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
            )
        return self._client

    async def _run(self, func: Callable[..., Any], /, **kwargs: Any) -> Any:
        """Run a blocking boto3 call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, **kwargs))

    async def ensure_bucket(self) -> None:
        """
        Create the media bucket if it does not exist.

        Raises:
            StorageError: If the bucket cannot be checked or created
        """
        try:
            await self._run(self.client.head_bucket, Bucket=self.bucket)
            return
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code not in _MISSING_CODES and code != "NoSuchBucket":
                logger.error("Failed to check bucket %s: %s", self.bucket, e)
                raise StorageError("Object storage unavailable") from e
        except BotoCoreError as e:
            logger.error("Failed to reach object storage: %s", e)
            raise StorageError("Object storage unavailable") from e

        params: dict[str, Any] = {"Bucket": self.bucket}
        if self.region and self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            await self._run(self.client.create_bucket, **params)
            logger.info("Created bucket %s", self.bucket)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to create bucket %s: %s", self.bucket, e)
            raise StorageError("Could not create media bucket") from e

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        """
        Upload an object.

        Raises:
            StorageError: If the upload fails
        """
        try:
            await self._run(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ContentLength=len(data),
            )
            logger.info("Stored object %s (%d bytes)", key, len(data))
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to store object %s: %s", key, e)
            raise StorageError("Failed to store uploaded file") from e

    async def get_object(self, key: str) -> StoredObject:
        """
        Fetch an object.

        Raises:
            StoredObjectNotFoundError: If the key does not exist
            StorageError: On any other failure
        """
        try:
            response = await self._run(self.client.get_object, Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                data = await self._run(body.read)
            finally:
                body.close()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                raise StoredObjectNotFoundError(key) from e
            logger.error("Failed to fetch object %s: %s", key, e)
            raise StorageError("Failed to fetch file") from e
        except BotoCoreError as e:
            logger.error("Failed to fetch object %s: %s", key, e)
            raise StorageError("Failed to fetch file") from e

        return StoredObject(
            key=key,
            data=data,
            content_type=response.get("ContentType") or "application/octet-stream",
            size=len(data),
        )

    async def delete_object(self, key: str) -> None:
        """
        Delete an object.

        Raises:
            StorageError: If the delete fails
        """
        try:
            await self._run(self.client.delete_object, Bucket=self.bucket, Key=key)
            logger.info("Deleted object %s", key)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to delete object %s: %s", key, e)
            raise StorageError("Failed to delete file") from e

    async def ping(self) -> bool:
        """Check bucket reachability."""
        try:
            await self._run(self.client.head_bucket, Bucket=self.bucket)
            return True
        except (ClientError, BotoCoreError):
            return False

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None
