"""
Media Service

Upload validation, naming, storage and release of photos attached to
workouts, meals, progress entries and profile pictures.

Flow:
=====
    store_many(uploads, owner)
        1. validate the whole batch (count, MIME type, size)  ← no storage call yet
        2. put each object under a generated key
        3. if any put fails, release what was stored and re-raise

    release(key)
        best-effort delete; a StorageError is logged and swallowed so that
        deleting a record never fails because of its photos

Usage:
======
    media = MediaService(storage)
    keys = await media.store_many(uploads, owner_id=user.id)
    ...
    await media.release_many(workout.photos)
"""

from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

from fitshare.config.settings import settings
from fitshare.shared.adapters.storage_adapter import ObjectStorage, StoredObject
from fitshare.shared.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageError,
    TooManyFilesError,
    ValidationError,
)
from fitshare.shared.core.logging import get_logger
from fitshare.shared.utils.files import build_file_url, generate_object_key, is_safe_key

logger = get_logger("media")


@dataclass
class UploadedFile:
    """One file taken from a multipart request."""

    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class MediaService:
    """
    Service for photo attachments.

    Attributes:
        storage: Object storage adapter
        max_bytes: Per-file size limit
        max_files: Files allowed per request
        allowed_types: Accepted MIME types
    """

    def __init__(
        self,
        storage: ObjectStorage,
        max_bytes: Optional[int] = None,
        max_files: Optional[int] = None,
        allowed_types: Optional[Sequence[str]] = None,
    ) -> None:
        self.storage = storage
        self.max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES
        self.max_files = max_files or settings.MAX_UPLOAD_FILES
        self.allowed_types = {t.lower() for t in (allowed_types or settings.ALLOWED_IMAGE_TYPES)}

    # ═══════════════════════════════════════════════════════════════════════════
    # VALIDATION
    # ═══════════════════════════════════════════════════════════════════════════

    def validate(self, upload: UploadedFile) -> None:
        """
        Check one file against the MIME allow-list and the size limit.

        Raises:
            InvalidFileTypeError: MIME type not allowed
            FileTooLargeError: Payload over the limit
        """
        content_type = (upload.content_type or "").lower()
        if content_type not in self.allowed_types:
            raise InvalidFileTypeError(upload.content_type)
        if upload.size > self.max_bytes:
            raise FileTooLargeError(upload.filename, self.max_bytes)

    def validate_many(self, uploads: Sequence[UploadedFile]) -> None:
        """
        Validate a whole batch before anything is stored.

        Raises:
            TooManyFilesError: More than max_files uploads
        """
        if len(uploads) > self.max_files:
            raise TooManyFilesError(self.max_files)
        for upload in uploads:
            self.validate(upload)

    # ═══════════════════════════════════════════════════════════════════════════
    # STORE / RELEASE
    # ═══════════════════════════════════════════════════════════════════════════

    async def store(self, upload: UploadedFile, owner_id: UUID) -> str:
        """
        Validate and store one file.

        Returns:
            Object key (the stored reference)
        """
        self.validate(upload)
        key = generate_object_key(upload.filename, owner_id, upload.content_type)
        await self.storage.put_object(key, upload.data, (upload.content_type or "").lower())
        logger.info("Media stored", key=key, owner_id=str(owner_id), size=upload.size)
        return key

    async def store_many(self, uploads: Sequence[UploadedFile], owner_id: UUID) -> list[str]:
        """
        Validate the batch, then store every file.

        A failure part-way releases the files already stored.

        Returns:
            Object keys in upload order
        """
        self.validate_many(uploads)

        keys: list[str] = []
        try:
            for upload in uploads:
                keys.append(await self.store(upload, owner_id))
        except StorageError:
            await self.release_many(keys)
            raise
        return keys

    async def release(self, key: str) -> bool:
        """
        Best-effort delete of a stored file.

        Returns:
            True if deleted, False if the delete failed (logged)
        """
        try:
            await self.storage.delete_object(key)
            return True
        except StorageError as e:
            logger.warning("Media release failed", key=key, error=e.message)
            return False

    async def release_many(self, keys: Sequence[str]) -> int:
        """
        Release every key, continuing past failures.

        Returns:
            Number of keys that could not be released
        """
        failures = 0
        for key in keys:
            if not await self.release(key):
                failures += 1
        return failures

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def fetch(self, key: str) -> StoredObject:
        """
        Load a stored file for download.

        Raises:
            ValidationError: Key tries to escape the bucket root
            StoredObjectNotFoundError: No such object
        """
        if not is_safe_key(key):
            raise ValidationError("Invalid file name", errors=["key: invalid file name"])
        return await self.storage.get_object(key)

    @staticmethod
    def url_for(key: str) -> str:
        """Public URL of a stored file."""
        return build_file_url(key)
