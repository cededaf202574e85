"""
Tests for MediaService: upload validation, storage, and best-effort release.
"""

import uuid

import pytest

from fitshare.shared.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageError,
    StoredObjectNotFoundError,
    TooManyFilesError,
    ValidationError,
)
from fitshare.shared.services.media_service import MediaService, UploadedFile


OWNER = uuid.UUID("00000000-0000-0000-0000-0000000000aa")


class TestValidation:
    async def test_rejects_non_image_before_storage(self, media, storage, png):
        upload = png(name="notes.pdf", content_type="application/pdf")

        with pytest.raises(InvalidFileTypeError):
            await media.store(upload, OWNER)

        assert storage.put_calls == 0
        assert storage.objects == {}

    async def test_rejects_oversized_file_before_storage(self, storage):
        media = MediaService(storage, max_bytes=10)
        upload = UploadedFile(filename="big.jpg", content_type="image/jpeg", data=b"x" * 11)

        with pytest.raises(FileTooLargeError):
            await media.store(upload, OWNER)

        assert storage.put_calls == 0

    async def test_accepts_file_at_exact_limit(self, storage):
        media = MediaService(storage, max_bytes=10)
        upload = UploadedFile(filename="ok.jpg", content_type="image/jpeg", data=b"x" * 10)

        key = await media.store(upload, OWNER)

        assert key in storage.objects

    async def test_batch_is_validated_before_any_store(self, media, storage, png):
        uploads = [png(), png(name="b.png"), png(name="c.gif", content_type="image/gif")]

        with pytest.raises(InvalidFileTypeError):
            await media.store_many(uploads, OWNER)

        assert storage.put_calls == 0

    async def test_too_many_files(self, storage, png):
        media = MediaService(storage, max_files=2)

        with pytest.raises(TooManyFilesError):
            await media.store_many([png(), png(), png()], OWNER)

    def test_mime_check_is_case_insensitive(self, media, png):
        media.validate(png(content_type="IMAGE/JPEG"))


class TestStore:
    async def test_key_format(self, media, storage, png):
        key = await media.store(png(name="Leg Day.PNG"), OWNER)

        owner, millis, suffix = key.rsplit("-", 2)
        assert owner == str(OWNER)
        assert millis.isdigit()
        random_part, ext = suffix.split(".")
        assert len(random_part) == 8
        assert ext == "png"
        assert storage.objects[key].content_type == "image/png"

    async def test_keys_are_unique(self, media, png):
        keys = {await media.store(png(), OWNER) for _ in range(5)}
        assert len(keys) == 5

    async def test_partial_failure_releases_stored_files(self, media, storage, png):
        storage.fail_puts_after = 2

        with pytest.raises(StorageError):
            await media.store_many([png(), png(), png()], OWNER)

        assert storage.objects == {}
        assert len(storage.deleted) == 2

    def test_url_for(self, media):
        assert media.url_for("abc.png").endswith("/api/files/abc.png")


class TestRelease:
    async def test_release_swallows_storage_errors(self, media, storage, png):
        key = await media.store(png(), OWNER)
        storage.fail_deletes.add(key)

        assert await media.release(key) is False
        assert key in storage.objects

    async def test_release_many_continues_past_failures(self, media, storage, png):
        keys = [await media.store(png(), OWNER) for _ in range(3)]
        storage.fail_deletes.add(keys[1])

        failures = await media.release_many(keys)

        assert failures == 1
        assert set(storage.objects) == {keys[1]}


class TestFetch:
    async def test_fetch_existing(self, media, png):
        key = await media.store(png(), OWNER)
        stored = await media.fetch(key)
        assert stored.size == len(png().data)

    @pytest.mark.parametrize("key", ["../secret", "a/b.png", "a\\b.png", ""])
    async def test_fetch_rejects_unsafe_keys(self, media, key):
        with pytest.raises(ValidationError):
            await media.fetch(key)

    async def test_fetch_missing(self, media):
        with pytest.raises(StoredObjectNotFoundError):
            await media.fetch("nope.png")
