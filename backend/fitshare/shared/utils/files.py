"""
File Utilities

Naming and URL helpers for uploaded media.

Object keys:
============
    <owner uuid>-<epoch ms>-<8 hex>.<ext>
    550e8400-e29b-41d4-a716-446655440000-1717225200000-9f2c1a7b.jpg

The random suffix keeps two uploads from the same owner in the same
millisecond from colliding.

Usage:
======
    from fitshare.shared.utils.files import generate_object_key, build_file_url

    key = generate_object_key("IMG_0042.JPG", owner_id, "image/jpeg")
    url = build_file_url(key)  # http://localhost:8000/api/files/<key>
"""

import secrets
import time
from pathlib import PurePosixPath
from typing import Optional
from uuid import UUID

from fitshare.config.settings import settings


# Fallback extensions when the original filename has none
MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def file_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """
    Lowercase extension of the original filename, or one derived from the MIME type.
    """
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    if suffix and suffix.isalnum():
        return suffix
    return MIME_EXTENSIONS.get((content_type or "").lower(), "bin")


def generate_object_key(filename: Optional[str], owner_id: UUID, content_type: Optional[str]) -> str:
    """Collision-resistant object key derived from owner, timestamp and extension."""
    timestamp_ms = int(time.time() * 1000)
    return f"{owner_id}-{timestamp_ms}-{secrets.token_hex(4)}.{file_extension(filename, content_type)}"


def is_safe_key(key: str) -> bool:
    """Reject keys that could address anything outside the bucket root."""
    return bool(key) and ".." not in key and "/" not in key and "\\" not in key


def build_file_url(key: str) -> str:
    """Public URL served by GET /api/files/{key}."""
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{settings.API_PREFIX}/files/{key}"
