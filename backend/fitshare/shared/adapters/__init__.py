"""
Adapters Package

External service integrations.

Contents:
=========
- redis_adapter: Redis read-through cache (advisory, never raises)
- storage_adapter: S3 / MinIO object storage for uploaded photos

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from fitshare.shared.adapters.redis_adapter import RedisCache
    from fitshare.shared.adapters.storage_adapter import S3ObjectStorage
"""

from fitshare.shared.adapters.redis_adapter import Cache, RedisCache, build_list_key
from fitshare.shared.adapters.storage_adapter import ObjectStorage, S3ObjectStorage, StoredObject

__all__ = [
    "Cache",
    "RedisCache",
    "build_list_key",
    "ObjectStorage",
    "S3ObjectStorage",
    "StoredObject",
]
