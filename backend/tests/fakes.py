"""
In-memory doubles for the cache and object storage adapters.

They implement the same async interface as RedisCache and S3ObjectStorage
and record calls, so tests can assert on invalidation and media cleanup.
"""

import fnmatch
import json
from typing import Any, Optional

from fitshare.shared.adapters.storage_adapter import StoredObject
from fitshare.shared.core.exceptions import StorageError, StoredObjectNotFoundError


class FakeCache:
    """Dict-backed cache. TTLs are recorded, not enforced."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, Optional[int]] = {}
        self.deleted_patterns: list[str] = []
        self.hits = 0

    async def get_json(self, key: str) -> Optional[Any]:
        value = self.store.get(key)
        if value is None:
            return None
        self.hits += 1
        return json.loads(value)

    async def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        self.store[key] = json.dumps(value, default=str)
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def delete_pattern(self, pattern: str) -> int:
        self.deleted_patterns.append(pattern)
        keys = [key for key in self.store if fnmatch.fnmatchcase(key, pattern)]
        for key in keys:
            del self.store[key]
        return len(keys)

    async def ping(self) -> bool:
        return True

    def keys(self, pattern: str = "*") -> list[str]:
        return [key for key in self.store if fnmatch.fnmatchcase(key, pattern)]


class FakeStorage:
    """Dict-backed object storage with switchable failures."""

    def __init__(self) -> None:
        self.objects: dict[str, StoredObject] = {}
        self.put_calls = 0
        self.fail_puts_after: Optional[int] = None
        self.fail_deletes: set[str] = set()
        self.deleted: list[str] = []

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        if self.fail_puts_after is not None and self.put_calls >= self.fail_puts_after:
            raise StorageError("Failed to store uploaded file")
        self.put_calls += 1
        self.objects[key] = StoredObject(key=key, data=data, content_type=content_type, size=len(data))

    async def get_object(self, key: str) -> StoredObject:
        if key not in self.objects:
            raise StoredObjectNotFoundError(key)
        return self.objects[key]

    async def delete_object(self, key: str) -> None:
        if key in self.fail_deletes:
            raise StorageError("Failed to delete file")
        self.objects.pop(key, None)
        self.deleted.append(key)

    async def ping(self) -> bool:
        return True
