"""
Tests for the Redis cache adapter and list key builder.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from fitshare.shared.adapters.redis_adapter import RedisCache, build_list_key
from fitshare.shared.models.enums import PostType
from fitshare.shared.schemas.post import PostCreate, PostFilters
from fitshare.shared.schemas.workout import WorkoutFilters
from fitshare.shared.services import PostService, WorkoutService


class UnreachableRedis:
    """Client whose every command fails as if the server were down."""

    def __init__(self) -> None:
        self.closed = False

    async def get(self, key):
        raise RedisConnectionError("Connection refused")

    async def set(self, key, value):
        raise RedisConnectionError("Connection refused")

    async def setex(self, key, ttl, value):
        raise RedisConnectionError("Connection refused")

    async def delete(self, *keys):
        raise RedisConnectionError("Connection refused")

    async def scan_iter(self, match=None, count=None):
        raise RedisConnectionError("Connection refused")
        yield  # pragma: no cover

    async def ping(self):
        raise RedisConnectionError("Connection refused")

    async def aclose(self):
        self.closed = True


class InMemoryRedis:
    """Just enough of redis.asyncio.Redis for the adapter's happy path."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value
        return True

    async def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys):
        return sum(1 for key in keys if self.data.pop(key, None) is not None)

    async def scan_iter(self, match=None, count=None):
        prefix = (match or "*").rstrip("*")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key

    async def ping(self):
        return True


class TestBuildListKey:
    def test_drops_none_and_sorts(self):
        key = build_list_key("posts", {"user_id": None, "type": "meal", "a": 1}, 2, 10)
        assert key == 'posts:{"a":1,"type":"meal"}:page:2:limit:10'

    def test_same_query_same_key(self):
        first = build_list_key("meals:user:1", {"meal_type": "lunch", "start_date": None}, 1, 20)
        second = build_list_key("meals:user:1", {"start_date": None, "meal_type": "lunch"}, 1, 20)
        assert first == second

    def test_no_filters(self):
        assert build_list_key("users", {}, 1, 20) == "users:{}:page:1:limit:20"


class TestRedisCache:
    async def test_round_trip_with_ttl(self):
        client = InMemoryRedis()
        cache = RedisCache(url="redis://localhost:6379/0", client=client)

        assert await cache.set_json("user:1", {"firstName": "Ada"}, ttl=600) is True

        assert await cache.get_json("user:1") == {"firstName": "Ada"}
        assert client.ttls["user:1"] == 600

    async def test_pattern_delete(self):
        client = InMemoryRedis()
        cache = RedisCache(client=client)
        for key in ("posts:{}:page:1:limit:20", "posts:{}:page:2:limit:20", "users:{}:page:1:limit:20"):
            await cache.set_json(key, [])

        assert await cache.delete_pattern("posts:*") == 2
        assert list(client.data) == ["users:{}:page:1:limit:20"]

    async def test_corrupt_value_is_a_miss(self):
        client = InMemoryRedis()
        client.data["broken"] = "{not json"
        cache = RedisCache(client=client)

        assert await cache.get_json("broken") is None

    async def test_outage_degrades_to_misses(self):
        client = UnreachableRedis()
        cache = RedisCache(client=client)

        assert await cache.get_json("posts:x") is None
        assert await cache.set_json("posts:x", {"a": 1}, ttl=60) is False
        assert await cache.delete("posts:x") is False
        assert await cache.delete_pattern("posts:*") == 0
        assert await cache.ping() is False

        await cache.close()
        assert client.closed is True

    async def test_services_fall_through_when_cache_is_down(self, database, media, make_user):
        owner = await make_user()
        cache = RedisCache(client=UnreachableRedis())

        async with database.session() as s:
            page = await WorkoutService(s, cache, media).list(owner.id, WorkoutFilters(), 1, 20)

        assert page.items == []
        assert page.pagination.total_items == 0

    async def test_post_engine_works_when_cache_is_down(self, database, make_user):
        author = await make_user()
        fan = await make_user("Grace", "Hopper")
        cache = RedisCache(client=UnreachableRedis())

        async with database.session() as s:
            post = await PostService(s, cache).create(author.id, PostCreate(type=PostType.WORKOUT, content="Leg day"))
        async with database.session() as s:
            liked = await PostService(s, cache).toggle_like(post.id, fan.id)
        async with database.session() as s:
            comment = await PostService(s, cache).add_comment(post.id, fan.id, "Strong")
        async with database.session() as s:
            feed = await PostService(s, cache).list(PostFilters(), page=1, limit=20)

        assert liked.liked is True
        assert comment.text == "Strong"
        assert [p.id for p in feed.items] == [post.id]
        assert feed.items[0].likes_count == 1
        assert [c.text for c in feed.items[0].comments] == ["Strong"]


@pytest.mark.parametrize(
    "filters,expected",
    [
        ({"split": "Push"}, 'workouts:user:u:{"split":"Push"}:page:1:limit:20'),
        ({"split": None}, "workouts:user:u:{}:page:1:limit:20"),
    ],
)
def test_owner_scoped_keys(filters, expected):
    assert build_list_key("workouts:user:u", filters, 1, 20) == expected
