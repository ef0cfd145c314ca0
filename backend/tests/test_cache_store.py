import json
from datetime import datetime, timedelta, timezone

from blog_api.core.constants import POSTS_LIST_KEY
from blog_api.models.post import CachedPost, Post
from blog_api.services.cache import MISS, UNAVAILABLE, CacheStore, Hit


def _post(post_id: str, minutes: int = 0) -> Post:
    created = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return Post(
        id=post_id,
        title=f"title {post_id}",
        content="body",
        author="alice",
        created_at=created,
        updated_at=created,
        published=True,
    )


async def test_set_post_then_get_is_hit_with_cached_at(cache, backend, clock):
    post = _post("1")
    assert await cache.set_post(post) is True

    outcome = await cache.get_post("1")

    assert isinstance(outcome, Hit)
    assert outcome.value.cached_at == clock.now
    assert outcome.value.to_post() == post
    assert backend.ttls["blog:post:1"] == 420


async def test_post_expires_after_window(cache, clock):
    await cache.set_post(_post("1"))

    clock.advance(420)
    assert isinstance(await cache.get_post("1"), Hit)

    clock.advance(1)
    assert await cache.get_post("1") == MISS


async def test_missing_post_is_miss(cache):
    assert await cache.get_post("nope") == MISS


async def test_list_fresh_within_window_and_absent_after(cache, clock):
    posts = [_post("2", 5), _post("1")]
    await cache.set_all_posts(posts)

    clock.advance(419)
    outcome = await cache.get_all_posts()
    assert isinstance(outcome, Hit)
    assert [p.to_post() for p in outcome.value] == posts
    assert all(p.cached_at == clock.now - timedelta(seconds=419) for p in outcome.value)

    clock.advance(2)
    assert await cache.get_all_posts() == MISS


async def test_one_stale_entry_invalidates_whole_list(cache, backend, clock):
    fresh = CachedPost.stamp(_post("1"), clock.now)
    stale = CachedPost.stamp(_post("2"), clock.now - timedelta(seconds=421))
    backend.data[POSTS_LIST_KEY] = json.dumps([fresh.to_wire(), stale.to_wire()])

    assert await cache.get_all_posts() == MISS


async def test_invalidate_all_posts_leaves_single_entries(cache):
    await cache.set_post(_post("1"))
    await cache.set_all_posts([_post("1")])

    await cache.invalidate_all_posts()

    assert await cache.get_all_posts() == MISS
    assert isinstance(await cache.get_post("1"), Hit)


async def test_invalidate_post(cache):
    await cache.set_post(_post("1"))
    await cache.invalidate_post("1")
    assert await cache.get_post("1") == MISS


async def test_malformed_entry_is_miss(cache, backend):
    backend.data["blog:post:1"] = "{not json"
    assert await cache.get_post("1") == MISS


async def test_backend_errors_degrade_silently(cache, backend):
    backend.down = True

    assert await cache.is_available() is False
    assert await cache.get_post("1") == UNAVAILABLE
    assert await cache.get_all_posts() == UNAVAILABLE
    assert await cache.set_post(_post("1")) is False
    assert await cache.set_all_posts([_post("1")]) is False
    assert await cache.invalidate_post("1") is False
    assert await cache.invalidate_all_posts() is False


async def test_unconfigured_cache_is_unavailable():
    cache = CacheStore(None)

    assert await cache.is_available() is False
    assert await cache.get_post("1") == UNAVAILABLE
    assert await cache.set_post(_post("1")) is False


async def test_wire_shape_uses_camel_case(cache, backend):
    await cache.set_post(_post("1"))

    stored = json.loads(backend.data["blog:post:1"])

    assert set(stored) == {"id", "title", "content", "author", "createdAt", "updatedAt", "published", "cachedAt"}
