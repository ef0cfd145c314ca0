"""
Post cache: short-lived copies of single posts and of the full post list.

Every entry carries cachedAt. An entry older than the freshness window is treated as
absent even if Redis still holds it; Redis SETEX with the same window is only the backstop.
The list snapshot is all-or-nothing: one stale member and the whole list is a miss.

Never talks to GitHub. Backend errors are logged and reported as Unavailable (reads)
or False (writes); nothing raises out of here.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from blog_api.core.constants import DEFAULT_CACHE_TTL_SECONDS, POST_KEY_TEMPLATE, POSTS_LIST_KEY
from blog_api.models.post import CachedPost, Post
from blog_api.services.cache.backend import CacheBackend
from blog_api.services.cache.outcome import MISS, UNAVAILABLE, CacheOutcome, Hit

logger = logging.getLogger(__name__)

_post_list_adapter = TypeAdapter(list[CachedPost])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _post_key(post_id: str) -> str:
    return POST_KEY_TEMPLATE.format(post_id=post_id)


class CacheStore:
    """Freshness-windowed cache for one post per id plus one list snapshot."""

    def __init__(
        self,
        backend: CacheBackend | None,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._backend = backend
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _is_stale(self, cached_at: datetime, now: datetime) -> bool:
        return (now - cached_at).total_seconds() > self.ttl_seconds

    # --- List snapshot ---

    async def get_all_posts(self) -> CacheOutcome[list[CachedPost]]:
        if self._backend is None:
            return UNAVAILABLE
        try:
            raw = await self._backend.get(POSTS_LIST_KEY)
        except Exception as e:
            logger.warning("Error fetching posts from cache: %s", e)
            return UNAVAILABLE
        if not raw:
            return MISS
        try:
            cached = _post_list_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Cached posts list is malformed, ignoring: %s", e)
            return MISS
        now = self._clock()
        if any(self._is_stale(p.cached_at, now) for p in cached):
            logger.info("Posts cache has expired, will fetch from GitHub")
            return MISS
        return Hit(cached)

    async def set_all_posts(self, posts: list[Post]) -> bool:
        if self._backend is None:
            return False
        now = self._clock()
        stamped = [CachedPost.stamp(p, now) for p in posts]
        payload = json.dumps([p.to_wire() for p in stamped])
        try:
            await self._backend.set(POSTS_LIST_KEY, payload, self.ttl_seconds)
        except Exception as e:
            logger.warning("Error caching posts list: %s", e)
            return False
        return True

    async def invalidate_all_posts(self) -> bool:
        """Drop the list snapshot. Single-post entries are left alone."""
        if self._backend is None:
            return False
        try:
            await self._backend.delete(POSTS_LIST_KEY)
        except Exception as e:
            logger.warning("Error invalidating posts list cache: %s", e)
            return False
        return True

    # --- Single post ---

    async def get_post(self, post_id: str) -> CacheOutcome[CachedPost]:
        if self._backend is None:
            return UNAVAILABLE
        try:
            raw = await self._backend.get(_post_key(post_id))
        except Exception as e:
            logger.warning("Error fetching post %s from cache: %s", post_id, e)
            return UNAVAILABLE
        if not raw:
            return MISS
        try:
            cached = CachedPost.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Cached post %s is malformed, ignoring: %s", post_id, e)
            return MISS
        if self._is_stale(cached.cached_at, self._clock()):
            logger.info("Post %s cache has expired, will fetch from GitHub", post_id)
            return MISS
        return Hit(cached)

    async def set_post(self, post: Post) -> bool:
        if self._backend is None:
            return False
        stamped = CachedPost.stamp(post, self._clock())
        try:
            await self._backend.set(_post_key(post.id), json.dumps(stamped.to_wire()), self.ttl_seconds)
        except Exception as e:
            logger.warning("Error caching post %s: %s", post.id, e)
            return False
        return True

    async def invalidate_post(self, post_id: str) -> bool:
        if self._backend is None:
            return False
        try:
            await self._backend.delete(_post_key(post_id))
        except Exception as e:
            logger.warning("Error invalidating post %s cache: %s", post_id, e)
            return False
        return True

    # --- Liveness ---

    async def is_available(self) -> bool:
        if self._backend is None:
            return False
        try:
            return bool(await self._backend.ping())
        except Exception as e:
            logger.warning("Cache is not available: %s", e)
            return False
