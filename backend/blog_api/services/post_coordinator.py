"""
Post coordinator: the read/write policy between the post cache and the GitHub store.

Reads are cache-first. A miss (absent, expired or cache down) is served from GitHub and
the cache is NOT repopulated, so the list keeps getting refreshed from GitHub once the
freshness window lapses instead of renewing itself from its own copies.

Writes go to the cache first (optimistic), then to GitHub. GitHub is ground truth:
on success the list snapshot is invalidated; on failure the single-post entry is rolled
back (removed on create, restored to the pre-update copy on update). A failed delete
leaves the post cache-cold but still in GitHub; it is not re-cached.

No locks: concurrent writers to the same id race, last GitHub write wins.
"""
import asyncio
import json
import logging
from datetime import datetime
from typing import Callable

from pydantic import ValidationError

from blog_api.core.constants import POST_FILE_SUFFIX, POST_JSON_INDENT
from blog_api.core.errors import PostNotFoundError
from blog_api.models.post import AuthorIdentity, Post, PostDraft, PostUpdate
from blog_api.services.cache.outcome import Hit
from blog_api.services.cache.store import CacheStore, utcnow
from blog_api.services.github.base import DirectoryEntry, DurableStore

logger = logging.getLogger(__name__)


def _commit_message(action: str, subject: str, author: AuthorIdentity | None) -> str:
    if author:
        return f"{action} post: {subject} (by {author.name} <{author.email}>)"
    return f"{action} post: {subject}"


def sort_newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: p.created_at, reverse=True)


class PostCoordinator:
    """get_all_posts / get_post / create_post / update_post / delete_post over CacheStore + DurableStore."""

    def __init__(
        self,
        cache: CacheStore,
        store: DurableStore,
        *,
        posts_dir: str = "posts",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._cache = cache
        self._store = store
        self._posts_dir = posts_dir.strip("/")
        self._clock = clock
        self._last_id = 0

    def post_path(self, post_id: str) -> str:
        return f"{self._posts_dir}/{post_id}{POST_FILE_SUFFIX}"

    def _new_post_id(self, now: datetime) -> str:
        """Millisecond timestamp, bumped past the last id handed out by this process."""
        candidate = int(now.timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    @staticmethod
    def _serialize(post: Post) -> str:
        return json.dumps(post.to_wire(), indent=POST_JSON_INDENT)

    @staticmethod
    def _parse(content: str, source: str) -> Post | None:
        try:
            return Post.model_validate_json(content)
        except ValidationError as e:
            logger.error("Error parsing post %s: %s", source, e)
            return None

    # --- Reads ---

    async def get_all_posts(self) -> list[Post]:
        if await self._cache.is_available():
            outcome = await self._cache.get_all_posts()
            if isinstance(outcome, Hit) and outcome.value:
                logger.info("Serving posts from cache")
                return [p.to_post() for p in outcome.value]

        logger.info("Cache miss/expired - fetching posts from GitHub")
        entries = await self._store.list_directory(self._posts_dir)
        if entries is None:
            logger.error("Error fetching posts from GitHub; returning empty list")
            return []
        files = [e for e in entries if e.type == "file" and e.name.endswith(POST_FILE_SUFFIX)]
        loaded = await asyncio.gather(*(self._load_entry(e) for e in files))
        return sort_newest_first([p for p in loaded if p is not None])

    async def _load_entry(self, entry: DirectoryEntry) -> Post | None:
        content = await self._store.read(entry.path)
        if not content:
            return None
        return self._parse(content, entry.name)

    async def get_post(self, post_id: str) -> Post | None:
        if await self._cache.is_available():
            outcome = await self._cache.get_post(post_id)
            if isinstance(outcome, Hit):
                logger.info("Serving post %s from cache", post_id)
                return outcome.value.to_post()

        logger.info("Cache miss/expired for post %s - fetching from GitHub", post_id)
        content = await self._store.read(self.post_path(post_id))
        if not content:
            return None
        return self._parse(content, post_id)

    # --- Writes ---

    async def create_post(
        self,
        draft: PostDraft,
        author_name: str,
        author: AuthorIdentity | None = None,
    ) -> Post | None:
        """Returns the new post, or None if the GitHub write failed (cache entry rolled back)."""
        now = self._clock()
        post = Post(
            id=self._new_post_id(now),
            title=draft.title or "",
            content=draft.content or "",
            author=author_name,
            published=draft.published,
            created_at=now,
            updated_at=now,
        )

        cache_up = await self._cache.is_available()
        if cache_up:
            await self._cache.set_post(post)
            logger.info("Stored new post %s in cache", post.id)

        ok = await self._store.write(
            self.post_path(post.id),
            self._serialize(post),
            _commit_message("Create", post.title, author),
            None,
            author,
        )
        if not ok:
            if cache_up:
                await self._cache.invalidate_post(post.id)
                logger.warning("Removed post %s from cache due to GitHub failure", post.id)
            return None

        if cache_up:
            await self._cache.invalidate_all_posts()
        return post

    async def update_post(
        self,
        post_id: str,
        updates: PostUpdate,
        author: AuthorIdentity | None = None,
    ) -> Post | None:
        """
        Merge updates over the current post. Raises PostNotFoundError if it does not exist;
        returns None if the GitHub write failed (cache restored to the pre-update copy).
        """
        existing = await self.get_post(post_id)
        if existing is None:
            raise PostNotFoundError(post_id)

        now = self._clock()
        merged = existing.model_copy(
            update={
                **updates.changes(),
                "id": existing.id,
                "created_at": existing.created_at,
                "updated_at": max(now, existing.created_at),
            }
        )

        cache_up = await self._cache.is_available()
        if cache_up:
            await self._cache.set_post(merged)
            logger.info("Updated post %s in cache", post_id)

        path = self.post_path(post_id)
        sha = await self._store.get_revision_token(path)
        if sha is None:
            logger.warning("No revision token for %s; writing without conditional check", path)

        ok = await self._store.write(
            path,
            self._serialize(merged),
            _commit_message("Update", merged.title, author),
            sha,
            author,
        )
        if not ok:
            if cache_up:
                await self._cache.set_post(existing)
                logger.warning("Reverted post %s in cache due to GitHub failure", post_id)
            return None

        if cache_up:
            await self._cache.invalidate_all_posts()
        return merged

    async def delete_post(self, post_id: str, author: AuthorIdentity | None = None) -> bool:
        """
        Raises PostNotFoundError if the file is not in GitHub; returns False if the delete failed.
        The cache entry is dropped up front and not restored on failure.
        """
        cache_up = await self._cache.is_available()
        if cache_up:
            await self._cache.invalidate_post(post_id)
            logger.info("Removed post %s from cache", post_id)

        path = self.post_path(post_id)
        sha = await self._store.get_revision_token(path)
        if sha is None:
            raise PostNotFoundError(post_id)

        ok = await self._store.delete(path, sha, _commit_message("Delete", post_id, author), author)
        if not ok:
            logger.error("Error deleting post %s", post_id)
            return False

        if cache_up:
            await self._cache.invalidate_all_posts()
        return True
