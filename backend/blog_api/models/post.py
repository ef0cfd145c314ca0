"""Post records: durable shape, cached shape, and the request bodies that produce them."""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _assume_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class Post(BaseModel):
    """One blog post. Same JSON shape at the API boundary and in posts/<id>.json."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    author: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    published: bool = False

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def timestamps_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class CachedPost(Post):
    """Post plus the time its cache copy was written. Never persisted to GitHub."""

    cached_at: datetime = Field(alias="cachedAt")

    @field_validator("cached_at", mode="after")
    @classmethod
    def cached_at_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)

    @classmethod
    def stamp(cls, post: Post, cached_at: datetime) -> "CachedPost":
        return cls(**post.model_dump(exclude={"cached_at"}), cached_at=cached_at)

    def to_post(self) -> Post:
        return Post(**self.model_dump(exclude={"cached_at"}))


class PostDraft(BaseModel):
    """Body for POST /posts. Author comes from the session, not the client."""

    title: str | None = None
    content: str | None = None
    published: bool = False


class PostUpdate(BaseModel):
    """Body for PUT /posts/{id}. Only fields the client sends are merged."""

    title: str | None = None
    content: str | None = None
    published: bool | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AuthorIdentity(BaseModel):
    """Who a write is attributed to in the commit."""

    name: str
    email: str
