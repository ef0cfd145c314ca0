from blog_api.models.post import AuthorIdentity, CachedPost, Post, PostDraft, PostUpdate
from blog_api.models.user import SignInRequest, SignUpRequest, User

__all__ = [
    "AuthorIdentity",
    "CachedPost",
    "Post",
    "PostDraft",
    "PostUpdate",
    "SignInRequest",
    "SignUpRequest",
    "User",
]
