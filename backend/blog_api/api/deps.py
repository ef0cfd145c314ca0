"""
Request dependencies. Services are built once in the lifespan and kept on app.state;
tests swap them with app.dependency_overrides.
"""
from fastapi import Depends, Header, Request

from blog_api.core.errors import unauthorized
from blog_api.models.post import AuthorIdentity
from blog_api.services.post_coordinator import PostCoordinator
from blog_api.services.session_tokens import SessionTokens
from blog_api.services.user_store import UserStore


def get_post_coordinator(request: Request) -> PostCoordinator:
    return request.app.state.post_coordinator


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_session_tokens(request: Request) -> SessionTokens:
    return request.app.state.session_tokens


def require_author(
    authorization: str | None = Header(None),
    tokens: SessionTokens = Depends(get_session_tokens),
) -> AuthorIdentity:
    """Author identity from `Authorization: Bearer <token>`; 401 before any post service call otherwise."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise unauthorized()
    identity = tokens.identity(token.strip())
    if identity is None:
        raise unauthorized()
    return identity
