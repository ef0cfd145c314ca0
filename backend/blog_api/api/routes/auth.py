"""
Auth API: sign-up, sign-in (returns a bearer token), and who-am-i.
Sync handlers so bcrypt runs in the threadpool instead of the event loop.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from blog_api.api.deps import get_session_tokens, get_user_store, require_author
from blog_api.core.errors import (
    STATUS_BAD_REQUEST,
    InvalidCredentialsError,
    UserExistsError,
    blog_error_to_http,
)
from blog_api.models.post import AuthorIdentity
from blog_api.models.user import SignInRequest, SignUpRequest
from blog_api.services.session_tokens import SessionTokens
from blog_api.services.user_store import UserStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/signup", status_code=201)
def sign_up(body: SignUpRequest, users: UserStore = Depends(get_user_store)) -> dict[str, Any]:
    email = (body.email or "").strip()
    name = (body.name or "").strip()
    if not email or not body.password or not name:
        raise HTTPException(status_code=STATUS_BAD_REQUEST, detail="Email, password and name are required")
    try:
        user = users.create_user(email, body.password, name)
    except UserExistsError as e:
        raise blog_error_to_http(e) from e
    return user.public()


@router.post("/signin")
def sign_in(
    body: SignInRequest,
    users: UserStore = Depends(get_user_store),
    tokens: SessionTokens = Depends(get_session_tokens),
) -> dict[str, Any]:
    if not body.email or not body.password:
        raise blog_error_to_http(InvalidCredentialsError())
    try:
        user = users.authenticate(body.email.strip(), body.password)
    except InvalidCredentialsError as e:
        raise blog_error_to_http(e) from e
    return {"access_token": tokens.issue(user), "token_type": "bearer", "user": user.public()}


@router.get("/me")
def me(author: AuthorIdentity = Depends(require_author)) -> dict[str, str]:
    return {"name": author.name, "email": author.email}
