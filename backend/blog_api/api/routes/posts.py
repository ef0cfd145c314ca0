"""
Posts API: list, get, create, update, delete.
Reads are public. Writes need a session token; the author identity goes into the GitHub commit.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from blog_api.api.deps import get_post_coordinator, require_author
from blog_api.core.errors import (
    MSG_CREATE_FAILED,
    MSG_DELETE_FAILED,
    MSG_POST_NOT_FOUND,
    MSG_TITLE_CONTENT_REQUIRED,
    MSG_UPDATE_FAILED,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    STATUS_NOT_FOUND,
    PostNotFoundError,
    blog_error_to_http,
)
from blog_api.models.post import AuthorIdentity, Post, PostDraft, PostUpdate
from blog_api.services.post_coordinator import PostCoordinator

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[Post])
async def list_posts(coordinator: PostCoordinator = Depends(get_post_coordinator)) -> list[Post]:
    """All posts, newest first."""
    return await coordinator.get_all_posts()


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: str, coordinator: PostCoordinator = Depends(get_post_coordinator)) -> Post:
    post = await coordinator.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=STATUS_NOT_FOUND, detail=MSG_POST_NOT_FOUND)
    return post


@router.post("", response_model=Post, status_code=201)
async def create_post(
    body: PostDraft,
    author: AuthorIdentity = Depends(require_author),
    coordinator: PostCoordinator = Depends(get_post_coordinator),
) -> Post:
    if not body.title or not body.content:
        raise HTTPException(status_code=STATUS_BAD_REQUEST, detail=MSG_TITLE_CONTENT_REQUIRED)
    post = await coordinator.create_post(body, author.name, author)
    if post is None:
        raise HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_CREATE_FAILED)
    return post


@router.put("/{post_id}", response_model=Post)
async def update_post(
    post_id: str,
    body: PostUpdate,
    author: AuthorIdentity = Depends(require_author),
    coordinator: PostCoordinator = Depends(get_post_coordinator),
) -> Post:
    """Partial update: only title/content/published fields present in the body change."""
    try:
        post = await coordinator.update_post(post_id, body, author)
    except PostNotFoundError as e:
        raise blog_error_to_http(e) from e
    if post is None:
        raise HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_UPDATE_FAILED)
    return post


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    author: AuthorIdentity = Depends(require_author),
    coordinator: PostCoordinator = Depends(get_post_coordinator),
) -> dict[str, str]:
    try:
        ok = await coordinator.delete_post(post_id, author)
    except PostNotFoundError as e:
        raise blog_error_to_http(e) from e
    if not ok:
        raise HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_DELETE_FAILED)
    return {"message": "Post deleted successfully"}
