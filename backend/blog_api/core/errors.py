"""
Centralized error handling for post/auth failures.
Domain exceptions plus a rule table so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class BlogError(Exception):
    """Base class for errors the API layer knows how to report."""


class PostNotFoundError(BlogError):
    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class UserExistsError(BlogError):
    def __init__(self, email: str):
        super().__init__(f"User {email} already exists")
        self.email = email


class InvalidCredentialsError(BlogError):
    pass


class ConfigurationError(BlogError):
    pass


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500

MSG_UNAUTHORIZED = "Unauthorized"
MSG_POST_NOT_FOUND = "Post not found"
MSG_USER_EXISTS = "User already exists"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_CREATE_FAILED = "Failed to create post"
MSG_UPDATE_FAILED = "Failed to update post"
MSG_DELETE_FAILED = "Failed to delete post"
MSG_TITLE_CONTENT_REQUIRED = "Title and content are required"


# ---------------------------------------------------------------------------
# Error rules: (exception type, status_code, detail_message)
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

# First match wins.
BLOG_ERROR_RULES: list[tuple[type[BlogError], int, str]] = [
    (PostNotFoundError, STATUS_NOT_FOUND, MSG_POST_NOT_FOUND),
    (UserExistsError, STATUS_CONFLICT, MSG_USER_EXISTS),
    (InvalidCredentialsError, STATUS_UNAUTHORIZED, MSG_INVALID_CREDENTIALS),
]


def blog_error_to_http(exc: Exception) -> HTTPException:
    """
    Map a domain exception into an HTTPException.
    Uses BLOG_ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for exc_type, status_code, detail in BLOG_ERROR_RULES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=STATUS_UNAUTHORIZED,
        detail=MSG_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )
