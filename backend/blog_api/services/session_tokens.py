"""
Signed session tokens (JWT, HS256). Claims: sub (user id), email, name, iat, exp.
Issued on sign-in; decoded into the AuthorIdentity that write routes attribute commits to.
"""
import logging
import time

import jwt

from blog_api.core.constants import AUTH_TOKEN_ALGORITHM, UNKNOWN_AUTHOR_EMAIL, UNKNOWN_AUTHOR_NAME
from blog_api.models.post import AuthorIdentity
from blog_api.models.user import User

logger = logging.getLogger(__name__)


class SessionTokens:
    def __init__(self, secret: str, expire_minutes: int = 1440) -> None:
        self._secret = secret
        self._expire_seconds = expire_minutes * 60

    def issue(self, user: User) -> str:
        now = int(time.time())
        token = jwt.encode(
            {
                "sub": user.id,
                "email": user.email,
                "name": user.name,
                "iat": now,
                "exp": now + self._expire_seconds,
            },
            self._secret,
            algorithm=AUTH_TOKEN_ALGORITHM,
        )
        if isinstance(token, bytes):
            token = token.decode("utf-8")
        return token

    def identity(self, token: str) -> AuthorIdentity | None:
        """AuthorIdentity for a valid token, None if expired, tampered or malformed."""
        try:
            claims = jwt.decode(token, self._secret, algorithms=[AUTH_TOKEN_ALGORITHM])
        except jwt.PyJWTError as e:
            logger.info("Rejected session token: %s", e)
            return None
        email = claims.get("email") or ""
        return AuthorIdentity(
            name=claims.get("name") or email or UNKNOWN_AUTHOR_NAME,
            email=email or UNKNOWN_AUTHOR_EMAIL,
        )
