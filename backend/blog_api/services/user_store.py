"""
User accounts: JSON array in <data_dir>/users.json with bcrypt-hashed passwords.
The file is created (empty) on first use. Read-modify-write is guarded by a process lock.
"""
import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path

import bcrypt
from pydantic import TypeAdapter, ValidationError

from blog_api.core.constants import BCRYPT_ROUNDS, USERS_FILE_NAME
from blog_api.core.errors import InvalidCredentialsError, UserExistsError
from blog_api.models.user import User

logger = logging.getLogger(__name__)

_users_adapter = TypeAdapter(list[User])


class UserStore:
    """Sign-up and credential check over users.json."""

    def __init__(self, data_dir: str | Path, *, rounds: int = BCRYPT_ROUNDS) -> None:
        self._path = Path(data_dir) / USERS_FILE_NAME
        self._rounds = rounds
        self._lock = threading.Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._path.write_text("[]", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[User]:
        try:
            return _users_adapter.validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Failed to read users file %s: %s", self._path, e)
            return []

    def _save(self, users: list[User]) -> None:
        payload = [u.model_dump(mode="json", by_alias=True) for u in users]
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def get_by_email(self, email: str) -> User | None:
        for user in self._load():
            if user.email == email:
                return user
        return None

    def create_user(self, email: str, password: str, name: str) -> User:
        """Raises UserExistsError if the email is taken."""
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds))
        with self._lock:
            users = self._load()
            if any(u.email == email for u in users):
                raise UserExistsError(email)
            user = User(
                id=str(time.time_ns() // 1_000_000),
                email=email,
                password=hashed.decode("utf-8"),
                name=name,
                created_at=datetime.now(timezone.utc),
            )
            users.append(user)
            self._save(users)
        logger.info("Created user %s", email)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Raises InvalidCredentialsError on unknown email or wrong password."""
        user = self.get_by_email(email)
        if user is None or not user.password:
            raise InvalidCredentialsError()
        try:
            ok = bcrypt.checkpw(password.encode("utf-8"), user.password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash for %s is not a bcrypt hash", email)
            ok = False
        if not ok:
            raise InvalidCredentialsError()
        return user
