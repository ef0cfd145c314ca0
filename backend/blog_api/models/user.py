"""User accounts stored in users.json."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """One row of users.json. `password` is the bcrypt hash, never the plain text."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    password: str
    name: str
    created_at: datetime = Field(alias="createdAt")

    def public(self) -> dict:
        return {"id": self.id, "email": self.email, "name": self.name}


class SignUpRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class SignInRequest(BaseModel):
    email: str | None = None
    password: str | None = None
