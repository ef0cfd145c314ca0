"""Protocol for the durable post store. Failures are reported (None/False), never raised."""
from dataclasses import dataclass
from typing import Protocol

from blog_api.models.post import AuthorIdentity


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: str
    type: str = "file"


class DurableStore(Protocol):
    """Version-controlled file store (GitHub contents API in production)."""

    async def read(self, path: str) -> str | None:
        """File content as text, or None if missing or unreadable."""
        ...

    async def write(
        self,
        path: str,
        content: str,
        message: str,
        revision_token: str | None = None,
        author: AuthorIdentity | None = None,
    ) -> bool:
        """
        Create or overwrite a file. With revision_token the write only lands if the
        file is still at that revision.
        """
        ...

    async def delete(
        self,
        path: str,
        revision_token: str,
        message: str,
        author: AuthorIdentity | None = None,
    ) -> bool:
        ...

    async def list_directory(self, path: str) -> list[DirectoryEntry] | None:
        """Entries under path ([] if the directory does not exist, None on transport error)."""
        ...

    async def get_revision_token(self, path: str) -> str | None:
        """Current revision handle (GitHub blob sha) or None if the file does not exist."""
        ...
