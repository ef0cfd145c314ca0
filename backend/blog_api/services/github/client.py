"""GitHub contents API client: lowest level, one request per call. Implements DurableStore."""
import base64
import logging
from typing import Any

import httpx

from blog_api.models.post import AuthorIdentity
from blog_api.services.github.base import DirectoryEntry
from blog_api.services.github.config import GitHubConfig

logger = logging.getLogger(__name__)

_NOT_FOUND = 404


def _attribution(author: AuthorIdentity | None) -> dict[str, Any]:
    """Commit author and committer fields; empty when no identity is supplied."""
    if author is None:
        return {}
    person = {"name": author.name, "email": author.email}
    return {"author": person, "committer": dict(person)}


class GitHubContentsStore:
    """Posts as files in a GitHub repository, read and committed through /repos/{owner}/{repo}/contents."""

    def __init__(
        self,
        config: GitHubConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
    ) -> None:
        self._config = config or GitHubConfig()
        self._client = client or httpx.AsyncClient(
            base_url=self._config.api_url,
            headers=self._config.headers(),
            timeout=timeout,
        )

    @property
    def config(self) -> GitHubConfig:
        return self._config

    async def close(self) -> None:
        await self._client.aclose()

    def _ref_params(self) -> dict[str, str]:
        return {"ref": self._config.branch} if self._config.branch else {}

    def _branch_body(self) -> dict[str, str]:
        return {"branch": self._config.branch} if self._config.branch else {}

    async def _get_contents(self, path: str) -> Any | None:
        """GET contents for a file (dict) or directory (list). None on 404 or any error."""
        try:
            r = await self._client.get(self._config.contents_path(path), params=self._ref_params())
        except httpx.HTTPError as e:
            logger.error("Error fetching %s from GitHub: %s", path, e)
            return None
        if r.status_code == _NOT_FOUND:
            return None
        if not r.is_success:
            logger.error("GitHub API error fetching %s: %s %s", path, r.status_code, r.text[:500])
            return None
        try:
            return r.json()
        except ValueError as e:
            logger.error("GitHub returned non-JSON for %s: %s", path, e)
            return None

    async def read(self, path: str) -> str | None:
        data = await self._get_contents(path)
        if not isinstance(data, dict) or "content" not in data:
            return None
        try:
            return base64.b64decode(data["content"]).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            logger.error("Error decoding %s: %s", path, e)
            return None

    async def get_revision_token(self, path: str) -> str | None:
        data = await self._get_contents(path)
        if isinstance(data, dict) and data.get("sha"):
            return str(data["sha"])
        return None

    async def list_directory(self, path: str) -> list[DirectoryEntry] | None:
        try:
            r = await self._client.get(self._config.contents_path(path), params=self._ref_params())
        except httpx.HTTPError as e:
            logger.error("Error listing %s on GitHub: %s", path, e)
            return None
        if r.status_code == _NOT_FOUND:
            return []
        if not r.is_success:
            logger.error("GitHub API error listing %s: %s %s", path, r.status_code, r.text[:500])
            return None
        try:
            data = r.json()
        except ValueError as e:
            logger.error("GitHub returned non-JSON listing %s: %s", path, e)
            return None
        if not isinstance(data, list):
            return []
        return [
            DirectoryEntry(name=item["name"], path=item["path"], type=item.get("type", "file"))
            for item in data
            if isinstance(item, dict) and item.get("name") and item.get("path")
        ]

    async def write(
        self,
        path: str,
        content: str,
        message: str,
        revision_token: str | None = None,
        author: AuthorIdentity | None = None,
    ) -> bool:
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            **self._branch_body(),
            **_attribution(author),
        }
        if revision_token:
            body["sha"] = revision_token
        try:
            r = await self._client.put(self._config.contents_path(path), json=body)
        except httpx.HTTPError as e:
            logger.error("Error creating/updating file %s: %s", path, e)
            return False
        if not r.is_success:
            logger.error("GitHub API error writing %s: %s %s", path, r.status_code, r.text[:500])
            return False
        return True

    async def delete(
        self,
        path: str,
        revision_token: str,
        message: str,
        author: AuthorIdentity | None = None,
    ) -> bool:
        body: dict[str, Any] = {
            "message": message,
            "sha": revision_token,
            **self._branch_body(),
            **_attribution(author),
        }
        try:
            r = await self._client.request("DELETE", self._config.contents_path(path), json=body)
        except httpx.HTTPError as e:
            logger.error("Error deleting file %s: %s", path, e)
            return False
        if not r.is_success:
            logger.error("GitHub API error deleting %s: %s %s", path, r.status_code, r.text[:500])
            return False
        return True
