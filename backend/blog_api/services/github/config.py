"""GitHub repository config. Credentials from settings (GITHUB_TOKEN, GITHUB_REPO_OWNER, GITHUB_REPO_NAME) or explicit args."""
from blog_api.config import settings

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubConfig:
    """Token, repository coordinates and API base URL."""

    __slots__ = ("token", "owner", "repo", "branch", "api_url")

    def __init__(
        self,
        *,
        token: str | None = None,
        owner: str | None = None,
        repo: str | None = None,
        branch: str | None = None,
        api_url: str | None = None,
    ) -> None:
        self.token = (token if token is not None else settings.github_token).strip()
        self.owner = (owner if owner is not None else settings.github_repo_owner).strip()
        self.repo = (repo if repo is not None else settings.github_repo_name).strip()
        self.branch = (branch if branch is not None else settings.github_branch).strip()
        self.api_url = (api_url or settings.github_api_url or DEFAULT_API_URL).rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.token and self.owner and self.repo)

    def contents_path(self, path: str) -> str:
        return f"/repos/{self.owner}/{self.repo}/contents/{path.lstrip('/')}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
