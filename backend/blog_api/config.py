"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of blog_api/)
_env_path = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_AUTH_SECRET = "dev-secret-change-me-before-deploying"


class Settings(BaseSettings):
    # GitHub repository holding posts/<id>.json. Token, owner and name are required at startup.
    github_token: str = ""
    github_repo_owner: str = ""
    github_repo_name: str = ""
    github_branch: str = ""  # empty = repository default branch
    github_api_url: str = "https://api.github.com"
    posts_dir: str = "posts"

    # Redis cache in front of GitHub. Empty REDIS_URL disables caching.
    redis_url: str = ""
    redis_token: str = ""
    cache_ttl_seconds: int = 420

    # users.json lives here
    data_dir: str = "./data"
    auth_secret: str = DEFAULT_AUTH_SECRET
    auth_token_expire_minutes: int = 1440

    cors_origins: str = ""  # comma-separated, added to the dev origins
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator(
        "github_token",
        "github_repo_owner",
        "github_repo_name",
        "github_branch",
        "redis_url",
        "redis_token",
        mode="after",
    )
    @classmethod
    def strip_credentials(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("cache_ttl_seconds", mode="after")
    @classmethod
    def positive_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be positive")
        return v

    def github_configured(self) -> bool:
        return bool(self.github_token and self.github_repo_owner and self.github_repo_name)

    def cache_configured(self) -> bool:
        return bool(self.redis_url)


settings = Settings()
