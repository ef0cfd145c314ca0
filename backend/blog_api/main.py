"""
FastAPI app entrypoint.

Posts live in a GitHub repository; a Redis cache sits in front of it. Users live in users.json.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from blog_api.api.routes import auth, posts
from blog_api.config import DEFAULT_AUTH_SECRET, settings
from blog_api.core.errors import ConfigurationError
from blog_api.services.cache import CacheStore, create_cache_backend
from blog_api.services.github import GitHubConfig, GitHubContentsStore
from blog_api.services.post_coordinator import PostCoordinator
from blog_api.services.session_tokens import SessionTokens
from blog_api.services.user_store import UserStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.github_configured():
        raise ConfigurationError("GITHUB_TOKEN, GITHUB_REPO_OWNER and GITHUB_REPO_NAME must be set in .env")
    if settings.auth_secret == DEFAULT_AUTH_SECRET:
        logger.warning("AUTH_SECRET not set; using the development default")

    store = GitHubContentsStore(GitHubConfig())
    backend = create_cache_backend(settings.redis_url, settings.redis_token)
    cache = CacheStore(backend, ttl_seconds=settings.cache_ttl_seconds)

    app.state.cache = cache
    app.state.post_coordinator = PostCoordinator(cache, store, posts_dir=settings.posts_dir)
    app.state.user_store = UserStore(settings.data_dir)
    app.state.session_tokens = SessionTokens(settings.auth_secret, settings.auth_token_expire_minutes)

    logger.info(
        "Blog backend ready: repo %s/%s, cache %s (ttl %ss)",
        settings.github_repo_owner,
        settings.github_repo_name,
        "enabled" if backend is not None else "disabled",
        settings.cache_ttl_seconds,
    )
    yield
    await store.close()
    if backend is not None:
        await backend.close()


app = FastAPI(title="GitHub Blog", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production frontend
_cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_extra = settings.cors_origins or os.getenv("CORS_ORIGINS", "")
if _cors_extra:
    _cors_origins.extend(o.strip() for o in _cors_extra.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts.router, prefix="/api/posts", tags=["posts"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "GitHub Blog API", "docs": "/docs", "health": "/health"}


@app.get("/health")
async def health(request: Request) -> dict:
    cache = getattr(request.app.state, "cache", None)
    cache_up = await cache.is_available() if cache is not None else False
    return {"status": "ok", "cache": cache_up}
