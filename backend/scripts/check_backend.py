#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from repo root or backend/:
  python backend/scripts/check_backend.py
  # or:
  cd backend && python scripts/check_backend.py
"""
import asyncio
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


async def _check_github(errors: list[str]) -> None:
    from blog_api.config import settings
    from blog_api.services.github import GitHubContentsStore

    store = GitHubContentsStore()
    try:
        entries = await store.list_directory(settings.posts_dir)
        if entries is None:
            errors.append("GitHub: could not list repository contents (check GITHUB_TOKEN and repo name)")
            print("FAIL GitHub repository")
        else:
            print(f"OK  GitHub repository {store.config.owner}/{store.config.repo}")
    finally:
        await store.close()


async def _check_redis(errors: list[str]) -> None:
    from blog_api.config import settings
    from blog_api.services.cache import CacheStore, create_cache_backend

    backend = create_cache_backend(settings.redis_url, settings.redis_token)
    if backend is None:
        print("SKIP Redis (REDIS_URL not set; cache disabled)")
        return
    try:
        if await CacheStore(backend).is_available():
            print("OK  Redis ping")
        else:
            errors.append("Redis: ping failed (check REDIS_URL / REDIS_TOKEN). The app still runs without cache.")
            print("FAIL Redis ping")
    finally:
        await backend.close()


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        errors.append("backend/.env missing. Copy from backend/.env.example and set GITHUB_TOKEN, etc.")
    else:
        print("OK  .env exists")

    # 2) GitHub settings and access
    try:
        from blog_api.config import settings

        if not settings.github_configured():
            errors.append("GITHUB_TOKEN, GITHUB_REPO_OWNER and GITHUB_REPO_NAME must be set")
            print("FAIL GitHub settings")
        else:
            asyncio.run(_check_github(errors))
    except Exception as e:
        errors.append(f"GitHub: {e}")
        print("FAIL GitHub:", e)

    # 3) Redis (optional)
    try:
        asyncio.run(_check_redis(errors))
    except Exception as e:
        errors.append(f"Redis: {e}")
        print("FAIL Redis:", e)

    # 4) App import (catches missing deps, bad imports)
    try:
        from blog_api.main import app  # noqa: F401
        print("OK  App import (blog_api.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)
        return 1

    # 5) Port 8000
    try:
        import socket
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 8000))
        print("OK  Port 8000 is free")
    except OSError:
        errors.append("Port 8000 is in use. Stop the other process or use another port (e.g. --port 8001).")
        print("FAIL Port 8000 is in use")

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        print("\nThen start backend: cd backend && uvicorn blog_api.main:app --reload")
        return 1

    print("\nAll checks passed. Start with: cd backend && uvicorn blog_api.main:app --reload")
    return 0

if __name__ == "__main__":
    sys.exit(main())
