import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add backend/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Settings are read at import; keep tests off any real repo or Redis
os.environ.setdefault("GITHUB_TOKEN", "test-token")
os.environ.setdefault("GITHUB_REPO_OWNER", "octo")
os.environ.setdefault("GITHUB_REPO_NAME", "blog")
os.environ["REDIS_URL"] = ""

from blog_api.services.cache.store import CacheStore
from blog_api.services.post_coordinator import PostCoordinator
from tests.fakes import FakeCacheBackend, FakeDurableStore, ManualClock


@pytest.fixture
def clock():
    return ManualClock(datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def backend():
    return FakeCacheBackend()


@pytest.fixture
def cache(backend, clock):
    return CacheStore(backend, ttl_seconds=420, clock=clock)


@pytest.fixture
def store():
    return FakeDurableStore()


@pytest.fixture
def coordinator(cache, store, clock):
    return PostCoordinator(cache, store, clock=clock)
