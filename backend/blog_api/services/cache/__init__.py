"""
Post cache: CacheStore over a pluggable backend (Redis in production).
Reads return Hit | Miss | Unavailable so callers branch explicitly.
"""
from blog_api.services.cache.backend import CacheBackend, RedisCacheBackend, create_cache_backend
from blog_api.services.cache.outcome import MISS, UNAVAILABLE, CacheOutcome, Hit, Miss, Unavailable
from blog_api.services.cache.store import CacheStore

__all__ = [
    "CacheBackend",
    "CacheOutcome",
    "CacheStore",
    "Hit",
    "MISS",
    "Miss",
    "RedisCacheBackend",
    "UNAVAILABLE",
    "Unavailable",
    "create_cache_backend",
]
