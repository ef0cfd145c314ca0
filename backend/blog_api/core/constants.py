"""
Centralized constants for cache keys and durable paths.

Change key prefixes or file layout here instead of scattering literals across services.
Freshness window and repository location come from settings (env-driven).
"""

# Redis keys: one entry per post plus one snapshot of the full list
CACHE_PREFIX = "blog:"
POST_KEY_TEMPLATE = CACHE_PREFIX + "post:{post_id}"
POSTS_LIST_KEY = CACHE_PREFIX + "posts:list"

# Default freshness window (seconds); settings.cache_ttl_seconds overrides
DEFAULT_CACHE_TTL_SECONDS = 420

# Durable layout: posts/<id>.json, pretty-printed with 2-space indent
POST_FILE_SUFFIX = ".json"
POST_JSON_INDENT = 2

# Users file inside settings.data_dir
USERS_FILE_NAME = "users.json"
BCRYPT_ROUNDS = 12

# Session tokens
AUTH_TOKEN_ALGORITHM = "HS256"

# Commit attribution fallback when a session has no name/email
UNKNOWN_AUTHOR_NAME = "Unknown User"
UNKNOWN_AUTHOR_EMAIL = "unknown@example.com"
