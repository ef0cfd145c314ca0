"""
Durable post store: a GitHub repository, one JSON file per post.
The coordinator only sees the DurableStore protocol; GitHubContentsStore is the production implementation.
"""
from blog_api.services.github.base import DirectoryEntry, DurableStore
from blog_api.services.github.client import GitHubContentsStore
from blog_api.services.github.config import GitHubConfig

__all__ = ["DirectoryEntry", "DurableStore", "GitHubConfig", "GitHubContentsStore"]
