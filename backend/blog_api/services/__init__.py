from blog_api.services.post_coordinator import PostCoordinator
from blog_api.services.session_tokens import SessionTokens
from blog_api.services.user_store import UserStore

__all__ = ["PostCoordinator", "SessionTokens", "UserStore"]
