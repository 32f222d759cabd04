"""Service layer: feed composition, bookmarks, search and user/post actions."""

from .auth_service import AuthService
from .bookmarks import BookmarkService
from .feed import FeedComposer
from .post_service import PostService
from .search import SearchService
from .user_service import UserService

__all__ = [
    "AuthService",
    "BookmarkService",
    "FeedComposer",
    "PostService",
    "SearchService",
    "UserService",
]
