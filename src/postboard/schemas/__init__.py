# src/postboard/schemas/__init__.py
"""
Pydantic schemas for store records, API payloads and service results.
"""

from .common import ActionState
from .post import Post, PostCreate, PostUpdate
from .results import (
    BookmarkState,
    FeedResponse,
    FeedResult,
    FollowState,
    LoginState,
    SearchResponse,
    SearchResult,
    SearchType,
)
from .user import LoginRequest, User, UserCreate, UserPublic, UserUpdate

__all__ = [
    "ActionState",
    "BookmarkState",
    "FeedResponse",
    "FeedResult",
    "FollowState",
    "LoginRequest",
    "LoginState",
    "Post", "PostCreate", "PostUpdate",
    "SearchResponse", "SearchResult", "SearchType",
    "User", "UserCreate", "UserPublic", "UserUpdate",
]
