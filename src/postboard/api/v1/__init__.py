# src/postboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    feed_router,
    posts_router,
    search_router,
    system_router,
    users_router,
)

__all__ = [
    "auth_router",
    "feed_router",
    "posts_router",
    "search_router",
    "system_router",
    "users_router",
]
