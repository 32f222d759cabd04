"""Service-level helpers for creating, editing and deleting posts."""
from __future__ import annotations

import logging
from datetime import UTC, datetime

from postboard.core.errors import (
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    ValidationError,
    error_kind,
    user_message,
)
from postboard.core.session import SessionUser
from postboard.repositories import PostRepository
from postboard.schemas.common import ActionState
from postboard.schemas.post import Post
from postboard.services.feed import newest_first

logger = logging.getLogger(__name__)

__all__ = ["PostService", "utc_now_iso"]


def utc_now_iso() -> str:
    """Return the current time as an ISO-8601 UTC string."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _failure(exc: Exception, fallback: str) -> ActionState:
    if error_kind(exc) == ErrorKind.CONFIGURATION:
        raise exc
    return ActionState(success=False, message=user_message(exc, fallback))


class PostService:
    """Post actions for the current user. Failures are returned, not raised."""

    def __init__(self, posts: PostRepository) -> None:
        self.posts = posts

    async def list_posts(self) -> list[Post]:
        """Return every post, newest first."""
        return newest_first(await self.posts.get_all())

    async def get_post(self, post_id: str) -> Post | None:
        """Return one post or None when it does not exist."""
        return await self.posts.get_by_id(post_id)

    async def get_user_posts(self, user_id: str) -> list[Post]:
        """Return the posts written by ``user_id``."""
        return await self.posts.get_by_owner(user_id)

    async def _owned_post(self, current_user: SessionUser | None, post_id: str, verb: str) -> Post:
        if current_user is None:
            raise AuthenticationError(f"You must be logged in to {verb} a post")
        if not post_id:
            raise ValidationError("Post ID is required", "id")
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        if post.user_id != current_user.id:
            raise AuthenticationError(f"You can only {verb} your own posts")
        return post

    async def create_post(
        self, current_user: SessionUser | None, title: str, content: str
    ) -> ActionState:
        """Create a post owned by ``current_user``."""
        try:
            if current_user is None:
                raise AuthenticationError("You must be logged in to create a post")
            if not title or not content:
                raise ValidationError("Title and content are required")
            now = utc_now_iso()
            post = await self.posts.create(
                {
                    "userId": current_user.id,
                    "title": title,
                    "content": content,
                    "bookmarkedBy": [],
                    "createdAt": now,
                    "updatedAt": now,
                }
            )
        except Exception as exc:
            logger.error("Error creating post: %s", exc)
            return _failure(exc, "Failed to create post")
        logger.info("User %s created post %s", current_user.id, post.id)
        return ActionState(success=True, message="Post created successfully", id=post.id)

    async def update_post(
        self,
        current_user: SessionUser | None,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> ActionState:
        """Change the title and/or content of one of the current user's posts."""
        try:
            await self._owned_post(current_user, post_id, "update")
            fields: dict[str, str] = {}
            if title:
                fields["title"] = title
            if content:
                fields["content"] = content
            if not fields:
                return ActionState(success=False, message="No changes provided")
            fields["updatedAt"] = utc_now_iso()
            await self.posts.update(post_id, fields)
        except Exception as exc:
            logger.error("Error updating post %s: %s", post_id, exc)
            return _failure(exc, "Failed to update post")
        logger.info("Post %s updated", post_id)
        return ActionState(success=True, message="Post updated successfully", id=post_id)

    async def delete_post(self, current_user: SessionUser | None, post_id: str) -> ActionState:
        """Delete one of the current user's posts."""
        try:
            await self._owned_post(current_user, post_id, "delete")
            await self.posts.delete(post_id)
        except Exception as exc:
            logger.error("Error deleting post %s: %s", post_id, exc)
            return _failure(exc, "Failed to delete post")
        logger.info("Post %s deleted", post_id)
        return ActionState(success=True, message="Post deleted successfully", id=post_id)
