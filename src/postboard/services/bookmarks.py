"""Bookmark toggling across the post and user records.

A bookmark lives in two places: the post's ``bookmarkedBy`` list and the
user's ``bookmarkedPosts`` list. The store has no transactions, so a toggle
writes the post first, then the user, and if the user write fails it issues a
single compensating write that puts the post's original list back. The
compensation is best effort: if it fails too, the two records stay out of step
until the next toggle.

There is no locking. Two users toggling the same post at the same time both
read-modify-write the whole ``bookmarkedBy`` list and the last write wins.
"""

from __future__ import annotations

import asyncio
import logging

from postboard.core.errors import (
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    error_kind,
    user_message,
    write_failure,
)
from postboard.repositories import PostRepository, UserRepository
from postboard.schemas.post import Post
from postboard.schemas.results import BookmarkState

logger = logging.getLogger(__name__)

BOOKMARK_ADDED_MESSAGE = "Post bookmarked successfully"
BOOKMARK_REMOVED_MESSAGE = "Bookmark removed successfully"
BOOKMARK_FAILED_MESSAGE = "Failed to update bookmark"


def toggled(values: list[str], item: str, present: bool) -> list[str]:
    """Return ``values`` with ``item`` added (once) or removed."""
    if present:
        return values if item in values else [*values, item]
    return [value for value in values if value != item]


class BookmarkService:
    """Maintains the mirrored bookmark relation between users and posts."""

    def __init__(self, posts: PostRepository, users: UserRepository) -> None:
        self.posts = posts
        self.users = users

    async def _compensate(self, original: Post) -> None:
        """Put the post's pre-toggle bookmarker list back. Failures are only logged."""
        try:
            await self.posts.replace(original)
        except Exception as exc:
            logger.error(
                "Failed to revert bookmark update on post %s: %s", original.id, exc, exc_info=True
            )
        else:
            logger.info("Reverted bookmark update on post %s", original.id)

    async def _toggle(self, post_id: str, current_user_id: str | None) -> BookmarkState:
        if not current_user_id:
            raise AuthenticationError("You must be logged in to bookmark posts")

        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)

        user = await self.users.get_by_id(current_user_id)
        if user is None:
            raise NotFoundError("User", current_user_id)

        bookmarked = current_user_id not in post.bookmarked_by

        try:
            await self.posts.set_bookmarked_by(
                post, toggled(post.bookmarked_by, current_user_id, bookmarked)
            )
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            raise write_failure("Failed to update post bookmark", exc) from exc

        try:
            await self.users.replace(
                user.model_copy(
                    update={
                        "bookmarked_posts": toggled(user.bookmarked_posts, post_id, bookmarked)
                    }
                )
            )
        except Exception as exc:
            logger.error("Failed to update user bookmarks: %s", exc)
            await self._compensate(post)
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            raise write_failure("Failed to update user bookmarks", exc) from exc

        logger.info(
            "User %s %s post %s",
            current_user_id,
            "bookmarked" if bookmarked else "removed bookmark from",
            post_id,
        )
        return BookmarkState(
            success=True,
            message=BOOKMARK_ADDED_MESSAGE if bookmarked else BOOKMARK_REMOVED_MESSAGE,
            is_bookmarked=bookmarked,
        )

    async def toggle(self, post_id: str, current_user_id: str | None) -> BookmarkState:
        """Flip ``current_user_id``'s bookmark on ``post_id``.

        Returns:
            The final state. Failures are reported in the result instead of
            raised, except for missing configuration.
        """
        try:
            return await self._toggle(post_id, current_user_id)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Bookmark toggle error: %s", exc)
            return BookmarkState(
                success=False,
                message=user_message(exc, BOOKMARK_FAILED_MESSAGE),
            )

    async def get_user_bookmarks(self, user_id: str) -> list[Post]:
        """Return the posts ``user_id`` has bookmarked, skipping deleted ones."""
        try:
            user = await self.users.get_by_id(user_id)
            if user is None or not user.bookmarked_posts:
                return []
            posts = await asyncio.gather(
                *(self.posts.get_by_id(post_id) for post_id in user.bookmarked_posts)
            )
            return [post for post in posts if post is not None]
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.warning("Error fetching bookmarks for user %s: %s", user_id, exc)
            return []

    async def is_post_bookmarked(self, post_id: str, user_id: str) -> bool:
        """Return True if ``user_id`` appears in the post's bookmarker list."""
        try:
            post = await self.posts.get_by_id(post_id)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.warning("Error checking bookmark status of post %s: %s", post_id, exc)
            return False
        return post is not None and user_id in post.bookmarked_by

    async def get_post_bookmark_count(self, post_id: str) -> int:
        """Return how many users bookmarked ``post_id``; 0 when unknown."""
        try:
            post = await self.posts.get_by_id(post_id)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.warning("Error getting bookmark count of post %s: %s", post_id, exc)
            return 0
        return post.bookmark_count if post is not None else 0
