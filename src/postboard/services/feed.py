"""Feed composition for the home page.

Two feeds exist:

- The popular feed backs the anonymous landing page. Posts are ranked by
  bookmark count, newest first among equals, and the whole operation degrades
  to an empty feed on failure.
- The followed feed shows a logged-in user the posts of the people they
  follow, newest first. Each followed user is fetched independently so one
  bad record never hides the rest.

Authentication and configuration errors always reach the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from postboard.core.errors import NotFoundError, must_propagate
from postboard.repositories import PostRepository, UserRepository
from postboard.schemas.post import Post
from postboard.schemas.results import FeedResult
from postboard.schemas.user import User

logger = logging.getLogger(__name__)

DEFAULT_POPULAR_LIMIT = 20

_EPOCH = datetime.min.replace(tzinfo=UTC)


def created_at_key(post: Post) -> datetime:
    """Return a comparable creation time; unparseable stamps sort oldest."""
    if not post.created_at:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(post.created_at)
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def rank_by_popularity(posts: Iterable[Post]) -> list[Post]:
    """Order posts by bookmark count, then by creation time, both descending.

    ``sorted`` is stable, so posts that tie on both keys keep the order the
    store returned them in.
    """
    return sorted(
        posts,
        key=lambda post: (post.bookmark_count, created_at_key(post)),
        reverse=True,
    )


def newest_first(posts: Iterable[Post]) -> list[Post]:
    """Order posts by creation time, newest first."""
    return sorted(posts, key=created_at_key, reverse=True)


class FeedComposer:
    """Builds the popular and followed feeds from the store."""

    def __init__(self, posts: PostRepository, users: UserRepository) -> None:
        self.posts = posts
        self.users = users

    async def _resolve_authors(self, author_ids: Iterable[str]) -> list[User]:
        """Fetch author records concurrently, omitting any that fail or are missing."""
        ids = list(author_ids)
        results = await asyncio.gather(
            *(self.users.get_by_id(author_id) for author_id in ids),
            return_exceptions=True,
        )
        authors: list[User] = []
        for author_id, result in zip(ids, results):
            if isinstance(result, BaseException):
                if must_propagate(result):
                    raise result
                logger.warning("Failed to resolve author %s: %s", author_id, result)
                continue
            if result is None:
                logger.warning("Author %s not found", author_id)
                continue
            authors.append(result)
        return authors

    async def popular_feed(self, limit: int = DEFAULT_POPULAR_LIMIT) -> FeedResult:
        """Return the most bookmarked posts and their authors.

        Args:
            limit: Maximum number of posts to return.

        Returns:
            The ranked posts and the distinct authors that could be resolved.
            Any failure yields an empty feed.
        """
        try:
            ranked = rank_by_popularity(await self.posts.get_all())[: max(limit, 0)]
            author_ids = {post.user_id for post in ranked}
            authors = await self._resolve_authors(author_ids)
            return FeedResult(posts=ranked, authors=authors)
        except Exception as exc:
            if must_propagate(exc):
                raise
            logger.warning("Popular feed degraded to empty: %s", exc, exc_info=True)
            return FeedResult.empty()

    async def _fetch_followed(self, followed_id: str) -> tuple[list[Post], User | None]:
        posts_result, profile_result = await asyncio.gather(
            self.posts.get_by_owner(followed_id),
            self.users.get_by_id(followed_id),
            return_exceptions=True,
        )
        posts: list[Post] = []
        profile: User | None = None

        if isinstance(posts_result, BaseException):
            if must_propagate(posts_result):
                raise posts_result
            logger.warning("Failed to fetch posts for followed user %s: %s", followed_id, posts_result)
        else:
            posts = posts_result

        if isinstance(profile_result, BaseException):
            if must_propagate(profile_result):
                raise profile_result
            logger.warning(
                "Failed to fetch profile for followed user %s: %s", followed_id, profile_result
            )
        elif profile_result is None:
            logger.warning("Followed user %s not found", followed_id)
        else:
            profile = profile_result

        return posts, profile

    async def followed_feed(self, current_user_id: str | None) -> FeedResult:
        """Return posts from the users ``current_user_id`` follows, newest first.

        Raises:
            NotFoundError: If the current user's record does not exist.
            StoreError: If the current user's record cannot be fetched.
            AuthenticationError: From anywhere in the pipeline.
        """
        if not current_user_id:
            return FeedResult.empty()

        user = await self.users.get_by_id(current_user_id)
        if user is None:
            raise NotFoundError("User", current_user_id)

        if not user.following:
            return FeedResult.empty()

        try:
            outcomes = await asyncio.gather(
                *(self._fetch_followed(followed_id) for followed_id in user.following),
                return_exceptions=True,
            )
            failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
            if failures:
                raise next((exc for exc in failures if must_propagate(exc)), failures[0])
            per_user = [outcome for outcome in outcomes if not isinstance(outcome, BaseException)]
            posts = newest_first(post for user_posts, _ in per_user for post in user_posts)
            authors = [profile for _, profile in per_user if profile is not None]
            return FeedResult(posts=posts, authors=authors)
        except Exception as exc:
            if must_propagate(exc):
                raise
            logger.warning(
                "Followed feed for %s degraded to empty: %s", current_user_id, exc, exc_info=True
            )
            return FeedResult.empty()

    async def home_feed(
        self, current_user_id: str | None, limit: int = DEFAULT_POPULAR_LIMIT
    ) -> tuple[FeedResult, bool]:
        """Return the feed for the home page and whether it is personalized."""
        if current_user_id:
            return await self.followed_feed(current_user_id), True
        return await self.popular_feed(limit), False
