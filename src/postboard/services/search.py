"""Field-scoped search over posts and users.

The store only supports filtering one field at a time, so each search runs
two field queries concurrently and merges the hits by id.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TypeVar

from postboard.core.errors import SearchError, must_propagate
from postboard.repositories import PostRepository, UserRepository
from postboard.repositories.base import StoreRepository
from postboard.schemas.common import StoreModel
from postboard.schemas.post import Post
from postboard.schemas.results import SearchResult, SearchType
from postboard.schemas.user import User

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

POST_SEARCH_FIELDS = ("title", "content")
USER_SEARCH_FIELDS = ("name", "bio")

RecordT = TypeVar("RecordT", bound=StoreModel)


def merge_by_id(*hit_lists: Iterable[RecordT]) -> list[RecordT]:
    """Merge hit lists, keeping the first occurrence of every id in order."""
    merged: dict[str, RecordT] = {}
    for hits in hit_lists:
        for record in hits:
            merged.setdefault(record.id, record)
    return list(merged.values())


class SearchService:
    """Runs and merges field-scoped store queries."""

    def __init__(
        self,
        posts: PostRepository,
        users: UserRepository,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.posts = posts
        self.users = users
        self.page_size = page_size

    async def _field_search(
        self,
        repo: StoreRepository[RecordT],
        fields: tuple[str, ...],
        query: str,
        page: int,
        limit: int | None,
        label: str,
    ) -> list[RecordT]:
        page_size = self.page_size if limit is None else limit
        if not query.strip() or page_size <= 0:
            return []
        results = await asyncio.gather(
            *(repo.search(field, query, page, page_size) for field in fields),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            if must_propagate(failure):
                raise failure
        if failures:
            failure = failures[0]
            logger.error("Search of %s for %r failed: %s", label, query, failure)
            raise SearchError(
                f"Failed to search {label}", getattr(failure, "status", None)
            ) from failure
        return merge_by_id(*results)

    async def search_posts(self, query: str, page: int = 1, limit: int | None = None) -> list[Post]:
        """Return posts whose title or content matches ``query``.

        Raises:
            SearchError: If either field query fails.
        """
        return await self._field_search(self.posts, POST_SEARCH_FIELDS, query, page, limit, "posts")

    async def search_users(self, query: str, page: int = 1, limit: int | None = None) -> list[User]:
        """Return users whose name or bio matches ``query``.

        Raises:
            SearchError: If either field query fails.
        """
        return await self._field_search(self.users, USER_SEARCH_FIELDS, query, page, limit, "users")

    async def search(self, query: str, search_type: SearchType = "all", page: int = 1) -> SearchResult:
        """Search posts, users or both; a failed half degrades to no hits."""
        if not query.strip():
            return SearchResult()

        async def _posts() -> list[Post]:
            return await self.search_posts(query, page) if search_type != "users" else []

        async def _users() -> list[User]:
            return await self.search_users(query, page) if search_type != "posts" else []

        posts, users = await asyncio.gather(_posts(), _users(), return_exceptions=True)
        for result in (posts, users):
            if isinstance(result, BaseException) and must_propagate(result):
                raise result
        if isinstance(posts, BaseException):
            logger.warning("Search degraded: %s", posts)
            posts = []
        if isinstance(users, BaseException):
            logger.warning("Search degraded: %s", users)
            users = []
        return SearchResult(posts=posts, users=users)
