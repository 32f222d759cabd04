"""Data access helpers for working with posts."""
from __future__ import annotations

from postboard.clients.store import HTTP_NOT_FOUND, raise_for_store_status
from postboard.repositories.base import StoreRepository
from postboard.schemas.post import Post

__all__ = ["PostRepository"]


class PostRepository(StoreRepository[Post]):
    """Thin wrapper around store access for post records."""

    collection = "posts"
    resource = "Post"
    model = Post

    async def get_by_owner(self, owner_id: str) -> list[Post]:
        """Return the posts written by ``owner_id``.

        A 404 on the owner-scoped collection means the owner has no posts.
        """
        path = f"/users/{owner_id}/posts"
        response = await self.store.request("GET", path)
        if response.status_code == HTTP_NOT_FOUND:
            return []
        raise_for_store_status(response, "Failed to fetch user posts", self.store.url_for(path))
        return self._parse_many(response.json())

    async def set_bookmarked_by(self, post: Post, bookmarked_by: list[str]) -> Post:
        """Write ``post`` back with a new bookmarker list (full-record PUT)."""
        return await self.replace(post.model_copy(update={"bookmarked_by": bookmarked_by}))
