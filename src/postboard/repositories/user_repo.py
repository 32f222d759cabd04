"""Data access helpers for working with users."""
from __future__ import annotations

from postboard.clients.store import HTTP_NOT_FOUND, raise_for_store_status
from postboard.repositories.base import StoreRepository
from postboard.schemas.user import User

__all__ = ["UserRepository"]


class UserRepository(StoreRepository[User]):
    """Thin wrapper around store access for user records."""

    collection = "users"
    resource = "User"
    model = User

    async def find_by_email(self, email: str) -> User | None:
        """Return the first user registered with ``email``, if any."""
        path = self._path()
        response = await self.store.request("GET", path, params={"email": email})
        if response.status_code == HTTP_NOT_FOUND:
            return None
        raise_for_store_status(response, "Failed to look up user", self.store.url_for(path))
        users = self._parse_many(response.json())
        # The store filter is a substring match; require the exact address.
        for user in users:
            if user.email == email:
                return user
        return None
