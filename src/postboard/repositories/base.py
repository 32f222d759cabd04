"""Shared plumbing for repositories backed by the remote store."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from postboard.clients.store import HTTP_NOT_FOUND, StoreClient, raise_for_store_status
from postboard.core.errors import NotFoundError
from postboard.schemas.common import StoreModel

ModelT = TypeVar("ModelT", bound=StoreModel)

__all__ = ["StoreRepository"]


class StoreRepository(Generic[ModelT]):
    """CRUD access to one collection of the remote store.

    Subclasses set ``collection`` (the URL segment), ``model`` (the record
    type) and ``resource`` (the name used in error messages).
    """

    collection: str
    resource: str
    model: type[ModelT]

    def __init__(self, store: StoreClient) -> None:
        """Initialize the repository with a shared store client."""
        self.store = store

    def _path(self, entity_id: str | None = None) -> str:
        if entity_id is None:
            return f"/{self.collection}"
        return f"/{self.collection}/{entity_id}"

    def _parse_many(self, payload: Any) -> list[ModelT]:
        if not isinstance(payload, list):
            return []
        return [self.model.model_validate(item) for item in payload]

    async def get_all(self) -> list[ModelT]:
        """Return every record of the collection.

        Raises:
            StoreError: If the store does not answer with a success status.
        """
        path = self._path()
        response = await self.store.request("GET", path)
        raise_for_store_status(
            response, f"Failed to fetch {self.collection}", self.store.url_for(path)
        )
        return self._parse_many(response.json())

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        """Return a single record, or None when the store reports 404."""
        path = self._path(entity_id)
        response = await self.store.request("GET", path)
        if response.status_code == HTTP_NOT_FOUND:
            return None
        raise_for_store_status(
            response, f"Failed to fetch {self.resource.lower()}", self.store.url_for(path)
        )
        return self.model.model_validate(response.json())

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        """Insert a new record; the store assigns the identifier."""
        path = self._path()
        response = await self.store.request("POST", path, json=dict(data))
        raise_for_store_status(
            response, f"Failed to create {self.resource.lower()}", self.store.url_for(path)
        )
        return self.model.model_validate(response.json())

    async def replace(self, entity: ModelT) -> ModelT:
        """Write the whole record back (full-record PUT)."""
        return await self.update(entity.id, entity.to_store())

    async def update(self, entity_id: str, fields: Mapping[str, Any]) -> ModelT:
        """Send ``fields`` (camelCase) as a PUT to the record.

        Raises:
            StoreError: If the store rejects the write.
        """
        path = self._path(entity_id)
        response = await self.store.request("PUT", path, json=dict(fields))
        raise_for_store_status(
            response, f"Failed to update {self.resource.lower()}", self.store.url_for(path)
        )
        return self.model.model_validate(response.json())

    async def delete(self, entity_id: str) -> None:
        """Remove a record.

        Raises:
            NotFoundError: If the record does not exist.
            StoreError: For any other failure.
        """
        path = self._path(entity_id)
        response = await self.store.request("DELETE", path)
        if response.status_code == HTTP_NOT_FOUND:
            raise NotFoundError(self.resource, entity_id)
        raise_for_store_status(
            response, f"Failed to delete {self.resource.lower()}", self.store.url_for(path)
        )

    async def search(self, field: str, value: str, page: int = 1, limit: int = 10) -> list[ModelT]:
        """Return records whose ``field`` matches ``value`` using store-side filtering.

        MockAPI answers 404 when a filter matches nothing; that is an empty page.
        """
        path = self._path()
        params = {field: value, "page": page, "limit": limit}
        response = await self.store.request("GET", path, params=params)
        if response.status_code == HTTP_NOT_FOUND:
            return []
        raise_for_store_status(
            response, f"Failed to search {self.collection}", self.store.url_for(path)
        )
        return self._parse_many(response.json())

