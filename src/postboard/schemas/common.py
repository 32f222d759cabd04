"""Shared Pydantic schemas for store records and action results."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StoreModel(BaseModel):
    """Base for records that round-trip through the remote store.

    Attributes are snake_case in Python and camelCase on the wire. Unknown
    store fields are preserved so a full-record PUT never drops data.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_store(self) -> dict[str, Any]:
        """Return the camelCase JSON body used for store writes."""
        return self.model_dump(by_alias=True, mode="json")


def list_or_empty(value: object) -> object:
    """Normalize an absent multi-valued store field to an empty list."""
    return [] if value is None else value


def coerce_id(value: object) -> object:
    """Accept numeric identifiers from the store and keep them as strings."""
    return str(value) if isinstance(value, int) else value


class ActionState(BaseModel):
    """Outcome of a user-initiated mutation."""

    success: bool
    message: str
    id: str | None = Field(None, description="Identifier of the created entity, if any")
