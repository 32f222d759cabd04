# src/postboard/schemas/post.py
"""Post-related Pydantic schemas."""

from pydantic import BaseModel, Field, field_validator

from .common import StoreModel, coerce_id, list_or_empty


class Post(StoreModel):
    """A post as stored remotely."""

    id: str
    user_id: str
    title: str = ""
    content: str = ""
    bookmarked_by: list[str] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("bookmarked_by", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return list_or_empty(value)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return coerce_id(value)

    @property
    def bookmark_count(self) -> int:
        """Number of users who bookmarked this post."""
        return len(self.bookmarked_by)

    @property
    def is_edited(self) -> bool:
        """True once the post has been modified after creation."""
        return self.updated_at is not None and self.updated_at != self.created_at


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field("", description="Post title")
    content: str = Field("", description="Post body")


class PostUpdate(BaseModel):
    """Schema for updating a post. Empty fields are left unchanged."""

    title: str | None = Field(None, description="New title")
    content: str | None = Field(None, description="New body")
