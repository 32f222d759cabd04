"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .common import StoreModel, coerce_id, list_or_empty


class User(StoreModel):
    """A user record as stored remotely.

    ``password`` is held in plaintext by the demo store and is never part of
    any API response (see ``UserPublic``).
    """

    id: str
    name: str = ""
    email: str = ""
    avatar: str = ""
    password: str | None = None
    bio: str | None = None
    created_at: str | None = None
    following: list[str] = Field(default_factory=list)
    followers: list[str] = Field(default_factory=list)
    bookmarked_posts: list[str] = Field(default_factory=list)

    @field_validator("following", "followers", "bookmarked_posts", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return list_or_empty(value)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return coerce_id(value)

    def public(self) -> "UserPublic":
        """Return the representation that is safe to send to clients."""
        return UserPublic.model_validate(self.model_dump(exclude={"password"}))


class UserPublic(BaseModel):
    """Schema for user information returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    avatar: str
    bio: str | None = None
    created_at: str | None = None
    following: list[str] = Field(default_factory=list)
    followers: list[str] = Field(default_factory=list)
    bookmarked_posts: list[str] = Field(default_factory=list)


class UserCreate(BaseModel):
    """Schema for signup submissions."""

    name: str = Field("", description="Display name")
    email: str = Field("", description="Login email")
    password: str = Field("", description="Plaintext password (demo store)")
    avatar: str = Field("", description="Avatar image URL")
    bio: str | None = Field(None, description="Optional biography")


class UserUpdate(BaseModel):
    """Schema for profile updates. Unset fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = None
    password: str | None = None
    avatar: str | None = None
    bio: str | None = None


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str = Field("", description="Login email")
    password: str = Field("", description="Plaintext password")
