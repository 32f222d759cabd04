"""Result schemas returned by the feed, bookmark, search and auth services."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .post import Post
from .user import User, UserPublic

SearchType = Literal["all", "posts", "users"]


class FeedResult(BaseModel):
    """Posts to display plus the author records needed to render them."""

    posts: list[Post] = Field(default_factory=list)
    authors: list[User] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> FeedResult:
        return cls(posts=[], authors=[])


class BookmarkState(BaseModel):
    """Outcome of a bookmark toggle."""

    success: bool
    message: str
    is_bookmarked: bool | None = None


class FollowState(BaseModel):
    """Outcome of a follow or unfollow request."""

    success: bool
    message: str
    is_following: bool | None = None


class SearchResult(BaseModel):
    """Combined search hits."""

    posts: list[Post] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)


class LoginState(BaseModel):
    """Outcome of a login attempt."""

    success: bool
    message: str
    user: User | None = Field(None, exclude=True)


class FeedResponse(BaseModel):
    """Feed as returned by the API; author records omit credentials."""

    posts: list[Post] = Field(default_factory=list)
    authors: list[UserPublic] = Field(default_factory=list)
    personalized: bool = False

    @classmethod
    def from_result(cls, result: FeedResult, personalized: bool = False) -> FeedResponse:
        return cls(
            posts=result.posts,
            authors=[author.public() for author in result.authors],
            personalized=personalized,
        )


class SearchResponse(BaseModel):
    """Search hits as returned by the API."""

    query: str
    type: SearchType = "all"
    posts: list[Post] = Field(default_factory=list)
    users: list[UserPublic] = Field(default_factory=list)
