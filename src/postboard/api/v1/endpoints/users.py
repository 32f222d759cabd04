"""User endpoints: signup, profiles, follows and per-user listings."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from postboard.api.v1.dependencies import (
    BookmarkDep,
    CurrentUserDep,
    OptionalUserDep,
    PostServiceDep,
    SettingsDep,
    UserServiceDep,
)
from postboard.api.v1.endpoints.auth import clear_session_cookie
from postboard.schemas.common import ActionState
from postboard.schemas.post import Post
from postboard.schemas.results import FollowState
from postboard.schemas.user import UserCreate, UserPublic, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserPublic])
async def list_users(user_service: UserServiceDep) -> list[UserPublic]:
    """List every user."""
    return [user.public() for user in await user_service.list_users()]


@router.post("/", response_model=ActionState)
async def signup(payload: UserCreate, user_service: UserServiceDep) -> ActionState:
    """Register a new account."""
    return await user_service.create_user(payload)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, user_service: UserServiceDep) -> UserPublic:
    """Return a user's public profile."""
    user = await user_service.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user.public()


@router.put("/{user_id}", response_model=ActionState)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    user_service: UserServiceDep,
    user: OptionalUserDep,
) -> ActionState:
    """Edit the caller's own profile."""
    return await user_service.update_user(user, user_id, payload)


@router.delete("/{user_id}", response_model=ActionState)
async def delete_user(
    user_id: str,
    response: Response,
    user_service: UserServiceDep,
    user: OptionalUserDep,
    app_settings: SettingsDep,
) -> ActionState:
    """Delete the caller's own account and end their session."""
    result = await user_service.delete_user(user, user_id)
    if result.success:
        clear_session_cookie(response, app_settings)
    return result


@router.get("/{user_id}/posts", response_model=list[Post])
async def get_user_posts(user_id: str, post_service: PostServiceDep) -> list[Post]:
    """List the posts a user has written."""
    return await post_service.get_user_posts(user_id)


@router.get("/{user_id}/bookmarks", response_model=list[Post])
async def get_user_bookmarks(user_id: str, bookmarks: BookmarkDep) -> list[Post]:
    """List the posts a user has bookmarked."""
    return await bookmarks.get_user_bookmarks(user_id)


@router.get("/{user_id}/followers", response_model=list[UserPublic])
async def get_followers(user_id: str, user_service: UserServiceDep) -> list[UserPublic]:
    """List the users following ``user_id``."""
    return [user.public() for user in await user_service.get_followers(user_id)]


@router.get("/{user_id}/following", response_model=list[UserPublic])
async def get_following(user_id: str, user_service: UserServiceDep) -> list[UserPublic]:
    """List the users ``user_id`` follows."""
    return [user.public() for user in await user_service.get_following(user_id)]


@router.post("/{user_id}/follow", response_model=FollowState)
async def follow_user(
    user_id: str,
    user_service: UserServiceDep,
    user: CurrentUserDep,
) -> FollowState:
    """Follow ``user_id``."""
    return await user_service.follow(user.id, user_id)


@router.delete("/{user_id}/follow", response_model=FollowState)
async def unfollow_user(
    user_id: str,
    user_service: UserServiceDep,
    user: CurrentUserDep,
) -> FollowState:
    """Stop following ``user_id``."""
    return await user_service.unfollow(user.id, user_id)
