"""User actions: signup, profile edits, account removal and following.

Following is mirrored in two records like bookmarks are: the follower's
``following`` list and the followed user's ``followers`` list. The follower
is written first; if the second write fails the follower's original list is
written back once, best effort.
"""
from __future__ import annotations

import asyncio
import logging

from postboard.core.errors import (
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    ValidationError,
    error_kind,
    user_message,
    write_failure,
)
from postboard.core.session import SessionUser
from postboard.repositories import UserRepository
from postboard.schemas.common import ActionState
from postboard.schemas.results import FollowState
from postboard.schemas.user import User, UserCreate, UserUpdate
from postboard.services.bookmarks import toggled
from postboard.services.post_service import utc_now_iso

logger = logging.getLogger(__name__)

__all__ = ["UserService"]


class UserService:
    """User actions. Mutations report failures in their result."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def list_users(self) -> list[User]:
        """Return every user; an unreachable store yields an empty list."""
        try:
            return await self.users.get_all()
        except Exception as exc:
            if error_kind(exc) in (ErrorKind.AUTHENTICATION, ErrorKind.CONFIGURATION):
                raise
            logger.warning("Error fetching users: %s", exc)
            return []

    async def get_user(self, user_id: str) -> User | None:
        """Return one user or None when the id is unknown."""
        return await self.users.get_by_id(user_id)

    async def _resolve_many(self, user_ids: list[str]) -> list[User]:
        results = await asyncio.gather(
            *(self.users.get_by_id(user_id) for user_id in user_ids),
            return_exceptions=True,
        )
        resolved: list[User] = []
        for user_id, result in zip(user_ids, results):
            if isinstance(result, BaseException):
                if error_kind(result) in (ErrorKind.AUTHENTICATION, ErrorKind.CONFIGURATION):
                    raise result
                logger.warning("Failed to resolve user %s: %s", user_id, result)
            elif result is not None:
                resolved.append(result)
        return resolved

    async def get_followers(self, user_id: str) -> list[User]:
        """Return the profiles of the users following ``user_id``."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return await self._resolve_many(user.followers)

    async def get_following(self, user_id: str) -> list[User]:
        """Return the profiles of the users ``user_id`` follows."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return await self._resolve_many(user.following)

    async def create_user(self, data: UserCreate) -> ActionState:
        """Register a new user (signup)."""
        if not data.email or not data.password:
            return ActionState(success=False, message="Email and password are required.")
        try:
            existing = await self.users.find_by_email(data.email)
            if existing is not None:
                raise ValidationError("An account with this email already exists.", "email")
            user = await self.users.create(
                {
                    "name": data.name,
                    "email": data.email,
                    "password": data.password,
                    "avatar": data.avatar,
                    "bio": data.bio,
                    "following": [],
                    "followers": [],
                    "bookmarkedPosts": [],
                    "createdAt": utc_now_iso(),
                }
            )
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Error creating user: %s", exc)
            return ActionState(
                success=False,
                message=user_message(exc, "Failed to create user. Please try again."),
            )
        logger.info("Created user %s", user.id)
        return ActionState(success=True, message="success", id=user.id)

    async def update_user(
        self, current_user: SessionUser | None, user_id: str, data: UserUpdate
    ) -> ActionState:
        """Update the current user's own profile."""
        try:
            if current_user is None:
                raise AuthenticationError("You must be logged in to update your profile")
            if current_user.id != user_id:
                raise AuthenticationError("You can only update your own profile")
            fields = data.model_dump(exclude_unset=True, exclude_none=True)
            if not fields:
                return ActionState(success=False, message="No changes provided")
            if await self.users.get_by_id(user_id) is None:
                raise NotFoundError("User", user_id)
            await self.users.update(user_id, fields)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Error updating user %s: %s", user_id, exc)
            return ActionState(success=False, message=user_message(exc, "Failed to update user"))
        logger.info("User %s updated their profile", user_id)
        return ActionState(success=True, message="User updated successfully", id=user_id)

    async def delete_user(self, current_user: SessionUser | None, user_id: str) -> ActionState:
        """Delete the current user's own account."""
        try:
            if current_user is None:
                raise AuthenticationError("You must be logged in to delete your account")
            if current_user.id != user_id:
                raise AuthenticationError("You can only delete your own account")
            await self.users.delete(user_id)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Error deleting user %s: %s", user_id, exc)
            return ActionState(success=False, message=user_message(exc, "Failed to delete user"))
        logger.info("User %s deleted their account", user_id)
        return ActionState(success=True, message="User deleted successfully", id=user_id)

    async def _set_following(
        self, current_user_id: str | None, target_id: str, follow: bool
    ) -> FollowState:
        if not current_user_id:
            raise AuthenticationError("You must be logged in to follow users")
        if current_user_id == target_id:
            raise ValidationError("You cannot follow yourself", "target_id")

        follower = await self.users.get_by_id(current_user_id)
        if follower is None:
            raise NotFoundError("User", current_user_id)
        target = await self.users.get_by_id(target_id)
        if target is None:
            raise NotFoundError("User", target_id)

        try:
            await self.users.replace(
                follower.model_copy(
                    update={"following": toggled(follower.following, target_id, follow)}
                )
            )
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            raise write_failure("Failed to update following list", exc) from exc

        try:
            await self.users.replace(
                target.model_copy(
                    update={"followers": toggled(target.followers, current_user_id, follow)}
                )
            )
        except Exception as exc:
            logger.error("Failed to update followers of %s: %s", target_id, exc)
            try:
                await self.users.replace(follower)
            except Exception as revert_exc:
                logger.error(
                    "Failed to revert following list of %s: %s",
                    current_user_id,
                    revert_exc,
                    exc_info=True,
                )
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            raise write_failure("Failed to update followers", exc) from exc

        logger.info(
            "User %s %s user %s",
            current_user_id,
            "followed" if follow else "unfollowed",
            target_id,
        )
        return FollowState(
            success=True,
            message="User followed successfully" if follow else "User unfollowed successfully",
            is_following=follow,
        )

    async def _follow_action(
        self, current_user_id: str | None, target_id: str, follow: bool
    ) -> FollowState:
        try:
            return await self._set_following(current_user_id, target_id, follow)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Follow operation error: %s", exc)
            verb = "follow" if follow else "unfollow"
            return FollowState(success=False, message=user_message(exc, f"Failed to {verb} user"))

    async def follow(self, current_user_id: str | None, target_id: str) -> FollowState:
        """Make the current user follow ``target_id``."""
        return await self._follow_action(current_user_id, target_id, True)

    async def unfollow(self, current_user_id: str | None, target_id: str) -> FollowState:
        """Make the current user stop following ``target_id``."""
        return await self._follow_action(current_user_id, target_id, False)
