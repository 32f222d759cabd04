"""Login against the demo user store.

Passwords are stored and compared in plaintext: the backing store is a mock
and this is not a security model.
"""
from __future__ import annotations

import logging

from postboard.core.errors import ErrorKind, error_kind
from postboard.repositories import UserRepository
from postboard.schemas.results import LoginState

logger = logging.getLogger(__name__)

__all__ = ["AuthService"]


class AuthService:
    """Validates credentials; cookie handling lives in the API layer."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def login(self, email: str, password: str) -> LoginState:
        """Check ``email``/``password`` against the store."""
        if not email or not password:
            return LoginState(success=False, message="Email and password are required.")

        try:
            user = await self.users.find_by_email(email)
        except Exception as exc:
            if error_kind(exc) == ErrorKind.CONFIGURATION:
                raise
            logger.error("Login lookup failed: %s", exc)
            return LoginState(success=False, message="Login failed. Please try again.")

        if user is None or user.password != password:
            logger.info("Rejected login for %s", email)
            return LoginState(success=False, message="Invalid email or password.")

        logger.info("User %s logged in", user.id)
        return LoginState(success=True, message="Login successful", user=user)
