"""Domain error taxonomy.

Every error raised by Postboard code carries a ``kind`` discriminant so that
propagation boundaries can decide what to surface and what to degrade by
looking at one field instead of walking an ``isinstance`` chain.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Closed set of error categories understood by the service layer."""

    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    API = "api"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class PostboardError(RuntimeError):
    """Base class for all domain errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN


class AuthenticationError(PostboardError):
    """Raised when an operation requires a logged-in user and there is none."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication failed", reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class NotFoundError(PostboardError):
    """Raised when a required single entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message)


class APIError(PostboardError):
    """Raised when the store answers a mutating or critical call with a failure."""

    kind = ErrorKind.API

    def __init__(self, message: str, status: int | None, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.endpoint = endpoint


class StoreError(APIError):
    """Store-level failure: a non-success status or a transport problem.

    ``reason`` holds the HTTP reason phrase (or the transport error text) so
    callers can build their own user-facing message around it.
    """

    def __init__(
        self,
        message: str,
        status: int | None,
        endpoint: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, status, endpoint)
        self.reason = reason or message


class SearchError(APIError):
    """Labeled failure of a search query."""


class ConfigurationError(PostboardError):
    """Raised when required configuration is missing. Never retried."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, setting: str) -> None:
        self.setting = setting
        super().__init__(f"Configuration error: {setting} is not properly configured")


class ValidationError(PostboardError):
    """Raised when a required input field is missing or malformed."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def error_kind(exc: BaseException) -> ErrorKind:
    """Return the discriminant for ``exc``; foreign exceptions are UNKNOWN."""
    if isinstance(exc, PostboardError):
        return exc.kind
    return ErrorKind.UNKNOWN


def must_propagate(exc: BaseException) -> bool:
    """Return True for errors that no degrading path may swallow."""
    return error_kind(exc) in (ErrorKind.AUTHENTICATION, ErrorKind.CONFIGURATION)


def write_failure(action: str, exc: BaseException) -> APIError:
    """Wrap a failed store write in an ``APIError`` reading ``"{action}: {reason}"``.

    Only the store's reason phrase is kept; anything without one is reported
    as an unexpected store response.
    """
    reason = getattr(exc, "reason", None) or "Unexpected store response"
    return APIError(
        f"{action}: {reason}",
        getattr(exc, "status", None),
        getattr(exc, "endpoint", None),
    )


def user_message(exc: BaseException, fallback: str) -> str:
    """Return the message to show an end user for ``exc``.

    Domain errors already carry domain-specific text; anything else is hidden
    behind ``fallback`` so raw transport messages never reach the user.
    """
    kind = error_kind(exc)
    if kind in (
        ErrorKind.AUTHENTICATION,
        ErrorKind.NOT_FOUND,
        ErrorKind.API,
        ErrorKind.VALIDATION,
    ):
        return str(exc)
    return fallback


__all__ = [
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "ErrorKind",
    "NotFoundError",
    "PostboardError",
    "SearchError",
    "StoreError",
    "ValidationError",
    "error_kind",
    "must_propagate",
    "user_message",
    "write_failure",
]
