"""Session cookie encoding.

The session cookie carries the logged-in user's id, email and name as a
signed JWT. The rest of the application only ever asks one question of it:
who is the current user, if anyone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from postboard.core.settings import Settings, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """Identity recorded in the session cookie."""

    id: str
    email: str
    name: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"id": self.id, "email": self.email, "name": self.name}


def create_session_token(user: SessionUser, app_settings: Settings = settings) -> str:
    """Create the signed cookie value for ``user``."""
    expire = datetime.now(UTC) + timedelta(seconds=app_settings.session_max_age_seconds)
    to_encode: dict[str, object] = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "exp": expire,
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        app_settings.session_secret,
        algorithm=app_settings.session_algorithm,
    )
    return encoded_jwt


def read_session(token: str | None, app_settings: Settings = settings) -> SessionUser | None:
    """Return the user recorded in ``token``, or None if absent, forged or expired."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            app_settings.session_secret,
            algorithms=[app_settings.session_algorithm],
        )
    except JWTError as err:
        logger.debug("Rejected session cookie: %s", err)
        return None

    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        return None
    return SessionUser(id=str(subject), email=str(email), name=str(payload.get("name") or ""))
