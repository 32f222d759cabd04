# tests/test_session.py
from datetime import UTC, datetime, timedelta

from jose import jwt

from postboard.core.session import SessionUser, create_session_token, read_session
from postboard.core.settings import Settings


def test_session_token_round_trip(test_settings: Settings) -> None:
    user = SessionUser(id="u1", email="alice@example.com", name="Alice")
    token = create_session_token(user, test_settings)
    assert read_session(token, test_settings) == user


def test_missing_token_has_no_user(test_settings: Settings) -> None:
    assert read_session(None, test_settings) is None
    assert read_session("", test_settings) is None


def test_forged_token_is_rejected(test_settings: Settings) -> None:
    forged = jwt.encode(
        {"sub": "u1", "email": "alice@example.com"},
        "not-the-secret",
        algorithm=test_settings.session_algorithm,
    )
    assert read_session(forged, test_settings) is None


def test_expired_token_is_rejected(test_settings: Settings) -> None:
    expired = jwt.encode(
        {
            "sub": "u1",
            "email": "alice@example.com",
            "exp": datetime.now(UTC) - timedelta(minutes=1),
        },
        test_settings.session_secret,
        algorithm=test_settings.session_algorithm,
    )
    assert read_session(expired, test_settings) is None


def test_token_without_email_is_rejected(test_settings: Settings) -> None:
    token = jwt.encode(
        {"sub": "u1"},
        test_settings.session_secret,
        algorithm=test_settings.session_algorithm,
    )
    assert read_session(token, test_settings) is None


def test_garbage_token_is_rejected(test_settings: Settings) -> None:
    assert read_session("not-a-jwt", test_settings) is None
