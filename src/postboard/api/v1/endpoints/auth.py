# src/postboard/api/v1/endpoints/auth.py
"""Authentication endpoints: login, logout and session check."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from postboard.api.v1.dependencies import AuthServiceDep, OptionalUserDep, SettingsDep
from postboard.core.session import SessionUser, create_session_token
from postboard.core.settings import Settings
from postboard.schemas.results import LoginState
from postboard.schemas.user import LoginRequest

router = APIRouter(prefix="/auth", tags=["authentication"])


def set_session_cookie(response: Response, user: SessionUser, app_settings: Settings) -> None:
    """Attach a signed session cookie for ``user`` to ``response``."""
    response.set_cookie(
        key=app_settings.session_cookie_name,
        value=create_session_token(user, app_settings),
        max_age=app_settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=app_settings.secure_cookies,
        samesite="lax",
    )


def clear_session_cookie(response: Response, app_settings: Settings) -> None:
    """Remove the session cookie."""
    response.delete_cookie(key=app_settings.session_cookie_name, path="/")


@router.post("/login", response_model=LoginState)
async def login(
    payload: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    app_settings: SettingsDep,
) -> LoginState:
    """Validate credentials and start a session."""
    result = await auth_service.login(payload.email, payload.password)
    if result.success and result.user is not None:
        session_user = SessionUser(
            id=result.user.id,
            email=result.user.email,
            name=result.user.name,
        )
        set_session_cookie(response, session_user, app_settings)
    return result


@router.post("/logout")
async def logout(response: Response, app_settings: SettingsDep) -> dict[str, Any]:
    """End the current session."""
    clear_session_cookie(response, app_settings)
    return {"success": True, "message": "Logout successful"}


@router.get("/check-auth")
async def check_auth(user: OptionalUserDep) -> JSONResponse:
    """Report whether the caller holds a valid session."""
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False},
        )
    return JSONResponse(content={"authenticated": True, "user": user.as_dict()})
