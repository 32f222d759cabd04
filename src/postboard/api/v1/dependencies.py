"""Shared API dependencies for the store, services and the current session."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from postboard.clients.store import StoreClient
from postboard.core.session import SessionUser, read_session
from postboard.core.settings import Settings, settings
from postboard.repositories import PostRepository, UserRepository
from postboard.services import (
    AuthService,
    BookmarkService,
    FeedComposer,
    PostService,
    SearchService,
    UserService,
)


def get_settings() -> Settings:
    """Return the process-wide settings."""
    return settings


def get_store_client(request: Request) -> StoreClient:
    """Return the store client created at startup."""
    store: StoreClient = request.app.state.store
    return store


SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[StoreClient, Depends(get_store_client)]


def get_post_repository(store: StoreDep) -> PostRepository:
    return PostRepository(store)


def get_user_repository(store: StoreDep) -> UserRepository:
    return UserRepository(store)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_feed_composer(posts: PostRepoDep, users: UserRepoDep) -> FeedComposer:
    return FeedComposer(posts, users)


def get_bookmark_service(posts: PostRepoDep, users: UserRepoDep) -> BookmarkService:
    return BookmarkService(posts, users)


def get_search_service(
    posts: PostRepoDep, users: UserRepoDep, app_settings: SettingsDep
) -> SearchService:
    return SearchService(posts, users, page_size=app_settings.search_page_size)


def get_post_service(posts: PostRepoDep) -> PostService:
    return PostService(posts)


def get_user_service(users: UserRepoDep) -> UserService:
    return UserService(users)


def get_auth_service(users: UserRepoDep) -> AuthService:
    return AuthService(users)


FeedDep = Annotated[FeedComposer, Depends(get_feed_composer)]
BookmarkDep = Annotated[BookmarkService, Depends(get_bookmark_service)]
SearchDep = Annotated[SearchService, Depends(get_search_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_optional_user(request: Request, app_settings: SettingsDep) -> SessionUser | None:
    """Return the user recorded in the session cookie, if any."""
    return read_session(request.cookies.get(app_settings.session_cookie_name), app_settings)


OptionalUserDep = Annotated[SessionUser | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> SessionUser:
    """Return the logged-in user.

    Raises:
        HTTPException: If there is no valid session.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


CurrentUserDep = Annotated[SessionUser, Depends(get_current_user)]
