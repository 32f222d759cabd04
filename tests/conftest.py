# tests/conftest.py
from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from itertools import count
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("STORE_BASE_URL", "http://store.test/api/v1")
os.environ.setdefault("ENVIRONMENT", "test")

from postboard.api.v1.dependencies import get_store_client
from postboard.clients.store import StoreClient, StoreConfig
from postboard.core.session import SessionUser, create_session_token
from postboard.core.settings import Settings, settings
from postboard.main import app as fastapi_app
from postboard.repositories import PostRepository, UserRepository
from postboard.services import (
    AuthService,
    BookmarkService,
    FeedComposer,
    PostService,
    SearchService,
    UserService,
)

STORE_URL = "http://store.test/api/v1"
STORE_PREFIX = "/api/v1"
PAGING_PARAMS = {"page", "limit", "sortBy", "order"}
PASS_THROUGH = 0


class FakeStore:
    """In-memory MockAPI stand-in served through ``httpx.MockTransport``.

    Failures are injected per ``(method, path)``: a status code makes the
    store answer with that status, ``None`` makes the request fail at the
    transport level. Each injected failure fires ``times`` times.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {"users": {}, "posts": {}}
        self.requests: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str], list[int | None]] = {}
        self._ids = count(1)

    # -- seeding -----------------------------------------------------------

    def _next_id(self) -> str:
        return str(next(self._ids))

    def add_user(self, user_id: str | None = None, **fields: Any) -> dict[str, Any]:
        record = {
            "id": user_id or self._next_id(),
            "name": "",
            "email": "",
            "avatar": "",
            "password": "secret",
            "following": [],
            "followers": [],
            "bookmarkedPosts": [],
            "createdAt": "2024-01-01T00:00:00Z",
        }
        record.update(fields)
        self.collections["users"][record["id"]] = record
        return record

    def add_post(self, post_id: str | None = None, **fields: Any) -> dict[str, Any]:
        record = {
            "id": post_id or self._next_id(),
            "userId": "",
            "title": "",
            "content": "",
            "bookmarkedBy": [],
            "createdAt": "2024-01-01T00:00:00Z",
        }
        record.update(fields)
        self.collections["posts"][record["id"]] = record
        return record

    def user(self, user_id: str) -> dict[str, Any]:
        return self.collections["users"][user_id]

    def post(self, post_id: str) -> dict[str, Any]:
        return self.collections["posts"][post_id]

    # -- failure injection -------------------------------------------------

    def fail(
        self,
        method: str,
        path: str,
        status: int | None = 500,
        times: int = 1,
        after: int = 0,
    ) -> None:
        """Fail the next ``times`` matching requests once ``after`` of them succeeded."""
        queue = self._failures.setdefault((method, path), [])
        queue.extend([PASS_THROUGH] * after + [status] * times)

    def calls(self, method: str, path: str | None = None) -> list[tuple[str, str]]:
        return [
            call for call in self.requests
            if call[0] == method and (path is None or call[1] == path)
        ]

    # -- transport ---------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path.removeprefix(STORE_PREFIX)
        self.requests.append((method, path))

        pending = self._failures.get((method, path))
        status = pending.pop(0) if pending else PASS_THROUGH
        if status is None:
            raise httpx.ConnectError("connection refused", request=request)
        if status != PASS_THROUGH:
            return httpx.Response(status, json={"error": "injected"})

        parts = [part for part in path.split("/") if part]
        if len(parts) == 3 and parts[0] == "users" and parts[2] == "posts":
            if parts[1] not in self.collections["users"]:
                return httpx.Response(404, json="Not found")
            owned = [
                post for post in self.collections["posts"].values() if post["userId"] == parts[1]
            ]
            return httpx.Response(200, json=owned)

        if not parts or parts[0] not in self.collections:
            return httpx.Response(404, json="Not found")
        records = self.collections[parts[0]]

        if len(parts) == 1:
            if method == "GET":
                return self._list(records, request.url.params)
            if method == "POST":
                record = dict(request_json(request))
                record["id"] = self._next_id()
                records[record["id"]] = record
                return httpx.Response(201, json=record)
            return httpx.Response(405)

        record = records.get(parts[1])
        if record is None:
            return httpx.Response(404, json="Not found")
        if method == "GET":
            return httpx.Response(200, json=record)
        if method == "PUT":
            record.update(request_json(request))
            record["id"] = parts[1]
            return httpx.Response(200, json=record)
        if method == "DELETE":
            del records[parts[1]]
            return httpx.Response(200, json=record)
        return httpx.Response(405)

    @staticmethod
    def _list(records: dict[str, dict[str, Any]], params: httpx.QueryParams) -> httpx.Response:
        filters = {key: value for key, value in params.items() if key not in PAGING_PARAMS}
        matches = [
            record for record in records.values()
            if all(
                value.lower() in str(record.get(key) or "").lower()
                for key, value in filters.items()
            )
        ]
        if filters and not matches:
            return httpx.Response(404, json="Not found")
        if "page" in params and "limit" in params:
            limit = int(params["limit"])
            start = (int(params["page"]) - 1) * limit
            matches = matches[start:start + limit]
        return httpx.Response(200, json=matches)


def request_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content or b"{}")


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def store_client(fake_store: FakeStore) -> StoreClient:
    return StoreClient(
        StoreConfig(base_url=STORE_URL, timeout_seconds=5.0),
        transport=httpx.MockTransport(fake_store.handler),
    )


@pytest.fixture()
def post_repo(store_client: StoreClient) -> PostRepository:
    return PostRepository(store_client)


@pytest.fixture()
def user_repo(store_client: StoreClient) -> UserRepository:
    return UserRepository(store_client)


@pytest.fixture()
def feed_composer(post_repo: PostRepository, user_repo: UserRepository) -> FeedComposer:
    return FeedComposer(post_repo, user_repo)


@pytest.fixture()
def bookmark_service(post_repo: PostRepository, user_repo: UserRepository) -> BookmarkService:
    return BookmarkService(post_repo, user_repo)


@pytest.fixture()
def search_service(post_repo: PostRepository, user_repo: UserRepository) -> SearchService:
    return SearchService(post_repo, user_repo)


@pytest.fixture()
def post_service(post_repo: PostRepository) -> PostService:
    return PostService(post_repo)


@pytest.fixture()
def user_service(user_repo: UserRepository) -> UserService:
    return UserService(user_repo)


@pytest.fixture()
def auth_service(user_repo: UserRepository) -> AuthService:
    return AuthService(user_repo)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_store_dependency(app: FastAPI, store_client: StoreClient) -> Iterator[None]:
    app.dependency_overrides[get_store_client] = lambda: store_client
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store_client, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the application runs with."""
    return settings


@pytest.fixture()
def alice(fake_store: FakeStore) -> dict[str, Any]:
    return fake_store.add_user(
        "u1", name="Alice", email="alice@example.com", password="wonderland", bio="Curious reader"
    )


@pytest.fixture()
def bob(fake_store: FakeStore) -> dict[str, Any]:
    return fake_store.add_user(
        "u2", name="Bob", email="bob@example.com", password="builder", bio="Builds things"
    )


@pytest.fixture()
def login_as(client: TestClient) -> Callable[[dict[str, Any]], None]:
    """Return a helper that attaches a session cookie for a seeded user."""

    def _login(user: dict[str, Any]) -> None:
        token = create_session_token(
            SessionUser(id=user["id"], email=user["email"], name=user["name"])
        )
        client.cookies.set(settings.session_cookie_name, token, domain="test.local")

    return _login
