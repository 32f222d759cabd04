# tests/services/test_post_service.py
from __future__ import annotations

import pytest

from postboard.core.session import SessionUser
from postboard.services.post_service import PostService

ALICE = SessionUser(id="u1", email="alice@example.com", name="Alice")
BOB = SessionUser(id="u2", email="bob@example.com", name="Bob")


@pytest.mark.asyncio
async def test_create_post_stamps_owner_and_times(post_service: PostService, fake_store) -> None:
    result = await post_service.create_post(ALICE, "Title", "Body")

    assert result.success is True
    assert result.message == "Post created successfully"
    stored = fake_store.post(result.id)
    assert stored["userId"] == "u1"
    assert stored["bookmarkedBy"] == []
    assert stored["createdAt"] == stored["updatedAt"]
    assert stored["createdAt"].endswith("Z")


@pytest.mark.asyncio
async def test_create_post_requires_login_and_fields(post_service: PostService, fake_store) -> None:
    anonymous = await post_service.create_post(None, "Title", "Body")
    incomplete = await post_service.create_post(ALICE, "", "Body")

    assert anonymous.success is False
    assert anonymous.message == "You must be logged in to create a post"
    assert incomplete.message == "Title and content are required"
    assert fake_store.calls("POST") == []


@pytest.mark.asyncio
async def test_create_post_reports_unreachable_store(post_service: PostService, fake_store) -> None:
    fake_store.fail("POST", "/posts", status=None)

    result = await post_service.create_post(ALICE, "Title", "Body")

    assert result.success is False
    assert result.message == "Store request failed for POST /posts"


@pytest.mark.asyncio
async def test_update_post_by_owner(post_service: PostService, fake_store) -> None:
    fake_store.add_post("p1", userId="u1", title="Old", content="Body")

    result = await post_service.update_post(ALICE, "p1", title="New")

    assert result.success is True
    assert result.message == "Post updated successfully"
    stored = fake_store.post("p1")
    assert stored["title"] == "New"
    assert stored["content"] == "Body"
    assert "updatedAt" in stored


@pytest.mark.asyncio
async def test_update_post_rejects_other_users(post_service: PostService, fake_store) -> None:
    fake_store.add_post("p1", userId="u1", title="Old", content="Body")

    result = await post_service.update_post(BOB, "p1", title="Hijacked")

    assert result.success is False
    assert result.message == "You can only update your own posts"
    assert fake_store.post("p1")["title"] == "Old"


@pytest.mark.asyncio
async def test_update_post_without_changes(post_service: PostService, fake_store) -> None:
    fake_store.add_post("p1", userId="u1")

    result = await post_service.update_post(ALICE, "p1")

    assert result.success is False
    assert result.message == "No changes provided"


@pytest.mark.asyncio
async def test_delete_post(post_service: PostService, fake_store) -> None:
    fake_store.add_post("p1", userId="u1")

    denied = await post_service.delete_post(BOB, "p1")
    missing = await post_service.delete_post(ALICE, "p404")
    deleted = await post_service.delete_post(ALICE, "p1")

    assert denied.message == "You can only delete your own posts"
    assert missing.message == "Post with id 'p404' not found"
    assert deleted.success is True
    assert "p1" not in fake_store.collections["posts"]


@pytest.mark.asyncio
async def test_listing_posts(post_service: PostService, fake_store) -> None:
    fake_store.add_user("u1")
    fake_store.add_post("old", userId="u1", createdAt="2023-01-01T00:00:00Z")
    fake_store.add_post("new", userId="u1", createdAt="2024-01-01T00:00:00Z")
    fake_store.add_post("other", userId="u2", createdAt="2022-01-01T00:00:00Z")

    assert [post.id for post in await post_service.list_posts()] == ["new", "old", "other"]
    assert sorted(post.id for post in await post_service.get_user_posts("u1")) == ["new", "old"]
    assert await post_service.get_post("missing") is None
