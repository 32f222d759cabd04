# tests/services/test_search.py
from __future__ import annotations

import pytest

from postboard.core.errors import AuthenticationError, SearchError
from postboard.services.search import SearchService


@pytest.fixture()
def seeded(fake_store) -> None:
    fake_store.add_post("A", userId="u1", title="Hello world", content="First post")
    fake_store.add_post("B", userId="u1", title="Second", content="Well hello there")
    fake_store.add_post("C", userId="u1", title="Hello again", content="hello hello")
    fake_store.add_post("D", userId="u1", title="Unrelated", content="Nothing here")
    fake_store.add_user("u1", name="Hello Kitty", bio="Cat")
    fake_store.add_user("u2", name="Dana", bio="Says hello a lot")


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_search_posts_merges_title_and_content_hits(search_service: SearchService) -> None:
    hits = await search_service.search_posts("Hello")

    ids = [post.id for post in hits]
    assert sorted(ids) == ["A", "B", "C"]
    assert len(ids) == len(set(ids))


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_search_posts_queries_both_fields_with_paging(
    search_service: SearchService, fake_store
) -> None:
    await search_service.search_posts("Hello", page=2, limit=5)

    assert len(fake_store.calls("GET", "/posts")) == 2


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_search_users_matches_name_or_bio(search_service: SearchService) -> None:
    hits = await search_service.search_users("hello")

    assert sorted(user.id for user in hits) == ["u1", "u2"]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   "])
async def test_blank_query_makes_no_requests(
    search_service: SearchService, fake_store, query: str
) -> None:
    assert await search_service.search_posts(query) == []
    assert await search_service.search_users(query) == []
    result = await search_service.search(query)
    assert result.posts == [] and result.users == []
    assert fake_store.requests == []


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_failed_field_query_raises_labeled_error(
    search_service: SearchService, fake_store
) -> None:
    fake_store.fail("GET", "/posts", status=500)

    with pytest.raises(SearchError) as exc_info:
        await search_service.search_posts("Hello")

    assert str(exc_info.value) == "Failed to search posts"
    assert exc_info.value.status == 500


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_failed_user_query_raises_labeled_error(
    search_service: SearchService, fake_store
) -> None:
    fake_store.fail("GET", "/users", status=None)

    with pytest.raises(SearchError, match="Failed to search users"):
        await search_service.search_users("hello")


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_search_authentication_failure_propagates(
    search_service: SearchService, fake_store
) -> None:
    fake_store.fail("GET", "/users", status=401)

    with pytest.raises(AuthenticationError):
        await search_service.search("hello")


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_combined_search_degrades_failed_half(
    search_service: SearchService, fake_store
) -> None:
    fake_store.fail("GET", "/users", status=500)

    result = await search_service.search("hello")

    assert sorted(post.id for post in result.posts) == ["A", "B", "C"]
    assert result.users == []


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_combined_search_respects_type(search_service: SearchService, fake_store) -> None:
    posts_only = await search_service.search("hello", "posts")
    assert posts_only.users == []
    assert fake_store.calls("GET", "/users") == []

    users_only = await search_service.search("hello", "users")
    assert users_only.posts == []
    assert sorted(user.id for user in users_only.users) == ["u1", "u2"]


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_zero_limit_returns_nothing_without_requests(
    search_service: SearchService, fake_store
) -> None:
    assert await search_service.search_posts("Hello", limit=0) == []
    assert fake_store.requests == []


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded")
async def test_explicit_limit_is_sent_to_store(search_service: SearchService, fake_store) -> None:
    hits = await search_service.search_posts("Hello", limit=1)

    assert sorted(post.id for post in hits) == ["A", "B"]
