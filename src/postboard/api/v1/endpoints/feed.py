"""Feed endpoints for the home page."""
from __future__ import annotations

from fastapi import APIRouter, Query

from postboard.api.v1.dependencies import CurrentUserDep, FeedDep, OptionalUserDep, SettingsDep
from postboard.schemas.results import FeedResponse

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("/home", response_model=FeedResponse)
async def get_home_feed(
    feed: FeedDep,
    user: OptionalUserDep,
    app_settings: SettingsDep,
) -> FeedResponse:
    """Return the followed feed for logged-in users and the popular feed otherwise."""
    result, personalized = await feed.home_feed(
        user.id if user else None,
        limit=app_settings.popular_feed_limit,
    )
    return FeedResponse.from_result(result, personalized=personalized)


@router.get("/popular", response_model=FeedResponse)
async def get_popular_feed(
    feed: FeedDep,
    limit: int = Query(20, ge=1, le=100),
) -> FeedResponse:
    """Return the most bookmarked posts."""
    return FeedResponse.from_result(await feed.popular_feed(limit))


@router.get("/following", response_model=FeedResponse)
async def get_following_feed(feed: FeedDep, user: CurrentUserDep) -> FeedResponse:
    """Return posts from the users the caller follows."""
    return FeedResponse.from_result(await feed.followed_feed(user.id), personalized=True)
