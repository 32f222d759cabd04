"""Search endpoint over posts and users."""
from __future__ import annotations

from fastapi import APIRouter, Query

from postboard.api.v1.dependencies import SearchDep
from postboard.schemas.results import SearchResponse, SearchType

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/", response_model=SearchResponse)
async def search(
    search_service: SearchDep,
    q: str = Query("", description="Search text"),
    type: SearchType = Query("all", description="Restrict results to posts or users"),
    page: int = Query(1, ge=1),
) -> SearchResponse:
    """Search post titles/contents and user names/bios."""
    result = await search_service.search(q, type, page)
    return SearchResponse(
        query=q,
        type=type,
        posts=result.posts,
        users=[user.public() for user in result.users],
    )
