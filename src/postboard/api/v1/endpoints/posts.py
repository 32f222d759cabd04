# src/postboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Postboard API."""

from typing import Any

from fastapi import APIRouter, HTTPException, status

from postboard.api.v1.dependencies import BookmarkDep, OptionalUserDep, PostServiceDep
from postboard.schemas.common import ActionState
from postboard.schemas.post import Post, PostCreate, PostUpdate
from postboard.schemas.results import BookmarkState

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[Post])
async def list_posts(post_service: PostServiceDep) -> list[Post]:
    """List every post, newest first."""
    return await post_service.list_posts()


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: str, post_service: PostServiceDep) -> Post:
    """Get a specific post by ID.

    Raises:
        HTTPException: If the post does not exist.
    """
    post = await post_service.get_post(post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.post("/", response_model=ActionState)
async def create_post(
    payload: PostCreate,
    post_service: PostServiceDep,
    user: OptionalUserDep,
) -> ActionState:
    """Create a post as the current user."""
    return await post_service.create_post(user, payload.title, payload.content)


@router.put("/{post_id}", response_model=ActionState)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    post_service: PostServiceDep,
    user: OptionalUserDep,
) -> ActionState:
    """Edit one of the current user's posts."""
    return await post_service.update_post(user, post_id, payload.title, payload.content)


@router.delete("/{post_id}", response_model=ActionState)
async def delete_post(
    post_id: str,
    post_service: PostServiceDep,
    user: OptionalUserDep,
) -> ActionState:
    """Delete one of the current user's posts."""
    return await post_service.delete_post(user, post_id)


@router.post("/{post_id}/bookmark", response_model=BookmarkState)
async def toggle_bookmark(
    post_id: str,
    bookmarks: BookmarkDep,
    user: OptionalUserDep,
) -> BookmarkState:
    """Bookmark the post, or remove the bookmark if it is already set."""
    return await bookmarks.toggle(post_id, user.id if user else None)


@router.get("/{post_id}/bookmarks")
async def get_bookmark_status(
    post_id: str,
    bookmarks: BookmarkDep,
    user: OptionalUserDep,
) -> dict[str, Any]:
    """Return the bookmark count and whether the caller bookmarked the post."""
    count = await bookmarks.get_post_bookmark_count(post_id)
    bookmarked = await bookmarks.is_post_bookmarked(post_id, user.id) if user else False
    return {"post_id": post_id, "count": count, "is_bookmarked": bookmarked}
