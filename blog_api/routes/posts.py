"""
Blog API — Post Route Handlers
================================

What:  POST/GET /api/posts and PUT/DELETE /api/posts/{id}.
How:   Parses the JSON body, delegates to PostService, returns JSON.
Who:   Called by the browser client (public/app.js).

Errors raised by the service are not caught here; the global handlers in
main.py turn every DatabaseError into HTTP 500 {"error": message}.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.post import (
    ErrorResponse,
    MessageResponse,
    PostPayload,
    PostResponse,
)
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

_ERROR_RESPONSES = {500: {"description": "Database error", "model": ErrorResponse}}


@router.post(
    "/posts",
    response_model=PostResponse,
    responses=_ERROR_RESPONSES,
    summary="Create a post",
)
async def create_post(
    payload: PostPayload,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """Create a post and return it with its assigned id."""
    return await post_service.create_post(db=db, payload=payload)


@router.get(
    "/posts",
    response_model=List[PostResponse],
    responses=_ERROR_RESPONSES,
    summary="List all posts",
    description="Returns every post. No pagination, filtering or ordering guarantee.",
)
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.list_posts(db=db)


@router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses=_ERROR_RESPONSES,
    summary="Update a post",
    description=(
        "Overwrites title and/or body. An unknown or malformed id is reported "
        "as a 500 with the underlying error message."
    ),
)
async def update_post(
    post_id: str,
    payload: PostPayload,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db=db, post_id=post_id, payload=payload)


@router.delete(
    "/posts/{post_id}",
    response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_service.delete_post(db=db, post_id=post_id)
    return MessageResponse(message="Deleted")
