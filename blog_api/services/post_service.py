"""
Blog API — Post Service
=========================

What:  All database work for posts: create, list, update, delete and a
       connectivity check.
Why:   Keeps route handlers down to HTTP concerns; the same service is used
       by the smoke script without going through HTTP.
How:   Each method receives an AsyncSession explicitly (no shared client),
       talks to the database through the Post model and commits its own
       writes.

Error Handling Strategy:
    Every SQLAlchemy error, and every id the database layer cannot
    interpret, is re-raised as DatabaseError whose message is the raw text
    of the original error. Unknown ids raise RecordNotFoundError, which is a
    DatabaseError too, so callers see one uniform failure type. Nothing is
    retried.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import DatabaseError, RecordNotFoundError
from blog_api.models.post import Post
from blog_api.schemas.post import PostPayload, PostResponse

logger = logging.getLogger(__name__)


def _to_response(post: Post) -> PostResponse:
    return PostResponse(id=str(post.id), title=post.title, body=post.body)


def _parse_post_id(post_id: str) -> uuid.UUID:
    """Convert the id from the URL into the database's identifier type."""
    try:
        return uuid.UUID(post_id)
    except ValueError as e:
        raise DatabaseError(
            message=f"Malformed post id '{post_id}': {e}",
            context={"post_id": post_id},
        ) from e


class PostService:
    """
    CRUD operations on the posts collection.

    Responsibilities:
        - create_post(): insert a post, database assigns the id
        - list_posts(): every post, in whatever order the database returns
        - update_post(): overwrite title/body of an existing post
        - delete_post(): hard delete
        - check_database(): trivial read used by GET /api/db-check
    """

    async def create_post(self, db: AsyncSession, payload: PostPayload) -> PostResponse:
        """
        Insert a new post.

        Fields missing from the payload are stored as null; nothing is
        validated beyond what the schema coerces.

        Raises:
            DatabaseError: The insert or commit failed
        """
        logger.info("Creating post: %s", payload.model_dump())
        post = Post(title=payload.title, body=payload.body)
        try:
            db.add(post)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e))
            raise DatabaseError(message=str(e)) from e

        logger.info("Post created: %s", post.id)
        return _to_response(post)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """Return all posts with their ids rendered as strings."""
        try:
            result = await db.execute(select(Post))
            posts = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e))
            raise DatabaseError(message=str(e)) from e

        return [_to_response(post) for post in posts]

    async def update_post(
        self,
        db: AsyncSession,
        post_id: str,
        payload: PostPayload,
    ) -> PostResponse:
        """
        Replace title and/or body of an existing post.

        Only fields present in the request body are written; an explicit
        null is written as null. The id never changes.

        Raises:
            RecordNotFoundError: No post has this id (→ 500)
            DatabaseError: Malformed id or the update failed (→ 500)
        """
        logger.info("Updating post %s: %s", post_id, payload.model_dump(exclude_unset=True))
        key = _parse_post_id(post_id)
        try:
            post = await db.get(Post, key)
            if post is None:
                raise RecordNotFoundError(operation="update", post_id=post_id)

            for field, value in payload.model_dump(exclude_unset=True).items():
                setattr(post, field, value)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e))
            raise DatabaseError(message=str(e), context={"post_id": post_id}) from e

        return _to_response(post)

    async def delete_post(self, db: AsyncSession, post_id: str) -> None:
        """
        Delete a post permanently.

        Raises:
            RecordNotFoundError: No post has this id (→ 500)
            DatabaseError: Malformed id or the delete failed (→ 500)
        """
        key = _parse_post_id(post_id)
        try:
            post = await db.get(Post, key)
            if post is None:
                raise RecordNotFoundError(operation="delete", post_id=post_id)

            await db.delete(post)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e))
            raise DatabaseError(message=str(e), context={"post_id": post_id}) from e

        logger.info("Post deleted: %s", post_id)

    async def check_database(self, db: AsyncSession) -> None:
        """
        Read at most one post id to prove the database answers.

        Raises:
            DatabaseError: The read failed (connection refused, missing table, ...)
        """
        try:
            await db.execute(select(Post.id).limit(1))
        except SQLAlchemyError as e:
            raise DatabaseError(message=str(e)) from e


# Stateless; one shared instance is enough
post_service = PostService()
