"""
Blog API — Post SQLAlchemy Model
==================================

What:  ORM model representing the `posts` collection.
Why:   Maps Python objects to database rows; the service layer only talks
       to the database through this class.
Who:   Used by PostService for create/find/update/delete.

Table Design:
    - id: UUID assigned by the mapper at insert time. Opaque to clients,
      who always see its string form. Never updated after insert.
    - title / body: Free-form text. Nullable because a create request may
      omit either field and the value is stored as-is.
"""

import uuid
from typing import Optional

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class Post(Base):
    """
    A blog post.

    Lifecycle:
        1. Created by POST /api/posts (id assigned here)
        2. title/body replaced in place by PUT /api/posts/{id}
        3. Removed by DELETE /api/posts/{id} (hard delete)
    """

    __tablename__ = "posts"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r})>"
