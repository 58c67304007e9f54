"""
Blog API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the JSON contract between the page and the API.
Why:   Automatic parsing of request bodies, serialization of responses and
       OpenAPI documentation.

Validation policy:
    Request fields are optional and only type-coerced (numbers become
    strings). Anything the client leaves out is passed to the database layer
    as missing; no length or format rules are enforced.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostPayload(BaseModel):
    """
    Body of POST /api/posts and PUT /api/posts/{id}.

    On create, missing fields are stored as null.
    On update, only the fields present in the body are written
    (see PostService.update_post, which uses exclude_unset).
    """
    title: Optional[str] = Field(default=None, description="Post title")
    body: Optional[str] = Field(default=None, description="Post body text")

    model_config = ConfigDict(coerce_numbers_to_str=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """
    A stored post as returned by every post endpoint.

    The id is always the string form of the database identifier so the page
    can embed it in URLs without caring about its type.
    """
    id: str = Field(description="Post identifier (string form)")
    title: Optional[str] = Field(default=None, description="Post title")
    body: Optional[str] = Field(default=None, description="Post body text")


class MessageResponse(BaseModel):
    """Returned by DELETE /api/posts/{id}."""
    message: str = Field(description="Human-readable outcome, e.g. 'Deleted'")


class DbCheckResponse(BaseModel):
    """Returned by GET /api/db-check when the database answers."""
    status: str = Field(description="'ok' when a trivial read succeeded")


class ErrorResponse(BaseModel):
    """
    Error body for all failures.

    Fields:
        error: The raw error message (database errors are passed through)
        details: Extra text, only set by GET /api/db-check
    """
    error: str = Field(description="Error message")
    details: Optional[str] = Field(default=None, description="Underlying error text")
