"""
Blog API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions raised by services and the lifespan.
Why:   Global exception handlers (registered in main.py) map each type to
       one HTTP status and one JSON error shape, so routes stay free of
       try/except boilerplate.
How:   Each exception carries a message and an optional context dict.

Exception Hierarchy:
    BlogApiError (base)
    ├── DatabaseError              → 500 {"error": <raw database message>}
    │   └── RecordNotFoundError    → 500 (unknown post id; same as other DB errors)
    ├── DatabaseConnectionError    → fatal during startup (process exits)
    └── NotFoundError              → 404 (unknown /api route)

Note on status codes:
    A missing post is reported exactly like any other database failure:
    HTTP 500 with the underlying message. Clients of this API already rely
    on that behaviour, so RecordNotFoundError deliberately subclasses
    DatabaseError instead of NotFoundError.
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  Error description returned to the client
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(BlogApiError):
    """
    Raised when a database operation fails while serving a request.

    What:    A query, insert, update or delete failed, or the id could not be
             interpreted by the database layer.
    HTTP:    500 Internal Server Error, body {"error": message}

    The message is the raw text of the underlying error. It is surfaced to
    the caller unchanged.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RecordNotFoundError(DatabaseError):
    """Raised by update/delete when no post has the requested id."""

    def __init__(
        self,
        operation: str,
        post_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["post_id"] = post_id
        ctx["operation"] = operation
        super().__init__(
            message=f"Record to {operation} not found: no post with id '{post_id}'",
            context=ctx,
        )
        self.post_id = post_id


class DatabaseConnectionError(BlogApiError):
    """
    Raised when the initial database connection fails at startup.

    What:    The lifespan could not reach the database.
    When:    Once, before the server starts accepting requests.
    Effect:  Propagates out of the lifespan; uvicorn aborts startup and the
             process exits with a non-zero status. There is no retry.
    """

    def __init__(
        self,
        message: str = "Failed to connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BlogApiError):
    """Raised for /api paths that no route handles."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
