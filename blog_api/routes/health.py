"""
Blog API — Database Check Route
=================================

What:  GET /api/db-check, a connectivity check for the database.
Why:   Lets an operator (or the page) tell "API up, database down" apart
       from "API down".
How:   Runs the cheapest possible read through PostService and reports
       the outcome. No writes, no other side effects.

Responses:
    200 {"status": "ok"}
    500 {"error": "Database not connected", "details": <raw error>}
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.post import DbCheckResponse, ErrorResponse
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/db-check",
    response_model=DbCheckResponse,
    responses={500: {"description": "Database unreachable", "model": ErrorResponse}},
    summary="Database connectivity check",
)
async def db_check(db: AsyncSession = Depends(get_db_session)):
    """
    Check the database with a trivial read.

    Unlike the post routes, failures are handled here rather than by the
    global handler, because this endpoint reports them with a fixed error
    label plus the raw text in `details`.
    """
    try:
        await post_service.check_database(db)
    except Exception as e:
        details = getattr(e, "message", str(e))
        logger.error("Database connection check failed: %s", details)
        return JSONResponse(
            status_code=500,
            content={"error": "Database not connected", "details": details},
        )

    return DbCheckResponse(status="ok")
