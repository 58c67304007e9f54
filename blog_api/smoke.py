"""
Blog API — Database Smoke Test Command
========================================

What:  `blog-api-smoke` connects to the configured database, creates one
       test post, prints every stored post and disconnects.
Why:   Quick way to verify DATABASE_URL and the schema without starting the
       HTTP server or opening a browser.
How:   Same engine/session helpers and PostService the API uses.

Exit status is 0 on success, 1 when anything fails.
"""

import asyncio
import logging
import sys
from typing import List, Optional

from blog_api.config import Settings, settings
from blog_api.database import (
    build_engine,
    build_session_factory,
    connect_database,
    dispose_engine,
)
from blog_api.schemas.post import PostPayload, PostResponse
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

SMOKE_TITLE = "Test Post"
SMOKE_BODY = "Running the blog API against the configured database!"


async def run_smoke_test(app_settings: Settings) -> List[PostResponse]:
    """Create one post and return the full post list afterwards."""
    engine = build_engine(app_settings)
    try:
        await connect_database(engine)
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            created = await post_service.create_post(
                session, PostPayload(title=SMOKE_TITLE, body=SMOKE_BODY)
            )
            print(f"Created: {created.model_dump()}")

            posts = await post_service.list_posts(session)
            print(f"All posts: {[post.model_dump() for post in posts]}")
            return posts
    finally:
        await dispose_engine(engine)


def main(app_settings: Optional[Settings] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(run_smoke_test(app_settings or settings))
    except Exception as e:
        logger.error("Smoke test failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
