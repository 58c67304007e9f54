"""
Blog API — Database Engine and Session Management
===================================================

What:  Async SQLAlchemy engine factory, session dependency and lifecycle helpers.
Why:   Centralizes all database connection logic in one place.
How:   create_app() builds one engine and one session factory per application
       and stores them on `app.state`. Route handlers receive a session via
       the `get_db_session` dependency, which looks the factory up on the
       request's application. Nothing database-related is module-global.
Who:   main.py (engine creation, lifespan), routes (sessions), smoke.py.
When:  Engine is created with the app; sessions are created per request.

Connection Pooling:
    The pool provided by the driver is used as-is. pool_size / max_overflow
    come from settings for server databases; SQLite picks its own pool class
    and rejects those arguments, so they are only passed for other backends.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Creating the engine does not open a connection; the first connection is
    made by connect_database() during startup.
    """
    engine_kwargs = {
        "pool_pre_ping": app_settings.db_pool_pre_ping,
        "echo": app_settings.log_level == "DEBUG",
    }
    if not app_settings.is_sqlite:
        engine_kwargs["pool_size"] = app_settings.db_pool_size
        engine_kwargs["max_overflow"] = app_settings.db_max_overflow
        engine_kwargs["pool_recycle"] = 3600

    return create_async_engine(app_settings.database_url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned posts stay readable after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    What:    Opens a session from the application's own session factory,
             yields it to the handler and always closes it afterwards.
    Why:     Handlers get an explicit handle instead of a shared client.

    Services commit their own writes, so the only job left here is to roll
    back whatever a failing handler left behind.

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            return await post_service.list_posts(db)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def connect_database(engine: AsyncEngine) -> None:
    """
    Open the first connection and make sure the posts table exists.

    What:  Called once by the lifespan before serving requests.
    Raises: Whatever the driver raises when the database is unreachable;
            the lifespan turns that into a fatal DatabaseConnectionError.
    """
    # Import registers the Post model on Base.metadata
    from blog_api.models import post  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database connected: %s", engine.url.render_as_string(hide_password=True))


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections (called on shutdown)."""
    await engine.dispose()
