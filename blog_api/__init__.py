"""
Blog API — Application Package Initializer
============================================

What: Marks the `blog_api` directory as a Python package.
Why:  Enables module imports like `from blog_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by uvicorn and pytest.

Architecture Note:
    The backend keeps a small layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Post CRUD)        │  ← ORM calls, error wrapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Per-app engine, per-request sessions
    └─────────────────────────────────────┘

    The static frontend (public/index.html, public/app.js) ships inside the
    package and is served by the same application.
"""

__version__ = "1.0.0"
