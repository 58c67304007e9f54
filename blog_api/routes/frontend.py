"""
Blog API — Static Frontend Route
==================================

What:  Serves the browser client for every request outside /api.
How:   If the requested path names a file inside the static directory it is
       returned verbatim; any other path gets index.html (single-page-app
       catch-all). Paths under /api are never answered with the page.
Who:   Browsers loading the page and its script.

Security:
    The resolved path must stay inside the static directory, so
    "../" segments cannot reach other files on disk.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from blog_api.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Registered last in create_app() so it never shadows the API routes
router = APIRouter(include_in_schema=False)

INDEX_FILE = "index.html"

# Any method gets the page, matching a plain static-server fallback
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _find_static_file(static_root: Path, file_path: str) -> Optional[Path]:
    """
    Return the file under static_root named by file_path, if there is one.

    Paths the filesystem cannot represent (embedded NUL, over-long names)
    are treated like any other unknown path.
    """
    if not file_path:
        return None
    try:
        candidate = (static_root / file_path).resolve()
        if candidate.is_relative_to(static_root) and candidate.is_file():
            return candidate
    except (OSError, ValueError) as e:
        logger.debug("Unusable static path /%s: %s", file_path, e)
    return None


@router.api_route("/{file_path:path}", methods=FALLBACK_METHODS)
async def serve_frontend(file_path: str, request: Request) -> FileResponse:
    """Return a static file, or index.html for anything else."""
    if file_path == "api" or file_path.startswith("api/"):
        raise NotFoundError(resource="route", resource_id=f"/{file_path}")

    static_root = Path(request.app.state.settings.static_dir).resolve()

    static_file = _find_static_file(static_root, file_path)
    if static_file is not None:
        return FileResponse(path=str(static_file))

    logger.debug("Serving index page for %s /%s", request.method, file_path)
    return FileResponse(path=str(static_root / INDEX_FILE), media_type="text/html")
