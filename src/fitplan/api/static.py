"""Static file serving for the front-end."""

import logging
from pathlib import Path

from fastapi import Response
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "text/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
}


def content_type_for(path: Path) -> str:
    """Return the Content-Type for *path* based on its extension."""
    return CONTENT_TYPES.get(path.suffix, DEFAULT_CONTENT_TYPE)


def resolve_static_path(public_root: Path, pathname: str) -> Path:
    """Map a URL path onto a file under *public_root* (``/`` is the index page)."""
    if pathname == "/":
        return public_root / INDEX_FILE
    return public_root / pathname.lstrip("/")


async def serve_static(public_root: Path, pathname: str) -> Response | None:
    """
    Read the file for *pathname* and wrap it in a response.

    Returns *None* when there is nothing to serve: the file is missing, unreadable, a directory,
    or resolves outside *public_root*.  The caller decides what a miss looks like.
    """
    file_path = resolve_static_path(public_root, pathname)

    try:
        if not file_path.resolve().is_relative_to(public_root.resolve()):
            logger.warning("Refusing static path outside public root: %s", pathname)
            return None
        data = await run_in_threadpool(file_path.read_bytes)
    except (OSError, ValueError) as exc:
        logger.debug("No static file for %s: %s", pathname, exc)
        return None

    return Response(content=data, media_type=content_type_for(file_path))
