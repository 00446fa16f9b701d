"""Content-type lookup by file extension."""

import os

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".mp3": "audio/mpeg",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".txt": "text/plain",
    ".webmanifest": "application/manifest+json",
}


def mime_for(path: str | os.PathLike) -> str:
    _, ext = os.path.splitext(os.fspath(path))
    return MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)
