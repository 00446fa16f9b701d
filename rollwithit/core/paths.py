"""Traversal-safe resolution of request paths against a root directory."""

import os
import re
from pathlib import Path

from beartype import beartype

_SEGMENT_SPLIT = re.compile(r"[\\/]")


def normalize_root(root: str | os.PathLike) -> str:
    return os.path.normpath(os.path.abspath(root))


@beartype
def resolve(root: str | os.PathLike, requested: str) -> Path | None:
    """Join ``requested`` onto ``root`` and return it only if it stays inside.

    Returns ``None`` for any ``..`` segment or for a normalized result that does
    not lie under the normalized root. An empty or ``/`` path yields the root.
    """
    if any(segment == ".." for segment in _SEGMENT_SPLIT.split(requested)):
        return None

    base = normalize_root(root)
    candidate = os.path.normpath(os.path.join(base, requested.lstrip("/\\")))

    if candidate != base and not candidate.startswith(base.rstrip(os.sep) + os.sep):
        return None
    return Path(candidate)
