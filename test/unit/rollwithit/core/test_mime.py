"""Tests for content-type lookup."""

from pathlib import Path

import pytest

from rollwithit.core.mime import DEFAULT_MIME_TYPE, mime_for


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("index.html", "text/html"),
        ("style.css", "text/css"),
        ("app.js", "application/javascript"),
        ("data.json", "application/json"),
        ("song.mp3", "audio/mpeg"),
        ("SONG.MP3", "audio/mpeg"),
        (Path("/srv/public/Index.HTML"), "text/html"),
    ],
)
def test_known_extensions(path, expected: str) -> None:
    """Verify the fixed table, case-insensitively."""
    assert mime_for(path) == expected


@pytest.mark.parametrize("path", ["archive.xyz", "README", "song.mp3.part", ".mp3"])
def test_unknown_extensions_fall_back(path: str) -> None:
    """Verify unknown or missing extensions give the octet-stream default."""
    assert mime_for(path) == DEFAULT_MIME_TYPE == "application/octet-stream"
