"""Test fixtures for roll-with-it unit tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from rollwithit.core.settings import Settings
from rollwithit.models.core import IncomingRequest

BOUNDARY = "----WebKitFormBoundaryXYZ"
INDEX_HTML = b"<!doctype html><title>Roll With It</title>"


# -----------------------------------------------------------------------------
# Filesystem fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """Public asset tree with an index document, a script and a nested section."""
    root = tmp_path / "public"
    (root / "docs").mkdir(parents=True)
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "app.js").write_bytes(b"console.log('alarm');")
    (root / "docs" / "index.html").write_bytes(b"<p>docs</p>")
    return root


@pytest.fixture
def index_html() -> bytes:
    return INDEX_HTML


@pytest.fixture
def songs_dir(tmp_path: Path) -> Path:
    root = tmp_path / "songs"
    root.mkdir()
    return root


@pytest.fixture
def test_settings(public_dir: Path, songs_dir: Path) -> Settings:
    """Settings pointing at the temporary public and songs directories."""
    return Settings(PUBLIC_DIR=public_dir, SONGS_DIR=songs_dir)


# -----------------------------------------------------------------------------
# Request builders
# -----------------------------------------------------------------------------


@pytest.fixture
def make_request() -> Callable[..., IncomingRequest]:
    """Factory fixture to create incoming requests."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> IncomingRequest:
        return IncomingRequest(
            method=method,
            path=path,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body_reader=lambda: body,
        )

    return _make


@pytest.fixture
def multipart_body() -> Callable[..., bytes]:
    """Factory fixture rendering parts the way a browser form does.

    Each part is ``(disposition, content)``; ``disposition`` of ``None`` leaves
    the Content-Disposition header out.
    """

    def _build(parts: list[tuple[str | None, bytes]], boundary: str = BOUNDARY) -> bytes:
        chunks = []
        for disposition, content in parts:
            headers = b""
            if disposition is not None:
                headers += f"Content-Disposition: form-data; {disposition}\r\n".encode()
            headers += b"Content-Type: audio/mpeg\r\n"
            chunks.append(f"--{boundary}\r\n".encode() + headers + b"\r\n" + content + b"\r\n")
        return b"".join(chunks) + f"--{boundary}--\r\n".encode()

    return _build


@pytest.fixture
def upload_headers() -> dict[str, str]:
    return {"content-type": f"multipart/form-data; boundary={BOUNDARY}"}
