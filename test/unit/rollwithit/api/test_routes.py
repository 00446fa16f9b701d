"""End-to-end dispatch through the server's route table."""

from pathlib import Path

import pytest

from rollwithit.api.routes import build_router
from rollwithit.core.router import Router
from rollwithit.core.settings import Settings


@pytest.fixture
def router(test_settings: Settings) -> Router:
    return build_router(test_settings)


def _upload(router, make_request, multipart_body, upload_headers, filename: str, content: bytes):
    body = multipart_body([(f'name="song"; filename="{filename}"', content)])
    return router.dispatch(make_request("POST", "/api/upload", upload_headers, body))


def test_route_priority(router: Router) -> None:
    assert [(r.method, r.path, r.prefix) for r in router.routes] == [
        ("GET", "/api/health", False),
        ("GET", "/api/songs", False),
        ("POST", "/api/upload", False),
        (None, "/songs/", True),
        (None, "/", True),
    ]


def test_upload_then_download_round_trip(router, make_request, multipart_body, upload_headers) -> None:
    content = bytes(range(256)) * 4

    uploaded = _upload(router, make_request, multipart_body, upload_headers, "x.mp3", content)
    downloaded = router.dispatch(make_request("GET", "/songs/x.mp3"))

    assert uploaded.status_code == 200
    assert uploaded.json_body() == {"ok": True}
    assert downloaded.status_code == 200
    assert downloaded.headers["content-type"] == "audio/mpeg"
    assert downloaded.body == content


def test_listing_after_uploads(router, make_request, multipart_body, upload_headers) -> None:
    _upload(router, make_request, multipart_body, upload_headers, "b.mp3", b"b")
    _upload(router, make_request, multipart_body, upload_headers, "a.mp3", b"a")

    response = router.dispatch(make_request("GET", "/api/songs"))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json_body() == ["a.mp3", "b.mp3"]


def test_listing_failure_is_500(test_settings: Settings, songs_dir: Path, make_request) -> None:
    songs_dir.rmdir()

    response = build_router(test_settings).dispatch(make_request("GET", "/api/songs"))

    assert response.status_code == 500
    assert response.json_body() == {"error": "Unable to list songs"}


def test_upload_without_boundary_is_400(router, make_request) -> None:
    headers = {"content-type": "multipart/form-data"}

    response = router.dispatch(make_request("POST", "/api/upload", headers, b"ignored"))

    assert response.status_code == 400
    assert response.json_body() == {"error": "Missing boundary"}


def test_upload_without_disposition_is_400(router, make_request, multipart_body, upload_headers) -> None:
    body = multipart_body([(None, b"bytes")])

    response = router.dispatch(make_request("POST", "/api/upload", upload_headers, body))

    assert response.status_code == 400
    assert response.json_body() == {"error": "No file data found"}


def test_upload_write_failure_is_500(router, make_request, multipart_body, upload_headers) -> None:
    response = _upload(router, make_request, multipart_body, upload_headers, "missing/dir.mp3", b"x")

    assert response.status_code == 500
    assert response.json_body() == {"error": "Upload failed"}


def test_upload_over_configured_cap_is_413(public_dir, songs_dir, make_request, multipart_body, upload_headers) -> None:
    router = build_router(Settings(PUBLIC_DIR=public_dir, SONGS_DIR=songs_dir, MAX_UPLOAD_BYTES=16))

    response = _upload(router, make_request, multipart_body, upload_headers, "big.mp3", b"x" * 64)

    assert response.status_code == 413
    assert response.json_body() == {"error": "Upload too large"}


def test_unknown_page_serves_spa_index(router, make_request, index_html: bytes) -> None:
    response = router.dispatch(make_request("GET", "/nonexistent-page"))

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/html"
    assert response.body == index_html


def test_get_on_upload_path_falls_through_to_static(router, make_request, index_html: bytes) -> None:
    assert router.dispatch(make_request("GET", "/api/upload")).body == index_html


@pytest.mark.parametrize("path", ["/../etc/passwd", "/songs/../../etc/passwd", "/songs/..", "/docs/../../x"])
def test_traversal_is_403(router, make_request, path: str) -> None:
    response = router.dispatch(make_request("GET", path))

    assert response.status_code == 403
    assert response.json_body() == {"error": "Forbidden"}


def test_missing_song_is_404(router, make_request) -> None:
    response = router.dispatch(make_request("GET", "/songs/ghost.mp3"))

    assert response.status_code == 404


def test_missing_song_legacy_fallback(public_dir, songs_dir, make_request, index_html: bytes) -> None:
    router = build_router(Settings(PUBLIC_DIR=public_dir, SONGS_DIR=songs_dir, SONGS_SPA_FALLBACK=True))

    response = router.dispatch(make_request("GET", "/songs/ghost.mp3"))

    assert response.status_code == 200
    assert response.body == index_html


def test_health(router, make_request) -> None:
    response = router.dispatch(make_request("GET", "/api/health"))

    assert response.status_code == 200
    assert response.json_body()["status"] == "healthy"
