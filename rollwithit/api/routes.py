"""Dispatch table of the song server."""

from pathlib import Path

from rollwithit.api.health import health_check
from rollwithit.api.songs import SongLibrary, UploadHandler
from rollwithit.api.static import StaticAssetHandler
from rollwithit.core.router import Router
from rollwithit.core.settings import Settings

SONGS_PREFIX = "/songs/"


def build_router(st: Settings, songs_dir: Path | None = None) -> Router:
    """Routes in priority order; the first match wins.

    ``songs_dir`` overrides ``st.SONGS_DIR``.
    """
    songs_dir = songs_dir or st.SONGS_DIR
    router = Router()
    router.get("/api/health")(health_check)
    router.get("/api/songs")(SongLibrary(songs_dir))
    router.post("/api/upload")(
        UploadHandler(songs_dir, field=st.UPLOAD_FIELD, max_body_bytes=st.MAX_UPLOAD_BYTES)
    )
    router.any(SONGS_PREFIX, prefix=True)(
        StaticAssetHandler(
            songs_dir,
            prefix=SONGS_PREFIX,
            fallback_root=st.PUBLIC_DIR,
            index_document=st.INDEX_DOCUMENT,
            spa_fallback=st.SONGS_SPA_FALLBACK,
        )
    )
    router.any("/", prefix=True)(
        StaticAssetHandler(st.PUBLIC_DIR, index_document=st.INDEX_DOCUMENT)
    )
    return router
