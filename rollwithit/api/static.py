"""Static asset serving with single-page-app fallback."""

from pathlib import Path

from starlette import status as status_codes

from rollwithit.core.errors import IOFailure, NotFoundError, PathTraversalRejection
from rollwithit.core.mime import mime_for
from rollwithit.core.paths import resolve
from rollwithit.models.core import HttpResponse, IncomingRequest


class StaticAssetHandler:
    """Serves files under ``root`` for request paths starting with ``prefix``.

    A directory hit is retried with the index document appended. A miss serves
    ``fallback_root``'s index document when ``spa_fallback`` is on, otherwise 404.
    """

    def __init__(
        self,
        root: Path,
        *,
        prefix: str = "",
        fallback_root: Path | None = None,
        index_document: str = "index.html",
        spa_fallback: bool = True,
    ) -> None:
        self.root = Path(root)
        self.prefix = prefix
        self.fallback_root = Path(fallback_root) if fallback_root else self.root
        self.index_document = index_document
        self.spa_fallback = spa_fallback

    def locate(self, request_path: str) -> Path:
        """Map a request path to the file that should be served."""
        relative = request_path.removeprefix(self.prefix)
        file_path = resolve(self.root, relative)
        if file_path is None:
            raise PathTraversalRejection()

        if file_path.is_dir():
            file_path = file_path / self.index_document
        if not file_path.exists():
            if not self.spa_fallback:
                raise NotFoundError()
            file_path = self.fallback_root / self.index_document
        return file_path

    def __call__(self, request: IncomingRequest) -> HttpResponse:
        file_path = self.locate(request.path)
        try:
            content = file_path.read_bytes()
        except OSError as ex:
            raise IOFailure() from ex
        return HttpResponse(status_codes.HTTP_200_OK, {"content-type": mime_for(file_path)}, content)
