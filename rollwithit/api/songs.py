"""Song library listing and multipart upload."""

from pathlib import Path

from rollwithit.core.errors import ClientInputError, IOFailure, PayloadTooLargeError
from rollwithit.core.logger import LogIcon, logger
from rollwithit.core.multipart import extract_boundary, file_parts, parse_multipart
from rollwithit.core.paths import resolve
from rollwithit.models.core import IncomingRequest, UploadAck

SONG_EXTENSION = ".mp3"


class SongLibrary:
    """Lists the playable files of the songs directory."""

    def __init__(self, songs_dir: Path) -> None:
        self.songs_dir = Path(songs_dir)

    def list_songs(self) -> list[str]:
        """Regular files ending in ``.mp3`` (any case), sorted by name."""
        return sorted(
            entry.name
            for entry in self.songs_dir.iterdir()
            if entry.name.lower().endswith(SONG_EXTENSION) and entry.is_file()
        )

    def __call__(self, request: IncomingRequest) -> list[str]:
        try:
            return self.list_songs()
        except OSError as ex:
            raise IOFailure("Unable to list songs") from ex


class UploadHandler:
    """Stores every file part of a multipart upload under the songs directory."""

    def __init__(self, songs_dir: Path, *, field: str = "song", max_body_bytes: int | None = None) -> None:
        self.songs_dir = Path(songs_dir)
        self.field = field
        self.max_body_bytes = max_body_bytes

    def _check_declared_size(self, request: IncomingRequest) -> None:
        if self.max_body_bytes is None:
            return
        declared = request.header("content-length")
        if declared.isdigit() and int(declared) > self.max_body_bytes:
            raise PayloadTooLargeError()

    def _read_body(self, request: IncomingRequest) -> bytes:
        try:
            body = request.read_body()
        except OSError as ex:
            raise IOFailure("Upload failed") from ex
        if self.max_body_bytes is not None and len(body) > self.max_body_bytes:
            raise PayloadTooLargeError()
        return body

    def save(self, body: bytes, boundary: str) -> list[str]:
        """Write the file parts of ``body`` and return the stored filenames.

        Parts written before an I/O error stay on disk.
        """
        saved: list[str] = []
        for part in file_parts(parse_multipart(body, boundary), self.field):
            destination = resolve(self.songs_dir, part.filename)
            if destination is None or destination.is_dir():
                logger.warning("Upload filename rejected", icon=LogIcon.FORBIDDEN, filename=part.filename)
                continue
            try:
                destination.write_bytes(part.content)
            except OSError as ex:
                raise IOFailure("Upload failed") from ex
            logger.info("Song stored", icon=LogIcon.UPLOAD, filename=part.filename, size=len(part.content))
            saved.append(part.filename)
        return saved

    def __call__(self, request: IncomingRequest) -> UploadAck:
        boundary = extract_boundary(request.header("content-type"))
        if not boundary:
            raise ClientInputError("Missing boundary")

        self._check_declared_size(request)
        if not self.save(self._read_body(request), boundary):
            raise ClientInputError("No file data found")
        return UploadAck(ok=True)
