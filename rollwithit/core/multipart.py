"""Hand-rolled multipart/form-data decoder for browser single-file uploads.

Covers the shape a browser form produces and nothing more: no nested multipart,
no transfer encodings, no escaping inside quoted header values. Each segment is
decoded on its own; a malformed one is dropped without affecting the others.
"""

import re
from collections.abc import Iterable, Iterator

from rollwithit.models.core import MultipartPart

CRLF = b"\r\n"
HEADER_SEPARATOR = b"\r\n\r\n"
CLOSING_MARKER = b"--\r\n"

_BOUNDARY_RE = re.compile(r'boundary=(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)
_DISPOSITION_RE = re.compile(r"^content-disposition:(.*)$", re.IGNORECASE | re.MULTILINE)
_NAME_RE = re.compile(r'\bname="([^"]+)"', re.IGNORECASE)
_FILENAME_RE = re.compile(r'\bfilename="([^"]*)"', re.IGNORECASE)


def extract_boundary(content_type: str) -> str | None:
    """Return the ``boundary=`` parameter of a Content-Type value, if any."""
    match = _BOUNDARY_RE.search(content_type or "")
    if not match:
        return None
    return match.group(1) or match.group(2)


def split_on(data: bytes, delimiter: bytes) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` offsets of the runs between ``delimiter`` hits."""
    start = 0
    while (index := data.find(delimiter, start)) != -1:
        yield start, index
        start = index + len(delimiter)
    yield start, len(data)


def parse_segment(data: bytes, start: int, end: int) -> MultipartPart | None:
    """Decode ``data[start:end]``, or ``None`` when it is not a usable part."""
    if data.startswith(CRLF, start, end):
        start += len(CRLF)

    header_end = data.find(HEADER_SEPARATOR, start, end)
    if header_end == -1:
        return None

    header_text = data[start:header_end].decode("utf-8", errors="replace")
    disposition = _DISPOSITION_RE.search(header_text)
    if not disposition:
        return None

    name = _NAME_RE.search(disposition.group(1))
    if not name:
        return None
    filename = _FILENAME_RE.search(disposition.group(1))

    content_start = header_end + len(HEADER_SEPARATOR)
    if data.endswith(CRLF, content_start, end):
        end -= len(CRLF)

    return MultipartPart(
        name=name.group(1),
        filename=filename.group(1) if filename else None,
        content=bytes(memoryview(data)[content_start:end]),
    )


def parse_multipart(body: bytes, boundary: str) -> list[MultipartPart]:
    """Split ``body`` on ``--boundary`` and decode every well-formed part."""
    data = bytes(body)
    delimiter = b"--" + boundary.encode("latin-1", errors="replace")
    segments = split_on(data, delimiter)
    next(segments)  # preamble

    parts: list[MultipartPart] = []
    for start, end in segments:
        if start == end or data[start:end] == CLOSING_MARKER:
            continue
        if part := parse_segment(data, start, end):
            parts.append(part)
    return parts


def file_parts(parts: Iterable[MultipartPart], field: str) -> list[MultipartPart]:
    """Keep the parts named ``field`` that carry a non-empty filename."""
    return [part for part in parts if part.name == field and part.is_file]
