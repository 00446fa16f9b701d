"""Core models for request/response handling."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

import orjson
from pydantic import BaseModel


class ContentType(StrEnum):
    """Content types the server writes itself."""

    JSON = "application/json"
    TEXT = "text/plain"


@dataclass(frozen=True, slots=True)
class IncomingRequest:
    """One inbound request: percent-decoded path, lowercase header names.

    The body is only pulled from ``body_reader`` when a handler asks for it.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body_reader: Callable[[], bytes] = field(default=lambda: b"", repr=False)

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)

    def read_body(self) -> bytes:
        return self.body_reader()


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, headers and body of one response."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @classmethod
    def json(cls, status_code: int, data) -> "HttpResponse":
        return cls(status_code, {"content-type": ContentType.JSON}, orjson.dumps(data))

    @classmethod
    def error(cls, status_code: int, message: str) -> "HttpResponse":
        return cls.json(status_code, {"error": message})

    def json_body(self):
        return orjson.loads(self.body)


@dataclass(frozen=True, slots=True)
class MultipartPart:
    """One part of a multipart/form-data body."""

    name: str
    filename: str | None
    content: bytes = field(repr=False)

    @property
    def is_file(self) -> bool:
        return bool(self.filename)


class UploadAck(BaseModel):
    """Upload success response model."""

    ok: bool = True


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
