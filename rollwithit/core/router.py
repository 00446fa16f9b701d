"""Ordered method + path dispatch with error and response normalization."""

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import anyio
import structlog
from asgi_correlation_id import correlation_id
from pydantic import BaseModel
from starlette import status as status_codes
from starlette.requests import Request
from starlette.responses import Response

from rollwithit.core.errors import ClientInputError, NotFoundError, PathTraversalRejection, RollWithItError
from rollwithit.core.logger import LogIcon, logger
from rollwithit.models.core import ContentType, HttpResponse, IncomingRequest

Handler = Callable[[IncomingRequest], Any]

HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


def parse_response(result: Any) -> HttpResponse:
    """Convert handler result to HttpResponse."""
    match result:
        case HttpResponse():
            return result
        case BaseModel():
            return HttpResponse(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": ContentType.JSON},
                body=result.model_dump_json().encode(),
            )
        case dict() | list():
            return HttpResponse.json(status_codes.HTTP_200_OK, result)
        case bytes():
            return HttpResponse(status_codes.HTTP_200_OK, {}, result)
        case _:
            return HttpResponse(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": ContentType.TEXT},
                body=str(result).encode(),
            )


def from_starlette(request: Request) -> IncomingRequest:
    """Snapshot a Starlette request; the body stays unread until ``read_body()``.

    ``read_body()`` must be called from a worker thread started by anyio, which
    is where ``Router.dispatch`` runs.
    """
    return IncomingRequest(
        method=request.method.upper(),
        path=request.scope["path"] or "/",
        headers={name.lower(): value for name, value in request.headers.items()},
        body_reader=lambda: anyio.from_thread.run(request.body),
    )


def to_starlette(response: HttpResponse) -> Response:
    return Response(
        content=response.body,
        status_code=response.status_code,
        headers={name: str(value) for name, value in response.headers.items()},
    )


@dataclass(frozen=True, slots=True)
class Route:
    """One dispatch entry. ``method=None`` matches any method."""

    method: str | None
    path: str
    handler: Handler
    prefix: bool = False

    def matches(self, request: IncomingRequest) -> bool:
        if self.method is not None and self.method != request.method:
            return False
        if self.prefix:
            return request.path.startswith(self.path)
        return request.path == self.path


class Router:
    """First-match dispatch table, evaluated in registration order."""

    def __init__(self) -> None:
        self._routes: list[Route] = []

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def add(self, method: str | None, path: str, handler: Handler, *, prefix: bool = False) -> "Router":
        """Append a route. Returns self for chaining."""
        self._routes.append(Route(method.upper() if method else None, path, handler, prefix))
        return self

    def get(self, path: str, *, prefix: bool = False) -> Callable[[Handler], Handler]:
        return self._decorator("GET", path, prefix)

    def post(self, path: str, *, prefix: bool = False) -> Callable[[Handler], Handler]:
        return self._decorator("POST", path, prefix)

    def any(self, path: str, *, prefix: bool = False) -> Callable[[Handler], Handler]:
        return self._decorator(None, path, prefix)

    def _decorator(self, method: str | None, path: str, prefix: bool) -> Callable[[Handler], Handler]:
        def register(handler: Handler) -> Handler:
            self.add(method, path, handler, prefix=prefix)
            return handler

        return register

    def match(self, request: IncomingRequest) -> Route | None:
        return next((route for route in self._routes if route.matches(request)), None)

    def dispatch(self, request: IncomingRequest) -> HttpResponse:
        """Run the first matching handler and turn its outcome into a response."""
        request_id = correlation_id.get() or request.header("x-request-id") or uuid.uuid4().hex
        token = correlation_id.set(request_id)
        try:
            with structlog.contextvars.bound_contextvars(method=request.method, path=request.path):
                response = self._handle(request)
                logger.info("Request served", icon=LogIcon.NETWORK, status=response.status_code)
                return response
        finally:
            correlation_id.reset(token)

    def _handle(self, request: IncomingRequest) -> HttpResponse:
        try:
            route = self.match(request)
            if route is None:
                raise NotFoundError()
            return parse_response(route.handler(request))
        except (ClientInputError, PathTraversalRejection, NotFoundError) as ex:
            icon = LogIcon.FORBIDDEN if isinstance(ex, PathTraversalRejection) else LogIcon.WARNING
            logger.warning(f"Request rejected: {ex.message}", icon=icon, status=ex.status_code)
            return HttpResponse.error(ex.status_code, ex.message)
        except RollWithItError as ex:
            logger.exception(f"Request failed: {ex.message}", icon=LogIcon.ERROR)
            return HttpResponse.error(ex.status_code, ex.message)
        except Exception:
            logger.exception("Unhandled error while serving request", icon=LogIcon.ERROR)
            return HttpResponse.error(status_codes.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
