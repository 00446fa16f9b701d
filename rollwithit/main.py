"""roll-with-it - song library server on Starlette."""

import uvicorn
from asgi_correlation_id import CorrelationIdMiddleware
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from rollwithit.core.lifespan import Lifespan
from rollwithit.core.logger import LogIcon, logger
from rollwithit.core.router import HTTP_METHODS, from_starlette, to_starlette
from rollwithit.core.settings import Settings
from rollwithit.core.settings import settings as st
from rollwithit.events.router import RouterEvent
from rollwithit.events.songs_dir import SongsDirectoryEvent


async def forward(request: Request) -> Response:
    """Hand every request to the in-house router; file I/O runs in the threadpool."""
    router = request.app.state.router
    response = await run_in_threadpool(router.dispatch, from_starlette(request))
    return to_starlette(response)


def create_app(settings: Settings = st) -> Starlette:
    # Lifespan events
    lifespan = Lifespan(settings).register(SongsDirectoryEvent).register(RouterEvent)

    return Starlette(
        routes=[Route("/{path:path}", forward, methods=HTTP_METHODS)],
        middleware=[Middleware(CorrelationIdMiddleware)],
        lifespan=lifespan,
    )


app = create_app()


def main() -> None:
    logger.info("Starting %s | HOST=%s | PORT=%s", st.API_NAME, st.API_HOST, st.API_PORT, icon=LogIcon.START)
    uvicorn.run(app, host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
