"""Dispatch table lifespan event."""

from rollwithit.api.routes import build_router
from rollwithit.core.lifespan import BaseEvent
from rollwithit.core.router import Router


class RouterEvent(BaseEvent[Router]):
    """Builds the router over the songs directory prepared by ``SongsDirectoryEvent``."""

    name = "router"

    async def startup(self) -> Router:
        return build_router(self.settings, songs_dir=self.state.songs_dir)
