"""Startup/shutdown events publishing their resources on ``app.state``."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from starlette.applications import Starlette
from starlette.datastructures import State

from rollwithit.core.logger import LogIcon, logger
from rollwithit.core.settings import Settings


class BaseEvent[T](ABC):
    """A resource created at startup and optionally released at shutdown."""

    name: str
    state: State
    settings: Settings

    @abstractmethod
    async def startup(self) -> T:
        ...

    async def shutdown(self, instance: T) -> None:  # noqa: B027
        """Release ``instance``. No-op unless overridden."""

    @classmethod
    def has_shutdown(cls) -> bool:
        return cls.shutdown is not BaseEvent.shutdown


class Lifespan:
    """Runs registered events in order at startup and in reverse at shutdown.

    Each event sees what earlier events stored on the state under their names.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._event_classes: list[type[BaseEvent[Any]]] = []

    def register(self, event_cls: type[BaseEvent[Any]]) -> "Lifespan":
        """Register an event class. Returns self for chaining."""
        self._event_classes.append(event_cls)
        return self

    @asynccontextmanager
    async def __call__(self, app: Starlette) -> AsyncIterator[None]:
        logger.info("Starting application lifespan", icon=LogIcon.START, version=self._settings.API_VERSION)
        started: list[BaseEvent[Any]] = []

        try:
            for event_cls in self._event_classes:
                event = event_cls()
                event.state = app.state
                event.settings = self._settings
                setattr(app.state, event.name, await event.startup())
                logger.info(f"Event ready: {event.name}", icon=LogIcon.SUCCESS)
                started.append(event)

            logger.info("App state ready", icon=LogIcon.COMPLETE)
            yield
        finally:
            for event in reversed(started):
                if event.has_shutdown():
                    await event.shutdown(getattr(app.state, event.name))
                    logger.info(f"Shutdown complete: {event.name}", icon=LogIcon.SUCCESS)
            logger.info("Cleanup complete", icon=LogIcon.COMPLETE)
