"""Songs directory lifespan event."""

from pathlib import Path

from rollwithit.core.lifespan import BaseEvent
from rollwithit.core.logger import LogIcon, logger


def ensure_directory(path: Path) -> Path:
    """Create ``path`` if absent. Any failure other than it existing propagates."""
    path.mkdir(parents=True, exist_ok=True)
    return path


class SongsDirectoryEvent(BaseEvent[Path]):
    """Makes sure uploads have somewhere to land before serving starts."""

    name = "songs_dir"

    async def startup(self) -> Path:
        songs_dir = ensure_directory(Path(self.settings.SONGS_DIR).absolute())
        logger.info("Songs directory ready", icon=LogIcon.FOLDER, path=str(songs_dir))
        return songs_dir
