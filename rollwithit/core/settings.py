"""Unified settings for roll-with-it."""

import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def read_pyproject(pyproject_path: Path) -> dict:
    """Read pyproject.toml into a dict, empty when the file is not shipped."""
    if not pyproject_path.is_file():
        return {}
    with pyproject_path.open("rb") as file_handle:
        return tomllib.load(file_handle)


def get_version(base_dir: Path) -> str:
    """Get version from git tags or fallback to package metadata."""
    try:
        import git

        repo = git.Repo(base_dir, search_parent_directories=True)
        latest_tag = max(repo.tags, key=lambda t: t.commit.committed_datetime, default=None)
        return str(latest_tag) if latest_tag else "0.0.0"
    except Exception:
        try:
            import importlib.metadata

            return importlib.metadata.version("roll-with-it")
        except Exception:
            return "0.0.0"


class Settings(BaseSettings):
    """Unified settings for the song server."""

    DEBUG: bool = True
    ENVIRONMENT: Literal["DEV", "PROD"] = "DEV"

    BASE_DIR: ClassVar[Path] = Path(__file__).parent.parent.parent
    PACKAGE_DIR: ClassVar[Path] = Path(__file__).parent.parent
    PROJECT: ClassVar[dict] = read_pyproject(BASE_DIR / "pyproject.toml")
    API_NAME: ClassVar[str] = PROJECT.get("project", {}).get("name", "roll-with-it")
    API_DESCRIPTION: ClassVar[str] = PROJECT.get("project", {}).get("description", "Roll With It song server")
    API_VERSION: ClassVar[str] = get_version(BASE_DIR)

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=3000, validation_alias=AliasChoices("PORT", "API_PORT"))

    # Paths; the SPA shell ships inside the package, songs live under the working directory
    PUBLIC_DIR: Path = PACKAGE_DIR / "public"
    SONGS_DIR: Path = Path("songs")
    INDEX_DOCUMENT: str = "index.html"

    # Uploads
    UPLOAD_FIELD: str = "song"
    MAX_UPLOAD_BYTES: int | None = None

    # Legacy: a missing /songs/ file serves the SPA index instead of a 404
    SONGS_SPA_FALLBACK: bool = False

    @property
    def api_url(self) -> str:
        return f"http://{self.API_HOST}:{self.API_PORT}"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()  # type: ignore
