"""Configuration: runtime settings (.env + env vars) and the persisted user record.

ForvoSettings -- pydantic-settings model for per-run behavior (FORVO_* env vars).
UserConfig    -- the JSON record saved on explicit request (api key, Anki root,
                 default collection) under the per-user config directory.
"""

import sys
from pathlib import Path

import click
from loguru import logger
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import ANKICONNECT_URL

APP_NAME = "forvo-pronounce"

log = logger.bind(stage="config")


def get_app_dir() -> Path:
    """Per-user application directory (platform-specific, via click)."""
    return Path(click.get_app_dir(APP_NAME))


class ForvoSettings(BaseSettings):
    """Run configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORVO_",
        env_file=".env",
        extra="ignore",
    )

    # -- Lookup --
    api_key: str = ""
    download_dir: Path | None = None
    collection: str = ""

    # -- Network --
    request_timeout: float = 30.0
    download_timeout: float = 60.0
    chunk_size: int = 8192
    ankiconnect_url: str = ANKICONNECT_URL

    # -- Logging --
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path = get_app_dir() / "logs"

    def setup_logging(self) -> None:
        """Configure loguru: stderr at log_level (DEBUG when verbose), rotating file at DEBUG."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level="DEBUG" if self.verbose else self.log_level.upper(),
            filter=_default_extra,
        )

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / f"{APP_NAME}.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )


class UserConfig(BaseModel):
    """Values the user chose to persist between runs. All optional."""

    api_key: str | None = None
    anki2_path: str | None = None
    default_collection: str | None = None

    def media_dir(self, collection: str | None = None) -> Path | None:
        """Anki media folder for a collection, if the Anki root is known.

        Falls back to default_collection when no collection is given.
        """
        name = collection or self.default_collection
        if not self.anki2_path or not name:
            return None
        return Path(self.anki2_path).expanduser() / name / "collection.media"


def get_config_path() -> Path:
    return get_app_dir() / "config.json"


def load_user_config(path: Path | None = None) -> UserConfig:
    """Load the persisted record. A missing file yields an empty record.

    Raises ConfigError if the file cannot be read or is not a valid record.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        log.debug(f"No user config at {config_path}")
        return UserConfig()

    try:
        text = config_path.read_text(encoding="utf-8")
        config = UserConfig.model_validate_json(text)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        log.error(f"Failed to read user config {config_path}: {exc}")
        raise ConfigError(f"Failed to read config {config_path}: {exc}") from exc

    log.debug(f"Loaded user config from {config_path}")
    return config


def save_user_config(config: UserConfig, path: Path | None = None) -> Path:
    """Write the record as pretty JSON, creating parent directories."""
    config_path = path or get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            config.model_dump_json(indent=2) + "\n", encoding="utf-8"
        )
    except OSError as exc:
        raise ConfigError(f"Failed to write config {config_path}: {exc}") from exc

    log.info(f"Saved user config to {config_path}")
    return config_path
