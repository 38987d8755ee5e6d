"""Configuration management for note.

Two layers live here:

- process settings read from the environment (``LOG_LEVEL``,
  ``NOTE_CONFIG_FILE``, ``NOTE_DEBUG``), optionally seeded from a ``.env`` file
- the user's note configuration stored in ``~/.note`` as ``key=value`` lines
"""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"
DEFAULT_NOTES_DIR = "~/Notes"


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    if value:
        logger.warning(f"{key}={value!r} is not a valid boolean, using {default}")
    return default


# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "WARNING")
DEBUG = get_env_bool("NOTE_DEBUG", False)


def setup_logging() -> logging.Logger:
    """Configure and return logger.

    Logs go to stderr so they never mix with listing or search output.
    """
    level = logging.DEBUG if DEBUG else getattr(
        logging, (LOG_LEVEL or "WARNING").upper(), logging.WARNING
    )
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )
    return logging.getLogger("note")


def get_config_path() -> Path:
    """Location of the user's note configuration file."""
    override = get_env("NOTE_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".note"


def expand_path(path: str) -> str:
    """Expand a leading ``~/`` and resolve symbolic links.

    A path that cannot be resolved (it does not exist yet, or a link is
    broken) is returned with only the tilde expanded.
    """
    if path == "~" or path.startswith("~/"):
        path = os.path.expanduser(path)
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        return path


class ConfigError(Exception):
    """Raised when the note configuration is missing or invalid."""

    pass


class NoteConfig(BaseModel):
    """Resolved user configuration.

    Frozen so it can be handed to every component without copying.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    editor: str
    notes_dir: Path

    @field_validator("editor")
    @classmethod
    def _editor_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("editor must not be empty")
        return value

    @field_validator("notes_dir", mode="before")
    @classmethod
    def _expand_notes_dir(cls, value):
        if isinstance(value, Path):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise ValueError("notes directory must not be empty")
        return Path(expand_path(value.strip()))


def load_config(path: Path | None = None) -> NoteConfig:
    """Load ``~/.note`` into a NoteConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or lacks a key.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        raise ConfigError(f"No config file at {config_path}")

    try:
        raw = dotenv_values(config_path, interpolate=False)
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    logger.debug(f"Loaded config keys {sorted(raw)} from {config_path}")

    try:
        return NoteConfig(
            editor=raw.get("editor") or "",
            notes_dir=raw.get("notesdir") or "",
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def read_existing_values(path: Path | None = None) -> dict[str, str]:
    """Best-effort read of current values, used as setup defaults."""
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}
    try:
        raw = dotenv_values(config_path, interpolate=False)
    except OSError:
        return {}
    return {key: value for key, value in raw.items() if value}


def save_config(config: NoteConfig, path: Path | None = None) -> Path:
    """Write the config file, storing the notes directory in ``~`` notation."""
    config_path = path or get_config_path()
    home = str(Path.home())
    notes_dir = str(config.notes_dir)
    if notes_dir == home or notes_dir.startswith(home + os.sep):
        notes_dir = "~" + notes_dir[len(home):]

    config_path.write_text(
        f"editor={config.editor}\nnotesdir={notes_dir}\n", encoding="utf-8"
    )
    logger.debug(f"Saved config to {config_path}")
    return config_path
