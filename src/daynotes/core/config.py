"""Configuration management for daynotes core."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "%s=%r is not a valid integer, using %s", key, value, default
        )
        return default


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("%s=%r is not a valid number, using %s", key, value, default)
        return default


# Data directory (XDG-style, defaults to ~/.daynotes)
DAYNOTES_DATA_DIR = Path(
    get_env("DAYNOTES_DATA_DIR", os.path.expanduser("~/.daynotes"))
    or os.path.expanduser("~/.daynotes")
)

# Database path
DATABASE_PATH = DAYNOTES_DATA_DIR / "daynotes.db"

# Storage namespace shared with other persisted data
NOTE_KEY_PREFIX = get_env("DAYNOTES_KEY_PREFIX", "monitor-note-") or "monitor-note-"

# Auto-save debounce window in seconds
AUTOSAVE_DEBOUNCE_SECONDS = get_env_float("DAYNOTES_AUTOSAVE_SECONDS", 1.0)

# Characters shown on each side of the first match in a search excerpt
EXCERPT_WINDOW = get_env_int("DAYNOTES_EXCERPT_WINDOW", 50)
ELLIPSIS = "..."

# Dashboard settings
RECENT_NOTES_DAYS = 14
PREVIEW_CHARS = 120

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def setup_logging() -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (LOG_LEVEL or "INFO").upper(), logging.INFO),
    )
    return logging.getLogger("daynotes")


def validate_core_environment() -> tuple[bool, str]:
    """
    Validate configuration values read from the environment.

    Returns:
        (is_valid, message) - If not valid, message explains what's wrong.
    """
    if AUTOSAVE_DEBOUNCE_SECONDS <= 0:
        return (
            False,
            "DAYNOTES_AUTOSAVE_SECONDS must be positive, "
            f"got {AUTOSAVE_DEBOUNCE_SECONDS}",
        )

    if EXCERPT_WINDOW < 0:
        return (
            False,
            f"DAYNOTES_EXCERPT_WINDOW cannot be negative, got {EXCERPT_WINDOW}",
        )

    return True, ""
