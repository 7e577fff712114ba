"""Settings loaded from environment variables.

Every variable is optional; unset or malformed values fall back to the
defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "RTASKS"

STORE_DIR_NAME = ".rtasks"
STORE_FILE_NAME = "tasks.json"
LOG_FILE_NAME = "rtasks.log"

# Seconds between repaints when no key arrives
DEFAULT_REDRAW_INTERVAL = 1.5
DEFAULT_LOG_LEVEL = "INFO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for one session."""

    store_path: Path | None
    redraw_interval: float
    log_level: str
    log_file: Path | None
    log_enabled: bool


def load_settings() -> Settings:
    """Read settings from the current environment."""
    log_raw = os.getenv(_k("LOG_FILE"))
    log_enabled = log_raw is None or log_raw.strip() != ""

    return Settings(
        store_path=_env_path(_k("STORE")),
        redraw_interval=_env_float(_k("REDRAW_INTERVAL"), DEFAULT_REDRAW_INTERVAL),
        log_level=(os.getenv(_k("LOG_LEVEL")) or DEFAULT_LOG_LEVEL).strip().upper(),
        log_file=_env_path(_k("LOG_FILE")),
        log_enabled=log_enabled,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
