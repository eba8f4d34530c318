"""
Configuration loader — reads trackctl.yml and the current-session file.

Two sources:
    - ``trackctl.yml`` (searched upward from the cwd, or ``--config``):
      default session, backend selection, lttng client settings.
    - ``.lttngrc`` in ``$LTTNG_HOME`` or ``$HOME``: the session made
      current by ``lttng create`` / ``lttng set-session``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "trackctl.yml"

# Written by the lttng client, one "key=value" per line
LTTNGRC_FILE = ".lttngrc"
LTTNGRC_SESSION_KEY = "session"


class ConfigError(Exception):
    """Raised when trackctl configuration is invalid or unreadable."""


class LttngSettings(BaseModel):
    """Settings of the lttng command-line backend."""

    binary: str = "lttng"
    timeout: int = Field(default=30, gt=0)


class TrackctlConfig(BaseModel):
    """Validated contents of trackctl.yml."""

    session: str | None = None
    backend: Literal["lttng", "mock"] = "lttng"
    lttng: LttngSettings = Field(default_factory=LttngSettings)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for trackctl.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to trackctl.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> TrackctlConfig:
    """Load and validate trackctl configuration.

    Args:
        path: Explicit path to trackctl.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated TrackctlConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return TrackctlConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return TrackctlConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return TrackctlConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def lttngrc_path(environ: dict[str, str] | None = None) -> Path | None:
    """Location of the current-session file, or None without a home."""
    env = os.environ if environ is None else environ
    home = env.get("LTTNG_HOME") or env.get("HOME")
    if not home:
        return None
    return Path(home) / LTTNGRC_FILE


def read_current_session(environ: dict[str, str] | None = None) -> str | None:
    """Return the current session name recorded in .lttngrc, if any."""
    path = lttngrc_path(environ)
    if path is None or not path.is_file():
        return None

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None

    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == LTTNGRC_SESSION_KEY and value.strip():
            return value.strip()
    return None
