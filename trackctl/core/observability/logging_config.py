"""
Logging configuration — central setup for the trackctl CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config through
the ``trackctl`` package logger.

Levels are resolved in precedence order:
    CLI flag  >  TRACKCTL_LOG_LEVEL env var  >  WARNING (default)

Optional file output via TRACKCTL_LOG_FILE / TRACKCTL_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "trackctl"

# ── Format strings ──────────────────────────────────────────────

# WARNING level — same shape as the lttng client's diagnostics
_FMT_MINIMAL = "%(levelname_title)s: %(message)s"

# INFO level — timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class _TitleLevelFormatter(logging.Formatter):
    """Renders WARNING as 'Warning', ERROR as 'Error'."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname_title = record.levelname.title()
        return super().format(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Configure logging for the trackctl package.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.

    Returns:
        The configured package logger.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    elif numeric_level <= logging.INFO:
        formatter = logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_VERBOSE)
    else:
        formatter = _TitleLevelFormatter(_FMT_MINIMAL)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(formatter)

    # ── Package logger ──────────────────────────────────────────
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()
    pkg.addHandler(console)

    # Effective level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        pkg.addHandler(fh)

    pkg.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
    return pkg


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
