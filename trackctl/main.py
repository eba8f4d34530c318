"""
trackctl — CLI entrypoint.

Usage:
    python -m trackctl.main --help
    python -m trackctl.main track -k -p 42
    python -m trackctl.main --mi xml untrack -u -p --all
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from trackctl import __version__
from trackctl.core.observability.logging_config import setup_logging
from trackctl.core.services.mi_report import MI_FORMATS
from trackctl.ui.cli.tracker import CONTEXT_SETTINGS, track, untrack


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="trackctl")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to trackctl.yml (default: auto-detect).",
)
@click.option(
    "--mi",
    type=click.Choice(MI_FORMATS),
    default=None,
    help="Machine interface output on stdout.",
)
@click.option("--mock", is_flag=True, help="Use mock session control (no real tracer).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    mi: str | None,
    mock: bool,
) -> None:
    """trackctl — control which processes a tracing session records."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["mi"] = mi
    ctx.obj["mock"] = mock

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TRACKCTL_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TRACKCTL_LOG_FILE"),
        log_file_level=os.environ.get("TRACKCTL_LOG_FILE_LEVEL"),
    )


cli.add_command(track)
cli.add_command(untrack)


if __name__ == "__main__":
    cli()
