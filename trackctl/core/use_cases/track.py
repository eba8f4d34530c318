"""
Track/untrack use case — validate the options, apply them, report.

This is the top-level orchestrator behind both ``trackctl track`` and
``trackctl untrack``: it resolves the domain, the session and the PID
spec, drives the tracker invoker, and writes the machine-interface
report when asked. Validation happens before any session handle is
acquired, so a rejected command has no side effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TextIO

from trackctl.adapters.base import SessionControl
from trackctl.adapters.lttng.cli import LttngCliAdapter
from trackctl.adapters.registry import SessionControlRegistry
from trackctl.core.config.loader import TrackctlConfig, read_current_session
from trackctl.core.errors import (
    MissingTracker,
    ReportIOError,
    SessionNameNotFound,
    TrackctlError,
    ValidationError,
)
from trackctl.core.models.tracker import (
    CommandResult,
    ExitCode,
    TrackerOperation,
    TrackerOptions,
)
from trackctl.core.services.domain import resolve_domain
from trackctl.core.services.mi_report import write_report
from trackctl.core.services.pid_spec import parse_pid_spec
from trackctl.core.services.tracker_ops import apply_tracker

logger = logging.getLogger(__name__)


@dataclass
class TrackerRun:
    """Result of a track/untrack command."""

    exit_code: ExitCode = ExitCode.SUCCESS
    result: CommandResult | None = None
    error: str | None = None
    show_usage: bool = False
    report_error: str | None = None


def default_registry(config: TrackctlConfig, mock_mode: bool = False) -> SessionControlRegistry:
    """Registry with every built-in backend, configured from ``config``."""
    registry = SessionControlRegistry(mock_mode=mock_mode or config.backend == "mock")
    registry.register(
        LttngCliAdapter(binary=config.lttng.binary, timeout=config.lttng.timeout)
    )
    return registry


def resolve_session_name(
    options: TrackerOptions,
    config: TrackctlConfig,
    environ: dict[str, str] | None = None,
) -> str:
    """Pick the target session: --session, then config, then .lttngrc.

    Raises:
        SessionNameNotFound: None of the sources names a session.
    """
    if options.session_name:
        return options.session_name
    if config.session:
        return config.session

    current = read_current_session(environ)
    if current is None:
        raise SessionNameNotFound(
            "No session given (-s) and no current session found. "
            "Did you create a session?"
        )
    logger.debug("Using current session '%s'", current)
    return current


def run_tracker_command(
    operation: TrackerOperation,
    options: TrackerOptions,
    control: SessionControl,
    config: TrackctlConfig | None = None,
    report_stream: TextIO | None = None,
    environ: dict[str, str] | None = None,
) -> TrackerRun:
    """Execute one track/untrack invocation.

    Args:
        operation: Track or untrack.
        options: Parsed command-line options.
        control: Session-control backend.
        config: Loaded configuration (defaults if None).
        report_stream: Where the report goes when ``options.mi`` is set.
        environ: Environment used to locate .lttngrc (default: os.environ).

    Returns:
        TrackerRun. The exit code reflects the first failure: an
        operation error always wins over a later report error.
    """
    config = config or TrackctlConfig()
    run = TrackerRun()

    # ── Validate (no side effects past this block on failure) ────
    try:
        domain = resolve_domain(options.kernel, options.userspace)
        session_name = resolve_session_name(options, config, environ)
        if not options.pid_given:
            raise MissingTracker()
        pids = parse_pid_spec(options.pid_string, options.all_pids)
    except TrackctlError as e:
        run.exit_code = e.exit_code
        run.error = str(e)
        run.show_usage = isinstance(e, ValidationError)
        return run

    # ── Apply ────────────────────────────────────────────────────
    result = apply_tracker(operation, session_name, domain, pids, control)
    run.result = result
    run.exit_code = result.exit_code
    run.error = result.error

    # ── Report ───────────────────────────────────────────────────
    if options.mi and report_stream is not None:
        try:
            write_report(report_stream, result)
        except ReportIOError as e:
            logger.debug("Report failed: %s", e)
            run.report_error = str(e)
            if result.ok:
                run.exit_code = ExitCode.REPORT_IO_FAILURE
                run.error = str(e)

    return run
