"""
Tracker invoker — apply track/untrack to a session, PID by PID.

Policy:
    - The session handle is acquired once and released exactly once,
      whatever happens in between.
    - PIDs are applied in input order. The first rejected PID stops
      the loop; later PIDs are never attempted.
    - Nothing is rolled back: PIDs applied before a failure stay applied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from trackctl.adapters.base import SessionControl
from trackctl.core.errors import SessionUnavailable
from trackctl.core.models.tracker import (
    CommandResult,
    Domain,
    ExitCode,
    PidFailure,
    PidSpec,
    SessionHandle,
    TrackerOperation,
)

logger = logging.getLogger(__name__)


@contextmanager
def session_handle(
    control: SessionControl,
    session_name: str,
    domain: Domain,
) -> Iterator[SessionHandle]:
    """Hold a session handle for the duration of a ``with`` block.

    Raises:
        SessionUnavailable: The backend could not resolve the session.
            Nothing is released in that case.
    """
    handle = control.create_handle(session_name, domain)
    logger.debug(
        "Acquired handle %s for session '%s' (%s)",
        handle.handle_id, session_name, domain,
    )
    try:
        yield handle
    finally:
        control.destroy_handle(handle)
        logger.debug("Released handle %s", handle.handle_id)


def apply_tracker(
    operation: TrackerOperation,
    session_name: str,
    domain: Domain,
    pids: PidSpec,
    control: SessionControl,
) -> CommandResult:
    """Apply a tracker operation to every PID of a spec.

    Args:
        operation: Track or untrack.
        session_name: Target session.
        domain: Target tracing domain.
        pids: Wildcard or explicit PID list.
        control: Session-control backend.

    Returns:
        CommandResult describing what was attempted and the first failure.
    """
    attempted: list[int] = []
    applied = 0

    try:
        with session_handle(control, session_name, domain) as handle:
            for pid in pids.targets:
                logger.debug("%s PID %d", operation, pid)
                attempted.append(pid)
                receipt = control.apply(operation, handle, pid)
                if receipt.failed:
                    error = receipt.error or "unknown error"
                    logger.error("Failed to %s PID %d: %s", operation, pid, error)
                    return CommandResult(
                        exit_code=ExitCode.TRACKER_FAILURE,
                        operation=operation,
                        session_name=session_name,
                        domain=domain,
                        attempted=tuple(attempted),
                        applied_count=applied,
                        first_failure=PidFailure(pid=pid, error=error),
                        error=error,
                    )
                if receipt.output:
                    logger.debug("%s PID %d: %s", operation, pid, receipt.output)
                applied += 1
    except SessionUnavailable as e:
        logger.error("%s", e)
        return CommandResult(
            exit_code=ExitCode.ERROR,
            operation=operation,
            session_name=session_name,
            domain=domain,
            error=str(e),
        )

    logger.info(
        "%s: %d PID(s) applied to session '%s' (%s)",
        operation, applied, session_name, domain,
    )
    return CommandResult(
        exit_code=ExitCode.SUCCESS,
        operation=operation,
        session_name=session_name,
        domain=domain,
        attempted=tuple(attempted),
        applied_count=applied,
    )
