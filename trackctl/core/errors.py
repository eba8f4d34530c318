"""
Error hierarchy for track/untrack commands.

Every error carries the exit code the command driver maps it to.
Validation errors are raised before any session handle is acquired.
"""

from __future__ import annotations

from trackctl.core.models.tracker import ExitCode


class TrackctlError(Exception):
    """Base exception for all trackctl errors."""

    exit_code: ExitCode = ExitCode.ERROR


class ValidationError(TrackctlError):
    """Invalid combination of command-line flags or values.

    Not to be confused with pydantic.ValidationError.
    """

    usage_hint = True


class MissingPidSpec(ValidationError):
    """Neither a PID list nor --all was given."""

    exit_code = ExitCode.INVALID_PID_SPEC

    def __init__(self, message: str = "Please specify --all with an empty PID string") -> None:
        super().__init__(message)


class ConflictingPidSpec(ValidationError):
    """A PID list was given together with --all."""

    exit_code = ExitCode.INVALID_PID_SPEC

    def __init__(self, message: str = "An empty PID string is expected with --all") -> None:
        super().__init__(message)


class InvalidPid(ValidationError):
    """A token of the PID list is not a valid process ID."""

    exit_code = ExitCode.INVALID_PID_SPEC

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid PID value {token!r}")


class MissingTracker(ValidationError):
    """No tracker option (--pid) was given."""

    exit_code = ExitCode.INVALID_PID_SPEC

    def __init__(
        self,
        message: str = "Please specify at least one tracker with its expected arguments",
    ) -> None:
        super().__init__(message)


class DomainNotSpecified(ValidationError):
    """Zero or both of --kernel / --userspace were given."""

    exit_code = ExitCode.MISSING_DOMAIN

    def __init__(self, message: str = "exactly one domain must be specified") -> None:
        super().__init__(message)


class SessionNameNotFound(TrackctlError):
    """No --session given and no current session could be found."""

    def __init__(self, message: str = "No session name given and no current session found") -> None:
        super().__init__(message)


class SessionUnavailable(TrackctlError):
    """The session-control backend could not resolve a handle."""

    def __init__(self, session_name: str, domain: str, reason: str = "") -> None:
        self.session_name = session_name
        self.domain = domain
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Cannot open session '{session_name}' ({domain} domain){detail}"
        )


class ReportIOError(TrackctlError):
    """Writing the machine-interface report failed."""

    exit_code = ExitCode.REPORT_IO_FAILURE


class ReportStateError(TrackctlError):
    """A report element was opened or closed out of order."""

    exit_code = ExitCode.REPORT_IO_FAILURE
