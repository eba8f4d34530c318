"""
Tracker models — the vocabulary of a track/untrack invocation.

A tracker is a per-session allow-list of process IDs. An invocation
picks one operation (track or untrack), one domain (kernel or
user-space), and one PID specification: either an explicit ordered
list or the all-PIDs wildcard.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

# Value passed to the track/untrack primitive to mean "every process".
ALL_PIDS = -1

# Largest PID accepted by the parser (signed 32-bit pid_t).
MAX_PID = 2**31 - 1


class Domain(StrEnum):
    """Tracing domain targeted by the tracker."""

    KERNEL = "kernel"
    USERSPACE = "userspace"


class TrackerOperation(StrEnum):
    """Which session-control primitive is applied per PID."""

    TRACK = "track"
    UNTRACK = "untrack"


class ExitCode(IntEnum):
    """Process exit status of a track/untrack command."""

    SUCCESS = 0
    ERROR = 1
    UNDEFINED = 2
    MISSING_DOMAIN = 3
    INVALID_PID_SPEC = 4
    TRACKER_FAILURE = 5
    REPORT_IO_FAILURE = 6


class PidSpec(BaseModel):
    """Validated PID specification.

    Exactly one of the two shapes is representable:

        PidSpec.wildcard()          → every process
        PidSpec.explicit([4, 2, 4]) → those PIDs, in that order
    """

    model_config = ConfigDict(frozen=True)

    all: bool = False
    pids: tuple[int, ...] = ()

    @model_validator(mode="after")
    def _check_shape(self) -> PidSpec:
        if self.all and self.pids:
            raise ValueError("a wildcard PID spec cannot carry explicit PIDs")
        if not self.all and not self.pids:
            raise ValueError("an explicit PID spec needs at least one PID")
        for pid in self.pids:
            if pid < 0 or pid > MAX_PID:
                raise ValueError(f"PID out of range: {pid}")
        return self

    @classmethod
    def wildcard(cls) -> PidSpec:
        return cls(all=True)

    @classmethod
    def explicit(cls, pids: list[int] | tuple[int, ...]) -> PidSpec:
        return cls(all=False, pids=tuple(pids))

    @property
    def targets(self) -> tuple[int, ...]:
        """Values handed to the primitive, one call each."""
        if self.all:
            return (ALL_PIDS,)
        return self.pids

    def __len__(self) -> int:
        return len(self.targets)


class SessionHandle(BaseModel):
    """Opaque reference to a (session, domain) pair.

    Only the adapter that created a handle looks inside it.
    """

    model_config = ConfigDict(frozen=True)

    backend: str
    session_name: str
    domain: Domain
    handle_id: str


class TrackerOptions(BaseModel):
    """Command-line options of one track/untrack invocation.

    Built once by the CLI layer and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    session_name: str | None = None
    kernel: bool = False
    userspace: bool = False
    pid_given: bool = False
    pid_string: str | None = None
    all_pids: bool = False
    mi: str | None = None


@dataclass(frozen=True)
class PidFailure:
    """The first PID the primitive rejected."""

    pid: int
    error: str


@dataclass(frozen=True)
class CommandResult:
    """Outcome of applying a tracker operation to a session."""

    exit_code: ExitCode
    operation: TrackerOperation
    session_name: str
    domain: Domain
    attempted: tuple[int, ...] = ()
    applied_count: int = 0
    first_failure: PidFailure | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS
