"""
Adapter base — the contract between the tracker invoker and a
session-control backend.

The invoker never talks to a tracing daemon directly. It asks an
adapter for a session handle, calls the track/untrack primitive once
per PID through the adapter, and hands the handle back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from trackctl.core.models.receipt import Receipt
from trackctl.core.models.tracker import Domain, SessionHandle, TrackerOperation


class SessionControl(ABC):
    """Abstract base class for session-control backends.

    Handle resolution raises SessionUnavailable when the session cannot
    be opened. The per-PID primitives NEVER raise: a rejected PID is
    reported as a failed Receipt.

    To create a new backend:
        1. Subclass SessionControl
        2. Implement name, create_handle, destroy_handle, track_pid,
           untrack_pid
        3. Register it in the SessionControlRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g., 'lttng', 'mock')."""

    @abstractmethod
    def create_handle(self, session_name: str, domain: Domain) -> SessionHandle:
        """Resolve a handle for a (session, domain) pair.

        Raises:
            SessionUnavailable: The session does not exist or the
                backend cannot be reached.
        """

    @abstractmethod
    def destroy_handle(self, handle: SessionHandle) -> None:
        """Release a handle obtained from create_handle."""

    @abstractmethod
    def track_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        """Add a PID (or ALL_PIDS) to the session's tracker."""

    @abstractmethod
    def untrack_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        """Remove a PID (or ALL_PIDS) from the session's tracker."""

    def apply(self, operation: TrackerOperation, handle: SessionHandle, pid: int) -> Receipt:
        """Invoke the primitive selected by ``operation``."""
        if operation == TrackerOperation.TRACK:
            return self.track_pid(handle, pid)
        return self.untrack_pid(handle, pid)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
