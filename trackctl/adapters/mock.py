"""
Mock session control — in-process test double for the tracing daemon.

Used by ``--mock`` and by the test-suite. Accepts every session and
every PID unless configured otherwise, and records every call.
"""

from __future__ import annotations

from trackctl.adapters.base import SessionControl
from trackctl.core.errors import SessionUnavailable
from trackctl.core.models.receipt import Receipt
from trackctl.core.models.tracker import Domain, SessionHandle


class MockSessionControl(SessionControl):
    """Universal mock backend.

    Args:
        adapter_name: Name reported by the adapter.
        sessions: Known session names. None accepts any session.
        available: When False, every create_handle call fails.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        sessions: set[str] | None = None,
        available: bool = True,
    ):
        self._name = adapter_name
        self._sessions = sessions
        self._available = available
        self._failures: dict[int, str] = {}
        self._call_log: list[tuple[str, int]] = []
        self._created: list[SessionHandle] = []
        self._destroyed: list[SessionHandle] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[tuple[str, int]]:
        """Every (operation, pid) pair the primitives received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def created(self) -> list[SessionHandle]:
        return self._created

    @property
    def destroyed(self) -> list[SessionHandle]:
        return self._destroyed

    @property
    def open_handles(self) -> int:
        """Handles created but not yet destroyed."""
        return len(self._created) - len(self._destroyed)

    def set_failure(self, pid: int, error: str = "Mock failure") -> None:
        """Configure the primitives to reject a specific PID."""
        self._failures[pid] = error

    def create_handle(self, session_name: str, domain: Domain) -> SessionHandle:
        if not self._available:
            raise SessionUnavailable(session_name, domain, "mock backend unavailable")
        if self._sessions is not None and session_name not in self._sessions:
            raise SessionUnavailable(session_name, domain, "session not found")

        handle = SessionHandle(
            backend=self._name,
            session_name=session_name,
            domain=domain,
            handle_id=f"mock-{len(self._created) + 1}",
        )
        self._created.append(handle)
        return handle

    def destroy_handle(self, handle: SessionHandle) -> None:
        self._destroyed.append(handle)

    def track_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        return self._call("track", pid)

    def untrack_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        return self._call("untrack", pid)

    def reset(self) -> None:
        """Clear call log, handle history and configured failures."""
        self._call_log.clear()
        self._created.clear()
        self._destroyed.clear()
        self._failures.clear()

    def _call(self, operation: str, pid: int) -> Receipt:
        self._call_log.append((operation, pid))
        if pid in self._failures:
            return Receipt.failure(
                adapter=self._name,
                operation=operation,
                pid=pid,
                error=self._failures[pid],
            )
        return Receipt.success(
            adapter=self._name,
            operation=operation,
            pid=pid,
            output="[mock] applied",
            metadata={"mock": True},
        )
