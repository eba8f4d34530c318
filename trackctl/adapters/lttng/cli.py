"""
LTTng adapter — drive the session daemon through the ``lttng`` client.

Each primitive is one ``lttng track`` / ``lttng untrack`` invocation.
A handle is resolved by listing the session in the requested domain,
which fails when the session does not exist or the daemon is down.
"""

from __future__ import annotations

import logging
import subprocess
import time
import uuid

from trackctl.adapters.base import SessionControl
from trackctl.core.errors import SessionUnavailable
from trackctl.core.models.receipt import Receipt
from trackctl.core.models.tracker import ALL_PIDS, Domain, SessionHandle

logger = logging.getLogger(__name__)

_DOMAIN_FLAGS = {
    Domain.KERNEL: "--kernel",
    Domain.USERSPACE: "--userspace",
}


class LttngCliAdapter(SessionControl):
    """Session control through the ``lttng`` command-line client.

    Args:
        binary: Name or path of the lttng executable.
        timeout: Seconds allowed per lttng invocation.
    """

    def __init__(self, binary: str = "lttng", timeout: int = 30):
        self._binary = binary
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "lttng"

    def create_handle(self, session_name: str, domain: Domain) -> SessionHandle:
        cmd = [self._binary, "list", session_name, _DOMAIN_FLAGS[domain]]
        logger.debug("Resolving session: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            raise SessionUnavailable(
                session_name, domain, f"'{self._binary}' not found on PATH"
            ) from None
        except subprocess.TimeoutExpired:
            raise SessionUnavailable(
                session_name, domain, f"lttng timed out after {self._timeout}s"
            ) from None
        except OSError as e:
            raise SessionUnavailable(
                session_name, domain, f"lttng execution error: {e}"
            ) from e

        if result.returncode != 0:
            reason = result.stderr.strip() or f"lttng exited with code {result.returncode}"
            raise SessionUnavailable(session_name, domain, reason)

        return SessionHandle(
            backend=self.name,
            session_name=session_name,
            domain=domain,
            handle_id=uuid.uuid4().hex[:12],
        )

    def destroy_handle(self, handle: SessionHandle) -> None:
        # The lttng client is stateless between invocations.
        logger.debug("Released handle %s for session '%s'", handle.handle_id, handle.session_name)

    def track_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        return self._run("track", handle, pid)

    def untrack_pid(self, handle: SessionHandle, pid: int) -> Receipt:
        return self._run("untrack", handle, pid)

    def _build_command(self, operation: str, handle: SessionHandle, pid: int) -> list[str]:
        cmd = [
            self._binary,
            operation,
            "--session",
            handle.session_name,
            _DOMAIN_FLAGS[handle.domain],
        ]
        if pid == ALL_PIDS:
            cmd += ["--pid", "--all"]
        else:
            cmd += ["--pid", str(pid)]
        return cmd

    def _run(self, operation: str, handle: SessionHandle, pid: int) -> Receipt:
        cmd = self._build_command(operation, handle, pid)
        command = " ".join(cmd)
        logger.debug("Executing: %s", command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                operation=operation,
                pid=pid,
                error=f"lttng timed out after {self._timeout}s",
                metadata={"command": command, "timeout": self._timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                operation=operation,
                pid=pid,
                error=f"lttng execution error: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                operation=operation,
                pid=pid,
                output=output,
                duration_ms=elapsed_ms,
                metadata={"command": command, "return_code": result.returncode},
            )
        return Receipt.failure(
            adapter=self.name,
            operation=operation,
            pid=pid,
            error=stderr or f"lttng exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={
                "command": command,
                "return_code": result.returncode,
                "stdout": output,
            },
        )
