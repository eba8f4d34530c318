"""
Receipt model — the result of one session-control primitive call.

Adapters never raise for a rejected PID: the failure is captured in
the Receipt and the invoker decides what to do with it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Receipt(BaseModel):
    """Outcome of a track/untrack call for a single PID."""

    adapter: str
    operation: str
    pid: int
    status: Literal["ok", "failed"] = "ok"

    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the primitive accepted the PID."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the primitive rejected the PID."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        operation: str,
        pid: int,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            operation=operation,
            pid=pid,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        operation: str,
        pid: int,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            operation=operation,
            pid=pid,
            status="failed",
            error=error,
            **kwargs,
        )
