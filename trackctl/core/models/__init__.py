"""
Domain models for the tracker control plane.

All models are re-exported here for convenient access:

    from trackctl.core.models import PidSpec, Domain, CommandResult, Receipt
"""

from trackctl.core.models.receipt import Receipt
from trackctl.core.models.tracker import (
    ALL_PIDS,
    MAX_PID,
    CommandResult,
    Domain,
    ExitCode,
    PidFailure,
    PidSpec,
    SessionHandle,
    TrackerOperation,
    TrackerOptions,
)

__all__ = [
    "ALL_PIDS",
    "MAX_PID",
    "CommandResult",
    "Domain",
    "ExitCode",
    "PidFailure",
    "PidSpec",
    # receipt.py
    "Receipt",
    "SessionHandle",
    "TrackerOperation",
    "TrackerOptions",
]
