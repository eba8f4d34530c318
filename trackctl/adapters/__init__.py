"""Adapters — session-control backends.

Public re-exports for convenient access.
"""

from trackctl.adapters.base import SessionControl
from trackctl.adapters.mock import MockSessionControl
from trackctl.adapters.registry import SessionControlRegistry

__all__ = [
    "MockSessionControl",
    "SessionControl",
    "SessionControlRegistry",
]
