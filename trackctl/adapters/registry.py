"""
Session-control registry — pick the backend a command talks to.

The registry is the single point of backend management: registration,
lookup by name, and mock mode. Commands never construct backends
themselves; they ask the registry.
"""

from __future__ import annotations

import logging

from trackctl.adapters.base import SessionControl
from trackctl.adapters.mock import MockSessionControl

logger = logging.getLogger(__name__)


class SessionControlRegistry:
    """Central registry of session-control backends.

    Features:
        - Register backends by name
        - Mock mode: resolve every lookup to an in-process mock
    """

    def __init__(self, mock_mode: bool = False):
        self._backends: dict[str, SessionControl] = {}
        self._mock_mode = mock_mode
        self._mock_backend: MockSessionControl | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def register(self, backend: SessionControl) -> None:
        name = backend.name
        if name in self._backends:
            logger.warning("Overwriting existing backend: %s", name)
        self._backends[name] = backend
        logger.debug("Registered backend: %s", name)

    def get(self, name: str) -> SessionControl | None:
        """Look up a backend by name, honouring mock mode."""
        if self._mock_mode:
            if self._mock_backend is None:
                self._mock_backend = MockSessionControl()
            return self._mock_backend
        return self._backends.get(name)

