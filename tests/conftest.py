"""
Shared test fixtures and configuration.
"""

import io
from pathlib import Path

import pytest

from trackctl.adapters.mock import MockSessionControl


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch) -> Path:
    """Keep the real home directory and cwd config out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("LTTNG_HOME", str(home))
    monkeypatch.delenv("TRACKCTL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TRACKCTL_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def mock_control() -> MockSessionControl:
    """Session control that accepts the 'demo' session only."""
    return MockSessionControl(sessions={"demo"})


@pytest.fixture
def current_session(isolated_env: Path) -> str:
    """Record 'demo' as the current session in .lttngrc."""
    (isolated_env / ".lttngrc").write_text("session=demo\n")
    return "demo"


class BrokenStream(io.StringIO):
    """Accepts ``budget`` writes, then fails like a closed pipe."""

    def __init__(self, budget: int = 0):
        super().__init__()
        self._budget = budget

    def write(self, s: str) -> int:
        if self._budget <= 0:
            raise BrokenPipeError(32, "Broken pipe")
        self._budget -= 1
        return super().write(s)


@pytest.fixture
def broken_stream():
    """Factory for streams that fail after a number of writes."""
    return BrokenStream
