"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from trackctl.core.observability.logging_config import PACKAGE_LOGGER, _parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    pkg = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(pkg.handlers), pkg.level)
    yield
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        pkg.addHandler(handler)
    pkg.setLevel(saved[1])


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("chatty") == logging.WARNING


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("INFO")
        pkg = setup_logging("INFO")
        assert len(pkg.handlers) == 1
        assert pkg.level == logging.INFO

    def test_minimal_format(self, capsys):
        setup_logging("WARNING")
        logging.getLogger("trackctl.test").error("Failed to track PID %d", 7)
        assert "Error: Failed to track PID 7" in capsys.readouterr().err

    def test_debug_hidden_at_warning(self, capsys):
        setup_logging("WARNING")
        logging.getLogger("trackctl.test").debug("track PID 1")
        assert "track PID 1" not in capsys.readouterr().err

    def test_log_file(self, tmp_path: Path):
        log_file = tmp_path / "trackctl.log"
        pkg = setup_logging("ERROR", log_file=str(log_file), log_file_level="DEBUG")
        assert pkg.level == logging.DEBUG
        logging.getLogger("trackctl.test").debug("untrack PID 9")
        for handler in pkg.handlers:
            handler.flush()
        assert "untrack PID 9" in log_file.read_text()
