"""
Tests for configuration loading — trackctl.yml and .lttngrc.
"""

import textwrap
from pathlib import Path

import pytest

from trackctl.core.config.loader import (
    ConfigError,
    TrackctlConfig,
    find_config_file,
    load_config,
    lttngrc_path,
    read_current_session,
)


@pytest.fixture
def config_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        session: nightly
        backend: lttng
        lttng:
          binary: /usr/local/bin/lttng
          timeout: 10
    """)
    path = tmp_path / "trackctl.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_valid(self, config_yml: Path):
        config = load_config(config_yml)
        assert config.session == "nightly"
        assert config.backend == "lttng"
        assert config.lttng.binary == "/usr/local/bin/lttng"
        assert config.lttng.timeout == 10

    def test_defaults_when_absent(self):
        config = load_config()
        assert config == TrackctlConfig()
        assert config.session is None
        assert config.lttng.binary == "lttng"

    def test_auto_detect_upward(self, config_yml: Path, monkeypatch):
        sub = config_yml.parent / "a" / "b"
        sub.mkdir(parents=True)
        monkeypatch.chdir(sub)
        assert find_config_file() == config_yml
        assert load_config().session == "nightly"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "trackctl.yml"
        path.write_text("")
        assert load_config(path) == TrackctlConfig()

    def test_explicit_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "trackctl.yml"
        path.write_text("session: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "trackctl.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_unknown_backend(self, tmp_path: Path):
        path = tmp_path / "trackctl.yml"
        path.write_text("backend: dtrace\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_non_positive_timeout(self, tmp_path: Path):
        path = tmp_path / "trackctl.yml"
        path.write_text("lttng:\n  timeout: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestCurrentSession:
    def test_lttng_home_preferred(self, tmp_path: Path):
        env = {"LTTNG_HOME": str(tmp_path / "lh"), "HOME": str(tmp_path / "h")}
        assert lttngrc_path(env) == tmp_path / "lh" / ".lttngrc"

    def test_home_fallback(self, tmp_path: Path):
        assert lttngrc_path({"HOME": str(tmp_path)}) == tmp_path / ".lttngrc"

    def test_no_home(self):
        assert lttngrc_path({}) is None
        assert read_current_session({}) is None

    def test_reads_session(self, tmp_path: Path):
        (tmp_path / ".lttngrc").write_text("session=auto-20261019\n")
        assert read_current_session({"HOME": str(tmp_path)}) == "auto-20261019"

    def test_ignores_other_keys(self, tmp_path: Path):
        (tmp_path / ".lttngrc").write_text("foo=bar\nsession = spaced \n")
        assert read_current_session({"HOME": str(tmp_path)}) == "spaced"

    def test_missing_file(self, tmp_path: Path):
        assert read_current_session({"HOME": str(tmp_path)}) is None

    def test_empty_value(self, tmp_path: Path):
        (tmp_path / ".lttngrc").write_text("session=\n")
        assert read_current_session({"HOME": str(tmp_path)}) is None

    def test_uses_process_environment(self, current_session: str):
        assert read_current_session() == current_session
