"""
Tests for PID-list parsing and domain resolution.
"""

import pytest

from trackctl.core.errors import (
    ConflictingPidSpec,
    DomainNotSpecified,
    InvalidPid,
    MissingPidSpec,
    ValidationError,
)
from trackctl.core.models.tracker import ALL_PIDS, MAX_PID, Domain, ExitCode, PidSpec
from trackctl.core.services.domain import resolve_domain
from trackctl.core.services.pid_spec import parse_pid, parse_pid_spec

# ── parse_pid ────────────────────────────────────────────────────────


class TestParsePid:
    def test_plain_number(self):
        assert parse_pid("42") == 42

    def test_zero_accepted(self):
        assert parse_pid("0") == 0

    def test_leading_zeros(self):
        assert parse_pid("007") == 7

    def test_max_pid(self):
        assert parse_pid(str(MAX_PID)) == MAX_PID

    @pytest.mark.parametrize(
        "token",
        ["", "abc", "-1", "+1", " 1", "1 ", "1.5", "0x10", "²", str(MAX_PID + 1), "99999999999999999999"],
    )
    def test_rejected(self, token: str):
        with pytest.raises(InvalidPid) as exc_info:
            parse_pid(token)
        assert exc_info.value.token == token


# ── parse_pid_spec ───────────────────────────────────────────────────


class TestParsePidSpec:
    def test_single(self):
        spec = parse_pid_spec("42", all_pids=False)
        assert spec == PidSpec.explicit([42])
        assert not spec.all

    def test_order_and_duplicates_preserved(self):
        spec = parse_pid_spec("30,10,20,10", all_pids=False)
        assert spec.pids == (30, 10, 20, 10)
        assert len(spec) == 4

    def test_all_without_text(self):
        spec = parse_pid_spec(None, all_pids=True)
        assert spec.all
        assert spec.targets == (ALL_PIDS,)

    def test_all_with_empty_text(self):
        assert parse_pid_spec("", all_pids=True) == PidSpec.wildcard()

    def test_all_with_pids_conflicts(self):
        with pytest.raises(ConflictingPidSpec):
            parse_pid_spec("5", all_pids=True)

    def test_missing_when_absent(self):
        with pytest.raises(MissingPidSpec):
            parse_pid_spec(None, all_pids=False)

    def test_missing_when_empty(self):
        with pytest.raises(MissingPidSpec):
            parse_pid_spec("", all_pids=False)

    def test_invalid_token_reported(self):
        with pytest.raises(InvalidPid) as exc_info:
            parse_pid_spec("12,abc,7", all_pids=False)
        assert exc_info.value.token == "abc"

    def test_empty_token_rejected(self):
        with pytest.raises(InvalidPid) as exc_info:
            parse_pid_spec("1,,2", all_pids=False)
        assert exc_info.value.token == ""

    def test_trailing_comma_rejected(self):
        with pytest.raises(InvalidPid):
            parse_pid_spec("1,2,", all_pids=False)

    def test_errors_are_validation_errors(self):
        for raw, all_pids in [("x", False), (None, False), ("1", True)]:
            with pytest.raises(ValidationError) as exc_info:
                parse_pid_spec(raw, all_pids)
            assert exc_info.value.exit_code == ExitCode.INVALID_PID_SPEC


# ── resolve_domain ───────────────────────────────────────────────────


class TestResolveDomain:
    def test_kernel(self):
        assert resolve_domain(True, False) is Domain.KERNEL

    def test_userspace(self):
        assert resolve_domain(False, True) is Domain.USERSPACE

    @pytest.mark.parametrize("kernel,userspace", [(False, False), (True, True)])
    def test_exactly_one_required(self, kernel: bool, userspace: bool):
        with pytest.raises(DomainNotSpecified, match="exactly one domain must be specified"):
            resolve_domain(kernel, userspace)

    def test_exit_code(self):
        assert DomainNotSpecified().exit_code == ExitCode.MISSING_DOMAIN
