"""
Unit tests for core.limits module.

Tests:
- resolve_int() with missing, valid, malformed and negative values
- Exactly one warning per malformed value, none otherwise
"""

import logging
from collections.abc import Callable

import pytest

from nodeparams.core.limits import resolve_int
from nodeparams.core.params import ParamTable


KEY = "proxy.grpc.clientMaxRecvSize"
FALLBACK = 104_857_600


def _warnings(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.levelno == logging.WARNING]


class TestResolveIntMissing:
    """Missing key returns the fallback silently."""

    def test_returns_fallback(self, empty_table: ParamTable) -> None:
        assert resolve_int(empty_table, KEY, FALLBACK) == FALLBACK

    def test_no_warning(self, empty_table: ParamTable, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            resolve_int(empty_table, KEY, FALLBACK)
        assert _warnings(caplog) == []


class TestResolveIntValid:
    """Well-formed values are returned as integers."""

    @pytest.mark.parametrize(("raw", "expected"), [("1024", 1024), ("0", 0), ("+5", 5)])
    def test_parsed(
        self, make_table: Callable[..., ParamTable], raw: str, expected: int
    ) -> None:
        table = make_table(overrides={KEY: raw})
        assert resolve_int(table, KEY, FALLBACK) == expected

    def test_yaml_int(self, make_table: Callable[..., ParamTable]) -> None:
        table = make_table({"proxy": {"grpc": {"clientMaxRecvSize": 4096}}})
        assert resolve_int(table, KEY, FALLBACK) == 4096

    def test_no_warning(
        self, make_table: Callable[..., ParamTable], caplog: pytest.LogCaptureFixture
    ) -> None:
        table = make_table(overrides={KEY: "1024"})
        with caplog.at_level(logging.DEBUG):
            resolve_int(table, KEY, FALLBACK)
        assert _warnings(caplog) == []


class TestResolveIntInvalid:
    """Malformed and negative values fall back with exactly one warning."""

    @pytest.mark.parametrize(
        "raw", ["abc", "", "1.5", "10MB", " 1024", "-1", "99999999999999999999999"]
    )
    def test_returns_fallback(self, make_table: Callable[..., ParamTable], raw: str) -> None:
        table = make_table(overrides={KEY: raw})
        assert resolve_int(table, KEY, FALLBACK) == FALLBACK

    def test_one_warning(
        self, make_table: Callable[..., ParamTable], caplog: pytest.LogCaptureFixture
    ) -> None:
        table = make_table(overrides={KEY: "abc"})
        with caplog.at_level(logging.DEBUG):
            resolve_int(table, KEY, FALLBACK, role="proxy")

        warnings = _warnings(caplog)
        assert len(warnings) == 1
        record = warnings[0]
        assert record.message == "size_limit_invalid"
        fields = record.structured_kv  # type: ignore[attr-defined]
        assert fields["role"] == "proxy"
        assert fields["key"] == KEY
        assert fields["value"] == "abc"
        assert fields["default"] == FALLBACK

    def test_never_raises(self, make_table: Callable[..., ParamTable]) -> None:
        table = make_table(overrides={KEY: "\x00garbage"})
        assert resolve_int(table, KEY, 7) == 7

    def test_beyond_int64_warns(
        self, make_table: Callable[..., ParamTable], caplog: pytest.LogCaptureFixture
    ) -> None:
        table = make_table(overrides={KEY: str(2**63)})
        with caplog.at_level(logging.DEBUG):
            assert resolve_int(table, KEY, FALLBACK, role="proxy") == FALLBACK
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert warnings[0].message == "size_limit_invalid"
