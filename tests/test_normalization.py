"""Normalization helper tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from registry_mcp.normalization import (
    format_trips,
    parse_datetime,
    parse_int,
    parse_text,
    to_epoch_ms,
)


class TestParseInt:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (5, 5),
            (5.9, 5),
            (" 12 ", 12),
            ("12.0", 12),
            ("", None),
            ("abc", None),
            (None, None),
            (True, None),
            (float("nan"), None),
            (float("inf"), None),
            ("1e999", None),
            ("-inf", None),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_int(raw) == expected


class TestDates:
    def test_epoch_ms_respects_offset(self):
        dt = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        assert to_epoch_ms(dt) == 1704067200000

    def test_parse_iso_with_z(self):
        assert parse_datetime("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_parse_epoch_ms_string(self):
        assert to_epoch_ms(parse_datetime("1704067200000")) == 1704067200000

    def test_empty_is_none(self):
        assert parse_datetime("") is None
        assert parse_datetime(None) is None

    def test_garbage_raises(self):
        with pytest.raises(ValueError, match="Invalid date"):
            parse_datetime("next tuesday")


def test_parse_text():
    assert parse_text(None) == ""
    assert parse_text(42) == "42"


def test_format_trips():
    assert format_trips([("A", "B"), ("C", "D")]) == "A to B, C to D"
    assert format_trips([]) == ""
