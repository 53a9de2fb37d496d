# SPDX-License-Identifier: MIT

"""
Unit tests for command line value parsing (flowtrack.terminal.parse)
"""

import pendulum
import pytest
import typer

from flowtrack.terminal.parse import parse_datetime


class TestParseDatetime:
    """Tests for parse_datetime."""

    def test_none(self):
        assert parse_datetime(None) is None

    def test_date_and_time_in_timezone(self):
        assert parse_datetime("2024-01-15 10:30", "Europe/Brussels") == pendulum.datetime(
            2024, 1, 15, 9, 30, tz="UTC"
        )

    def test_iso_separator_and_seconds(self):
        assert parse_datetime("2024-01-15T10:30:15", "UTC") == pendulum.datetime(
            2024, 1, 15, 10, 30, 15, tz="UTC"
        )

    def test_explicit_offset_wins(self):
        assert parse_datetime(
            "2024-01-15T10:30:00+02:00", "America/New_York"
        ) == pendulum.datetime(2024, 1, 15, 8, 30, tz="UTC")

    def test_date_only_is_start_of_day(self):
        assert parse_datetime("2024-01-15", "UTC") == pendulum.datetime(
            2024, 1, 15, tz="UTC"
        )

    def test_time_only_is_today(self):
        parsed = parse_datetime("7:05", "UTC")
        assert parsed.date() == pendulum.today("UTC").date()
        assert (parsed.hour, parsed.minute) == (7, 5)

    def test_words(self):
        assert parse_datetime("today", "UTC") == pendulum.today("UTC")
        assert parse_datetime("y", "UTC") == pendulum.yesterday("UTC")

    @pytest.mark.parametrize("value", ["25:00", "soon", "2024-13-40 10:00"])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter):
            parse_datetime(value, "UTC")
