# SPDX-License-Identifier: MIT

"""
Unit tests for CSV export and import (flowtrack.service.csv_codec)
"""

import math

import pendulum
import pytest

from flowtrack.service.csv_codec import (
    CSV_HEADER,
    CsvFileError,
    convert_to_24_hour,
    entry_to_csv_row,
    export_entries_csv,
    format_number,
    import_entries_csv,
    is_new_format_header,
    merge_imported_entries,
    parse_csv_line,
    parse_float,
    parse_import_timestamp,
    read_csv_file,
)
from flowtrack.service.statistics import get_stats_summary

NOW = pendulum.datetime(2024, 6, 1, 12, 0, 0, tz="UTC")


def make_entry(timestamp, volume=300.0, duration=30.0, flow_rate=10.0, **extra):
    entry = {
        "timestamp": timestamp,
        "volume": volume,
        "duration": duration,
        "flowRate": flow_rate,
    }
    entry.update(extra)
    return entry


class TestExport:
    """Tests for export_entries_csv and its row format."""

    def test_header_only_for_empty_list(self):
        assert export_entries_csv([], "UTC") == CSV_HEADER + "\n"

    def test_header_columns(self):
        assert CSV_HEADER.split(",") == [
            "Date",
            "Time",
            "Volume (mL)",
            "Duration (s)",
            "Flow Rate (mL/s)",
            "Color",
            "Urgency",
            "Concerns",
            "Notes",
            "Fluid Type",
            "Fluid Custom Type",
            "Fluid Amount",
            "Fluid Unit",
        ]

    def test_minimal_row(self):
        row = entry_to_csv_row(
            make_entry("2024-01-15T10:30:00+00:00", 300, 30, 10), "UTC"
        )
        assert row == '2024-01-15,10:30:00,300,30,10,,,"","","","","",""'

    def test_full_row_quotes_text_fields(self):
        entry = make_entry(
            "2024-01-15T10:30:00+00:00",
            250.5,
            25,
            10.02,
            color="Light Yellow",
            urgency="Normal",
            concerns=["Straining", "Dribbling"],
            notes='He said "ok"',
            fluidIntake={"type": "Other", "customType": "Kombucha", "amount": 12, "unit": "oz"},
        )
        row = entry_to_csv_row(entry, "UTC")
        assert row == (
            "2024-01-15,10:30:00,250.5,25,10.02,Light Yellow,Normal,"
            '"Straining; Dribbling","He said ""ok""","Other","Kombucha","12","oz"'
        )

    def test_date_and_time_use_same_timezone(self):
        # 23:30 UTC is already the next day in Brussels
        row = entry_to_csv_row(make_entry("2024-01-15T23:30:00+00:00"), "Europe/Brussels")
        assert row.startswith("2024-01-16,00:30:00,")

    def test_rows_keep_list_order_and_skip_nothing(self):
        entries = [
            make_entry("2024-03-01T08:00:00+00:00"),
            make_entry("2024-01-01T08:00:00+00:00"),
            make_entry("not a timestamp"),
        ]
        lines = export_entries_csv(entries, "UTC").split("\n")
        assert len(lines) == 4
        assert lines[1].startswith("2024-03-01,")
        assert lines[2].startswith("2024-01-01,")
        assert lines[3].startswith("not a timestamp,,")

    def test_numbers_are_not_rounded(self):
        assert format_number(300 / 7) == repr(300 / 7)
        assert format_number(12) == "12"
        assert format_number(math.nan) == "NaN"
        assert format_number(math.inf) == "Infinity"


class TestParseCsvLine:
    """Tests for the quote-aware field splitter."""

    def test_plain_fields(self):
        assert parse_csv_line("a,b,c") == ["a", "b", "c"]

    def test_comma_inside_quotes(self):
        assert parse_csv_line('1,"a, b",2') == ["1", "a, b", "2"]

    def test_doubled_quote_is_literal(self):
        assert parse_csv_line('"He said ""ok"""') == ['He said "ok"']

    def test_empty_fields(self):
        assert parse_csv_line(',,"",') == ["", "", "", ""]

    def test_unterminated_quote_keeps_rest(self):
        assert parse_csv_line('a,"b,c') == ["a", "b,c"]

    def test_empty_quoted_fields_stay_empty(self):
        assert parse_csv_line('1,"","",2') == ["1", "", "", "2"]

    def test_lone_quote_value(self):
        assert parse_csv_line('a,"""",b') == ["a", '"', "b"]


class TestParseFloat:
    """Tests for lenient number parsing."""

    def test_plain_numbers(self):
        assert parse_float("12") == 12.0
        assert parse_float("-3.5") == -3.5
        assert parse_float(".5") == 0.5
        assert parse_float("1e3") == 1000.0

    def test_trailing_text_ignored(self):
        assert parse_float("12 mL") == 12.0

    def test_no_number_is_nan(self):
        assert math.isnan(parse_float("abc"))
        assert math.isnan(parse_float(""))
        assert math.isnan(parse_float(None))

    def test_infinity(self):
        assert parse_float("Infinity") == math.inf


class TestTimestamps:
    """Tests for date and time cell handling on import."""

    def test_convert_pm(self):
        assert convert_to_24_hour("1:05 PM") == "13:05"

    def test_convert_midnight(self):
        assert convert_to_24_hour("12:15 AM") == "00:15"

    def test_convert_noon(self):
        assert convert_to_24_hour("12:15 PM") == "12:15"

    def test_convert_leaves_24_hour_alone(self):
        assert convert_to_24_hour("17:45") == "17:45"

    def test_us_date_with_short_year(self):
        assert (
            parse_import_timestamp("1/5/24", "2:30 PM", "UTC")
            == "2024-01-05T14:30:00+00:00"
        )

    def test_us_date_with_long_year(self):
        assert (
            parse_import_timestamp("12/25/2023", "08:00", "UTC")
            == "2023-12-25T08:00:00+00:00"
        )

    def test_iso_date(self):
        assert (
            parse_import_timestamp("2024-01-15", "10:30:45", "UTC")
            == "2024-01-15T10:30:45+00:00"
        )

    def test_local_time_converted_to_utc(self):
        assert (
            parse_import_timestamp("2024-01-15", "10:30:00", "Europe/Brussels")
            == "2024-01-15T09:30:00+00:00"
        )

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_import_timestamp("yesterday-ish", "later", "UTC")


class TestFormatDetection:
    """Tests for header based layout selection."""

    def test_export_header_is_new_format(self):
        assert is_new_format_header(CSV_HEADER)

    def test_old_header(self):
        assert not is_new_format_header("timestamp,volume,duration,flowRate")

    def test_old_layout_import(self):
        text = (
            "timestamp,volume,duration,flowRate\n"
            "2024-01-15T10:00:00.000Z,300,30,10\n"
        )
        result = import_entries_csv(text, "UTC", NOW)
        assert result["errors"] == []
        assert result["entries"] == [
            {
                "timestamp": "2024-01-15T10:00:00.000Z",
                "volume": 300.0,
                "duration": 30.0,
                "flowRate": 10.0,
            }
        ]

    def test_hand_written_layout_uses_column_names(self):
        text = (
            "Date,Time,Duration (s),Volume (ml),Rate (ml/s)\n"
            "1/15/24,9:15 AM,25,250,10\n"
        )
        entry = import_entries_csv(text, "UTC", NOW)["entries"][0]
        assert entry["timestamp"] == "2024-01-15T09:15:00+00:00"
        assert entry["volume"] == 250.0
        assert entry["duration"] == 25.0
        assert entry["flowRate"] == 10.0


class TestImport:
    """Tests for import_entries_csv."""

    def test_round_trip_base_fields(self):
        entries = [
            make_entry("2024-01-15T10:30:00+00:00", 300, 30, 10),
            make_entry("2024-02-01T06:05:09+00:00", 412.5, 33, 412.5 / 33),
        ]
        result = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)

        assert result["errors"] == []
        assert len(result["entries"]) == 2
        for original, imported in zip(entries, result["entries"]):
            assert pendulum.parse(imported["timestamp"]) == pendulum.parse(
                original["timestamp"]
            )
            assert imported["volume"] == original["volume"]
            assert imported["duration"] == original["duration"]
            assert imported["flowRate"] == original["flowRate"]

    def test_round_trip_in_local_timezone(self):
        entries = [make_entry("2024-07-01T22:45:00+00:00")]
        text = export_entries_csv(entries, "America/New_York")
        imported = import_entries_csv(text, "America/New_York", NOW)["entries"][0]
        assert imported["timestamp"] == "2024-07-01T22:45:00+00:00"

    def test_notes_with_quotes_survive(self):
        entries = [make_entry("2024-01-15T10:30:00+00:00", notes='He said "ok"')]
        imported = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)
        assert imported["entries"][0]["notes"] == 'He said "ok"'

    def test_optional_fields_survive(self):
        entries = [
            make_entry(
                "2024-01-15T10:30:00+00:00",
                color="Dark Yellow",
                urgency="Had drips",
                concerns=["Pain", "Burning"],
                fluidIntake={
                    "type": "Other",
                    "customType": "Kombucha",
                    "amount": 12,
                    "unit": "oz",
                },
            )
        ]
        imported = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)
        entry = imported["entries"][0]
        assert entry["color"] == "Dark Yellow"
        assert entry["urgency"] == "Had drips"
        assert entry["concerns"] == ["Pain", "Burning"]
        assert entry["fluidIntake"] == {
            "type": "Other",
            "customType": "Kombucha",
            "amount": 12.0,
            "unit": "oz",
        }

    def test_empty_optional_fields_are_omitted(self):
        entries = [make_entry("2024-01-15T10:30:00+00:00")]
        entry = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)[
            "entries"
        ][0]
        assert set(entry.keys()) == {"timestamp", "volume", "duration", "flowRate"}

    def test_entry_without_optionals_does_not_skew_stats(self):
        entries = [make_entry("2024-01-15T10:30:00+00:00", 300, 30, 10)]
        imported = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)
        summary = get_stats_summary(imported["entries"], now=NOW)
        assert summary["fluid_intake_count"] == 0
        assert summary["fluid_type_counts"] == {}
        assert summary["concern_counts"] == {}

    def test_notes_of_a_single_quote_survive(self):
        entries = [make_entry("2024-01-15T10:30:00+00:00", notes='"')]
        imported = import_entries_csv(export_entries_csv(entries, "UTC"), "UTC", NOW)
        assert imported["entries"][0]["notes"] == '"'

    def test_multiline_notes_stay_one_entry(self):
        entries = [
            make_entry("2024-01-15T10:30:00+00:00", notes="first line\nsecond line"),
            make_entry("2024-01-16T10:30:00+00:00", notes="a\r\nb"),
        ]
        text = export_entries_csv(entries, "UTC")
        assert len(text.split("\n")) == 3

        imported = import_entries_csv(text, "UTC", NOW)
        assert imported["errors"] == []
        assert [entry["notes"] for entry in imported["entries"]] == [
            "first line second line",
            "a b",
        ]

    def test_bad_date_falls_back_to_now(self):
        text = (
            "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s)\n"
            "2024-01-15,10:00:00,300,30,10\n"
            "garbage,??,310,31,10\n"
            "2024-01-16,11:00:00,320,32,10\n"
        )
        result = import_entries_csv(text, "UTC", NOW)

        assert len(result["entries"]) == 3
        assert result["errors"] == []
        assert result["entries"][1]["timestamp"] == "2024-06-01T12:00:00+00:00"
        assert result["entries"][1]["volume"] == 310.0

    def test_bad_date_is_logged(self, caplog):
        text = "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s)\ngarbage,??,310,31,10\n"
        with caplog.at_level("WARNING", logger="flowtrack"):
            import_entries_csv(text, "UTC", NOW)
        assert "using the current time" in caplog.text

    def test_malformed_line_is_skipped_and_reported(self):
        text = (
            "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s)\n"
            "2024-01-15,10:00:00,300,30,10\n"
            "lonely\n"
        )
        result = import_entries_csv(text, "UTC", NOW)

        assert len(result["entries"]) == 1
        assert len(result["errors"]) == 1
        assert result["errors"][0]["line_number"] == 3
        assert result["errors"][0]["line"] == "lonely"

    def test_blank_lines_ignored(self):
        text = (
            "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s)\n"
            "\n"
            "2024-01-15,10:00:00,300,30,10\n"
            "   \n"
        )
        result = import_entries_csv(text, "UTC", NOW)
        assert len(result["entries"]) == 1
        assert result["errors"] == []

    def test_unparseable_numbers_become_nan(self):
        text = (
            "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s)\n"
            "2024-01-15,10:00:00,abc,30,\n"
        )
        entry = import_entries_csv(text, "UTC", NOW)["entries"][0]
        assert math.isnan(entry["volume"])
        assert math.isnan(entry["flowRate"])
        assert entry["duration"] == 30.0


class TestMergeAndRead:
    """Tests for merging imported entries and reading files."""

    def test_merge_appends(self):
        existing = [make_entry("2024-01-01T00:00:00+00:00")]
        imported = [make_entry("2024-01-02T00:00:00+00:00")]
        assert merge_imported_entries(existing, imported) == existing + imported

    def test_merge_nothing_keeps_list(self):
        existing = [make_entry("2024-01-01T00:00:00+00:00")]
        assert merge_imported_entries(existing, []) is existing

    def test_read_strips_bom(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_bytes("\ufeffDate,Time\n".encode("utf-8"))
        assert read_csv_file(path) == "Date,Time\n"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(CsvFileError):
            read_csv_file(tmp_path / "missing.csv")
