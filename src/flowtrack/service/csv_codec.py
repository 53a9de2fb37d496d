# SPDX-License-Identifier: MIT

import logging
import math
import re
from pathlib import Path
from typing import Optional, TypedDict

import pendulum

from flowtrack.model.entry import FlowEntry, FluidIntake
from flowtrack.time import (
    datetime_from_local_parts,
    datetime_to_iso_str,
    datetime_to_local_date_str,
    datetime_to_local_time_str,
    now_utc,
    timestamp_to_datetime_optional,
)

logger = logging.getLogger(__name__)

CSV_HEADER = (
    "Date,Time,Volume (mL),Duration (s),Flow Rate (mL/s),Color,Urgency,Concerns,"
    "Notes,Fluid Type,Fluid Custom Type,Fluid Amount,Fluid Unit"
)

CONCERNS_SEPARATOR = "; "

# Column positions of the hand-written "Date,Time,Duration (s),Volume (ml),Rate (ml/s)"
# layout, used when the header does not name a column
LEGACY_DURATION_COLUMN = 2
LEGACY_VOLUME_COLUMN = 3
LEGACY_RATE_COLUMN = 4

_FLOAT_PREFIX = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TWELVE_HOUR_TIME = re.compile(r"(\d+):(\d+)\s*([AP]M)")


class CsvFileError(Exception):
    """Raised when a CSV file cannot be read as a whole."""

    pass


class LineError(TypedDict):
    line_number: int  # 1-based, the header is line 1
    line: str
    message: str


class ImportResult(TypedDict):
    entries: list[FlowEntry]
    errors: list[LineError]


class _ColumnMap(TypedDict):
    volume: int
    duration: int
    flow_rate: int
    color: Optional[int]
    urgency: Optional[int]
    concerns: Optional[int]
    notes: Optional[int]
    fluid_type: Optional[int]
    fluid_custom_type: Optional[int]
    fluid_amount: Optional[int]
    fluid_unit: Optional[int]


# ─────────────────────────────────────────────────────────────
# Export
# ─────────────────────────────────────────────────────────────


def format_number(value: float) -> str:
    """Render a number the way it is stored, without rounding."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def quote_field(value: str) -> str:
    """Quote a text field, flattening line breaks so a row stays on one line."""
    value = _LINE_BREAK.sub(" ", value)
    return '"' + value.replace('"', '""') + '"'


def entry_to_csv_row(entry: FlowEntry, tz: str = "local") -> str:
    parsed = timestamp_to_datetime_optional(entry["timestamp"])
    if parsed is not None:
        date_str = datetime_to_local_date_str(parsed, tz)
        time_str = datetime_to_local_time_str(parsed, tz)
    else:
        date_str = entry["timestamp"]
        time_str = ""

    fluid_intake = entry.get("fluidIntake")
    fluid_type = ""
    fluid_custom_type = ""
    fluid_amount = ""
    fluid_unit = ""
    if fluid_intake is not None:
        fluid_type = fluid_intake.get("type") or ""
        fluid_custom_type = fluid_intake.get("customType") or ""
        fluid_amount = format_number(fluid_intake["amount"])
        fluid_unit = fluid_intake.get("unit") or ""

    fields = [
        date_str,
        time_str,
        format_number(entry["volume"]),
        format_number(entry["duration"]),
        format_number(entry["flowRate"]),
        entry.get("color") or "",
        entry.get("urgency") or "",
        quote_field(CONCERNS_SEPARATOR.join(entry.get("concerns") or [])),
        quote_field(entry.get("notes") or ""),
        quote_field(fluid_type),
        quote_field(fluid_custom_type),
        quote_field(fluid_amount),
        quote_field(fluid_unit),
    ]
    return ",".join(fields)


def export_entries_csv(entries: list[FlowEntry], tz: str = "local") -> str:
    """
    Serialize entries to CSV text with the fixed export header.

    Rows follow the order of the given list; no entry is skipped.
    """
    rows = [entry_to_csv_row(entry, tz) for entry in entries]
    return CSV_HEADER + "\n" + "\n".join(rows)


# ─────────────────────────────────────────────────────────────
# Import
# ─────────────────────────────────────────────────────────────


def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into fields.

    Inside a quoted field a doubled quote is a literal quote and a comma is
    kept. An unmatched quote leaves the rest of the line quoted.
    """
    result: list[str] = []
    current = ""
    in_quotes = False

    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current += '"'
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            result.append(current)
            current = ""
        else:
            current += char
        i += 1

    result.append(current)
    return result


def parse_float(text: Optional[str]) -> float:
    """
    Parse the leading decimal number of a string.

    Trailing garbage is ignored ("12 mL" is 12.0); text without a leading
    number gives NaN instead of raising.
    """
    if text is None:
        return math.nan
    match = _FLOAT_PREFIX.match(text.strip())
    if match is None:
        return math.nan
    return float(match.group(0).replace("Infinity", "inf"))


def is_new_format_header(header: str) -> bool:
    lowered = header.lower()
    return "date" in lowered and "time" in lowered


def convert_to_24_hour(time_str: str) -> str:
    """Convert 'H:MM AM/PM' to 'HH:MM'; other strings are returned unchanged."""
    if "AM" not in time_str and "PM" not in time_str:
        return time_str

    match = _TWELVE_HOUR_TIME.search(time_str)
    if match is None:
        return time_str

    hours = int(match.group(1))
    minutes = match.group(2)
    meridiem = match.group(3)

    if meridiem == "PM" and hours < 12:
        hours += 12
    if meridiem == "AM" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes}"


def parse_import_timestamp(date_str: str, time_str: str, tz: str = "local") -> str:
    """
    Build a UTC ISO timestamp from the Date and Time cells of a row.

    Dates are MM/DD/YY or MM/DD/YYYY; anything not slash-separated is tried
    as an ISO date (the layout written by export).

    Raises:
        ValueError: If the cells do not form a valid date-time
    """
    date_parts = date_str.split("/")
    if len(date_parts) == 3:
        month, day, year = date_parts
        if len(year) == 2:
            year = "20" + year
        formatted_date = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
        formatted_time = convert_to_24_hour(time_str)
        timestamp = datetime_from_local_parts(formatted_date, formatted_time, tz)
    else:
        timestamp = datetime_from_local_parts(date_str, time_str, tz)
    return datetime_to_iso_str(timestamp)


def _find_column(
    header_cells: list[str], prefixes: tuple[str, ...], exact: bool = False
) -> Optional[int]:
    for index, cell in enumerate(header_cells):
        for prefix in prefixes:
            if (exact and cell == prefix) or (not exact and cell.startswith(prefix)):
                return index
    return None


def _map_columns(header: str) -> _ColumnMap:
    header_cells = [cell.strip().lower() for cell in parse_csv_line(header)]

    volume = _find_column(header_cells, ("volume",))
    duration = _find_column(header_cells, ("duration",))
    flow_rate = _find_column(header_cells, ("flow rate", "rate"))

    return {
        "volume": volume if volume is not None else LEGACY_VOLUME_COLUMN,
        "duration": duration if duration is not None else LEGACY_DURATION_COLUMN,
        "flow_rate": flow_rate if flow_rate is not None else LEGACY_RATE_COLUMN,
        "color": _find_column(header_cells, ("color",), exact=True),
        "urgency": _find_column(header_cells, ("urgency",), exact=True),
        "concerns": _find_column(header_cells, ("concerns",), exact=True),
        "notes": _find_column(header_cells, ("notes",), exact=True),
        "fluid_type": _find_column(header_cells, ("fluid type",), exact=True),
        "fluid_custom_type": _find_column(
            header_cells, ("fluid custom type",), exact=True
        ),
        "fluid_amount": _find_column(header_cells, ("fluid amount",), exact=True),
        "fluid_unit": _find_column(header_cells, ("fluid unit",), exact=True),
    }


def _field(fields: list[str], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(fields):
        return None
    return fields[index]


def _text_field(fields: list[str], index: Optional[int]) -> Optional[str]:
    value = _field(fields, index)
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def _parse_new_format_fields(
    fields: list[str],
    columns: _ColumnMap,
    line_number: int,
    tz: str,
    now: Optional[pendulum.DateTime],
) -> FlowEntry:
    if len(fields) < 2:
        raise ValueError("expected at least a date and a time column")

    date_str = fields[0].replace('"', "").strip()
    time_str = fields[1].replace('"', "").strip()

    try:
        timestamp = parse_import_timestamp(date_str, time_str, tz)
    except ValueError as e:
        logger.warning(
            "Error parsing date/time %r %r on line %d, using the current time: %s",
            date_str,
            time_str,
            line_number,
            e,
        )
        timestamp = datetime_to_iso_str(now if now is not None else now_utc())

    entry: FlowEntry = {
        "timestamp": timestamp,
        "volume": parse_float(_field(fields, columns["volume"])),
        "duration": parse_float(_field(fields, columns["duration"])),
        "flowRate": parse_float(_field(fields, columns["flow_rate"])),
    }

    color = _text_field(fields, columns["color"])
    if color is not None:
        entry["color"] = color
    urgency = _text_field(fields, columns["urgency"])
    if urgency is not None:
        entry["urgency"] = urgency
    concerns = _text_field(fields, columns["concerns"])
    if concerns is not None:
        concern_list = [c.strip() for c in concerns.split(";") if c.strip()]
        if concern_list:
            entry["concerns"] = concern_list
    notes = _field(fields, columns["notes"])
    if notes:
        entry["notes"] = notes

    fluid_type = _text_field(fields, columns["fluid_type"])
    if fluid_type is not None:
        fluid_intake: FluidIntake = {
            "type": fluid_type,
            "amount": parse_float(_field(fields, columns["fluid_amount"])),
            "unit": "oz" if _text_field(fields, columns["fluid_unit"]) == "oz" else "mL",
        }
        custom_type = _text_field(fields, columns["fluid_custom_type"])
        if custom_type is not None:
            fluid_intake["customType"] = custom_type
        entry["fluidIntake"] = fluid_intake

    return entry


def _parse_old_format_fields(fields: list[str]) -> FlowEntry:
    return {
        "timestamp": fields[0],
        "volume": parse_float(_field(fields, 1)),
        "duration": parse_float(_field(fields, 2)),
        "flowRate": parse_float(_field(fields, 3)),
    }


def import_entries_csv(
    text: str,
    tz: str = "local",
    now: Optional[pendulum.DateTime] = None,
) -> ImportResult:
    """
    Parse CSV text into new entries.

    The header decides the layout: one mentioning both "date" and "time" is
    read as Date/Time columns, anything else as timestamp,volume,duration,flowRate.
    Lines that fail are skipped and reported in the result's errors; a bad
    date or time only falls back to the current time.
    """
    lines = text.split("\n")
    header = lines[0].strip()
    new_format = is_new_format_header(header)
    columns = _map_columns(header) if new_format else None

    logger.info(
        "importing %d line(s) using the %s layout",
        len(lines) - 1,
        "date/time" if new_format else "timestamp",
    )

    entries: list[FlowEntry] = []
    errors: list[LineError] = []

    for index in range(1, len(lines)):
        line = lines[index].strip()
        if not line:
            continue
        line_number = index + 1

        try:
            fields = parse_csv_line(line)
            if columns is not None:
                entry = _parse_new_format_fields(fields, columns, line_number, tz, now)
            else:
                entry = _parse_old_format_fields(fields)
        except (ValueError, IndexError, KeyError, TypeError) as e:
            logger.warning("Error parsing CSV line %d %r: %s", line_number, line, e)
            errors.append({"line_number": line_number, "line": line, "message": str(e)})
            continue

        entries.append(entry)

    return {"entries": entries, "errors": errors}


def merge_imported_entries(
    existing: list[FlowEntry], imported: list[FlowEntry]
) -> list[FlowEntry]:
    """Append imported entries; the existing list is returned as-is when nothing was imported."""
    if len(imported) == 0:
        return existing
    return existing + imported


def read_csv_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CsvFileError(f"Error processing CSV file {path}: {e}")
