# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("UTC").isoformat()


def timestamp_to_datetime_optional(timestamp: str) -> Optional[pendulum.DateTime]:
    """Parse a stored entry timestamp, returning None when it is not a valid ISO date-time."""
    try:
        parsed = pendulum.parse(timestamp)
    except (ValueError, TypeError):
        return None
    if not isinstance(parsed, pendulum.DateTime):
        return None
    return parsed


def datetime_from_local_parts(
    date_str: str, time_str: str, tz: str = "local"
) -> pendulum.DateTime:
    """
    Interpret a date and a time of day in the given timezone and return UTC.

    'YYYY-MM-DD' with '(H)H:mm' or '(H)H:mm:ss' is built field by field; any
    other shape is handed to pendulum's ISO-8601 parser as '<date>T<time>'.

    Raises:
        ValueError: If the parts do not form a valid date-time
    """
    date_match = re.match(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", date_str)
    time_match = re.match(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$", time_str)
    if date_match and time_match:
        pendulum_date_time = pendulum.datetime(
            int(date_match.group(1)),
            int(date_match.group(2)),
            int(date_match.group(3)),
            int(time_match.group(1)),
            int(time_match.group(2)),
            int(time_match.group(3) or 0),
            tz=tz,
        )
    else:
        parsed = pendulum.parse(f"{date_str}T{time_str}", tz=tz)
        if not isinstance(parsed, pendulum.DateTime):
            raise ValueError(f"Not a date-time: {date_str}T{time_str}")
        pendulum_date_time = parsed
    return pendulum_date_time.in_tz("UTC")


def datetime_to_local_date_str(datetime: pendulum.DateTime, tz: str = "local") -> str:
    return datetime.in_tz(tz).format("YYYY-MM-DD")


def datetime_to_local_time_str(datetime: pendulum.DateTime, tz: str = "local") -> str:
    return datetime.in_tz(tz).format("HH:mm:ss")


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def timestamp_to_display_str(timestamp: str) -> str:
    parsed = timestamp_to_datetime_optional(timestamp)
    if parsed is None:
        return timestamp
    return datetime_to_display_local_datetime_str(parsed)
