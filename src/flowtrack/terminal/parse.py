# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from flowtrack.time import datetime_from_local_parts


def parse_datetime(
    datetime_param: Optional[str], tz: str = "local"
) -> Optional[pendulum.DateTime]:
    """
    Parse a user supplied date-time into UTC.

    Accepts 'YYYY-MM-DD HH:mm[:ss]', 'YYYY-MM-DDTHH:mm[:ss]', a bare
    'YYYY-MM-DD' (start of that day), a bare '(H)H:mm' (today), and the words
    now/n, today/t, yesterday/y.

    Raises:
        typer.BadParameter: If the value matches none of these shapes
    """
    if datetime_param is None:
        return None

    datetime = datetime_param.strip()

    # Full ISO date-time with an explicit offset
    if re.match(r"^\d{4}-\d{2}-\d{2}T.*(Z|[+-]\d{2}:?\d{2})$", datetime):
        try:
            parsed = pendulum.parse(datetime)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date-time: {e}")
        if not isinstance(parsed, pendulum.DateTime):
            raise typer.BadParameter(f"Invalid date-time: {datetime}")
        return parsed.in_tz("UTC")

    # Match YYYY-MM-DD format (with optional time component)
    date_time_match = re.match(r"^(\d{4}-\d{2}-\d{2})(?:[ T](.+))?$", datetime)
    if date_time_match:
        time_part = date_time_match.group(2) or "00:00"
        try:
            return datetime_from_local_parts(date_time_match.group(1), time_part, tz)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date-time: {e}")

    # Match (H)H:mm format (time only, use today's date)
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", datetime)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))

        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

        pendulum_date_time = pendulum.today(tz).set(
            hour=hour, minute=minute, second=0, microsecond=0
        )
        return pendulum_date_time.in_tz("UTC")

    if datetime == "now" or datetime == "n":
        return pendulum.now("UTC")
    if datetime == "today" or datetime == "t":
        return pendulum.today(tz).in_tz("UTC")
    if datetime == "yesterday" or datetime == "y":
        return pendulum.yesterday(tz).in_tz("UTC")
    raise typer.BadParameter("Incorrect datetime format")
