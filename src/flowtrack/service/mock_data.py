# SPDX-License-Identifier: MIT

import logging
import random
from typing import Optional

import pendulum

from flowtrack.model.entry import FlowEntry
from flowtrack.time import datetime_to_iso_str

logger = logging.getLogger(__name__)

MOCK_NOTES = "Mock data to be removed"

MOCK_FLUID_TYPES = ["Water", "Coffee", "Tea", "Juice", "Soda"]

# Morning, afternoon and evening
MOCK_ENTRY_HOURS = [7, 13, 20]


def get_default_mock_range(
    months: int = 3, tz: str = "local"
) -> tuple[pendulum.Date, pendulum.Date]:
    today = pendulum.today(tz).date()
    return today.subtract(months=months), today


def generate_mock_entries(
    start_date: pendulum.Date,
    end_date: pendulum.Date,
    rng: Optional[random.Random] = None,
    tz: str = "local",
) -> list[FlowEntry]:
    """
    Generate three synthetic entries for every day from start_date through end_date.

    Every entry is tagged with MOCK_NOTES so it can be removed later.
    """
    if rng is None:
        rng = random.Random()

    mock_entries: list[FlowEntry] = []
    current_date = start_date
    while current_date <= end_date:
        for hour in MOCK_ENTRY_HOURS:
            entry_time = pendulum.datetime(
                current_date.year,
                current_date.month,
                current_date.day,
                hour,
                rng.randint(0, 59),
                0,
                tz=tz,
            )

            volume = rng.randint(200, 499)
            duration = rng.randint(30, 69)

            mock_entries.append(
                {
                    "timestamp": datetime_to_iso_str(entry_time),
                    "volume": volume,
                    "duration": duration,
                    "flowRate": volume / duration,
                    "notes": MOCK_NOTES,
                    "fluidIntake": {
                        "type": rng.choice(MOCK_FLUID_TYPES),
                        "amount": rng.randint(200, 499),
                        "unit": "mL",
                    },
                }
            )
        current_date = current_date.add(days=1)

    logger.info(
        "generated %d mock entries from %s to %s",
        len(mock_entries),
        start_date,
        end_date,
    )
    return mock_entries


def is_mock_entry(entry: FlowEntry) -> bool:
    return entry.get("notes") == MOCK_NOTES


def has_mock_entries(entries: list[FlowEntry]) -> bool:
    return any(is_mock_entry(entry) for entry in entries)


def delete_mock_entries(entries: list[FlowEntry]) -> list[FlowEntry]:
    return [entry for entry in entries if not is_mock_entry(entry)]
