# SPDX-License-Identifier: MIT

from flowtrack.model.entry import FlowEntry
from flowtrack.model.statistics import MonthlyGroup
from flowtrack.service.statistics import average, sort_entries_by_timestamp
from flowtrack.time import timestamp_to_datetime_optional

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

UNKNOWN_GROUP_KEY = "unknown"
UNKNOWN_GROUP_LABEL = "Unknown date"


def _build_group(key: str, label: str, entries: list[FlowEntry]) -> MonthlyGroup:
    return {
        "key": key,
        "label": label,
        "entries": entries,
        "averageFlowRate": average(entry["flowRate"] for entry in entries),
        "averageVolume": average(entry["volume"] for entry in entries),
        "averageDuration": average(entry["duration"] for entry in entries),
    }


def group_entries_by_month(
    entries: list[FlowEntry], tz: str = "local"
) -> list[MonthlyGroup]:
    """
    Bucket entries by calendar month, most recent month first.

    Entries inside a group are newest first. Entries with an unparseable
    timestamp are collected in a trailing "unknown" group.
    """
    groups: dict[str, list[FlowEntry]] = {}
    labels: dict[str, str] = {}

    for entry in sort_entries_by_timestamp(entries, newest_first=True):
        local_time = timestamp_to_datetime_optional(entry["timestamp"])
        if local_time is None:
            continue
        local_time = local_time.in_tz(tz)
        key = f"{local_time.year}-{local_time.month:02d}"
        if key not in groups:
            groups[key] = []
            labels[key] = f"{MONTH_NAMES[local_time.month - 1]} {local_time.year}"
        groups[key].append(entry)

    monthly_groups = [
        _build_group(key, labels[key], month_entries)
        for key, month_entries in groups.items()
    ]

    undated = [
        entry
        for entry in entries
        if timestamp_to_datetime_optional(entry["timestamp"]) is None
    ]
    if undated:
        monthly_groups.append(
            _build_group(UNKNOWN_GROUP_KEY, UNKNOWN_GROUP_LABEL, undated)
        )

    return monthly_groups
