# SPDX-License-Identifier: MIT

from typing import Callable, Iterable, Optional

import pendulum

from flowtrack.model.entry import FlowEntry, FluidIntake
from flowtrack.model.options import FLUID_TYPE_OTHER
from flowtrack.model.statistics import FluidTrend, StatsSummary
from flowtrack.time import now_utc, timestamp_to_datetime_optional

ML_PER_OZ = 29.5735

TREND_MIN_ENTRIES = 4
TREND_THRESHOLD_PERCENT = 5


def average(values: Iterable[float]) -> float:
    """Arithmetic mean, 0 for an empty input."""
    values = list(values)
    if len(values) == 0:
        return 0
    return sum(values) / len(values)


def fluid_intake_to_ml(fluid_intake: FluidIntake) -> float:
    if fluid_intake["unit"] == "oz":
        return fluid_intake["amount"] * ML_PER_OZ
    return fluid_intake["amount"]


def entry_fluid_intake_ml(entry: FlowEntry) -> float:
    """Normalized fluid intake of an entry in mL, 0 when it has none."""
    fluid_intake = entry.get("fluidIntake")
    if fluid_intake is None:
        return 0
    return fluid_intake_to_ml(fluid_intake)


def entries_with_fluid_intake(entries: list[FlowEntry]) -> list[FlowEntry]:
    return [entry for entry in entries if entry.get("fluidIntake")]


def sort_entries_by_timestamp(
    entries: list[FlowEntry], newest_first: bool = False
) -> list[FlowEntry]:
    """
    Sort entries by their parsed timestamp.

    Entries whose timestamp cannot be parsed are dropped.
    """
    dated: list[tuple[pendulum.DateTime, FlowEntry]] = []
    for entry in entries:
        parsed = timestamp_to_datetime_optional(entry["timestamp"])
        if parsed is not None:
            dated.append((parsed, entry))
    dated.sort(key=lambda pair: pair[0], reverse=newest_first)
    return [entry for _, entry in dated]


# ─────────────────────────────────────────────────────────────
# Averages
# ─────────────────────────────────────────────────────────────


def entries_in_window(
    entries: list[FlowEntry],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> list[FlowEntry]:
    """Entries whose timestamp falls within [start, end]."""
    window_entries = []
    for entry in entries:
        parsed = timestamp_to_datetime_optional(entry["timestamp"])
        if parsed is not None and start <= parsed <= end:
            window_entries.append(entry)
    return window_entries


def average_flow_rate(entries: list[FlowEntry]) -> float:
    return average(entry["flowRate"] for entry in entries)


def last_week_average_flow_rate(
    entries: list[FlowEntry], now: Optional[pendulum.DateTime] = None
) -> float:
    if now is None:
        now = now_utc()
    return average_flow_rate(entries_in_window(entries, now.subtract(days=7), now))


def last_month_average_flow_rate(
    entries: list[FlowEntry], now: Optional[pendulum.DateTime] = None
) -> float:
    if now is None:
        now = now_utc()
    return average_flow_rate(entries_in_window(entries, now.subtract(months=1), now))


def today_average_flow_rate(
    entries: list[FlowEntry],
    now: Optional[pendulum.DateTime] = None,
    tz: str = "local",
) -> float:
    if now is None:
        now = now_utc()
    midnight = now.in_tz(tz).start_of("day")
    return average_flow_rate(entries_in_window(entries, midnight, now))


# ─────────────────────────────────────────────────────────────
# Distributions
# ─────────────────────────────────────────────────────────────


def count_labels(labels: Iterable[Optional[str]]) -> dict[str, int]:
    """Count labels in first-seen order, ignoring empty ones."""
    counts: dict[str, int] = {}
    for label in labels:
        if label:
            counts[label] = counts.get(label, 0) + 1
    return counts


def most_common(counts: dict[str, int]) -> Optional[str]:
    """The label with the strictly highest count; the first seen wins a tie."""
    most_common_label: Optional[str] = None
    max_count = 0
    for label, count in counts.items():
        if count > max_count:
            most_common_label = label
            max_count = count
    return most_common_label


def fluid_type_label(fluid_intake: FluidIntake) -> str:
    custom_type = fluid_intake.get("customType")
    if fluid_intake.get("type") == FLUID_TYPE_OTHER and custom_type:
        return custom_type
    return fluid_intake.get("type") or ""


def color_distribution(entries: list[FlowEntry]) -> dict[str, int]:
    return count_labels(entry.get("color") for entry in entries)


def urgency_distribution(entries: list[FlowEntry]) -> dict[str, int]:
    return count_labels(entry.get("urgency") for entry in entries)


def concern_distribution(entries: list[FlowEntry]) -> dict[str, int]:
    return count_labels(
        concern for entry in entries for concern in entry.get("concerns") or []
    )


def fluid_type_distribution(entries: list[FlowEntry]) -> dict[str, int]:
    return count_labels(
        fluid_type_label(entry["fluidIntake"])
        for entry in entries_with_fluid_intake(entries)
        if entry["fluidIntake"].get("type")
    )


# ─────────────────────────────────────────────────────────────
# Fluid intake
# ─────────────────────────────────────────────────────────────


def average_fluid_intake_ml(entries: list[FlowEntry]) -> float:
    return average(
        entry_fluid_intake_ml(entry) for entry in entries_with_fluid_intake(entries)
    )


def classify_change(first_average: float, second_average: float) -> FluidTrend:
    if first_average == 0:
        return "stable"

    percent_change = ((second_average - first_average) / first_average) * 100
    if percent_change > TREND_THRESHOLD_PERCENT:
        return "up"
    if percent_change < -TREND_THRESHOLD_PERCENT:
        return "down"
    return "stable"


def fluid_intake_trend(entries: list[FlowEntry]) -> Optional[FluidTrend]:
    """
    Classify fluid intake over time as up, down or stable.

    Entries with fluid intake are ordered by time and split at n // 2; the
    normalized averages of the two halves are compared against a 5% band.
    Returns None when fewer than four entries carry fluid intake.
    """
    with_intake = entries_with_fluid_intake(entries)
    if len(with_intake) < TREND_MIN_ENTRIES:
        return None

    sorted_entries = sort_entries_by_timestamp(with_intake)
    if len(sorted_entries) < TREND_MIN_ENTRIES:
        return None

    half_length = len(sorted_entries) // 2
    first_half = sorted_entries[:half_length]
    second_half = sorted_entries[half_length:]

    first_average = average(entry_fluid_intake_ml(entry) for entry in first_half)
    second_average = average(entry_fluid_intake_ml(entry) for entry in second_half)

    return classify_change(first_average, second_average)


# ─────────────────────────────────────────────────────────────
# Summary
# ─────────────────────────────────────────────────────────────


def _distribution_with_most_common(
    distribution: Callable[[list[FlowEntry]], dict[str, int]],
    entries: list[FlowEntry],
) -> tuple[dict[str, int], Optional[str]]:
    counts = distribution(entries)
    return counts, most_common(counts)


def get_stats_summary(
    entries: list[FlowEntry],
    now: Optional[pendulum.DateTime] = None,
    tz: str = "local",
) -> StatsSummary:
    if now is None:
        now = now_utc()

    color_counts, most_common_color = _distribution_with_most_common(
        color_distribution, entries
    )
    urgency_counts, most_common_urgency = _distribution_with_most_common(
        urgency_distribution, entries
    )
    concern_counts, most_common_concern = _distribution_with_most_common(
        concern_distribution, entries
    )
    fluid_type_counts, most_common_fluid_type = _distribution_with_most_common(
        fluid_type_distribution, entries
    )

    return {
        "entry_count": len(entries),
        "average_flow_rate": average_flow_rate(entries),
        "average_volume": average(entry["volume"] for entry in entries),
        "average_duration": average(entry["duration"] for entry in entries),
        "week_average_flow_rate": last_week_average_flow_rate(entries, now),
        "month_average_flow_rate": last_month_average_flow_rate(entries, now),
        "today_average_flow_rate": today_average_flow_rate(entries, now, tz),
        "color_counts": color_counts,
        "most_common_color": most_common_color,
        "urgency_counts": urgency_counts,
        "most_common_urgency": most_common_urgency,
        "concern_counts": concern_counts,
        "most_common_concern": most_common_concern,
        "fluid_intake_count": len(entries_with_fluid_intake(entries)),
        "average_fluid_intake_ml": average_fluid_intake_ml(entries),
        "fluid_type_counts": fluid_type_counts,
        "most_common_fluid_type": most_common_fluid_type,
        "fluid_intake_trend": fluid_intake_trend(entries),
    }
