# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum

from flowtrack.model.entry import FlowEntry
from flowtrack.model.statistics import (
    HeatmapCell,
    LinePoint,
    LineSeries,
    RegressionLine,
    ScatterData,
    ScatterPoint,
)
from flowtrack.service.statistics import (
    average,
    entries_with_fluid_intake,
    entry_fluid_intake_ml,
    sort_entries_by_timestamp,
)
from flowtrack.time import now_utc, timestamp_to_datetime_optional

AXIS_HEADROOM = 1.1
AXIS_TICK_COUNT = 5
MAX_DATE_LABELS = 10
DEFAULT_MAX_FLUID_INTAKE_ML = 1000.0
DEFAULT_MAX_FLOW_RATE = 1.0

HEATMAP_DAYS = 7
HEATMAP_HOURS = 24
# Average flow rate (mL/s) rendered at full intensity
HEATMAP_FULL_INTENSITY_FLOW_RATE = 20.0

SCATTER_MIN_OPACITY = 0.3
SCATTER_FADE_DAYS = 30
REGRESSION_MIN_POINTS = 3


def scale_max(values: list[float], default: float) -> float:
    """Largest finite value plus axis headroom, or the default when that is 0."""
    finite_values = [value for value in values if math.isfinite(value)]
    if not finite_values:
        return default
    maximum = max(finite_values) * AXIS_HEADROOM
    return maximum if maximum else default


def axis_ticks(maximum: float) -> list[float]:
    return [maximum * i / AXIS_TICK_COUNT for i in range(AXIS_TICK_COUNT + 1)]


def label_indices(count: int) -> list[int]:
    """Indices of the points that get an x-axis label, thinned to about ten."""
    if count > MAX_DATE_LABELS:
        step = math.ceil(count / MAX_DATE_LABELS)
        return list(range(0, count, step))
    return list(range(count))


def get_line_series(entries: list[FlowEntry], tz: str = "local") -> LineSeries:
    """
    Flow rate and fluid intake over time, oldest first.

    Each point carries its relative position on the time axis; a single point
    sits in the middle.
    """
    sorted_entries = sort_entries_by_timestamp(entries)
    count = len(sorted_entries)

    points: list[LinePoint] = []
    for i, entry in enumerate(sorted_entries):
        parsed = timestamp_to_datetime_optional(entry["timestamp"])
        date_label = parsed.in_tz(tz).format("MMM D") if parsed is not None else ""
        points.append(
            {
                "timestamp": entry["timestamp"],
                "date_label": date_label,
                "x": i / (count - 1) if count > 1 else 0.5,
                "flow_rate": entry["flowRate"],
                "fluid_intake_ml": entry_fluid_intake_ml(entry),
            }
        )

    max_flow_rate = scale_max(
        [point["flow_rate"] for point in points], DEFAULT_MAX_FLOW_RATE
    )
    max_fluid_intake_ml = scale_max(
        [point["fluid_intake_ml"] for point in points], DEFAULT_MAX_FLUID_INTAKE_ML
    )

    return {
        "points": points,
        "max_flow_rate": max_flow_rate,
        "max_fluid_intake_ml": max_fluid_intake_ml,
        "flow_rate_ticks": axis_ticks(max_flow_rate),
        "fluid_intake_ticks": axis_ticks(max_fluid_intake_ml),
        "label_indices": label_indices(count),
    }


def get_heatmap_grid(
    entries: list[FlowEntry], tz: str = "local"
) -> list[list[HeatmapCell]]:
    """
    Average flow rate by weekday and hour of day.

    The grid is indexed [weekday][hour] with weekday 0 being Sunday.
    """
    values: list[list[list[float]]] = [
        [[] for _ in range(HEATMAP_HOURS)] for _ in range(HEATMAP_DAYS)
    ]

    for entry in entries:
        parsed = timestamp_to_datetime_optional(entry["timestamp"])
        if parsed is None:
            continue
        local_time = parsed.in_tz(tz)
        weekday = local_time.isoweekday() % 7
        values[weekday][local_time.hour].append(entry["flowRate"])

    grid: list[list[HeatmapCell]] = []
    for weekday in range(HEATMAP_DAYS):
        row: list[HeatmapCell] = []
        for hour in range(HEATMAP_HOURS):
            cell_values = values[weekday][hour]
            average_flow_rate = average(cell_values)
            intensity = 0.0
            if cell_values and math.isfinite(average_flow_rate):
                intensity = max(
                    0.0, min(1.0, average_flow_rate / HEATMAP_FULL_INTENSITY_FLOW_RATE)
                )
            row.append(
                {
                    "weekday": weekday,
                    "hour": hour,
                    "count": len(cell_values),
                    "average_flow_rate": average_flow_rate,
                    "intensity": intensity,
                }
            )
        grid.append(row)

    return grid


def linear_regression(points: list[tuple[float, float]]) -> Optional[RegressionLine]:
    """
    Ordinary least squares fit of y on x.

    Returns None with fewer than three points or when every x is equal.
    """
    n = len(points)
    if n < REGRESSION_MIN_POINTS:
        return None

    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_x2 = sum(x * x for x, _ in points)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0 or not math.isfinite(denominator):
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return {"slope": slope, "intercept": intercept}


def regression_value(line: RegressionLine, x: float) -> float:
    return line["slope"] * x + line["intercept"]


def _recency_opacity(timestamp: str, now: pendulum.DateTime) -> float:
    parsed = timestamp_to_datetime_optional(timestamp)
    if parsed is None:
        return SCATTER_MIN_OPACITY
    days_old = (now - parsed).total_seconds() / 86400
    return max(SCATTER_MIN_OPACITY, 1 - days_old / SCATTER_FADE_DAYS)


def get_scatter_data(
    entries: list[FlowEntry], now: Optional[pendulum.DateTime] = None
) -> ScatterData:
    """Flow rate against normalized fluid intake, with a least squares trend line."""
    if now is None:
        now = now_utc()

    points: list[ScatterPoint] = [
        {
            "timestamp": entry["timestamp"],
            "fluid_intake_ml": entry_fluid_intake_ml(entry),
            "flow_rate": entry["flowRate"],
            "opacity": min(1.0, _recency_opacity(entry["timestamp"], now)),
        }
        for entry in entries_with_fluid_intake(entries)
    ]

    return {
        "points": points,
        "max_flow_rate": scale_max(
            [point["flow_rate"] for point in points], DEFAULT_MAX_FLOW_RATE
        ),
        "max_fluid_intake_ml": scale_max(
            [point["fluid_intake_ml"] for point in points],
            DEFAULT_MAX_FLUID_INTAKE_ML,
        ),
        "trend_line": linear_regression(
            [(point["fluid_intake_ml"], point["flow_rate"]) for point in points]
        ),
    }
