# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from flowtrack.model.entry import FlowEntry

FluidTrend = Literal["up", "down", "stable"]


class MonthlyGroup(TypedDict):
    key: str  # "YYYY-MM", or "unknown" for unparseable timestamps
    label: str  # e.g., "January 2024"
    entries: list[FlowEntry]
    averageFlowRate: float
    averageVolume: float
    averageDuration: float


class RegressionLine(TypedDict):
    slope: float
    intercept: float


class StatsSummary(TypedDict):
    entry_count: int
    average_flow_rate: float
    average_volume: float
    average_duration: float
    week_average_flow_rate: float
    month_average_flow_rate: float
    today_average_flow_rate: float
    color_counts: dict[str, int]
    most_common_color: Optional[str]
    urgency_counts: dict[str, int]
    most_common_urgency: Optional[str]
    concern_counts: dict[str, int]
    most_common_concern: Optional[str]
    fluid_intake_count: int
    average_fluid_intake_ml: float
    fluid_type_counts: dict[str, int]
    most_common_fluid_type: Optional[str]
    fluid_intake_trend: Optional[FluidTrend]


class LinePoint(TypedDict):
    timestamp: str
    date_label: str
    x: float  # 0..1 along the time axis
    flow_rate: float
    fluid_intake_ml: float  # 0 when the entry has no fluid intake


class LineSeries(TypedDict):
    points: list[LinePoint]
    max_flow_rate: float
    max_fluid_intake_ml: float
    flow_rate_ticks: list[float]
    fluid_intake_ticks: list[float]
    label_indices: list[int]


class HeatmapCell(TypedDict):
    weekday: int  # 0 = Sunday
    hour: int
    count: int
    average_flow_rate: float
    intensity: float  # 0..1


class ScatterPoint(TypedDict):
    timestamp: str
    fluid_intake_ml: float
    flow_rate: float
    opacity: float


class ScatterData(TypedDict):
    points: list[ScatterPoint]
    max_flow_rate: float
    max_fluid_intake_ml: float
    trend_line: Optional[RegressionLine]
