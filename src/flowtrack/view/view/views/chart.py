# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.padding import Padding
from rich.text import Text

from flowtrack.model.statistics import HeatmapCell, LineSeries, ScatterData
from flowtrack.service.chart import regression_value
from flowtrack.view.view.util import bar, format_measure
from flowtrack.view.view.views.header import header

BAR_WIDTH = 30
DATE_COLUMN_WIDTH = 8

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
HOUR_LABEL_STEP = 3
HEATMAP_CELL_WIDTH = 2

SCATTER_WIDTH = 60
SCATTER_HEIGHT = 16


def line_chart_view(series: LineSeries) -> None:
    """
    Display flow rate and fluid intake over time as paired horizontal bars.

    Dates are only printed on the thinned set of labelled points.
    """
    header("flow rate and fluid intake over time")

    console = Console()
    if not series["points"]:
        console.print(Padding("No data available for chart", (1, 1)))
        return

    console.print(
        Padding(
            f"[cyan]flow rate[/cyan] axis 0 to "
            f"{format_measure(series['max_flow_rate'], 1)} mL/s   "
            f"[magenta]fluid intake[/magenta] axis 0 to "
            f"{format_measure(series['max_fluid_intake_ml'], 0)} mL",
            (1, 1),
        )
    )

    labelled = set(series["label_indices"])
    for i, point in enumerate(series["points"]):
        row = Text(" ")
        date_label = point["date_label"] if i in labelled else ""
        row.append(date_label.ljust(DATE_COLUMN_WIDTH), style="dim")

        flow_bar = bar(point["flow_rate"], series["max_flow_rate"], BAR_WIDTH)
        row.append(flow_bar.ljust(BAR_WIDTH), style="cyan")
        row.append(f" {format_measure(point['flow_rate'], 2):>6} ")

        fluid_bar = bar(
            point["fluid_intake_ml"], series["max_fluid_intake_ml"], BAR_WIDTH
        )
        row.append(fluid_bar.ljust(BAR_WIDTH), style="magenta")
        if point["fluid_intake_ml"]:
            row.append(f" {format_measure(point['fluid_intake_ml'], 0)}")
        console.print(row)


def _heatmap_symbol(cell: HeatmapCell) -> tuple[str, str]:
    if cell["count"] == 0:
        return ("·", "dim")
    intensity = cell["intensity"]
    if intensity < 0.25:
        return ("░", "green")
    elif intensity < 0.5:
        return ("▒", "green")
    elif intensity < 0.75:
        return ("▓", "green")
    return ("█", "green")


def heatmap_view(grid: list[list[HeatmapCell]]) -> None:
    """Display average flow rate by weekday (rows) and hour of day (columns)."""
    header("flow rate by day and hour")

    console = Console()

    hours_row = Text(" " * 5)
    for hour in range(len(grid[0]) if grid else 0):
        if hour % HOUR_LABEL_STEP == 0:
            hours_row.append(str(hour).ljust(HEATMAP_CELL_WIDTH * HOUR_LABEL_STEP))
    console.print()
    console.print(hours_row, style="dim")

    for weekday, cells in enumerate(grid):
        row = Text(f" {WEEKDAY_LABELS[weekday]} ")
        for cell in cells:
            symbol, style = _heatmap_symbol(cell)
            row.append(symbol.ljust(HEATMAP_CELL_WIDTH), style=style)
        console.print(row)

    console.print()
    console.print(
        Padding("[dim]· none  ░ < 5  ▒ < 10  ▓ < 15  █ 15+ mL/s[/dim]", (0, 1))
    )


def scatter_view(data: ScatterData) -> None:
    """Plot flow rate against fluid intake, recent entries brighter."""
    header("flow rate vs fluid intake")

    console = Console()
    if not data["points"]:
        console.print(Padding("No entries with fluid intake data", (1, 1)))
        return

    cells: list[list[tuple[str, str]]] = [
        [(" ", "") for _ in range(SCATTER_WIDTH)] for _ in range(SCATTER_HEIGHT)
    ]

    def to_row(flow_rate: float) -> int:
        ratio = flow_rate / data["max_flow_rate"]
        return SCATTER_HEIGHT - 1 - round(max(0.0, min(1.0, ratio)) * (SCATTER_HEIGHT - 1))

    trend_line = data["trend_line"]
    if trend_line is not None:
        for column in range(SCATTER_WIDTH):
            x = data["max_fluid_intake_ml"] * column / (SCATTER_WIDTH - 1)
            y = regression_value(trend_line, x)
            if 0 <= y <= data["max_flow_rate"]:
                cells[to_row(y)][column] = ("-", "yellow")

    for point in data["points"]:
        ratio = point["fluid_intake_ml"] / data["max_fluid_intake_ml"]
        column = round(max(0.0, min(1.0, ratio)) * (SCATTER_WIDTH - 1))
        style = "bold cyan" if point["opacity"] >= 0.65 else "cyan dim"
        cells[to_row(point["flow_rate"])][column] = ("●", style)

    console.print(
        Padding(
            f"[dim]flow rate (mL/s) up to {format_measure(data['max_flow_rate'], 1)}[/dim]",
            (1, 1, 0, 1),
        )
    )
    for cell_row in cells:
        row = Text(" │")
        for symbol, style in cell_row:
            row.append(symbol, style=style)
        console.print(row)
    console.print(Text(" └" + "─" * SCATTER_WIDTH))
    console.print(
        Padding(
            f"[dim]fluid intake (mL) up to "
            f"{format_measure(data['max_fluid_intake_ml'], 0)}[/dim]",
            (0, 2),
        )
    )

    if trend_line is not None:
        console.print(
            Padding(
                f"trend: flow rate = {trend_line['slope']:.4f} x intake "
                f"+ {trend_line['intercept']:.2f}",
                (1, 1, 0, 1),
            )
        )
    else:
        console.print(Padding("[dim]not enough data for a trend line[/dim]", (1, 1, 0, 1)))
