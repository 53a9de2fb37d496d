# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from flowtrack.model.statistics import FluidTrend, StatsSummary
from flowtrack.view.view.util import format_measure
from flowtrack.view.view.views.header import header

TREND_SYMBOLS = {
    "up": "[green]↑ increasing[/green]",
    "down": "[red]↓ decreasing[/red]",
    "stable": "[cyan]→ stable[/cyan]",
}


def _format_trend(trend: Optional[FluidTrend]) -> str:
    if trend is None:
        return "[dim]not enough data[/dim]"
    return TREND_SYMBOLS[trend]


def _counts_table(title: str, counts: dict[str, int], most_common: Optional[str]) -> Table:
    counts_table = Table(title=title, box=box.SIMPLE)
    counts_table.add_column("value")
    counts_table.add_column("count", justify="right")
    for label, count in sorted(counts.items(), key=lambda item: -item[1]):
        if label == most_common:
            counts_table.add_row(f"[bold]{label}[/bold]", f"[bold]{count}[/bold]")
        else:
            counts_table.add_row(label, str(count))
    return counts_table


def stats_summary_view(summary: StatsSummary) -> None:
    """Display averages, distributions and the fluid intake trend."""
    header("stats")

    console = Console()

    averages_table = Table(box=box.SIMPLE)
    averages_table.add_column("property")
    averages_table.add_column("value", justify="right")

    averages_table.add_row("entries", str(summary["entry_count"]))
    averages_table.add_row(
        "average flow rate", f"{format_measure(summary['average_flow_rate'], 2)} mL/s"
    )
    averages_table.add_row(
        "today", f"{format_measure(summary['today_average_flow_rate'], 2)} mL/s"
    )
    averages_table.add_row(
        "last 7 days", f"{format_measure(summary['week_average_flow_rate'], 2)} mL/s"
    )
    averages_table.add_row(
        "last month",
        f"{format_measure(summary['month_average_flow_rate'], 2)} mL/s",
    )
    averages_table.add_row(
        "average volume", f"{format_measure(summary['average_volume'])} mL"
    )
    averages_table.add_row(
        "average duration", f"{format_measure(summary['average_duration'])} s"
    )
    averages_table.add_row("entries with fluid intake", str(summary["fluid_intake_count"]))
    averages_table.add_row(
        "average fluid intake",
        f"{format_measure(summary['average_fluid_intake_ml'], 0)} mL",
    )
    averages_table.add_row("fluid intake trend", _format_trend(summary["fluid_intake_trend"]))

    console.print(averages_table)

    if summary["color_counts"]:
        console.print(
            _counts_table("color", summary["color_counts"], summary["most_common_color"])
        )
    if summary["urgency_counts"]:
        console.print(
            _counts_table(
                "urgency", summary["urgency_counts"], summary["most_common_urgency"]
            )
        )
    if summary["concern_counts"]:
        console.print(
            _counts_table(
                "concerns", summary["concern_counts"], summary["most_common_concern"]
            )
        )
    if summary["fluid_type_counts"]:
        console.print(
            _counts_table(
                "fluid type",
                summary["fluid_type_counts"],
                summary["most_common_fluid_type"],
            )
        )
