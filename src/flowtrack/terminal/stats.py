# SPDX-License-Identifier: MIT

import typer

from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.entry import ENTRY_REPO
from flowtrack.service.chart import get_heatmap_grid, get_line_series, get_scatter_data
from flowtrack.service.statistics import get_stats_summary
from flowtrack.terminal.custom_typer import AliasedTyperGroup
from flowtrack.view.view.views import chart as chart_report
from flowtrack.view.view.views import statistics as statistics_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("summary, s")
def summary() -> None:
    """Averages, distributions and the fluid intake trend."""
    config = CONFIGURATION_REPO.get_config()
    statistics_report.stats_summary_view(
        get_stats_summary(ENTRY_REPO.get_all_entries(), tz=config["timezone"])
    )


@app.command("line, l")
def line() -> None:
    """Flow rate and fluid intake over time."""
    config = CONFIGURATION_REPO.get_config()
    chart_report.line_chart_view(
        get_line_series(ENTRY_REPO.get_all_entries(), config["timezone"])
    )


@app.command("heatmap, h")
def heatmap() -> None:
    """Average flow rate by weekday and hour of day."""
    config = CONFIGURATION_REPO.get_config()
    chart_report.heatmap_view(
        get_heatmap_grid(ENTRY_REPO.get_all_entries(), config["timezone"])
    )


@app.command("scatter, sc")
def scatter() -> None:
    """Flow rate against fluid intake with a trend line."""
    chart_report.scatter_view(get_scatter_data(ENTRY_REPO.get_all_entries()))
