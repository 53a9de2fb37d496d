# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table

from flowtrack.model.entry import FlowEntry
from flowtrack.model.statistics import MonthlyGroup
from flowtrack.time import timestamp_to_display_str
from flowtrack.view.view.util import (
    color_style,
    format_concerns,
    format_fluid_intake,
    format_measure,
)
from flowtrack.view.view.views.header import header


def _entries_table(entries: list[FlowEntry]) -> Table:
    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("time")
    entries_table.add_column("volume (mL)", justify="right")
    entries_table.add_column("duration (s)", justify="right")
    entries_table.add_column("flow rate (mL/s)", justify="right")
    entries_table.add_column("color")
    entries_table.add_column("urgency")
    entries_table.add_column("concerns")
    entries_table.add_column("fluid intake")
    entries_table.add_column("notes", overflow="fold")
    entries_table.add_column("timestamp", style="dim")

    for entry in entries:
        color = entry.get("color")
        style = color_style(color)
        entries_table.add_row(
            timestamp_to_display_str(entry["timestamp"]),
            format_measure(entry["volume"]),
            format_measure(entry["duration"]),
            format_measure(entry["flowRate"], 2),
            f"[{style}]{color}[/{style}]" if style else (color or ""),
            entry.get("urgency") or "",
            format_concerns(entry.get("concerns")),
            format_fluid_intake(entry.get("fluidIntake")),
            entry.get("notes") or "",
            entry["timestamp"],
        )
    return entries_table


def monthly_entries_view(groups: list[MonthlyGroup]) -> None:
    """Display entries grouped by month, most recent month first."""
    header("entries")

    console = Console()
    if not groups:
        console.print(Padding("No entries recorded yet", (1, 1)))
        return

    for group in groups:
        console.print()
        console.print(
            Padding(
                f"[bold]{group['label']}[/bold]  "
                f"[dim]{len(group['entries'])} entries, "
                f"avg {format_measure(group['averageFlowRate'], 2)} mL/s, "
                f"avg {format_measure(group['averageVolume'])} mL, "
                f"avg {format_measure(group['averageDuration'])} s[/dim]",
                (0, 1),
            )
        )
        console.print(_entries_table(group["entries"]))


def single_entry_view(entry: FlowEntry) -> None:
    """Display detailed view of a single entry."""
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("timestamp", entry["timestamp"])
    entry_table.add_row("time", timestamp_to_display_str(entry["timestamp"]))
    entry_table.add_row("volume", f"{format_measure(entry['volume'])} mL")
    entry_table.add_row("duration", f"{format_measure(entry['duration'])} s")
    entry_table.add_row("flow rate", f"{format_measure(entry['flowRate'], 2)} mL/s")
    entry_table.add_row("color", entry.get("color") or "")
    entry_table.add_row("urgency", entry.get("urgency") or "")
    entry_table.add_row("concerns", format_concerns(entry.get("concerns")))
    entry_table.add_row("fluid intake", format_fluid_intake(entry.get("fluidIntake")))
    entry_table.add_row("notes", entry.get("notes") or "")

    console = Console()
    console.print(entry_table)
