# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console

from flowtrack.model.entry import FluidIntake
from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.entry import ENTRY_REPO
from flowtrack.service.entry import (
    EntryValidationError,
    add_entry,
    build_fluid_intake,
    create_flow_entry,
    delete_entries_by_timestamp,
)
from flowtrack.service.grouping import group_entries_by_month
from flowtrack.terminal.completion import (
    complete_color,
    complete_concern,
    complete_drink_size,
    complete_fluid_type,
    complete_fluid_unit,
    complete_urgency,
)
from flowtrack.terminal.custom_typer import AliasedTyperGroup
from flowtrack.terminal.parse import parse_datetime
from flowtrack.view.view.views import entry as entry_report

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    volume: Annotated[float, typer.Argument(help="Voided volume in mL")],
    duration: Annotated[float, typer.Argument(help="Duration in seconds")],
    timestamp: Annotated[
        Optional[str],
        typer.Option(
            "--timestamp",
            "-t",
            help="YYYY-MM-DD HH:mm, HH:mm, now, today or yesterday (default: now)",
        ),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", autocompletion=complete_color),
    ] = None,
    urgency: Annotated[
        Optional[str],
        typer.Option("--urgency", "-u", autocompletion=complete_urgency),
    ] = None,
    concerns: Annotated[
        Optional[list[str]],
        typer.Option(
            "--concern",
            "-cn",
            help="accepts multiple concern options",
            autocompletion=complete_concern,
        ),
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
    fluid_type: Annotated[
        Optional[str],
        typer.Option(
            "--fluid-type",
            "-ft",
            help="What was drunk before this entry",
            autocompletion=complete_fluid_type,
        ),
    ] = None,
    fluid_custom_type: Annotated[
        Optional[str],
        typer.Option("--fluid-custom-type", help="Drink name when the type is Other"),
    ] = None,
    fluid_amount: Annotated[
        Optional[float],
        typer.Option("--fluid-amount", "-fa", help="Amount drunk in --fluid-unit"),
    ] = None,
    fluid_size: Annotated[
        Optional[str],
        typer.Option(
            "--fluid-size",
            "-fs",
            help="Common drink size instead of an amount",
            autocompletion=complete_drink_size,
        ),
    ] = None,
    fluid_unit: Annotated[
        Optional[str],
        typer.Option(
            "--fluid-unit",
            "-fu",
            help="oz or mL (default from configuration)",
            autocompletion=complete_fluid_unit,
        ),
    ] = None,
) -> None:
    """Record a new flow measurement."""
    config = CONFIGURATION_REPO.get_config()

    fluid_intake: Optional[FluidIntake] = None
    try:
        if fluid_type is not None:
            fluid_intake = build_fluid_intake(
                fluid_type,
                fluid_unit or config["default_fluid_unit"],
                amount=fluid_amount,
                size=fluid_size,
                custom_type=fluid_custom_type,
            )
        elif fluid_amount is not None or fluid_size is not None:
            raise EntryValidationError("--fluid-type is required with a fluid amount")

        entry = create_flow_entry(
            volume,
            duration,
            timestamp=parse_datetime(timestamp, config["timezone"]),
            color=color,
            urgency=urgency,
            concerns=list(dict.fromkeys(concerns)) if concerns else None,
            notes=notes,
            fluid_intake=fluid_intake,
            notes_max_length=config["notes_max_length"],
        )
    except EntryValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    ENTRY_REPO.replace_entries(add_entry(ENTRY_REPO.get_all_entries(), entry))
    logger.info("added entry %s", entry["timestamp"])

    entry_report.single_entry_view(entry)


@app.command("delete, d", no_args_is_help=True)
def delete(
    timestamp: Annotated[
        str, typer.Argument(help="Stored timestamp of the entry, as shown by list")
    ],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Delete the entry recorded at the given timestamp."""
    console = Console()

    entries = ENTRY_REPO.get_all_entries()
    remaining = delete_entries_by_timestamp(entries, timestamp)
    if len(remaining) == len(entries):
        console.print(f"[red]Error: No entry with timestamp '{timestamp}'[/red]")
        raise typer.Exit(1)

    if not yes:
        confirm = typer.confirm("Are you sure you want to delete this entry?")
        if not confirm:
            console.print("[cyan]Operation cancelled.[/cyan]")
            return

    ENTRY_REPO.replace_entries(remaining)
    console.print(f"[green]Deleted {len(entries) - len(remaining)} entry.[/green]")


@app.command("list, l")
def list_entries() -> None:
    """Show all entries grouped by month, newest first."""
    config = CONFIGURATION_REPO.get_config()

    groups = group_entries_by_month(ENTRY_REPO.get_all_entries(), config["timezone"])
    entry_report.monthly_entries_view(groups)
