# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.entry import ENTRY_REPO
from flowtrack.service.backup import BackupFormatError, deserialize, serialize
from flowtrack.service.csv_codec import (
    CsvFileError,
    export_entries_csv,
    import_entries_csv,
    merge_imported_entries,
    read_csv_file,
)
from flowtrack.service.mock_data import (
    delete_mock_entries,
    generate_mock_entries,
    get_default_mock_range,
    has_mock_entries,
)
from flowtrack.terminal.custom_typer import AliasedTyperGroup

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DEFAULT_EXPORT_FILE_NAME = "flow_tracker_data.csv"


@app.command("export, e")
def export(
    path: Annotated[
        Path, typer.Argument(help="Destination CSV file")
    ] = Path(DEFAULT_EXPORT_FILE_NAME),
) -> None:
    """Export all entries as CSV."""
    config = CONFIGURATION_REPO.get_config()
    console = Console()

    entries = ENTRY_REPO.get_all_entries()
    try:
        path.write_text(export_entries_csv(entries, config["timezone"]), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error: Could not write {path}: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Exported {len(entries)} entries to {path}[/green]")


@app.command("import, i", no_args_is_help=True)
def import_csv(
    path: Annotated[Path, typer.Argument(help="CSV file to import")],
) -> None:
    """Append the entries of a CSV file, in either supported layout."""
    config = CONFIGURATION_REPO.get_config()
    console = Console()

    try:
        text = read_csv_file(path)
    except CsvFileError as e:
        logger.error("%s", e)
        console.print("[red]Error processing CSV file. Please check the format.[/red]")
        raise typer.Exit(1)

    result = import_entries_csv(text, config["timezone"])
    ENTRY_REPO.replace_entries(
        merge_imported_entries(ENTRY_REPO.get_all_entries(), result["entries"])
    )

    console.print(f"[green]Imported {len(result['entries'])} entries.[/green]")
    for error in result["errors"]:
        console.print(
            f"[yellow]Skipped line {error['line_number']}: {error['message']}[/yellow]"
        )


@app.command("mock, m")
def mock(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Generate sample entries, three per day."""
    config = CONFIGURATION_REPO.get_config()
    console = Console()

    months = config["mock_data_months"]
    if not yes:
        confirm = typer.confirm(
            f"This will generate {months} months of mock data (3 entries per day). Continue?"
        )
        if not confirm:
            console.print("[cyan]Operation cancelled.[/cyan]")
            return

    start_date, end_date = get_default_mock_range(months, config["timezone"])
    mock_entries = generate_mock_entries(start_date, end_date, tz=config["timezone"])
    ENTRY_REPO.replace_entries(ENTRY_REPO.get_all_entries() + mock_entries)

    console.print(f"[green]Generated {len(mock_entries)} mock entries.[/green]")


@app.command("purge-mock, p")
def purge_mock(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Delete every generated mock entry."""
    console = Console()

    entries = ENTRY_REPO.get_all_entries()
    if not has_mock_entries(entries):
        console.print("No mock data to delete.")
        return

    if not yes:
        confirm = typer.confirm("This will delete all mock data entries. Continue?")
        if not confirm:
            console.print("[cyan]Operation cancelled.[/cyan]")
            return

    remaining = delete_mock_entries(entries)
    ENTRY_REPO.replace_entries(remaining)

    console.print(
        f"[green]Deleted {len(entries) - len(remaining)} mock entries.[/green]"
    )


@app.command("backup, b", no_args_is_help=True)
def backup(
    path: Annotated[Path, typer.Argument(help="Destination JSON file")],
) -> None:
    """Snapshot all entries to a JSON file."""
    console = Console()

    entries = ENTRY_REPO.get_all_entries()
    try:
        path.write_text(serialize(entries), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error: Could not write {path}: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Backed up {len(entries)} entries to {path}[/green]")


@app.command("restore, r", no_args_is_help=True)
def restore(
    path: Annotated[Path, typer.Argument(help="Backup JSON file")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Replace all entries with the contents of a backup."""
    console = Console()

    try:
        entries = deserialize(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: Could not read {path}: {e}[/red]")
        raise typer.Exit(1)
    except BackupFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not yes:
        console.print(
            f"[yellow]WARNING: This will replace all {len(ENTRY_REPO.get_all_entries())} "
            f"entries with {len(entries)} entries from the backup.[/yellow]"
        )
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            console.print("[cyan]Operation cancelled.[/cyan]")
            return

    ENTRY_REPO.replace_entries(entries)
    console.print(f"[green]Restored {len(entries)} entries.[/green]")
