# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from flowtrack import configuration
from flowtrack.model.options import FLUID_UNITS
from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.preference import PREFERENCE_REPO
from flowtrack.terminal.completion import complete_fluid_unit
from flowtrack.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("timezone", config["timezone"])
    table.add_row("notes_max_length", str(config["notes_max_length"]))
    table.add_row("default_fluid_unit", config["default_fluid_unit"])
    table.add_row("mock_data_months", str(config["mock_data_months"]))
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (platform default)",
    )
    table.add_row(
        "dark_mode",
        "✓ Enabled" if PREFERENCE_REPO.dark_mode else "✗ Disabled",
    )
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_configuration_table())
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")
    console.print(f"Data directory: {configuration.DATA_PATH}")

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            help="Timezone for dates in views and CSV files (e.g., local, Europe/Brussels)",
        ),
    ] = None,
    notes_max_length: Annotated[
        Optional[int],
        typer.Option("--notes-max-length", help="Maximum length of entry notes"),
    ] = None,
    default_fluid_unit: Annotated[
        Optional[str],
        typer.Option(
            "--default-fluid-unit",
            help="oz or mL",
            autocompletion=complete_fluid_unit,
        ),
    ] = None,
    mock_data_months: Annotated[
        Optional[int],
        typer.Option("--mock-data-months", help="Months of generated mock data"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the platform data directory)",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    console = Console()

    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        console.print(
            f"[red]Error: Invalid log level: {log_level}. "
            f"Valid options: {', '.join(LOG_LEVELS)}[/red]"
        )
        raise typer.Exit(1)
    if default_fluid_unit is not None and default_fluid_unit not in FLUID_UNITS:
        console.print(
            f"[red]Error: Invalid fluid unit: {default_fluid_unit}. "
            f"Valid options: {', '.join(FLUID_UNITS)}[/red]"
        )
        raise typer.Exit(1)
    if timezone is not None and timezone != "local":
        try:
            pendulum.timezone(timezone)
        except (ValueError, KeyError):
            console.print(f"[red]Error: Unknown timezone: {timezone}[/red]")
            raise typer.Exit(1)
    if notes_max_length is not None and notes_max_length < 1:
        console.print("[red]Error: notes_max_length must be at least 1[/red]")
        raise typer.Exit(1)
    if mock_data_months is not None and mock_data_months < 1:
        console.print("[red]Error: mock_data_months must be at least 1[/red]")
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        log_level=log_level,
        timezone=timezone,
        notes_max_length=notes_max_length,
        default_fluid_unit=default_fluid_unit,
        mock_data_months=mock_data_months,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )

    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table("Updated Configuration"))


@app.command("dark-mode, dm", no_args_is_help=True)
def dark_mode(
    value: Annotated[str, typer.Argument(help="on or off")],
) -> None:
    """Switch the dark color palette on or off."""
    if value not in ("on", "off"):
        raise typer.BadParameter("Expected 'on' or 'off'")

    PREFERENCE_REPO.set_dark_mode(value == "on")
    typer.echo(f"Dark mode {value}")
