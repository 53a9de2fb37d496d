# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from flowtrack.repository.custom_resource import CUSTOM_RESOURCE_REPO
from flowtrack.service.resource import (
    DEFAULT_RESOURCES,
    ResourceValidationError,
    add_custom_resource,
    create_custom_resource,
    delete_custom_resource,
    group_resources_by_category,
)
from flowtrack.terminal.custom_typer import AliasedTyperGroup
from flowtrack.view.view.views import resource as resource_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, l")
def list_resources() -> None:
    """Show the built-in links and your own, grouped by category."""
    resource_report.resources_view(
        DEFAULT_RESOURCES,
        group_resources_by_category(CUSTOM_RESOURCE_REPO.get_all_resources()),
    )


@app.command("add, a", no_args_is_help=True)
def add(title: str, url: str, category: str) -> None:
    """Add a custom resource link."""
    try:
        resource = create_custom_resource(title, url, category)
    except ResourceValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    CUSTOM_RESOURCE_REPO.replace_resources(
        add_custom_resource(CUSTOM_RESOURCE_REPO.get_all_resources(), resource)
    )
    resource_report.single_resource_view(resource)


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Delete a custom resource link."""
    console = Console()

    resources = CUSTOM_RESOURCE_REPO.get_all_resources()
    remaining = delete_custom_resource(resources, id)
    if len(remaining) == len(resources):
        console.print(f"[red]Error: Resource '{id}' not found[/red]")
        raise typer.Exit(1)

    if not yes:
        confirm = typer.confirm("Are you sure you want to delete this resource?")
        if not confirm:
            console.print("[cyan]Operation cancelled.[/cyan]")
            return

    CUSTOM_RESOURCE_REPO.replace_resources(remaining)
    console.print(f"[green]Deleted resource '{id}'[/green]")


@app.command("colors, c")
def colors() -> None:
    """Show the urine color chart."""
    resource_report.color_chart_view()
