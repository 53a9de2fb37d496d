# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table

from flowtrack.model.custom_resource import CustomResource, ResourceLink
from flowtrack.model.options import COLOR_OPTIONS
from flowtrack.view.view.views.header import header


def resources_view(
    default_resources: list[ResourceLink],
    grouped_custom_resources: dict[str, list[CustomResource]],
) -> None:
    """Display the built-in links followed by custom links grouped by category."""
    header("resources")

    console = Console()

    default_table = Table(title="Helpful Resources", box=box.SIMPLE)
    default_table.add_column("title")
    default_table.add_column("url", style="blue", overflow="fold")
    for link in default_resources:
        default_table.add_row(link["title"], link["url"])
    console.print(default_table)

    if not grouped_custom_resources:
        console.print(Padding("[dim]No custom resources added yet[/dim]", (0, 1)))
        return

    for category, resources in grouped_custom_resources.items():
        category_table = Table(title=category, box=box.SIMPLE)
        category_table.add_column("id", style="dim")
        category_table.add_column("title")
        category_table.add_column("url", style="blue", overflow="fold")
        for resource in resources:
            category_table.add_row(resource["id"], resource["title"], resource["url"])
        console.print(category_table)


def single_resource_view(resource: CustomResource) -> None:
    header("resource")

    resource_table = Table(box=box.SIMPLE)
    resource_table.add_column("property")
    resource_table.add_column("value")
    resource_table.add_row("id", resource["id"])
    resource_table.add_row("title", resource["title"])
    resource_table.add_row("url", resource["url"])
    resource_table.add_row("category", resource["category"])

    console = Console()
    console.print(resource_table)


def color_chart_view() -> None:
    """Display what each urine color may indicate."""
    header("urine color chart")

    color_table = Table(box=box.SIMPLE)
    color_table.add_column("")
    color_table.add_column("color")
    color_table.add_column("may indicate")
    for option in COLOR_OPTIONS:
        color_table.add_row(
            f"[{option['style']}]    [/{option['style']}]",
            option["value"],
            option["meaning"],
        )

    console = Console()
    console.print(color_table)
    console.print(
        Padding(
            "[dim]Urine color can be affected by medications, food and hydration "
            "status. If unusual colors persist or come with other symptoms, "
            "consult a healthcare provider.[/dim]",
            (0, 1),
        )
    )
