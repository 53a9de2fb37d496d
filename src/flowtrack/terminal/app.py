# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from flowtrack.logger import configure_logging
from flowtrack.terminal import configuration, data, entry, resource, stats
from flowtrack.terminal.custom_typer import OrderedTyperGroup
from flowtrack.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="flowtrack - Track urinary flow and fluid intake in the CLI",
    no_args_is_help=True,
)
app.add_typer(entry.app, name="entry, en")
app.add_typer(stats.app, name="stats, st")
app.add_typer(data.app, name="data, d")
app.add_typer(resource.app, name="resource, r")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Show debug logging on stderr",
        ),
    ] = False,
) -> None:
    """
    flowtrack - Track urinary flow and fluid intake in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
