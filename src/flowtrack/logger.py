# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from flowtrack.configuration import APP_NAME


def configure_logging(level: str = "WARNING") -> None:
    """Attach a rich stderr handler to the application logger."""
    app_logger = logging.getLogger(APP_NAME)
    app_logger.setLevel(level.upper())

    for handler in list(app_logger.handlers):
        if isinstance(handler, RichHandler):
            app_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    app_logger.addHandler(handler)
