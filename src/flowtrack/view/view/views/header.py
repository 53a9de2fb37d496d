# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from flowtrack.repository.preference import PREFERENCE_REPO
from flowtrack.view.state import get_show_header


def header(sub_header: Optional[str] = None) -> None:
    """Print the application header.

    Args:
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    # Brighter accents on dark terminals
    title_style = "dark_orange" if PREFERENCE_REPO.dark_mode else "orange4"
    sub_header_style = "sandy_brown" if PREFERENCE_REPO.dark_mode else "dark_goldenrod"

    print(Padding(f"[{title_style}]flowtrack[/{title_style}]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[{sub_header_style}]{sub_header}[/{sub_header_style}]", (0, 1)))
