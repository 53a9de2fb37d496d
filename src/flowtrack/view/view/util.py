# SPDX-License-Identifier: MIT

import math
from typing import Optional

from flowtrack.model.entry import FluidIntake
from flowtrack.model.options import COLOR_OPTIONS
from flowtrack.service.statistics import fluid_type_label


def format_measure(value: float, digits: int = 1) -> str:
    if not math.isfinite(value):
        return str(value)
    return f"{value:.{digits}f}"


def format_fluid_intake(fluid_intake: Optional[FluidIntake]) -> str:
    if fluid_intake is None:
        return ""
    return (
        f"{fluid_type_label(fluid_intake)} "
        f"{format_measure(fluid_intake['amount'], 0)} {fluid_intake['unit']}"
    )


def format_concerns(concerns: Optional[list[str]]) -> str:
    if not concerns:
        return ""
    return ", ".join(concerns)


def color_style(color: Optional[str]) -> str:
    """Rich style of the swatch for a known color, or no style."""
    if color is None:
        return ""
    for option in COLOR_OPTIONS:
        if option["value"] == color:
            return option["style"]
    return ""


def bar(value: float, maximum: float, width: int) -> str:
    if not math.isfinite(value) or maximum <= 0 or value <= 0:
        return ""
    return "█" * max(1, round(min(value, maximum) / maximum * width))
