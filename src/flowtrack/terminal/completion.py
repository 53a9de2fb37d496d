# SPDX-License-Identifier: MIT

from flowtrack.model.options import (
    COLOR_OPTIONS,
    COMMON_DRINK_SIZES,
    CONCERN_OPTIONS,
    FLUID_TYPE_OPTIONS,
    FLUID_UNITS,
    URGENCY_OPTIONS,
)


def _starting_with(options: list[str], incomplete: str) -> list[str]:
    return [
        option for option in options if option.lower().startswith(incomplete.lower())
    ]


def complete_color(incomplete: str) -> list[str]:
    """Return list of suggested colors for shell completion."""
    return _starting_with([option["value"] for option in COLOR_OPTIONS], incomplete)


def complete_urgency(incomplete: str) -> list[str]:
    return _starting_with(URGENCY_OPTIONS, incomplete)


def complete_concern(incomplete: str) -> list[str]:
    return _starting_with(CONCERN_OPTIONS, incomplete)


def complete_fluid_type(incomplete: str) -> list[str]:
    return _starting_with(FLUID_TYPE_OPTIONS, incomplete)


def complete_fluid_unit(incomplete: str) -> list[str]:
    return _starting_with(FLUID_UNITS, incomplete)


def complete_drink_size(incomplete: str) -> list[str]:
    """Return list of common drink size names for shell completion."""
    return _starting_with([size["name"] for size in COMMON_DRINK_SIZES], incomplete)
