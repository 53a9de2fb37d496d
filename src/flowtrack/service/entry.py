# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from flowtrack.model.entry import FlowEntry, FluidIntake
from flowtrack.model.options import COMMON_DRINK_SIZES, FLUID_TYPE_OTHER, FLUID_UNITS
from flowtrack.template.entry import get_flow_entry_template
from flowtrack.time import datetime_to_iso_str

DEFAULT_NOTES_MAX_LENGTH = 256


class EntryValidationError(Exception):
    """Raised when entry validation fails."""

    pass


def build_fluid_intake(
    fluid_type: str,
    unit: str,
    amount: Optional[float] = None,
    size: Optional[str] = None,
    custom_type: Optional[str] = None,
) -> FluidIntake:
    """
    Build the fluid intake part of an entry.

    The amount is either given directly or taken from one of the common drink
    sizes in the chosen unit. A custom type is only kept for "Other".
    """
    if unit not in FLUID_UNITS:
        raise EntryValidationError(
            f"Invalid fluid unit: {unit}. Valid options: {', '.join(FLUID_UNITS)}"
        )

    if amount is None and size is None:
        raise EntryValidationError("A fluid amount or a drink size is required")
    if amount is not None and size is not None:
        raise EntryValidationError("Give either a fluid amount or a drink size, not both")

    if size is not None:
        matching_sizes = [s for s in COMMON_DRINK_SIZES if s["name"] == size]
        if not matching_sizes:
            valid_sizes = ", ".join(s["name"] for s in COMMON_DRINK_SIZES)
            raise EntryValidationError(
                f"Invalid drink size: {size}. Valid options: {valid_sizes}"
            )
        amount = matching_sizes[0]["oz"] if unit == "oz" else matching_sizes[0]["mL"]

    if amount is None or amount <= 0:
        raise EntryValidationError("Fluid amount must be greater than 0")

    fluid_intake: FluidIntake = {
        "type": fluid_type,
        "amount": amount,
        "unit": "oz" if unit == "oz" else "mL",
    }
    if fluid_type == FLUID_TYPE_OTHER and custom_type:
        fluid_intake["customType"] = custom_type
    return fluid_intake


def create_flow_entry(
    volume: float,
    duration: float,
    timestamp: Optional[pendulum.DateTime] = None,
    color: Optional[str] = None,
    urgency: Optional[str] = None,
    concerns: Optional[list[str]] = None,
    notes: Optional[str] = None,
    fluid_intake: Optional[FluidIntake] = None,
    notes_max_length: int = DEFAULT_NOTES_MAX_LENGTH,
) -> FlowEntry:
    """
    Create an entry from a measurement, deriving its flow rate.

    Empty optional values are left out of the entry.

    Raises:
        EntryValidationError: If volume or duration is not positive, or the
            notes are longer than notes_max_length
    """
    if not volume > 0:
        raise EntryValidationError("Volume must be greater than 0")
    if not duration > 0:
        raise EntryValidationError("Duration must be greater than 0")
    if notes is not None and len(notes) > notes_max_length:
        raise EntryValidationError(
            f"Notes must be at most {notes_max_length} characters, got {len(notes)}"
        )

    entry = get_flow_entry_template()
    if timestamp is not None:
        entry["timestamp"] = datetime_to_iso_str(timestamp)
    entry["volume"] = volume
    entry["duration"] = duration
    entry["flowRate"] = volume / duration

    if color:
        entry["color"] = color
    if urgency:
        entry["urgency"] = urgency
    if concerns:
        entry["concerns"] = list(concerns)
    if notes:
        entry["notes"] = notes
    if fluid_intake is not None:
        entry["fluidIntake"] = fluid_intake

    return entry


def add_entry(entries: list[FlowEntry], entry: FlowEntry) -> list[FlowEntry]:
    return entries + [entry]


def delete_entries_by_timestamp(
    entries: list[FlowEntry], timestamp: str
) -> list[FlowEntry]:
    """Remove every entry recorded with exactly this timestamp."""
    return [entry for entry in entries if entry["timestamp"] != timestamp]
