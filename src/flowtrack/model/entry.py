# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, TypedDict

FluidUnit = Literal["oz", "mL"]


class FluidIntake(TypedDict):
    type: str  # e.g., "Water", "Other"
    customType: NotRequired[str]  # Only meaningful when type is "Other"
    amount: float
    unit: FluidUnit


class FlowEntry(TypedDict):
    timestamp: str  # ISO-8601, used as the deletion key
    volume: float  # mL
    duration: float  # seconds
    flowRate: float  # mL/s, volume / duration at creation time

    # Optional fields are absent rather than None
    color: NotRequired[str]
    urgency: NotRequired[str]
    concerns: NotRequired[list[str]]
    notes: NotRequired[str]
    fluidIntake: NotRequired[FluidIntake]
