# SPDX-License-Identifier: MIT

from flowtrack.model.entry import FlowEntry
from flowtrack.time import datetime_to_iso_str, now_utc


def get_flow_entry_template() -> FlowEntry:
    return {
        "timestamp": datetime_to_iso_str(now_utc()),
        "volume": 0.0,
        "duration": 0.0,
        "flowRate": 0.0,
    }
