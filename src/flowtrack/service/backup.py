# SPDX-License-Identifier: MIT

import json
from typing import Any, Optional, cast

import pendulum

from flowtrack.configuration import APP_NAME
from flowtrack.model.entry import FlowEntry
from flowtrack.time import datetime_to_iso_str, now_utc

REQUIRED_ENTRY_FIELDS = {"timestamp", "volume", "duration", "flowRate"}


class BackupFormatError(Exception):
    """Raised when a backup blob cannot be restored."""

    pass


def serialize(
    entries: list[FlowEntry], exported: Optional[pendulum.DateTime] = None
) -> str:
    """Snapshot the whole entry list as a JSON document."""
    if exported is None:
        exported = now_utc()
    backup: dict[str, Any] = {
        "app": APP_NAME,
        "exported": datetime_to_iso_str(exported),
        "entries": entries,
    }
    return json.dumps(backup, indent=2)


def deserialize(blob: str) -> list[FlowEntry]:
    """
    Read entries back from a backup.

    Accepts the document written by serialize() or a bare JSON list of
    entries, as kept in the entry store.

    Raises:
        BackupFormatError: If the blob is not valid JSON, has the wrong shape,
            or an entry is missing one of the required fields
    """
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise BackupFormatError(f"Backup is not valid JSON: {e}")

    if isinstance(data, dict):
        if "entries" not in data:
            raise BackupFormatError("Backup must contain an 'entries' key")
        data = data["entries"]

    if not isinstance(data, list):
        raise BackupFormatError(
            f"Backup entries must be a list, got {type(data).__name__}"
        )

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise BackupFormatError(f"Backup entry {index} is not an object")
        missing_fields = REQUIRED_ENTRY_FIELDS - set(entry.keys())
        if missing_fields:
            raise BackupFormatError(
                f"Backup entry {index}: Missing required fields: "
                f"{', '.join(sorted(missing_fields))}"
            )

    return cast(list[FlowEntry], data)
