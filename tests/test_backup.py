# SPDX-License-Identifier: MIT

"""
Unit tests for JSON backup and restore (flowtrack.service.backup)
"""

import json

import pendulum
import pytest

from flowtrack.service.backup import BackupFormatError, deserialize, serialize

ENTRIES = [
    {
        "timestamp": "2024-01-15T10:30:00+00:00",
        "volume": 300,
        "duration": 30,
        "flowRate": 10.0,
        "concerns": ["Pain"],
        "fluidIntake": {"type": "Water", "amount": 250, "unit": "mL"},
    },
    {
        "timestamp": "2024-01-16T10:30:00+00:00",
        "volume": 250.5,
        "duration": 25,
        "flowRate": 10.02,
    },
]


class TestSerialize:
    """Tests for serialize."""

    def test_envelope(self):
        exported = pendulum.datetime(2024, 2, 1, tz="UTC")
        data = json.loads(serialize(ENTRIES, exported))
        assert data["app"] == "flowtrack"
        assert data["exported"] == "2024-02-01T00:00:00+00:00"
        assert data["entries"] == ENTRIES

    def test_round_trip(self):
        assert deserialize(serialize(ENTRIES)) == ENTRIES

    def test_empty(self):
        assert deserialize(serialize([])) == []


class TestDeserialize:
    """Tests for deserialize."""

    def test_bare_list(self):
        assert deserialize(json.dumps(ENTRIES)) == ENTRIES

    def test_invalid_json(self):
        with pytest.raises(BackupFormatError, match="not valid JSON"):
            deserialize("{nope")

    def test_wrong_shape(self):
        with pytest.raises(BackupFormatError):
            deserialize(json.dumps({"app": "flowtrack"}))
        with pytest.raises(BackupFormatError):
            deserialize(json.dumps({"entries": {"timestamp": "x"}}))
        with pytest.raises(BackupFormatError):
            deserialize(json.dumps("entries"))

    def test_entry_not_an_object(self):
        with pytest.raises(BackupFormatError, match="entry 0"):
            deserialize(json.dumps([1]))

    def test_missing_required_field(self):
        broken = [{"timestamp": "2024-01-15T10:30:00+00:00", "volume": 1, "duration": 1}]
        with pytest.raises(BackupFormatError, match="flowRate"):
            deserialize(json.dumps(broken))
