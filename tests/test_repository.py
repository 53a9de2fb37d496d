# SPDX-License-Identifier: MIT

"""
Unit tests for the key-value store and repositories (flowtrack.repository)
"""

import json
import logging

import pytest
from yaml import safe_load

from flowtrack import configuration
from flowtrack.cleanup import flush
from flowtrack.initialize import initialize
from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.custom_resource import CustomResourceRepository
from flowtrack.repository.entry import FlowEntryRepository
from flowtrack.repository.preference import PreferenceRepository
from flowtrack.repository.store import KeyValueStore, StoreError

ENTRY = {
    "timestamp": "2024-01-15T10:30:00+00:00",
    "volume": 300,
    "duration": 30,
    "flowRate": 10.0,
}


@pytest.fixture
def store(tmp_path):
    return KeyValueStore(tmp_path / "store")


class TestKeyValueStore:
    """Tests for KeyValueStore."""

    def test_missing_key(self, store):
        assert store.get_item("flowEntries") is None
        assert not store.has_item("flowEntries")

    def test_set_get_remove(self, store):
        store.set_item("darkMode", "true")
        assert store.has_item("darkMode")
        assert store.get_item("darkMode") == "true"
        store.remove_item("darkMode")
        assert store.get_item("darkMode") is None

    def test_one_file_per_key(self, store):
        store.set_item("flowEntries", [ENTRY])
        path = store.store_dir / "flowEntries.json"
        assert json.loads(path.read_text()) == [ENTRY]

    def test_invalid_json(self, store):
        store.store_dir.mkdir(parents=True)
        (store.store_dir / "flowEntries.json").write_text("{broken")
        with pytest.raises(StoreError):
            store.get_item("flowEntries")

    def test_default_dir_follows_configuration(self):
        assert KeyValueStore().store_dir == configuration.DATA_STORE_DIR


class TestFlowEntryRepository:
    """Tests for FlowEntryRepository."""

    def test_empty_store(self, store):
        assert FlowEntryRepository(store).get_all_entries() == []

    def test_flush_only_when_dirty(self, store):
        repository = FlowEntryRepository(store)
        assert repository.get_all_entries() == []
        assert not repository.flush()

        repository.replace_entries([ENTRY])
        assert repository.flush()
        assert store.get_item("flowEntries") == [ENTRY]
        assert not repository.flush()

    def test_getters_return_copies(self, store):
        repository = FlowEntryRepository(store)
        repository.replace_entries([ENTRY])
        entries = repository.get_all_entries()
        entries[0]["volume"] = 1
        assert repository.get_all_entries()[0]["volume"] == 300

    def test_reload(self, store):
        store.set_item("flowEntries", [ENTRY])
        assert FlowEntryRepository(store).get_all_entries() == [ENTRY]

    def test_corrupt_entries_raise(self, store):
        store.set_item("flowEntries", {"not": "a list"})
        with pytest.raises(StoreError):
            FlowEntryRepository(store).get_all_entries()


class TestCustomResourceRepository:
    """Tests for CustomResourceRepository."""

    def test_corrupt_resources_logged_and_empty(self, store, caplog):
        store.store_dir.mkdir(parents=True)
        (store.store_dir / "customResources.json").write_text("{broken")
        with caplog.at_level(logging.ERROR, logger="flowtrack"):
            assert CustomResourceRepository(store).get_all_resources() == []
        assert "Failed to parse saved resources" in caplog.text

    def test_save(self, store):
        resource = {"id": "1", "title": "a", "url": "https://a", "category": "x"}
        repository = CustomResourceRepository(store)
        repository.replace_resources([resource])
        repository.flush()
        assert store.get_item("customResources") == [resource]


class TestPreferenceRepository:
    """Tests for PreferenceRepository."""

    def test_default_off(self, store):
        assert not PreferenceRepository(store).dark_mode

    def test_stored_as_string(self, store):
        repository = PreferenceRepository(store)
        repository.set_dark_mode(True)
        repository.flush()
        assert store.get_item("darkMode") == "true"
        assert PreferenceRepository(store).dark_mode


class TestConfiguration:
    """Tests for configuration loading and initialization."""

    def test_initialize_writes_defaults(self):
        initialize()
        written = safe_load(configuration.APP_CONFIG_PATH.read_text())
        assert written == configuration.get_default_configuration()
        assert configuration.DATA_STORE_DIR.is_dir()

    def test_missing_keys_back_filled(self):
        configuration.APP_CONFIG_PATH.write_text("timezone: UTC\n")
        config = CONFIGURATION_REPO.get_config()
        assert config["timezone"] == "UTC"
        assert config["notes_max_length"] == 256
        assert config["default_fluid_unit"] == "mL"

    def test_update_and_flush(self):
        CONFIGURATION_REPO.update_config(log_level="debug", mock_data_months=6)
        flush()
        written = safe_load(configuration.APP_CONFIG_PATH.read_text())
        assert written["log_level"] == "DEBUG"
        assert written["mock_data_months"] == 6

    def test_data_path_setting(self, tmp_path):
        configuration.APP_CONFIG_PATH.write_text(f"data_path: {tmp_path / 'elsewhere'}\n")
        configuration.load_data_path_configuration()
        assert configuration.DATA_PATH == tmp_path / "elsewhere"
        assert configuration.DATA_STORE_DIR == tmp_path / "elsewhere" / "store"
