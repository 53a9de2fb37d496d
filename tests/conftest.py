# SPDX-License-Identifier: MIT

"""
Shared fixtures: every test gets its own config and data directories.
"""

import pytest

from flowtrack import configuration
from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.custom_resource import CUSTOM_RESOURCE_REPO
from flowtrack.repository.entry import ENTRY_REPO
from flowtrack.repository.preference import PREFERENCE_REPO
from flowtrack.view import state as view_state


@pytest.fixture(autouse=True)
def isolated_app(tmp_path, monkeypatch):
    """Point configuration and the store at tmp_path and reset cached repository state."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(configuration, "DATA_STORE_DIR", tmp_path / "data" / "store")

    for repository, attribute in (
        (ENTRY_REPO, "_entries"),
        (CUSTOM_RESOURCE_REPO, "_resources"),
        (PREFERENCE_REPO, "_dark_mode"),
        (CONFIGURATION_REPO, "_config"),
    ):
        monkeypatch.setattr(repository, attribute, None)
        monkeypatch.setattr(repository, "is_dirty", False)

    view_state.set_show_header(True)
    return tmp_path


@pytest.fixture
def utc_config():
    """Use UTC for all local date handling so expectations are machine independent."""
    CONFIGURATION_REPO.update_config(timezone="UTC")
    return CONFIGURATION_REPO.get_config()
