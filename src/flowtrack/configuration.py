# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "flowtrack"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_STORE_DIR: Path = DATA_PATH / "store"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    log_level: str
    timezone: str
    notes_max_length: int
    default_fluid_unit: Literal["oz", "mL"]
    mock_data_months: int


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
        "timezone": "local",
        "notes_max_length": 256,
        "default_fluid_unit": "mL",
        "mock_data_months": 3,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_STORE_DIR

    DATA_PATH = data_path
    DATA_STORE_DIR = DATA_PATH / "store"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
