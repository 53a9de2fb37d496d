# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Any, Optional

from flowtrack import configuration

logger = logging.getLogger(__name__)

FLOW_ENTRIES_KEY = "flowEntries"
CUSTOM_RESOURCES_KEY = "customResources"
DARK_MODE_KEY = "darkMode"


class StoreError(Exception):
    """Raised when a stored value cannot be decoded."""

    pass


class KeyValueStore:
    """
    A local persistent key-value store.

    Each key is kept as one JSON document in the store directory, so a value
    is always read and written as a whole.
    """

    def __init__(self, store_dir: Optional[Path] = None) -> None:
        self._store_dir = store_dir

    @property
    def store_dir(self) -> Path:
        if self._store_dir is not None:
            return self._store_dir
        return configuration.DATA_STORE_DIR

    def __path_for(self, key: str) -> Path:
        return self.store_dir / f"{key}.json"

    def has_item(self, key: str) -> bool:
        return self.__path_for(key).is_file()

    def get_item(self, key: str) -> Optional[Any]:
        path = self.__path_for(key)
        if not path.is_file():
            return None
        raw = path.read_text(encoding="utf-8")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Stored value for '{key}' is not valid JSON: {e}")

    def set_item(self, key: str, value: Any) -> None:
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self.__path_for(key).write_text(json.dumps(value), encoding="utf-8")
        logger.debug("wrote store key %s", key)

    def remove_item(self, key: str) -> None:
        path = self.__path_for(key)
        if path.exists():
            path.unlink()


STORE = KeyValueStore()
