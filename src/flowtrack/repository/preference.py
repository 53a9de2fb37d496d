# SPDX-License-Identifier: MIT

from typing import Optional

from flowtrack.repository.store import DARK_MODE_KEY, STORE, KeyValueStore


class PreferenceRepository:
    def __init__(self, store: KeyValueStore = STORE) -> None:
        self._store = store
        self._dark_mode: Optional[bool] = None
        self.is_dirty = False

    @property
    def dark_mode(self) -> bool:
        if self._dark_mode is None:
            self.__load_data()
        return bool(self._dark_mode)

    def __load_data(self) -> None:
        # Stored as the string "true"/"false", as the browser store kept it
        raw_dark_mode = self._store.get_item(DARK_MODE_KEY)
        self._dark_mode = raw_dark_mode == "true" or raw_dark_mode is True

    def flush(self) -> bool:
        if self._dark_mode is not None and self.is_dirty:
            self._store.set_item(DARK_MODE_KEY, "true" if self._dark_mode else "false")
            self.is_dirty = False
            return True
        return False

    def set_dark_mode(self, value: bool) -> None:
        self.is_dirty = True
        self._dark_mode = value


PREFERENCE_REPO = PreferenceRepository()
