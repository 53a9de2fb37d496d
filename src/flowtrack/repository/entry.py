# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, cast

from flowtrack.model.entry import FlowEntry
from flowtrack.repository.store import FLOW_ENTRIES_KEY, STORE, KeyValueStore, StoreError


class FlowEntryRepository:
    def __init__(self, store: KeyValueStore = STORE) -> None:
        self._store = store
        self._entries: Optional[list[FlowEntry]] = None
        self.is_dirty = False

    @property
    def entries(self) -> list[FlowEntry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        raw_entries = self._store.get_item(FLOW_ENTRIES_KEY)
        if raw_entries is None:
            self._entries = []
            return
        if not isinstance(raw_entries, list):
            raise StoreError(f"Stored '{FLOW_ENTRIES_KEY}' must be a list")
        self._entries = cast(list[FlowEntry], raw_entries)

    def __save_data(self) -> None:
        self._store.set_item(FLOW_ENTRIES_KEY, self.entries)

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def replace_entries(self, entries: list[FlowEntry]) -> None:
        self.is_dirty = True
        self._entries = deepcopy(entries)

    def get_all_entries(self) -> list[FlowEntry]:
        return deepcopy(self.entries)


ENTRY_REPO = FlowEntryRepository()
