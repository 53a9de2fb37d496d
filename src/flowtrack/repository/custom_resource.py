# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional, cast

from flowtrack.model.custom_resource import CustomResource
from flowtrack.repository.store import (
    CUSTOM_RESOURCES_KEY,
    STORE,
    KeyValueStore,
    StoreError,
)

logger = logging.getLogger(__name__)


class CustomResourceRepository:
    def __init__(self, store: KeyValueStore = STORE) -> None:
        self._store = store
        self._resources: Optional[list[CustomResource]] = None
        self.is_dirty = False

    @property
    def resources(self) -> list[CustomResource]:
        if self._resources is None:
            self.__load_data()
        if self._resources is None:
            raise ValueError()
        return self._resources

    def __load_data(self) -> None:
        self._resources = []
        try:
            raw_resources = self._store.get_item(CUSTOM_RESOURCES_KEY)
        except StoreError as e:
            logger.error("Failed to parse saved resources: %s", e)
            return
        if isinstance(raw_resources, list):
            self._resources = cast(list[CustomResource], raw_resources)
        elif raw_resources is not None:
            logger.error("Saved resources are not a list, ignoring them")

    def __save_data(self) -> None:
        self._store.set_item(CUSTOM_RESOURCES_KEY, self.resources)

    def flush(self) -> bool:
        if self._resources is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def replace_resources(self, resources: list[CustomResource]) -> None:
        self.is_dirty = True
        self._resources = deepcopy(resources)

    def get_all_resources(self) -> list[CustomResource]:
        return deepcopy(self.resources)


CUSTOM_RESOURCE_REPO = CustomResourceRepository()
