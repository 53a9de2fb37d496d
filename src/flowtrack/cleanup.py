# SPDX-License-Identifier: MIT

import atexit

from flowtrack.repository.configuration import CONFIGURATION_REPO
from flowtrack.repository.custom_resource import CUSTOM_RESOURCE_REPO
from flowtrack.repository.entry import ENTRY_REPO
from flowtrack.repository.preference import PREFERENCE_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()

    ENTRY_REPO.flush()
    CUSTOM_RESOURCE_REPO.flush()
    PREFERENCE_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
