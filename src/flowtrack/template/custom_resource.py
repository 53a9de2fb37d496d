# SPDX-License-Identifier: MIT

from flowtrack.model.custom_resource import CustomResource
from flowtrack.time import now_utc


def get_custom_resource_template() -> CustomResource:
    return {
        "id": str(int(now_utc().timestamp() * 1000)),
        "title": "",
        "url": "",
        "category": "",
    }
