# SPDX-License-Identifier: MIT

from typing import TypedDict


class CustomResource(TypedDict):
    id: str  # Creation time in epoch milliseconds
    title: str
    url: str
    category: str


class ResourceLink(TypedDict):
    title: str
    url: str
