# SPDX-License-Identifier: MIT

import re
from urllib.parse import urlsplit

from flowtrack.model.custom_resource import CustomResource, ResourceLink
from flowtrack.template.custom_resource import get_custom_resource_template

DEFAULT_RESOURCES: list[ResourceLink] = [
    {
        "title": "Urethral Stricture - Diagnosis and Treatment",
        "url": "https://www.mayoclinic.org/diseases-conditions/urethral-stricture/diagnosis-treatment/drc-20351735",
    },
    {
        "title": "Urethral Stricture Disease: Symptoms, Diagnosis & Treatment",
        "url": "https://www.urologyhealth.org/urology-a-z/u/urethral-stricture-disease",
    },
    {
        "title": "Benign Prostatic Hyperplasia (BPH) - Mayo Clinic",
        "url": "https://www.mayoclinic.org/diseases-conditions/benign-prostatic-hyperplasia/symptoms-causes/syc-20370087",
    },
    {
        "title": "Benign Prostatic Hyperplasia (BPH)",
        "url": "https://www.urologyhealth.org/urology-a-z/b/benign-prostatic-hyperplasia-(bph)",
    },
    {
        "title": "Managing Urethral Strictures",
        "url": "https://www.urologyhealth.org/urologic-conditions/urethral-stricture-disease",
    },
]

_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


class ResourceValidationError(Exception):
    """Raised when a custom resource fails validation."""

    pass


def normalize_resource_url(url: str) -> str:
    """
    Prefix https:// when the URL has no http(s) scheme and check it parses.

    Raises:
        ResourceValidationError: If the URL has no host or the host contains
            whitespace
    """
    url = url.strip()
    if not _HTTP_SCHEME.match(url):
        url = "https://" + url

    try:
        parts = urlsplit(url)
    except ValueError:
        raise ResourceValidationError("Please enter a valid URL")
    if not parts.scheme or not parts.netloc or re.search(r"\s", parts.netloc):
        raise ResourceValidationError("Please enter a valid URL")
    return url


def create_custom_resource(title: str, url: str, category: str) -> CustomResource:
    """
    Validate the user's input and build a new custom resource.

    Args:
        title: Display title, trimmed
        url: Link target, trimmed and defaulted to https
        category: Group the link is listed under, trimmed

    Returns:
        The new resource, identified by its creation time in epoch milliseconds

    Raises:
        ResourceValidationError: With a message naming the first invalid field
    """
    if not title.strip():
        raise ResourceValidationError("Title is required")
    if not url.strip():
        raise ResourceValidationError("URL is required")
    normalized_url = normalize_resource_url(url)
    if not category.strip():
        raise ResourceValidationError("Category is required")

    resource = get_custom_resource_template()
    resource["title"] = title.strip()
    resource["url"] = normalized_url
    resource["category"] = category.strip()
    return resource


def add_custom_resource(
    resources: list[CustomResource], resource: CustomResource
) -> list[CustomResource]:
    return resources + [resource]


def delete_custom_resource(
    resources: list[CustomResource], id: str
) -> list[CustomResource]:
    return [resource for resource in resources if resource["id"] != id]


def group_resources_by_category(
    resources: list[CustomResource],
) -> dict[str, list[CustomResource]]:
    """Group resources by category, keeping first-seen category order."""
    grouped: dict[str, list[CustomResource]] = {}
    for resource in resources:
        if resource["category"] not in grouped:
            grouped[resource["category"]] = []
        grouped[resource["category"]].append(resource)
    return grouped
