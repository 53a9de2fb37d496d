# SPDX-License-Identifier: MIT

"""
Unit tests for custom resource links (flowtrack.service.resource)
"""

import pytest

from flowtrack.service.resource import (
    DEFAULT_RESOURCES,
    ResourceValidationError,
    add_custom_resource,
    create_custom_resource,
    delete_custom_resource,
    group_resources_by_category,
)


class TestCreateCustomResource:
    """Tests for create_custom_resource."""

    def test_inputs_trimmed(self):
        resource = create_custom_resource(
            "  Pelvic floor  ", " https://example.org/pf ", "  Exercise "
        )
        assert resource["title"] == "Pelvic floor"
        assert resource["url"] == "https://example.org/pf"
        assert resource["category"] == "Exercise"

    def test_id_is_epoch_milliseconds(self):
        resource = create_custom_resource("t", "example.org", "c")
        assert resource["id"].isdigit()
        assert len(resource["id"]) >= 13

    def test_https_prefixed(self):
        assert create_custom_resource("t", "example.org", "c")["url"] == "https://example.org"

    def test_http_kept(self):
        assert (
            create_custom_resource("t", "HTTP://example.org", "c")["url"]
            == "HTTP://example.org"
        )

    @pytest.mark.parametrize(
        "title,url,category,message",
        [
            ("", "example.org", "c", "Title is required"),
            ("   ", "example.org", "c", "Title is required"),
            ("t", "", "c", "URL is required"),
            ("t", "exa mple.org", "c", "Please enter a valid URL"),
            ("t", "https://", "c", "Please enter a valid URL"),
            ("t", "example.org", " ", "Category is required"),
        ],
    )
    def test_validation_messages(self, title, url, category, message):
        with pytest.raises(ResourceValidationError) as e:
            create_custom_resource(title, url, category)
        assert str(e.value) == message


class TestResourceLists:
    """Tests for list helpers."""

    def test_defaults_present(self):
        assert len(DEFAULT_RESOURCES) == 5
        assert all(link["url"].startswith("https://") for link in DEFAULT_RESOURCES)

    def test_add_and_delete(self):
        first = {"id": "1", "title": "a", "url": "https://a", "category": "x"}
        second = {"id": "2", "title": "b", "url": "https://b", "category": "y"}
        resources = add_custom_resource([first], second)
        assert resources == [first, second]
        assert delete_custom_resource(resources, "1") == [second]

    def test_group_keeps_first_seen_order(self):
        resources = [
            {"id": "1", "title": "a", "url": "https://a", "category": "Diet"},
            {"id": "2", "title": "b", "url": "https://b", "category": "Exercise"},
            {"id": "3", "title": "c", "url": "https://c", "category": "Diet"},
        ]
        grouped = group_resources_by_category(resources)
        assert list(grouped.keys()) == ["Diet", "Exercise"]
        assert [r["id"] for r in grouped["Diet"]] == ["1", "3"]
