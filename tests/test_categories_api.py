"""
Tests for the categories resource client.
"""

import json

import pytest
import responses

from pos_client.core.exceptions import ClientValidationError

TREE = [
    {
        "id": "electronics",
        "name": "Electronics",
        "level": 1,
        "subCategories": [
            {
                "id": "phones",
                "name": "Phones",
                "level": 2,
                "parentId": "electronics",
                "subCategories": [],
            }
        ],
    },
    {"id": "clothing", "name": "Clothing", "level": 1, "subCategories": None},
]


class TestCategoryReads:
    """Test category fetching."""

    @responses.activate
    def test_get_all_builds_tree(self, pos, base_url):
        """Test that nested subCategories become Category nodes."""
        responses.add(responses.GET, f"{base_url}/categories", json=TREE, status=200)

        tree = pos.categories.get_all()

        assert [c.id for c in tree] == ["electronics", "clothing"]
        assert tree[0].sub_categories[0].parent_id == "electronics"
        assert tree[0].sub_categories[0].level == 2
        assert tree[1].sub_categories == []

    @pytest.mark.parametrize(
        "call, path",
        [
            (lambda api: api.get_by_level(2), "/categories/level/2"),
            (lambda api: api.get_subcategories("electronics"), "/categories/electronics/subcategories"),
            (lambda api: api.get_hierarchy(), "/categories/hierarchy"),
        ],
    )
    @responses.activate
    def test_list_paths(self, pos, base_url, call, path):
        """Test the paths of the list endpoints."""
        responses.add(responses.GET, f"{base_url}{path}", json=[], status=200)

        assert call(pos.categories) == []
        assert responses.calls[0].request.url == f"{base_url}{path}"

    @responses.activate
    def test_get_by_id(self, pos, base_url):
        """Test fetching one category."""
        responses.add(responses.GET, f"{base_url}/categories/phones", json=TREE[0]["subCategories"][0])

        assert pos.categories.get_by_id("phones").name == "Phones"


class TestCategoryWrites:
    """Test category creation, update and deletion."""

    @responses.activate
    def test_create_sub_category(self, pos, base_url):
        """Test that a level 2 category is posted with its parent."""
        responses.add(
            responses.POST,
            f"{base_url}/categories",
            json={"id": "tablets", "name": "Tablets", "level": 2, "parentId": "electronics"},
            status=201,
        )

        created = pos.categories.create({"name": "Tablets", "level": 2, "parentId": "electronics"})

        assert created.id == "tablets"
        assert json.loads(responses.calls[0].request.body) == {
            "name": "Tablets",
            "level": 2,
            "parentId": "electronics",
        }

    @responses.activate
    def test_create_main_category_omits_parent(self, pos, base_url):
        """Test that a main category is sent without parentId."""
        responses.add(
            responses.POST,
            f"{base_url}/categories",
            json={"id": "toys", "name": "Toys", "level": 1},
            status=201,
        )

        pos.categories.create({"name": "Toys", "level": 1})

        assert json.loads(responses.calls[0].request.body) == {"name": "Toys", "level": 1}

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "", "level": 1},
            {"name": "Toys", "level": 4},
            {"name": "Tablets", "level": 2},
            {"name": "Toys", "level": 1, "parentId": "electronics"},
        ],
    )
    @responses.activate
    def test_create_rejects_invalid_form(self, pos, data):
        """Test that inconsistent name/level/parent never reach the network."""
        with pytest.raises(ClientValidationError):
            pos.categories.create(data)

        assert len(responses.calls) == 0

    @responses.activate
    def test_update_and_delete(self, pos, base_url):
        """Test category update and delete verbs."""
        responses.add(
            responses.PUT,
            f"{base_url}/categories/phones",
            json={"id": "phones", "name": "Mobile Phones", "level": 2, "parentId": "electronics"},
        )
        responses.add(
            responses.DELETE, f"{base_url}/categories/phones", json={"message": "Category deleted"}
        )

        updated = pos.categories.update("phones", {"name": "Mobile Phones"})
        result = pos.categories.delete("phones")

        assert updated.name == "Mobile Phones"
        assert json.loads(responses.calls[0].request.body) == {"name": "Mobile Phones"}
        assert result["message"] == "Category deleted"
