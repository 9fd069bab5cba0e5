"""
Tests for the products resource client.

Tests cover:
- Paths and verbs of every product operation
- Request bodies and query strings
- Client-side validation before any request
- Proportional pricing arithmetic
"""

import json
from decimal import Decimal

import pytest
import responses

from pos_client.core.exceptions import ClientValidationError
from pos_client.inventory.models import UpdateProductRequest
from pos_client.inventory.pricing import profit_margin, proportional_selling_price

PRODUCT = {
    "_id": "p1",
    "name": "Galaxy S24",
    "brand": "Samsung",
    "basePrice": 999,
    "purchasedPrice": 800,
    "sellingPrice": 999,
    "mainCategory": "electronics",
    "subCategory": "phones",
    "description": "Flagship phone",
    "images": ["https://img.test/1.jpg"],
    "specifications": {"Screen": "6.2in"},
    "availableOptions": {"color": ["Black"], "ram": [], "storage": ["256GB"]},
    "variants": [
        {
            "id": "color-Black-storage-256GB",
            "color": "Black",
            "storage": "256GB",
            "purchasedPrice": 800,
            "sellingPrice": 999,
            "stock": 4,
        }
    ],
    "createdAt": "2024-01-01T00:00:00.000Z",
}


def body_of(call):
    return json.loads(call.request.body)


class TestProductReads:
    """Test read operations."""

    @responses.activate
    def test_get_all_parses_products(self, pos, base_url):
        """Test that products are parsed including the Mongo-style _id."""
        responses.add(responses.GET, f"{base_url}/products", json=[PRODUCT], status=200)

        products = pos.products.get_all()

        assert len(products) == 1
        product = products[0]
        assert product.id == "p1"
        assert product.main_category == "electronics"
        assert product.sub_category == "phones"
        assert product.available_options.storage == ["256GB"]
        assert product.variants[0].stock == 4
        assert product.default_variant.id == "color-Black-storage-256GB"

    @responses.activate
    def test_get_by_id(self, pos, base_url):
        """Test fetching a single product."""
        responses.add(responses.GET, f"{base_url}/products/p1", json=PRODUCT, status=200)

        assert pos.products.get_by_id("p1").name == "Galaxy S24"

    @responses.activate
    def test_search_sends_only_given_criteria(self, pos, base_url):
        """Test that unset search criteria are left out of the query string."""
        responses.add(responses.GET, f"{base_url}/products/search", json=[], status=200)

        pos.products.search(name="galaxy", min_price=100.0, max_price=1500.5)

        assert responses.calls[0].request.url == (
            f"{base_url}/products/search?name=galaxy&minPrice=100&maxPrice=1500.5"
        )

    @responses.activate
    def test_get_by_category_encodes_segment(self, pos, base_url):
        """Test that the category path segment is URI-component encoded."""
        responses.add(
            responses.GET,
            f"{base_url}/products/category/Phones%20%26%20Tablets",
            json=[],
            status=200,
        )

        pos.products.get_by_category("Phones & Tablets")

        assert responses.calls[0].request.url.endswith("/products/category/Phones%20%26%20Tablets")

    @responses.activate
    def test_low_stock_default_threshold(self, pos, base_url):
        """Test that the low-stock threshold defaults to 10."""
        responses.add(responses.GET, f"{base_url}/products/low-stock", json=[], status=200)

        pos.products.get_low_stock()

        assert responses.calls[0].request.url == f"{base_url}/products/low-stock?threshold=10"

    @responses.activate
    def test_get_available_uses_sales_path(self, pos, base_url):
        """Test that sellable products come from the sales endpoint."""
        responses.add(
            responses.GET, f"{base_url}/sales/products/available", json=[PRODUCT], status=200
        )

        assert pos.products.get_available()[0].id == "p1"


class TestProductWrites:
    """Test write operations."""

    @responses.activate
    def test_create_sends_camel_case(self, pos, base_url):
        """Test that a valid product form is posted with wire key names."""
        responses.add(responses.POST, f"{base_url}/products", json=PRODUCT, status=201)

        pos.products.create(
            {
                "name": "Galaxy S24",
                "brand": "Samsung",
                "mainCategory": "electronics",
                "basePrice": 999,
                "purchasedPrice": 800,
                "sellingPrice": 999,
                "description": "Flagship phone",
                "images": ["https://img.test/1.jpg"],
            }
        )

        body = body_of(responses.calls[0])
        assert body["mainCategory"] == "electronics"
        assert body["purchasedPrice"] == 800
        assert body["availableOptions"] == {"color": [], "ram": [], "storage": []}
        assert "subCategory" not in body

    @pytest.mark.parametrize("images", [[], ["a", "b", "c", "d"]])
    @responses.activate
    def test_create_rejects_image_count(self, pos, images):
        """Test that products need between one and three images."""
        with pytest.raises(ClientValidationError) as exc_info:
            pos.products.create(
                {
                    "name": "Galaxy S24",
                    "brand": "Samsung",
                    "mainCategory": "electronics",
                    "basePrice": 999,
                    "purchasedPrice": 800,
                    "sellingPrice": 999,
                    "description": "Flagship phone",
                    "images": images,
                }
            )

        assert exc_info.value.errors[0]["field"] == "images"
        assert len(responses.calls) == 0

    @responses.activate
    def test_create_rejects_missing_name(self, pos):
        """Test that an invalid form never reaches the network."""
        with pytest.raises(ClientValidationError):
            pos.products.create({"name": "", "brand": "x"})

        assert len(responses.calls) == 0

    @responses.activate
    def test_update_sends_only_set_fields(self, pos, base_url):
        """Test that PUT carries only the fields that were set."""
        responses.add(responses.PUT, f"{base_url}/products/p1", json=PRODUCT, status=200)

        pos.products.update("p1", UpdateProductRequest(name="Galaxy S24 Ultra", sub_category=None))

        assert body_of(responses.calls[0]) == {"name": "Galaxy S24 Ultra", "subCategory": None}

    @responses.activate
    def test_partial_update_uses_patch(self, pos, base_url):
        """Test that partial updates are sent with PATCH."""
        responses.add(responses.PATCH, f"{base_url}/products/p1", json=PRODUCT, status=200)

        pos.products.partial_update("p1", {"sellingPrice": 949})

        assert responses.calls[0].request.method == "PATCH"
        assert body_of(responses.calls[0]) == {"sellingPrice": 949}

    @responses.activate
    def test_delete(self, pos, base_url):
        """Test deleting a product returns the server message."""
        responses.add(
            responses.DELETE,
            f"{base_url}/products/p1",
            json={"message": "Product deleted"},
            status=200,
        )

        assert pos.products.delete("p1") == {"message": "Product deleted"}

    @responses.activate
    def test_update_stock_body(self, pos, base_url):
        """Test that stock changes are sent as stockChange."""
        responses.add(responses.PUT, f"{base_url}/products/p1/stock", json=PRODUCT, status=200)

        pos.products.quick_stock_update("p1", -2)

        assert body_of(responses.calls[0]) == {"stockChange": -2}

    @responses.activate
    def test_update_pricing_omits_unset_prices(self, pos, base_url):
        """Test that only provided prices are sent to the pricing endpoint."""
        responses.add(responses.PUT, f"{base_url}/products/p1/pricing", json=PRODUCT, status=200)

        pos.products.update_pricing("p1", selling_price=949)

        assert body_of(responses.calls[0]) == {"sellingPrice": 949}

    @responses.activate
    def test_bulk_update_body(self, pos, base_url):
        """Test the bulk update envelope."""
        responses.add(
            responses.PUT, f"{base_url}/products/bulk-update", json=[PRODUCT], status=200
        )

        pos.products.bulk_update([("p1", {"brand": "Apple"}), ("p2", {"sellingPrice": 10})])

        assert body_of(responses.calls[0]) == {
            "updates": [
                {"id": "p1", "updates": {"brand": "Apple"}},
                {"id": "p2", "updates": {"sellingPrice": 10}},
            ]
        }


class TestProportionalPricing:
    """Test the client-side proportional pricing."""

    def test_round_figures(self):
        """Test that 100 at 25% gives exactly 125.00."""
        assert proportional_selling_price(100, 25) == Decimal("125.00")

    def test_rounds_half_up_to_cents(self):
        """Test rounding to two decimals."""
        assert proportional_selling_price(9.99, 15) == Decimal("11.49")
        assert proportional_selling_price(0.5, 1) == Decimal("0.51")

    def test_half_cent_rounds_up_from_decimal_value(self):
        """Test that a half cent rounds up from the written price, not its binary float."""
        assert proportional_selling_price(1.005, 0) == Decimal("1.01")
        assert proportional_selling_price("1.005", 0) == Decimal("1.01")
        assert proportional_selling_price(2.675, 0) == Decimal("2.68")

    def test_zero_margin(self):
        """Test that a zero margin keeps the purchase price."""
        assert proportional_selling_price(42.5, 0) == Decimal("42.50")

    def test_profit_margin_inverse(self):
        """Test the margin implied by two prices."""
        assert profit_margin(100, 125) == Decimal("25.00")
        assert profit_margin(0, 10) == Decimal("0.00")

    @responses.activate
    def test_update_proportional_pricing_request(self, pos, base_url):
        """Test that proportional pricing PATCHes both prices."""
        responses.add(responses.PATCH, f"{base_url}/products/p1", json=PRODUCT, status=200)

        pos.products.update_proportional_pricing("p1", 100, 25)

        assert body_of(responses.calls[0]) == {"purchasedPrice": 100.0, "sellingPrice": 125.0}
