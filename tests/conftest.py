"""
Pytest configuration and fixtures for the point-of-sale client.
"""

import pytest
import responses

from pos_client.client import PosClient
from pos_client.core.api import ApiClient
from pos_client.inventory.models import Category, Product, ProductVariant

BASE_URL = "http://pos.test"


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def api_client():
    """ApiClient pointed at the mocked backend."""
    client = ApiClient(base_url=BASE_URL, timeout=5)
    yield client
    client.close()


@pytest.fixture
def pos(api_client):
    """PosClient sharing the mocked ApiClient."""
    return PosClient(api=api_client)


@pytest.fixture
def backend():
    """Mocked backend, active from fixture setup through the test body."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def category_tree():
    """
    Two main categories:

    Electronics
      Phones
        Android
        iOS
      Laptops
    Clothing
      Shirts
    """
    return [
        Category(
            id="electronics",
            name="Electronics",
            level=1,
            sub_categories=[
                Category(
                    id="phones",
                    name="Phones",
                    level=2,
                    parent_id="electronics",
                    sub_categories=[
                        Category(id="android", name="Android", level=3, parent_id="phones"),
                        Category(id="ios", name="iOS", level=3, parent_id="phones"),
                    ],
                ),
                Category(id="laptops", name="Laptops", level=2, parent_id="electronics"),
            ],
        ),
        Category(
            id="clothing",
            name="Clothing",
            level=1,
            sub_categories=[
                Category(id="shirts", name="Shirts", level=2, parent_id="clothing"),
            ],
        ),
    ]


def make_product(product_id="p1", name="Galaxy S24", stock=5, price=999.0, **kwargs):
    """Product with a single default variant."""
    fields = {
        "id": product_id,
        "name": name,
        "brand": "Samsung",
        "base_price": price,
        "purchased_price": price * 0.8,
        "selling_price": price,
        "main_category": "electronics",
        "description": "Phone",
        "images": ["https://img.test/1.jpg"],
        "variants": [
            ProductVariant(
                id="default",
                purchased_price=price * 0.8,
                selling_price=price,
                stock=stock,
            )
        ],
    }
    fields.update(kwargs)
    return Product(**fields)


@pytest.fixture
def android_phone():
    return make_product(
        product_id="p-android",
        name="Pixel 8",
        main_category="electronics",
        sub_category="phones",
        sub_sub_category="android",
    )


@pytest.fixture
def shirt():
    return make_product(
        product_id="p-shirt",
        name="Oxford Shirt",
        price=49.0,
        main_category="clothing",
        sub_category="shirts",
    )
