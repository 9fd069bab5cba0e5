"""
Products and categories resource clients.

One method per backend operation; paths and body keys match the backend
contract exactly.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pos_client import settings
from pos_client.core.api import ApiClient
from pos_client.core.formatting_utils import Number, encode_path_segment, query_value
from pos_client.core.models import validate_form

from .models import (
    Category,
    CreateCategoryRequest,
    PricingUpdate,
    Product,
    ProductCreateRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from .pricing import proportional_selling_price

logger = logging.getLogger(__name__)

ProductUpdate = Union[UpdateProductRequest, Dict[str, Any]]


def _products(data) -> List[Product]:
    return [Product.model_validate(item) for item in data or []]


def _categories(data) -> List[Category]:
    return [Category.model_validate(item) for item in data or []]


class ProductsApi:
    """Product catalog operations."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_all(self) -> List[Product]:
        return _products(self.api.request("/products"))

    def get_by_id(self, product_id: str) -> Product:
        return Product.model_validate(self.api.request(f"/products/{product_id}"))

    def create(self, product: Union[ProductCreateRequest, Dict[str, Any]]) -> Product:
        """
        Create a product.

        Raises:
            ClientValidationError: If the form data is invalid (nothing is sent)
        """
        request = validate_form(ProductCreateRequest, product)
        data = self.api.request("/products", method="POST", body=request.to_wire())
        return Product.model_validate(data)

    def update(self, product_id: str, updates: ProductUpdate) -> Product:
        """Full edit (PUT); only fields set on `updates` are sent."""
        request = validate_form(UpdateProductRequest, updates)
        data = self.api.request(
            f"/products/{product_id}", method="PUT", body=request.to_wire(partial=True)
        )
        return Product.model_validate(data)

    def partial_update(self, product_id: str, updates: ProductUpdate) -> Product:
        request = validate_form(UpdateProductRequest, updates)
        data = self.api.request(
            f"/products/{product_id}", method="PATCH", body=request.to_wire(partial=True)
        )
        return Product.model_validate(data)

    def delete(self, product_id: str) -> Dict[str, Any]:
        return self.api.request(f"/products/{product_id}", method="DELETE") or {}

    def update_stock(self, product_id: str, stock_change: int) -> Product:
        """
        Apply a relative stock change.

        Args:
            product_id: Product ID
            stock_change: Units to add (positive) or remove (negative)
        """
        data = self.api.request(
            f"/products/{product_id}/stock",
            method="PUT",
            body={"stockChange": int(stock_change)},
        )
        return Product.model_validate(data)

    def quick_stock_update(self, product_id: str, stock_change: int) -> Product:
        """Stock adjustment from the product list; same endpoint as update_stock."""
        return self.update_stock(product_id, stock_change)

    def update_pricing(
        self,
        product_id: str,
        purchased_price: Optional[Number] = None,
        selling_price: Optional[Number] = None,
        base_price: Optional[Number] = None,
    ) -> Product:
        pricing = validate_form(
            PricingUpdate,
            {
                "purchased_price": purchased_price,
                "selling_price": selling_price,
                "base_price": base_price,
            },
        )
        data = self.api.request(
            f"/products/{product_id}/pricing", method="PUT", body=pricing.to_wire()
        )
        return Product.model_validate(data)

    def search(
        self,
        name: Optional[str] = None,
        brand: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Number] = None,
        max_price: Optional[Number] = None,
    ) -> List[Product]:
        """Server-side search; criteria left as None are not sent."""
        criteria = [
            ("name", name),
            ("brand", brand),
            ("category", category),
            ("minPrice", min_price),
            ("maxPrice", max_price),
        ]
        params = {key: query_value(value) for key, value in criteria if value is not None}
        return _products(self.api.request("/products/search", params=params))

    def get_by_category(self, category: str) -> List[Product]:
        return _products(self.api.request(f"/products/category/{encode_path_segment(category)}"))

    def get_low_stock(self, threshold: Optional[int] = None) -> List[Product]:
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return _products(
            self.api.request("/products/low-stock", params={"threshold": query_value(threshold)})
        )

    def bulk_update(self, updates: Iterable[Tuple[str, ProductUpdate]]) -> List[Product]:
        """
        Update several products in one request.

        Args:
            updates: (product_id, updates) pairs
        """
        body = {
            "updates": [
                {
                    "id": product_id,
                    "updates": validate_form(UpdateProductRequest, changes).to_wire(partial=True),
                }
                for product_id, changes in updates
            ]
        }
        return _products(self.api.request("/products/bulk-update", method="PUT", body=body))

    def get_available(self) -> List[Product]:
        """Products that can currently be sold."""
        return _products(self.api.request("/sales/products/available"))

    def update_proportional_pricing(
        self, product_id: str, purchased_price: Number, profit_margin: Number
    ) -> Product:
        """
        Reprice a product from its purchase price and a profit margin.

        The selling price is computed here and sent with the purchase price
        as a partial update.
        """
        selling_price = proportional_selling_price(purchased_price, profit_margin)
        logger.info(
            f"Repricing product {product_id}: purchased {purchased_price}, "
            f"margin {profit_margin}% -> selling {selling_price}"
        )
        data = self.api.request(
            f"/products/{product_id}",
            method="PATCH",
            body={
                "purchasedPrice": float(purchased_price),
                "sellingPrice": float(selling_price),
            },
        )
        return Product.model_validate(data)


class CategoriesApi:
    """Category tree operations."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_all(self) -> List[Category]:
        """Full category tree (main categories with nested subCategories)."""
        return _categories(self.api.request("/categories"))

    def get_by_id(self, category_id: str) -> Category:
        return Category.model_validate(self.api.request(f"/categories/{category_id}"))

    def create(self, category: Union[CreateCategoryRequest, Dict[str, Any]]) -> Category:
        """
        Create a category.

        Raises:
            ClientValidationError: If name/level/parent are inconsistent
        """
        request = validate_form(CreateCategoryRequest, category)
        data = self.api.request("/categories", method="POST", body=request.to_wire())
        return Category.model_validate(data)

    def update(
        self, category_id: str, updates: Union[UpdateCategoryRequest, Dict[str, Any]]
    ) -> Category:
        request = validate_form(UpdateCategoryRequest, updates)
        data = self.api.request(
            f"/categories/{category_id}", method="PUT", body=request.to_wire(partial=True)
        )
        return Category.model_validate(data)

    def delete(self, category_id: str) -> Dict[str, Any]:
        return self.api.request(f"/categories/{category_id}", method="DELETE") or {}

    def get_by_level(self, level: int) -> List[Category]:
        return _categories(self.api.request(f"/categories/level/{level}"))

    def get_subcategories(self, parent_id: str) -> List[Category]:
        return _categories(self.api.request(f"/categories/{parent_id}/subcategories"))

    def get_hierarchy(self) -> List[Category]:
        return _categories(self.api.request("/categories/hierarchy"))
