"""
Product catalog state for the products and category-management screens.

ProductCatalog holds the fetched products and category tree plus the
current filters. Products and categories are loaded concurrently and
independently: a failed category fetch still leaves the product list usable.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pos_client import settings
from pos_client.core.concurrency import LoadResult, RequestGeneration, fetch_concurrently
from pos_client.core.formatting_utils import Number

from .api import CategoriesApi, ProductsApi
from .categories import available_parent_categories, filter_products, find_category
from .models import Category, CreateCategoryRequest, Product

logger = logging.getLogger(__name__)


class ProductCatalog:
    """In-memory state of the catalog screens."""

    def __init__(self, products_api: ProductsApi, categories_api: CategoriesApi):
        self.products_api = products_api
        self.categories_api = categories_api
        self.products: List[Product] = []
        self.categories: List[Category] = []
        self.search_query = ""
        self.selected_category = ""
        self.generations = {"products": RequestGeneration(), "categories": RequestGeneration()}

    def load(self) -> LoadResult:
        """
        Fetch products and categories in parallel.

        Each resource is applied on its own; failures are reported in the
        returned LoadResult and leave the previous state for that resource.
        A response is dropped when close() or a newer load of the same
        resource happened while it was in flight.
        """
        tokens = {name: generation.next() for name, generation in self.generations.items()}
        outcome = fetch_concurrently(
            {
                "products": self.products_api.get_all,
                "categories": self.categories_api.get_all,
            }
        )

        for name, result in outcome.results.items():
            self._apply(name, tokens[name], result)
        return outcome

    def _apply(self, name: str, token: int, result: Any):
        if not self.generations[name].is_current(token):
            logger.info(f"Discarding stale {name} response")
            return
        setattr(self, name, result)

    def refresh_products(self) -> List[Product]:
        token = self.generations["products"].next()
        self._apply("products", token, self.products_api.get_all())
        return self.products

    def refresh_categories(self) -> List[Category]:
        token = self.generations["categories"].next()
        self._apply("categories", token, self.categories_api.get_all())
        return self.categories

    def close(self):
        """Stop applying responses for requests still in flight."""
        for generation in self.generations.values():
            generation.invalidate()

    # Filters

    def set_filters(self, search_query: Optional[str] = None, category_id: Optional[str] = None):
        if search_query is not None:
            self.search_query = search_query
        if category_id is not None:
            self.selected_category = category_id

    def filtered(self) -> List[Product]:
        return filter_products(
            self.products,
            self.categories,
            search_query=self.search_query,
            category_id=self.selected_category,
        )

    def category(self, category_id: str) -> Optional[Category]:
        return find_category(self.categories, category_id)

    def parent_candidates(self, level: int) -> List[Category]:
        return available_parent_categories(self.categories, level)

    # Actions

    def adjust_stock(self, product_id: str, stock_change: int) -> Product:
        """Apply a quick stock change, then refetch the product list."""
        product = self.products_api.quick_stock_update(product_id, stock_change)
        logger.info(f"Stock of product {product_id} changed by {stock_change}")
        self.refresh_products()
        return product

    def reprice(
        self,
        product_id: str,
        purchased_price: Number,
        profit_margin: Optional[Number] = None,
    ) -> Product:
        """Proportional repricing (default margin from settings), then refetch."""
        if profit_margin is None:
            profit_margin = settings.DEFAULT_PROFIT_MARGIN
        product = self.products_api.update_proportional_pricing(
            product_id, purchased_price, profit_margin
        )
        self.refresh_products()
        return product

    def create_category(self, category: Union[CreateCategoryRequest, Dict[str, Any]]) -> Category:
        """Create a category, then refetch the whole tree."""
        created = self.categories_api.create(category)
        logger.info(f"Created category {created.id} ({created.name}, level {created.level})")
        self.refresh_categories()
        return created
