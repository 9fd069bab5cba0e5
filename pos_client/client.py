"""
Entry point bundling every resource client around one HTTP session.

Usage:
    with PosClient() as pos:
        tree = pos.categories.get_all()
        products = pos.products.get_all()
"""

from typing import Optional

import requests

from .core.api import ApiClient
from .inventory.api import CategoriesApi, ProductsApi
from .inventory.catalog import ProductCatalog
from .reporting.api import ReportsApi
from .sales.api import SalesApi
from .sales.pos import SaleEntry
from .sales.receipt_service import ReceiptPrinter


class PosClient:
    """Products, sales, categories and reports sharing one ApiClient."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        api: Optional[ApiClient] = None,
    ):
        self.api = api or ApiClient(base_url=base_url, timeout=timeout, session=session)
        self.products = ProductsApi(self.api)
        self.sales = SalesApi(self.api)
        self.categories = CategoriesApi(self.api)
        self.reports = ReportsApi(self.api)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.api.close()

    def catalog(self) -> ProductCatalog:
        return ProductCatalog(self.products, self.categories)

    def sale_entry(self, printer: Optional[ReceiptPrinter] = None) -> SaleEntry:
        return SaleEntry(self.products, self.sales, printer=printer)
