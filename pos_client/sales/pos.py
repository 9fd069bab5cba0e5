"""
Sale entry workflow.

SaleEntry holds the state of the new-sale screen: the products that can be
sold, the cart and the search box. Cart changes go through the pure
transforms in sales.cart; only load() and checkout() touch the network.

Checkout:
1. validate the customer form and the cart (no request on failure)
2. submit the sale; on failure the cart is left intact for a retry
3. clear the cart, print the receipt, refresh available products

Failures in step 3 happen after the sale is committed, so they are reported
on the CheckoutResult instead of being raised.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pos_client.core.concurrency import RequestGeneration
from pos_client.core.exceptions import ApiError, DomainRuleError
from pos_client.core.models import validate_form
from pos_client.inventory.api import ProductsApi
from pos_client.inventory.categories import available_products
from pos_client.inventory.models import Product, ProductVariant

from . import cart as cart_ops
from .api import SalesApi
from .models import CartItem, Sale, SaleForm
from .receipt_service import ReceiptPrinter, StreamReceiptPrinter, print_sale_receipt

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    """Outcome of a submitted sale."""

    sale: Sale
    receipt_text: Optional[str] = None
    errors: Dict[str, Exception] = field(default_factory=dict)

    @property
    def receipt_printed(self) -> bool:
        return self.receipt_text is not None


class SaleEntry:
    """State of the new-sale screen."""

    def __init__(
        self,
        products_api: ProductsApi,
        sales_api: SalesApi,
        printer: Optional[ReceiptPrinter] = None,
    ):
        self.products_api = products_api
        self.sales_api = sales_api
        self.printer = printer or StreamReceiptPrinter()
        self.products: List[Product] = []
        self.cart: List[CartItem] = []
        self.search_query = ""
        self.generation = RequestGeneration()

    def load(self) -> List[Product]:
        """Fetch the products available for sale."""
        token = self.generation.next()
        products = self.products_api.get_available()
        if self.generation.is_current(token):
            self.products = products
        else:
            logger.info("Discarding stale available-products response")
        return self.products

    def close(self):
        self.generation.invalidate()

    def visible_products(self) -> List[Product]:
        return available_products(self.products, self.search_query)

    def product(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    # Cart

    def add(self, product: Union[Product, str], variant: Optional[ProductVariant] = None):
        if isinstance(product, str):
            found = self.product(product)
            if found is None:
                raise DomainRuleError(f"Product {product} is not available for sale")
            product = found
        self.cart = cart_ops.add_item(self.cart, product, variant)
        return self.cart

    def remove(self, product_id: str):
        self.cart = cart_ops.remove_item(self.cart, product_id)
        return self.cart

    def set_quantity(self, product_id: str, quantity: int):
        stock = cart_ops.stock_for(self.products, product_id)
        self.cart = cart_ops.set_quantity(self.cart, product_id, quantity, stock)
        return self.cart

    def clear(self):
        self.cart = []

    def total(self) -> Decimal:
        return cart_ops.cart_total(self.cart)

    # Checkout

    def checkout(self, form: Union[SaleForm, Dict[str, Any]]) -> CheckoutResult:
        """
        Submit the cart as a sale.

        Raises:
            ClientValidationError: If the customer form is invalid
            EmptyCartError: If the cart is empty
            ApiError: If the sale could not be created (cart kept)
        """
        form = validate_form(SaleForm, form)
        request = cart_ops.to_sale_request(self.cart, form.customer_name)

        sale = self.sales_api.create(request)
        self.cart = []
        result = CheckoutResult(sale=sale)

        if sale.id:
            try:
                result.receipt_text = print_sale_receipt(self.sales_api, sale.id, self.printer)
            except ApiError as e:
                logger.error(f"Sale {sale.id} created but its receipt could not be printed: {e}")
                result.errors["receipt"] = e
        else:
            logger.warning("Backend returned a sale without an id; receipt skipped")

        try:
            self.load()
        except ApiError as e:
            logger.warning(f"Could not refresh available products after sale {sale.id}: {e}")
            result.errors["products"] = e

        return result
