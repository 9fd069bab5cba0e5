"""
Cart aggregation for sale entry.

A cart is an ordered list of CartItem. Every function here is a pure
transform: it returns a new list and never mutates its input. Quantities are
bounded below by 1 and above by the stock of the product's selected variant.
"""

from decimal import Decimal
from typing import List, Optional, Sequence

from pos_client.core.exceptions import (
    DomainRuleError,
    EmptyCartError,
    InvalidQuantityError,
    NoVariantError,
    StockExceededError,
)
from pos_client.core.formatting_utils import round_money, to_decimal
from pos_client.inventory.models import Product, ProductVariant

from .models import CartItem, CreateSaleRequest, SaleRequestLine

Cart = List[CartItem]


def find_line(cart: Sequence[CartItem], product_id: str) -> Optional[CartItem]:
    for line in cart:
        if line.product_id == product_id:
            return line
    return None


def add_item(
    cart: Sequence[CartItem],
    product: Product,
    variant: Optional[ProductVariant] = None,
) -> Cart:
    """
    Add one unit of a product.

    Args:
        cart: Current cart
        product: Product to add
        variant: Variant being sold (default: the product's first variant)

    Returns:
        New cart with the line incremented, or a new line of quantity 1

    Raises:
        NoVariantError: If the product has no variant
        StockExceededError: If the variant has no more stock for this cart
    """
    if not product.id:
        raise DomainRuleError(f"Product '{product.name}' has no id")

    variant = variant or product.default_variant
    if variant is None:
        raise NoVariantError("No variant available for this product")

    existing = find_line(cart, product.id)
    current_quantity = existing.quantity if existing else 0
    if current_quantity >= variant.stock:
        raise StockExceededError(variant.stock)

    if existing:
        return [
            line.model_copy(update={"quantity": line.quantity + 1})
            if line.product_id == product.id
            else line
            for line in cart
        ]

    new_line = CartItem(
        product_id=product.id,
        name=product.name,
        price=variant.selling_price,
        quantity=1,
    )
    return list(cart) + [new_line]


def remove_item(cart: Sequence[CartItem], product_id: str) -> Cart:
    """Drop the product's line; an absent product leaves the cart as it was."""
    return [line for line in cart if line.product_id != product_id]


def set_quantity(
    cart: Sequence[CartItem],
    product_id: str,
    quantity: int,
    stock: Optional[int] = None,
) -> Cart:
    """
    Replace the quantity of a line.

    Args:
        cart: Current cart
        product_id: Product whose line changes
        quantity: New quantity
        stock: Stock of the product's variant; None when unknown (no upper bound)

    Raises:
        InvalidQuantityError: If quantity < 1
        StockExceededError: If quantity > stock
    """
    if quantity < 1:
        raise InvalidQuantityError("Quantity must be at least 1")
    if stock is not None and quantity > stock:
        raise StockExceededError(stock, f"Cannot exceed stock limit of {stock}")

    return [
        line.model_copy(update={"quantity": quantity}) if line.product_id == product_id else line
        for line in cart
    ]


def stock_for(products: Sequence[Product], product_id: str) -> Optional[int]:
    """Stock of the product's default variant, None if the product is unknown."""
    for product in products:
        if product.id == product_id:
            variant = product.default_variant
            return variant.stock if variant else None
    return None


def cart_total(cart: Sequence[CartItem]) -> Decimal:
    """Sum of price * quantity over all lines, in cents precision."""
    return round_money(sum((to_decimal(line.price) * line.quantity for line in cart), Decimal("0")))


def item_count(cart: Sequence[CartItem]) -> int:
    return sum(line.quantity for line in cart)


def to_sale_request(cart: Sequence[CartItem], customer_name: Optional[str] = None) -> CreateSaleRequest:
    """
    Build the request body for submitting the cart.

    Raises:
        EmptyCartError: If the cart has no lines
    """
    if not cart:
        raise EmptyCartError("Cart is empty")

    return CreateSaleRequest(
        items=[SaleRequestLine(product_id=line.product_id, quantity=line.quantity) for line in cart],
        customer_name=customer_name or None,
    )
