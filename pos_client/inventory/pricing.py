"""
Client-side price arithmetic.

The backend owns every other calculation; proportional pricing is the one
figure the client computes before sending a partial update.
"""

from decimal import Decimal

from pos_client.core.formatting_utils import Number, round_money, to_decimal

HUNDRED = Decimal("100")


def proportional_selling_price(purchased_price: Number, profit_margin: Number) -> Decimal:
    """
    Selling price for a purchase price and a profit margin in percent.

    Args:
        purchased_price: Purchase (cost) price
        profit_margin: Margin in percent, e.g. 25 for 25%

    Returns:
        purchased_price * (1 + profit_margin / 100), rounded half-up to cents

    Examples:
        >>> proportional_selling_price(100, 25)
        Decimal('125.00')
    """
    multiplier = 1 + to_decimal(profit_margin) / HUNDRED
    return round_money(to_decimal(purchased_price) * multiplier)


def profit_margin(purchased_price: Number, selling_price: Number) -> Decimal:
    """
    Margin in percent implied by a purchase and a selling price.

    Returns Decimal("0.00") when the purchase price is zero.
    """
    purchased = to_decimal(purchased_price)
    if not purchased:
        return Decimal("0.00")
    return round_money((to_decimal(selling_price) - purchased) / purchased * HUNDRED)
