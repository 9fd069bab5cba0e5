"""
Sales schemas: sales, cart lines and the checkout form.
"""

from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, ConfigDict, EmailStr, Field

from pos_client.core.models import WireModel


class SaleLine(WireModel):
    product_id: str
    quantity: int
    price: float = 0


class Sale(WireModel):
    """A completed sale as stored by the backend (the server computes total)."""

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    items: List[SaleLine] = Field(default_factory=list)
    total: float = 0
    customer_name: Optional[str] = None
    created_at: Optional[str] = None


class SaleRequestLine(WireModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class CreateSaleRequest(WireModel):
    items: List[SaleRequestLine] = Field(min_length=1)
    customer_name: Optional[str] = None


class CartItem(WireModel):
    """One line of the cart being rung up. Immutable; transforms return copies."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    price: float
    quantity: int = Field(1, ge=1)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class SaleForm(WireModel):
    """Customer details entered at checkout."""

    customer_name: str = Field(min_length=1)
    customer_email: Optional[Union[EmailStr, Literal[""]]] = None
    customer_phone: Optional[str] = None


class ReceiptText(WireModel):
    receipt_text: str = ""
