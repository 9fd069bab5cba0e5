"""
Report schemas.

The overview endpoint feeds both the home dashboard and the sales report
page, which historically read different key names for the same figures;
both spellings are accepted.
"""

from typing import List, Union

from pydantic import AliasChoices, Field

from pos_client.core.models import WireModel
from pos_client.sales.models import Sale


class ProductSalesReport(WireModel):
    product_id: str = ""
    product_name: str = Field("", validation_alias=AliasChoices("productName", "name"))
    quantity_sold: int = Field(
        0, validation_alias=AliasChoices("quantitySold", "totalQuantitySold")
    )
    total_revenue: float = 0
    average_price: float = 0


class SalesOverview(WireModel):
    # Home dashboard
    total_sales: int = 0
    total_revenue: float = 0
    average_order_value: float = 0
    total_products: int = 0
    # Sales report page
    todays_sales: int = 0
    todays_revenue: float = 0
    month_to_date_sales: int = 0
    month_to_date_revenue: float = 0
    active_orders: int = 0
    top_selling_products: List[ProductSalesReport] = Field(default_factory=list)


class DailySalesReport(WireModel):
    date: str
    total_sales: int = 0
    total_revenue: float = 0
    average_order_value: float = 0
    transactions: List[Sale] = Field(default_factory=list)


class MonthlySalesReport(WireModel):
    month: Union[int, str]
    year: int
    total_sales: int = 0
    total_revenue: float = 0
    average_order_value: float = 0
    daily_breakdown: List[DailySalesReport] = Field(default_factory=list)


class SalesReportSummary(WireModel):
    """Response of /sales/report."""

    total_sales: int = 0
    total_revenue: float = 0
    average_order_value: float = 0
    sales: List[Sale] = Field(default_factory=list)

