"""
Sales resource client.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pos_client.core.api import ApiClient
from pos_client.core.models import validate_form
from pos_client.reporting.models import SalesReportSummary

from .models import CreateSaleRequest, ReceiptText, Sale

logger = logging.getLogger(__name__)


def _sales(data) -> List[Sale]:
    return [Sale.model_validate(item) for item in data or []]


class SalesApi:
    """Sale transactions, receipts and sales reports."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_all(self) -> List[Sale]:
        return _sales(self.api.request("/sales"))

    def get_by_id(self, sale_id: str) -> Sale:
        return Sale.model_validate(self.api.request(f"/sales/{sale_id}"))

    def create(self, sale: Union[CreateSaleRequest, Dict[str, Any]]) -> Sale:
        """
        Submit a sale. The backend computes the total and decrements stock.

        Raises:
            ClientValidationError: If the sale has no items or a bad quantity
        """
        request = validate_form(CreateSaleRequest, sale)
        data = self.api.request("/sales", method="POST", body=request.to_wire())
        created = Sale.model_validate(data)
        logger.info(f"Created sale {created.id} with {len(request.items)} line(s)")
        return created

    def update(self, sale_id: str, updates: Union[Sale, Dict[str, Any]]) -> Sale:
        if isinstance(updates, Sale):
            body = updates.to_wire(partial=True)
        else:
            body = updates
        return Sale.model_validate(self.api.request(f"/sales/{sale_id}", method="PUT", body=body))

    def delete(self, sale_id: str) -> Dict[str, Any]:
        return self.api.request(f"/sales/{sale_id}", method="DELETE") or {}

    def generate_receipt(self, sale_id: str) -> Any:
        """Structured receipt data; its shape belongs to the backend."""
        return self.api.request(f"/sales/{sale_id}/receipt")

    def get_print_receipt(self, sale_id: str) -> str:
        """Preformatted receipt text for a thermal printer."""
        data = self.api.request(f"/sales/{sale_id}/receipt/print")
        return ReceiptText.model_validate(data or {}).receipt_text

    def get_by_date_range(self, start_date: str, end_date: str) -> List[Sale]:
        """
        Sales between two dates.

        Args:
            start_date: ISO date (YYYY-MM-DD)
            end_date: ISO date (YYYY-MM-DD)
        """
        return _sales(
            self.api.request(
                "/sales/date-range", params={"start": str(start_date), "end": str(end_date)}
            )
        )

    def get_report(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> SalesReportSummary:
        """Summary of sales matching the filters; unset filters are not sent."""
        filters = [("startDate", start_date), ("endDate", end_date), ("customerId", customer_id)]
        params = {key: str(value) for key, value in filters if value is not None}
        return SalesReportSummary.model_validate(
            self.api.request("/sales/report", params=params) or {}
        )
