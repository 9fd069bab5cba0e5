"""
Reports resource client.
"""

from datetime import date
from typing import List, Union

from pos_client.core.api import ApiClient
from pos_client.sales.models import Sale

from .models import DailySalesReport, MonthlySalesReport, SalesOverview

DateLike = Union[date, str]


def _iso(value: DateLike) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


class ReportsApi:
    """Aggregated sales figures computed by the backend."""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_overview(self) -> SalesOverview:
        return SalesOverview.model_validate(self.api.request("/reports/overview") or {})

    def get_daily(self, day: DateLike) -> DailySalesReport:
        data = self.api.request("/reports/daily", params={"date": _iso(day)})
        return DailySalesReport.model_validate(data)

    def get_monthly(self, month: int, year: int) -> MonthlySalesReport:
        data = self.api.request("/reports/monthly", params={"month": str(month), "year": str(year)})
        return MonthlySalesReport.model_validate(data)

    def get_date_range(self, start_date: DateLike, end_date: DateLike) -> List[Sale]:
        data = self.api.request(
            "/reports/date-range",
            params={"startDate": _iso(start_date), "endDate": _iso(end_date)},
        )
        return [Sale.model_validate(item) for item in data or []]
