"""
Dashboard and sales-report loaders.

Both screens fetch several independent reports at once. Each report is
fetched on its own thread and stored on its own; a failing report is
recorded in `errors` and the rest of the page still renders.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

from pos_client import settings
from pos_client.core.concurrency import fetch_concurrently
from pos_client.sales.models import Sale

from .api import ReportsApi
from .models import DailySalesReport, MonthlySalesReport, SalesOverview

logger = logging.getLogger(__name__)


@dataclass
class Dashboard:
    """Home dashboard: headline figures and the latest sales."""

    overview: SalesOverview = field(default_factory=SalesOverview)
    recent_sales: List[Sale] = field(default_factory=list)
    errors: Dict[str, Exception] = field(default_factory=dict)


@dataclass
class SalesReportPage:
    overview: Optional[SalesOverview] = None
    daily: Optional[DailySalesReport] = None
    monthly: Optional[MonthlySalesReport] = None
    errors: Dict[str, Exception] = field(default_factory=dict)


def recent_sales(sales: List[Sale], limit: Optional[int] = None) -> List[Sale]:
    """The last `limit` sales of a chronological list, newest first."""
    if limit is None:
        limit = settings.DASHBOARD_RECENT_SALES
    if limit <= 0:
        return []
    return list(reversed(sales[-limit:]))


def load_dashboard(
    reports_api: ReportsApi,
    today: Optional[date] = None,
    days: Optional[int] = None,
) -> Dashboard:
    """
    Load the home dashboard.

    Args:
        reports_api: Reports client
        today: End of the sales window (default: today)
        days: Length of the sales window (default: settings.DASHBOARD_DAYS)

    Returns:
        Dashboard; a failed overview keeps zeroed figures, a failed sales
        fetch keeps an empty recent-sales list
    """
    today = today or date.today()
    window = days if days is not None else settings.DASHBOARD_DAYS
    start_date = today - timedelta(days=window)

    outcome = fetch_concurrently(
        {
            "overview": reports_api.get_overview,
            "sales": lambda: reports_api.get_date_range(start_date, today),
        }
    )

    dashboard = Dashboard(errors=outcome.errors)
    if "overview" in outcome.results:
        dashboard.overview = outcome.results["overview"]
    if "sales" in outcome.results:
        dashboard.recent_sales = recent_sales(outcome.results["sales"])

    if outcome.errors:
        logger.warning(f"Dashboard loaded with errors in: {', '.join(sorted(outcome.errors))}")
    return dashboard


def load_sales_report(
    reports_api: ReportsApi,
    day: Optional[date] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> SalesReportPage:
    """
    Load the sales report page: overview, one day and one month.

    Args:
        reports_api: Reports client
        day: Day for the daily report (default: today)
        month: Month (1-12) for the monthly report (default: current month)
        year: Year for the monthly report (default: current year)
    """
    today = date.today()
    day = day or today
    month = month or today.month
    year = year or today.year

    outcome = fetch_concurrently(
        {
            "overview": reports_api.get_overview,
            "daily": lambda: reports_api.get_daily(day),
            "monthly": lambda: reports_api.get_monthly(month, year),
        }
    )

    return SalesReportPage(
        overview=outcome.get("overview"),
        daily=outcome.get("daily"),
        monthly=outcome.get("monthly"),
        errors=outcome.errors,
    )
