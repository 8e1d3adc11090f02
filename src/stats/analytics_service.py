from typing import Callable, List, Optional, TypeVar
from datetime import datetime
from sqlalchemy.orm import Session
import asyncio
import logging

from src.database import StorageContext
from src.models import Booking, Package
from src.stats import aggregations
from src.stats.schemas import (
    CustomerTotals, MonthlyRevenue, MostBookedPackage, Overview, OverviewTotals,
    RevenueSummary
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

class AnalyticsService:
    """Read-only rollups over confirmed bookings"""

    def __init__(self, db: Session):
        self.db = db

    def total_packages(self) -> int:
        """Count of all packages; packages carry no status"""
        return self.db.query(Package).count()

    def total_confirmed_bookings(self) -> int:
        return aggregations.confirmed(self.db.query(Booking)).count()

    def total_revenue(self) -> RevenueSummary:
        """Confirmed revenue per currency, largest first"""
        by_currency = [
            aggregations.format_currency_row(row)
            for row in aggregations.revenue_by_currency(self.db).all()
        ]
        overall_cents = sum(r.total_cents for r in by_currency)

        return RevenueSummary(
            by_currency=by_currency,
            overall_cents=overall_cents,
            overall_amount=aggregations.to_amount(overall_cents)
        )

    def total_customers(self) -> CustomerTotals:
        """Travelers summed across confirmed bookings"""
        row = aggregations.traveler_totals(self.db).one()
        return CustomerTotals(
            total_travelers=int(row.travelers or 0),
            bookings=int(row.bookings or 0)
        )

    def most_booked_package(self) -> Optional[MostBookedPackage]:
        """Package with the most confirmed bookings, or None without any"""
        row = aggregations.top_package_with_details(self.db).first()
        if row is None:
            return None
        return aggregations.format_top_package_row(row)

    def revenue_by_month(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> List[MonthlyRevenue]:
        """Confirmed revenue bucketed by month of last status change and currency"""
        rows = aggregations.monthly_revenue(self.db, date_from, date_to).all()
        return [aggregations.format_month_row(row) for row in rows]


async def compute_overview(storage: StorageContext) -> Overview:
    """Run the headline aggregations concurrently and assemble one summary.

    Each sub-query gets its own session in a worker thread. Results are not
    taken from a single snapshot; any failure fails the whole overview.
    """

    def run(query: Callable[[AnalyticsService], T]) -> T:
        with storage.session() as db:
            return query(AnalyticsService(db))

    packages, confirmed_bookings, customers, revenue, most_booked = await asyncio.gather(
        asyncio.to_thread(run, lambda s: s.total_packages()),
        asyncio.to_thread(run, lambda s: s.total_confirmed_bookings()),
        asyncio.to_thread(run, lambda s: s.total_customers()),
        asyncio.to_thread(run, lambda s: s.total_revenue()),
        asyncio.to_thread(run, lambda s: s.most_booked_package())
    )

    return Overview(
        totals=OverviewTotals(
            packages=packages,
            confirmed_bookings=confirmed_bookings,
            customers=customers.total_travelers
        ),
        revenue=revenue,
        most_booked_package=most_booked
    )
