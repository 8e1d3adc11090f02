from typing import List, Optional

from src.schemas import CamelModel

class CountResponse(CamelModel):
    total: int

class CurrencyRevenue(CamelModel):
    """Confirmed revenue for one currency"""
    currency: str
    total_cents: int
    amount: int
    bookings: int

class RevenueSummary(CamelModel):
    by_currency: List[CurrencyRevenue]
    overall_cents: int
    overall_amount: int

class CustomerTotals(CamelModel):
    total_travelers: int
    bookings: int

class MostBookedPackage(CamelModel):
    """Top package by confirmed bookings; display fields are null when the package was deleted"""
    package_id: str
    slug: Optional[str] = None
    title: Optional[str] = None
    image: Optional[str] = None
    bookings: int
    travelers: int

class MonthlyRevenue(CamelModel):
    month: str  # YYYY-MM
    currency: str
    total_cents: int
    amount: int
    bookings: int

class NoDataMessage(CamelModel):
    message: str

class OverviewTotals(CamelModel):
    packages: int
    confirmed_bookings: int
    customers: int

class Overview(CamelModel):
    totals: OverviewTotals
    revenue: RevenueSummary
    most_booked_package: Optional[MostBookedPackage] = None
