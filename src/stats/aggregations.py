"""
Query stages for booking analytics.

Every analytics call site builds its query from these stages so the
single-stat endpoints and the overview cannot drift apart. Stages take and
return SQLAlchemy ``Query`` objects; row formatters turn grouped rows into
response models.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import desc, extract, func
from sqlalchemy.orm import Query, Session

from src.models import Booking, Package
from src.bookings.schemas import BookingStatus
from src.bookings.pricing_service import MINOR_UNITS_PER_MAJOR, round_half_up
from src.stats.schemas import CurrencyRevenue, MonthlyRevenue, MostBookedPackage

UNKNOWN_CURRENCY = "UNKNOWN"

# Accumulators; missing values count as zero
revenue_cents = func.coalesce(func.sum(func.coalesce(Booking.total_group_cents, 0)), 0)
traveler_count = func.coalesce(func.sum(func.coalesce(Booking.travelers, 0)), 0)
booking_count = func.count(Booking.id)


# Match stages
def confirmed(query: Query) -> Query:
    return query.filter(Booking.status == BookingStatus.CONFIRMED.value)


def updated_within(
    query: Query,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None
) -> Query:
    """Half-open window [date_from, date_to) on the last status change"""
    if date_from is not None:
        query = query.filter(Booking.updated_at >= date_from)
    if date_to is not None:
        query = query.filter(Booking.updated_at < date_to)
    return query


# Group stages
def revenue_by_currency(db: Session) -> Query:
    query = db.query(
        Booking.currency.label("currency"),
        revenue_cents.label("total_cents"),
        booking_count.label("bookings")
    )
    return confirmed(query).group_by(Booking.currency).order_by(desc("total_cents"))


def traveler_totals(db: Session) -> Query:
    query = db.query(
        traveler_count.label("travelers"),
        booking_count.label("bookings")
    )
    return confirmed(query)


def package_popularity(db: Session) -> Query:
    """Confirmed bookings per package, most booked first, travelers breaking ties"""
    query = db.query(
        Booking.package_id.label("package_id"),
        booking_count.label("bookings"),
        traveler_count.label("travelers")
    )
    return confirmed(query).group_by(Booking.package_id).order_by(desc("bookings"), desc("travelers"))


def top_package_with_details(db: Session) -> Query:
    """Top popularity group left-joined to its package for display fields"""
    top = package_popularity(db).limit(1).subquery()
    return db.query(
        top.c.package_id,
        top.c.bookings,
        top.c.travelers,
        Package.slug,
        Package.title,
        Package.image
    ).outerjoin(Package, Package.id == top.c.package_id)


def monthly_revenue(
    db: Session,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None
) -> Query:
    year = extract("year", Booking.updated_at)
    month = extract("month", Booking.updated_at)
    query = db.query(
        year.label("year"),
        month.label("month"),
        Booking.currency.label("currency"),
        revenue_cents.label("total_cents"),
        booking_count.label("bookings")
    )
    query = updated_within(confirmed(query), date_from, date_to)
    return query.group_by(year, month, Booking.currency).order_by(year, month, Booking.currency)


# Row formatters
def to_amount(total_cents: int) -> int:
    return round_half_up(total_cents / MINOR_UNITS_PER_MAJOR)


def format_currency_row(row) -> CurrencyRevenue:
    total_cents = int(row.total_cents or 0)
    return CurrencyRevenue(
        currency=row.currency or UNKNOWN_CURRENCY,
        total_cents=total_cents,
        amount=to_amount(total_cents),
        bookings=int(row.bookings)
    )


def format_month_row(row) -> MonthlyRevenue:
    total_cents = int(row.total_cents or 0)
    return MonthlyRevenue(
        month=f"{int(row.year):04d}-{int(row.month):02d}",
        currency=row.currency or UNKNOWN_CURRENCY,
        total_cents=total_cents,
        amount=to_amount(total_cents),
        bookings=int(row.bookings)
    )


def format_top_package_row(row) -> MostBookedPackage:
    return MostBookedPackage(
        package_id=row.package_id,
        slug=row.slug,
        title=row.title,
        image=row.image,
        bookings=int(row.bookings),
        travelers=int(row.travelers or 0)
    )
