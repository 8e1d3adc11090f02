from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Union
from datetime import date, datetime, time
import logging

from src.database import StorageContext, get_db, get_storage
from src.auth.dependencies import get_current_operator
from src.stats.analytics_service import AnalyticsService, compute_overview
from src.stats.schemas import (
    CountResponse, CustomerTotals, MonthlyRevenue, MostBookedPackage, NoDataMessage,
    Overview, RevenueSummary
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_operator)])

def _internal_error(detail: str) -> HTTPException:
    logger.exception(detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail
    )

@router.get("/total-packages", response_model=CountResponse)
def get_total_packages(db: Session = Depends(get_db)):
    """Total number of packages"""
    try:
        return CountResponse(total=AnalyticsService(db).total_packages())
    except Exception:
        raise _internal_error("Failed to get total packages")

@router.get("/confirmed-bookings", response_model=CountResponse)
def get_confirmed_bookings(db: Session = Depends(get_db)):
    """Total number of confirmed bookings"""
    try:
        return CountResponse(total=AnalyticsService(db).total_confirmed_bookings())
    except Exception:
        raise _internal_error("Failed to get confirmed bookings")

@router.get("/total-revenue", response_model=RevenueSummary)
def get_total_revenue(db: Session = Depends(get_db)):
    """Revenue from confirmed bookings, per currency"""
    try:
        return AnalyticsService(db).total_revenue()
    except Exception:
        raise _internal_error("Failed to compute total revenue")

@router.get("/total-customers", response_model=CustomerTotals)
def get_total_customers(db: Session = Depends(get_db)):
    """Travelers across confirmed bookings"""
    try:
        return AnalyticsService(db).total_customers()
    except Exception:
        raise _internal_error("Failed to compute total customers")

@router.get("/most-booked-package", response_model=Union[MostBookedPackage, NoDataMessage])
def get_most_booked_package(db: Session = Depends(get_db)):
    """Most booked package by confirmed bookings; travelers break ties"""
    try:
        result = AnalyticsService(db).most_booked_package()
    except Exception:
        raise _internal_error("Failed to get most booked package")
    if result is None:
        return NoDataMessage(message="No confirmed bookings yet")
    return result

@router.get("/revenue-by-month", response_model=List[MonthlyRevenue])
def get_revenue_by_month(
    date_from: Optional[date] = Query(None, alias="from", description="Inclusive lower bound (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, alias="to", description="Exclusive upper bound (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    """Confirmed revenue by month of confirmation, grouped by currency"""
    start = datetime.combine(date_from, time.min) if date_from else None
    end = datetime.combine(date_to, time.min) if date_to else None
    try:
        return AnalyticsService(db).revenue_by_month(start, end)
    except Exception:
        raise _internal_error("Failed to compute revenue by month")

@router.get("/overview", response_model=Overview)
async def get_overview(storage: StorageContext = Depends(get_storage)):
    """One-shot summary of the headline statistics"""
    try:
        return await compute_overview(storage)
    except Exception:
        raise _internal_error("Failed to compute overview")
