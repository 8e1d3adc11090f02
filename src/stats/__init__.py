"""
Booking Analytics Module

Read-only statistics over confirmed bookings: counts, revenue per currency,
traveler totals, the most booked package, monthly revenue and a combined
overview.

Key Components:
- aggregations.py: Shared query stages and row formatters
- analytics_service.py: Analytics queries and the concurrent overview
- router.py: Operator-only FastAPI endpoints
- schemas.py: Pydantic response models
"""

from .router import router
from .analytics_service import AnalyticsService, compute_overview

__all__ = [
    "router",
    "AnalyticsService",
    "compute_overview"
]
