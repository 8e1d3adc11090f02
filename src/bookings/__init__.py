"""
Booking Module

This module provides the booking lifecycle for tour packages. It includes:

- Price normalization between major and minor currency units
- Per-booking price breakdown derived from a package and traveler count
- Public booking creation with input validation
- Operator confirm/reject/cancel transitions (permissive status machine)
- Operator booking listing and field edits

Key Components:
- pricing_service.py: Pure pricing helpers shared with the package catalogue
- booking_service.py: Booking creation and administration
- router.py: FastAPI endpoints for bookings
- schemas.py: Pydantic models for booking data structures
"""

from .router import router
from .booking_service import BookingService
from .pricing_service import normalize_submitted_price, derive_booking_pricing
from .schemas import (
    BookingStatus, BookingSource, BookingCreateRequest, BookingCreated,
    BookingOut, PricingBreakdown, PricingOverrides
)

__all__ = [
    "router",
    "BookingService",
    "normalize_submitted_price",
    "derive_booking_pricing",
    "BookingStatus",
    "BookingSource",
    "BookingCreateRequest",
    "BookingCreated",
    "BookingOut",
    "PricingBreakdown",
    "PricingOverrides"
]
