from pydantic import Field
from typing import Optional, Union
from datetime import datetime, date
from enum import Enum

from src.schemas import CamelModel

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

class BookingSource(str, Enum):
    """Where the booking request came from"""
    WEB_FORM = "WEB_FORM"
    WHATSAPP = "WHATSAPP"

# Request Models
class CustomerInfo(CamelModel):
    """Customer details as submitted by the booking form"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class TripInfo(CamelModel):
    """Trip details; travelers is validated by the service so bad counts map to 400"""
    travel_date: Optional[str] = None
    travelers: Optional[Union[int, float, str]] = None
    special_requests: Optional[str] = None

class PricingOverrides(CamelModel):
    """Caller-supplied pricing; any numeric field wins over the derived value"""
    currency: Optional[str] = None
    package_price_cents: Optional[Union[int, float, str]] = None
    sdf_fee_cents: Optional[Union[int, float, str]] = None
    total_per_person_cents: Optional[Union[int, float, str]] = None
    total_group_cents: Optional[Union[int, float, str]] = None

class BookingCreateRequest(CamelModel):
    """Public booking request"""
    package_slug: Optional[str] = None
    package_title_snapshot: Optional[str] = None
    customer: Optional[CustomerInfo] = None
    trip: Optional[TripInfo] = None
    pricing: Optional[PricingOverrides] = None
    source: Optional[BookingSource] = None

class BookingActionRequest(CamelModel):
    """Optional operator note for confirm/reject"""
    reason: Optional[str] = None

class BookingFieldPatch(CamelModel):
    """Fields an operator may edit directly on a booking"""
    phone: Optional[str] = None
    special_requests: Optional[str] = None
    admin_reason: Optional[str] = None

# Response Models
class PricingBreakdown(CamelModel):
    """Fully resolved per-booking pricing in minor units"""
    currency: Optional[str] = None
    package_price_cents: int = Field(..., ge=0)
    sdf_fee_cents: int = Field(..., ge=0)
    total_per_person_cents: int = Field(..., ge=0)
    total_group_cents: int = Field(..., ge=0)

class CustomerOut(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None

class TripOut(CamelModel):
    travel_date: date
    travelers: int
    special_requests: Optional[str] = None

class BookingOut(CamelModel):
    """Stored booking with nested customer, trip and pricing"""
    id: str
    package: str
    package_title_snapshot: Optional[str] = None
    status: BookingStatus
    customer: CustomerOut
    trip: TripOut
    pricing: PricingBreakdown
    source: BookingSource
    admin_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking) -> "BookingOut":
        return cls(
            id=booking.id,
            package=booking.package_id,
            package_title_snapshot=booking.package_title_snapshot,
            status=booking.status,
            customer=CustomerOut(
                first_name=booking.customer_first_name,
                last_name=booking.customer_last_name,
                email=booking.customer_email,
                phone=booking.customer_phone
            ),
            trip=TripOut(
                travel_date=booking.travel_date,
                travelers=booking.travelers,
                special_requests=booking.special_requests
            ),
            pricing=PricingBreakdown(
                currency=booking.currency,
                package_price_cents=booking.package_price_cents,
                sdf_fee_cents=booking.sdf_fee_cents,
                total_per_person_cents=booking.total_per_person_cents,
                total_group_cents=booking.total_group_cents
            ),
            source=booking.source,
            admin_reason=booking.admin_reason,
            created_at=booking.created_at,
            updated_at=booking.updated_at
        )

class BookingCreated(CamelModel):
    """Summary returned to the public form after a booking is stored"""
    booking_id: str
    status: BookingStatus
    currency: str
    date: str
    travelers: int

class BookingActionResponse(CamelModel):
    ok: bool = True
    booking: BookingOut
