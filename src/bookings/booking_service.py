from typing import List, Optional
from datetime import datetime, date, timezone
from sqlalchemy.orm import Session
import logging

from src.models import Booking, Package
from src.bookings.schemas import (
    BookingCreateRequest, BookingCreated, BookingStatus, BookingSource,
    BookingFieldPatch
)
from src.bookings.pricing_service import derive_booking_pricing, safe_number
from src.config import settings
from src.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

class BookingService:
    """Service for creating bookings and moving them through their statuses"""

    def __init__(self, db: Session):
        self.db = db

    def create_booking(self, request: BookingCreateRequest) -> BookingCreated:
        """Validate a public booking request, price it and store it as PENDING"""

        package = self._get_package_by_slug(request.package_slug)
        if not package:
            raise NotFoundError("Package not found")

        trip = request.trip
        if not trip or not trip.travel_date:
            raise InvalidInputError("Travel date is required")
        travel_date = self._parse_travel_date(trip.travel_date)
        travelers = self._parse_travelers(trip.travelers)

        customer = request.customer
        if not customer or not customer.first_name or not customer.last_name or not customer.email:
            raise InvalidInputError("Customer firstName, lastName and email are required")

        pricing = derive_booking_pricing(package, travelers, request.pricing)

        booking = Booking(
            package_id=package.id,
            package_title_snapshot=request.package_title_snapshot or package.title,
            status=BookingStatus.PENDING.value,
            customer_first_name=customer.first_name.strip(),
            customer_last_name=customer.last_name.strip(),
            customer_email=customer.email.strip().lower(),
            customer_phone=(customer.phone or "").strip(),
            travel_date=travel_date,
            travelers=travelers,
            special_requests=trip.special_requests or "",
            currency=pricing.currency,
            package_price_cents=pricing.package_price_cents,
            sdf_fee_cents=pricing.sdf_fee_cents,
            total_per_person_cents=pricing.total_per_person_cents,
            total_group_cents=pricing.total_group_cents,
            source=(request.source or BookingSource.WEB_FORM).value
        )

        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)

        logger.info(
            "Booking %s created for package %s (%s travelers, %s %s)",
            booking.id, package.slug, travelers, pricing.total_group_cents, pricing.currency
        )

        return BookingCreated(
            booking_id=booking.id,
            status=booking.status,
            currency=booking.currency,
            date=travel_date.isoformat(),
            travelers=travelers
        )

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID"""
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def list_bookings(self, email: Optional[str] = None) -> List[Booking]:
        """List bookings newest first, optionally for one customer email"""
        query = self.db.query(Booking)
        if email:
            query = query.filter(Booking.customer_email == email.strip().lower())
        return query.order_by(Booking.created_at.desc()).all()

    def update_booking_fields(self, booking_id: str, patch: BookingFieldPatch) -> Booking:
        """Apply an operator's direct edits; pricing and status are never touched here"""
        booking = self._require_booking(booking_id)

        update_data = patch.model_dump(exclude_unset=True)
        if "phone" in update_data:
            booking.customer_phone = update_data["phone"] or ""
        if "special_requests" in update_data:
            booking.special_requests = update_data["special_requests"] or ""
        if "admin_reason" in update_data:
            booking.admin_reason = update_data["admin_reason"]

        self.db.commit()
        self.db.refresh(booking)
        return booking

    # Administration: every transition is an unconditional overwrite
    def confirm_booking(self, booking_id: str, reason: Optional[str] = None) -> Booking:
        return self._set_status(booking_id, BookingStatus.CONFIRMED, reason)

    def reject_booking(self, booking_id: str, reason: Optional[str] = None) -> Booking:
        return self._set_status(booking_id, BookingStatus.REJECTED, reason)

    def cancel_booking(self, booking_id: str) -> Booking:
        return self._set_status(booking_id, BookingStatus.CANCELLED)

    def _set_status(
        self,
        booking_id: str,
        new_status: BookingStatus,
        reason: Optional[str] = None
    ) -> Booking:
        booking = self._require_booking(booking_id)
        previous_status = booking.status

        booking.apply_status(new_status.value, reason)
        self.db.commit()
        self.db.refresh(booking)

        logger.info("Booking %s moved %s -> %s", booking_id, previous_status, new_status.value)
        return booking

    def _require_booking(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def _get_package_by_slug(self, slug: Optional[str]) -> Optional[Package]:
        if not slug:
            return None
        return self.db.query(Package).filter(Package.slug == slug).first()

    @staticmethod
    def _parse_travel_date(value: str) -> date:
        """Normalize a date or datetime string to a UTC calendar date"""
        text = str(value).strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInputError("Invalid travel date")

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()

    @staticmethod
    def _parse_travelers(value) -> int:
        """Traveler count defaults to 1 and must be a positive integer within the per-booking cap"""
        if value is None or (isinstance(value, str) and not value.strip()):
            return 1

        number = safe_number(value)
        if number is None or number != int(number) or number <= 0:
            raise InvalidInputError("Invalid number of travelers")
        if number > settings.MAX_TRAVELERS_PER_BOOKING:
            raise InvalidInputError(
                f"At most {settings.MAX_TRAVELERS_PER_BOOKING} travelers per booking"
            )
        return int(number)
