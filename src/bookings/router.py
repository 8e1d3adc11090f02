from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from src.database import get_db
from src.auth.dependencies import get_current_operator
from src.bookings.schemas import (
    BookingCreateRequest, BookingCreated, BookingOut, BookingActionRequest,
    BookingActionResponse, BookingFieldPatch
)
from src.bookings.booking_service import BookingService
from src.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

# Public Endpoints
@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreateRequest,
    db: Session = Depends(get_db)
):
    """Create a new booking request"""

    booking_service = BookingService(db)

    try:
        return booking_service.create_booking(request)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except Exception:
        logger.exception("Booking creation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while creating the booking."
        )

# Operator Endpoints
@router.get("", response_model=List[BookingOut])
def list_bookings(
    email: Optional[str] = Query(None, description="Filter by customer email"),
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """List bookings, newest first"""

    booking_service = BookingService(db)
    try:
        return [BookingOut.from_booking(b) for b in booking_service.list_bookings(email)]
    except Exception:
        logger.exception("Failed to list bookings")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve bookings"
        )

@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(
    booking_id: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Get booking details by ID"""

    try:
        booking = BookingService(db).get_booking(booking_id)
    except Exception:
        logger.exception("Failed to load booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve booking"
        )
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )
    return BookingOut.from_booking(booking)

@router.patch("/{booking_id}", response_model=BookingActionResponse)
def update_booking(
    booking_id: str,
    patch: BookingFieldPatch,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Edit contact and note fields of a booking"""

    try:
        booking = BookingService(db).update_booking_fields(booking_id, patch)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except Exception:
        logger.exception("Failed to update booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update booking"
        )
    return BookingActionResponse(booking=BookingOut.from_booking(booking))

@router.patch("/{booking_id}/confirm", response_model=BookingActionResponse)
def confirm_booking(
    booking_id: str,
    action: Optional[BookingActionRequest] = None,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Confirm a booking"""

    reason = action.reason if action else None

    try:
        booking = BookingService(db).confirm_booking(booking_id, reason)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except Exception:
        logger.exception("Failed to confirm booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to confirm booking"
        )
    return BookingActionResponse(booking=BookingOut.from_booking(booking))

@router.patch("/{booking_id}/reject", response_model=BookingActionResponse)
def reject_booking(
    booking_id: str,
    action: Optional[BookingActionRequest] = None,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Reject a booking"""

    reason = action.reason if action else None

    try:
        booking = BookingService(db).reject_booking(booking_id, reason)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except Exception:
        logger.exception("Failed to reject booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reject booking"
        )
    return BookingActionResponse(booking=BookingOut.from_booking(booking))

@router.patch("/{booking_id}/cancel")
def cancel_booking(
    booking_id: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Cancel a booking"""

    try:
        BookingService(db).cancel_booking(booking_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except Exception:
        logger.exception("Failed to cancel booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cancel booking"
        )
    return {"ok": True}
