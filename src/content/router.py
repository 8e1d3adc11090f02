from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from src.database import get_db
from src.auth.dependencies import get_current_operator
from src.content.schemas import (
    ContentDeleted, EventCreate, EventOut, FaqCreate, FaqOut, GalleryImageDeleted,
    GalleryImageRequest, TestimonialCreate, TestimonialOut
)
from src.content.service import ContentService
from src.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

def _internal_error(detail: str) -> HTTPException:
    logger.exception(detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail
    )

def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

def _bad_request(e: InvalidInputError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

# Events
@router.get("/events", response_model=List[EventOut])
def list_events(db: Session = Depends(get_db)):
    """Upcoming and past events in date order"""
    try:
        return ContentService(db).list_events()
    except Exception:
        raise _internal_error("Failed to retrieve events")

@router.post("/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        return ContentService(db).create_event(data)
    except InvalidInputError as e:
        raise _bad_request(e)
    except Exception:
        raise _internal_error("Failed to create event")

@router.delete("/events/{event_id}", response_model=ContentDeleted)
def delete_event(
    event_id: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        ContentService(db).delete_event(event_id)
    except NotFoundError as e:
        raise _not_found(e)
    except Exception:
        raise _internal_error("Failed to delete event")
    return ContentDeleted(message="Event deleted successfully")

# FAQs
@router.get("/faqs", response_model=List[FaqOut])
def list_faqs(db: Session = Depends(get_db)):
    try:
        return ContentService(db).list_faqs()
    except Exception:
        raise _internal_error("Failed to retrieve FAQs")

@router.post("/faqs", response_model=FaqOut, status_code=status.HTTP_201_CREATED)
def create_faq(
    data: FaqCreate,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        return ContentService(db).create_faq(data)
    except InvalidInputError as e:
        raise _bad_request(e)
    except Exception:
        raise _internal_error("Failed to create FAQ")

@router.delete("/faqs/{faq_id}", response_model=ContentDeleted)
def delete_faq(
    faq_id: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        ContentService(db).delete_faq(faq_id)
    except NotFoundError as e:
        raise _not_found(e)
    except Exception:
        raise _internal_error("Failed to delete FAQ")
    return ContentDeleted(message="FAQ deleted successfully")

# Gallery
@router.get("/gallery", response_model=List[str])
def list_gallery_images(db: Session = Depends(get_db)):
    """Gallery image URLs in the order they were added"""
    try:
        return ContentService(db).list_gallery_images()
    except Exception:
        raise _internal_error("Failed to retrieve gallery images")

@router.post("/gallery/images", response_model=List[str], status_code=status.HTTP_201_CREATED)
def add_gallery_image(
    data: GalleryImageRequest,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        return ContentService(db).add_gallery_image(data.image_url)
    except InvalidInputError as e:
        raise _bad_request(e)
    except Exception:
        raise _internal_error("Failed to add image to gallery")

@router.delete("/gallery/images", response_model=GalleryImageDeleted)
def remove_gallery_image(
    data: GalleryImageRequest,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        images = ContentService(db).remove_gallery_image(data.image_url)
    except InvalidInputError as e:
        raise _bad_request(e)
    except NotFoundError as e:
        raise _not_found(e)
    except Exception:
        raise _internal_error("Failed to delete image from gallery")
    return GalleryImageDeleted(images=images)

# Testimonials
@router.get("/testimonials", response_model=List[TestimonialOut])
def list_testimonials(db: Session = Depends(get_db)):
    try:
        return ContentService(db).list_testimonials()
    except Exception:
        raise _internal_error("Failed to retrieve testimonials")

@router.post("/testimonials", response_model=TestimonialOut, status_code=status.HTTP_201_CREATED)
def create_testimonial(
    data: TestimonialCreate,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        return ContentService(db).create_testimonial(data)
    except InvalidInputError as e:
        raise _bad_request(e)
    except Exception:
        raise _internal_error("Failed to create testimonial")

@router.delete("/testimonials/{testimonial_id}", response_model=ContentDeleted)
def delete_testimonial(
    testimonial_id: str,
    operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    try:
        ContentService(db).delete_testimonial(testimonial_id)
    except NotFoundError as e:
        raise _not_found(e)
    except Exception:
        raise _internal_error("Failed to delete testimonial")
    return ContentDeleted(message="Testimonial deleted successfully")
