from typing import List
from sqlalchemy.orm import Session
import logging

from src.models import Event, Faq, Gallery, Testimonial
from src.content.schemas import EventCreate, FaqCreate, TestimonialCreate
from src.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

GALLERY_KEY = "gallery"
MIN_RATING = 1
MAX_RATING = 5

def _clean(value):
    return value.strip() if isinstance(value, str) else value

class ContentService:
    """Service for the marketing content shown on the public site"""

    def __init__(self, db: Session):
        self.db = db

    # Events
    def list_events(self) -> List[Event]:
        """Events in calendar order"""
        return self.db.query(Event).order_by(Event.date.asc()).all()

    def create_event(self, data: EventCreate) -> Event:
        if not _clean(data.title) or data.event_date is None:
            raise InvalidInputError("Event title and date are required")

        event = Event(
            title=_clean(data.title),
            description=_clean(data.description) or "",
            date=data.event_date,
            location=_clean(data.location),
            image=_clean(data.image)
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        logger.info("Created event %s on %s", event.id, event.date)
        return event

    def delete_event(self, event_id: str):
        self._delete(Event, event_id, "Event not found")

    # FAQs
    def list_faqs(self) -> List[Faq]:
        """FAQs, oldest first"""
        return self.db.query(Faq).order_by(Faq.created_at.asc()).all()

    def create_faq(self, data: FaqCreate) -> Faq:
        question, answer = _clean(data.question), _clean(data.answer)
        if not question or not answer:
            raise InvalidInputError("Question and answer are required")

        faq = Faq(question=question, answer=answer)
        self.db.add(faq)
        self.db.commit()
        self.db.refresh(faq)
        logger.info("Created FAQ %s", faq.id)
        return faq

    def delete_faq(self, faq_id: str):
        self._delete(Faq, faq_id, "FAQ not found")

    # Gallery
    def _get_gallery(self):
        return self.db.query(Gallery).filter(Gallery.singleton == GALLERY_KEY).first()

    def list_gallery_images(self) -> List[str]:
        gallery = self._get_gallery()
        return list(gallery.images or []) if gallery else []

    def add_gallery_image(self, image_url: str) -> List[str]:
        """Append an image URL, creating the gallery on first use"""
        image_url = _clean(image_url)
        if not image_url:
            raise InvalidInputError("imageUrl is required")

        gallery = self._get_gallery()
        if gallery is None:
            gallery = Gallery(singleton=GALLERY_KEY, images=[])
            self.db.add(gallery)
        # JSON columns only track reassignment
        gallery.images = [*(gallery.images or []), image_url]

        self.db.commit()
        self.db.refresh(gallery)
        return list(gallery.images)

    def remove_gallery_image(self, image_url: str) -> List[str]:
        """Remove every occurrence of an image URL"""
        image_url = _clean(image_url)
        if not image_url:
            raise InvalidInputError("imageUrl is required")

        gallery = self._get_gallery()
        if gallery is None:
            raise NotFoundError("Gallery not found")
        gallery.images = [url for url in gallery.images or [] if url != image_url]

        self.db.commit()
        self.db.refresh(gallery)
        return list(gallery.images)

    # Testimonials
    def list_testimonials(self) -> List[Testimonial]:
        """Testimonials, newest first"""
        return self.db.query(Testimonial).order_by(Testimonial.created_at.desc()).all()

    def create_testimonial(self, data: TestimonialCreate) -> Testimonial:
        fields = {
            name: _clean(getattr(data, name))
            for name in ("name", "location", "package", "text", "avatar")
        }
        missing = [name for name, value in fields.items() if not value]
        if missing or data.rating is None:
            raise InvalidInputError(
                "Testimonial name, location, package, rating, text and avatar are required"
            )
        if not MIN_RATING <= data.rating <= MAX_RATING:
            raise InvalidInputError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        testimonial = Testimonial(rating=data.rating, **fields)
        self.db.add(testimonial)
        self.db.commit()
        self.db.refresh(testimonial)
        logger.info("Created testimonial %s", testimonial.id)
        return testimonial

    def delete_testimonial(self, testimonial_id: str):
        self._delete(Testimonial, testimonial_id, "Testimonial not found")

    def _delete(self, model, item_id: str, not_found_message: str):
        item = self.db.query(model).filter(model.id == item_id).first()
        if not item:
            raise NotFoundError(not_found_message)
        self.db.delete(item)
        self.db.commit()
        logger.info("Deleted %s %s", model.__tablename__, item_id)
