from pydantic import Field
from typing import List, Optional
from datetime import date, datetime

from src.schemas import CamelModel

# Events
class EventCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[date] = Field(None, alias="date")
    location: Optional[str] = None
    image: Optional[str] = None

class EventOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    event_date: date = Field(..., alias="date")
    location: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# FAQs
class FaqCreate(CamelModel):
    question: Optional[str] = None
    answer: Optional[str] = None

class FaqOut(CamelModel):
    id: str
    question: str
    answer: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Gallery
class GalleryImageRequest(CamelModel):
    image_url: Optional[str] = None

class GalleryImageDeleted(CamelModel):
    ok: bool = True
    message: str = "Image deleted successfully"
    images: List[str]

# Testimonials
class TestimonialCreate(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    package: Optional[str] = None
    rating: Optional[int] = None
    text: Optional[str] = None
    avatar: Optional[str] = None

class TestimonialOut(CamelModel):
    id: str
    name: str
    location: str
    package: str
    rating: int
    text: str
    avatar: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ContentDeleted(CamelModel):
    ok: bool = True
    message: str
