import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, Text, Float, JSON, Index
from sqlalchemy.sql import func
from src.database import Base


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# ================================
# Catalogue
# ================================
class Package(Base):
    __tablename__ = "packages"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    
    # Pricing: minor units and major units are stored side by side
    currency = Column(String(10), nullable=False, default="NU")
    price_cents = Column(Integer, nullable=False)
    price_nu = Column(Integer, nullable=False)
    
    duration_days = Column(Integer, nullable=False)
    duration_text = Column(String(50))
    
    location = Column(String(255))
    type = Column(String(50), default="beach")
    travelers = Column(Integer, default=1)
    image = Column(String(1024))
    includes = Column(JSON, default=list)
    rating = Column(Float, default=4.5)
    price_details = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_package_travel_date_status", "package_id", "travel_date", "status"),
    )
    
    id = Column(String(32), primary_key=True, default=generate_id)
    # Plain reference: deleting a package neither cascades nor is blocked
    package_id = Column(String(32), nullable=False, index=True)
    package_title_snapshot = Column(String(255))
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    
    # Customer
    customer_first_name = Column(String(255), nullable=False)
    customer_last_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(50), default="")
    
    # Trip
    travel_date = Column(Date, nullable=False)
    travelers = Column(Integer, nullable=False, default=1)
    special_requests = Column(Text, default="")
    
    # Pricing, resolved once at creation
    currency = Column(String(10))
    package_price_cents = Column(Integer, nullable=False)
    sdf_fee_cents = Column(Integer, nullable=False)
    total_per_person_cents = Column(Integer, nullable=False)
    total_group_cents = Column(Integer, nullable=False)
    
    source = Column(String(20), nullable=False, default="WEB_FORM")
    admin_reason = Column(Text)
    # Stamped in Python so every stored value has the same text form on SQLite
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)
    
    def apply_status(self, status: str, reason: str = None):
        """Overwrite the status regardless of the current one"""
        self.status = status
        if reason:
            self.admin_reason = reason
        self.updated_at = utcnow()

# ================================
# Operators
# ================================
class AdminUser(Base):
    __tablename__ = "admin_users"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default="ADMIN", index=True)
    permissions = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)
    last_login_at = Column(DateTime(timezone=True))
    login_attempts = Column(Integer, default=0)
    lock_until = Column(DateTime(timezone=True), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

# ================================
# Site content
# ================================
class Event(Base):
    __tablename__ = "events"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    date = Column(Date, nullable=False, index=True)
    location = Column(String(255))
    image = Column(String(1024))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class Faq(Base):
    __tablename__ = "faqs"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class Gallery(Base):
    """Single row holding the ordered list of gallery image URLs"""
    __tablename__ = "gallery"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    singleton = Column(String(20), unique=True, nullable=False, default="gallery")
    images = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class Testimonial(Base):
    __tablename__ = "testimonials"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    package = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)
    avatar = Column(String(1024), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
