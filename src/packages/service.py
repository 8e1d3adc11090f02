from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from src.models import Package
from src.packages.schemas import PackageCreate, PackageUpdate, PackageDeleted
from src.bookings.pricing_service import normalize_submitted_price, parse_duration_days, safe_number
from src.config import settings
from src.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

def _split_includes(includes) -> List[str]:
    """Accept a list or a comma-separated string"""
    if isinstance(includes, list):
        return includes
    if isinstance(includes, str):
        return [item.strip() for item in includes.split(",") if item.strip()]
    return []

class PackageService:
    """Service for the tour package catalogue"""

    def __init__(self, db: Session):
        self.db = db

    def list_packages(self) -> List[Package]:
        """All packages, newest first"""
        return self.db.query(Package).order_by(Package.created_at.desc()).all()

    def get_package(self, slug: str) -> Optional[Package]:
        """Get package by slug"""
        return self.db.query(Package).filter(Package.slug == slug).first()

    def create_package(self, data: PackageCreate) -> Package:
        """Create a package, normalizing its price pair and duration"""
        if not data.slug or not data.title or not data.description:
            raise InvalidInputError("slug, title, description are required")

        price = normalize_submitted_price(data.price_nu, data.price_cents)

        duration_days = safe_number(data.duration_days)
        if not duration_days:
            duration_days = parse_duration_days(data.duration_text)
            if not duration_days:
                raise InvalidInputError("durationDays or durationText (like '7D/6N') required")
        duration_days = int(duration_days)

        package = Package(
            slug=data.slug,
            title=data.title,
            description=data.description,
            currency=data.currency or settings.DEFAULT_PACKAGE_CURRENCY,
            price_cents=price.price_cents,
            price_nu=price.price_nu,
            duration_days=duration_days,
            duration_text=data.duration_text or f"{duration_days}D/{max(duration_days - 1, 0)}N",
            location=data.location,
            type=(data.type.value if data.type else "beach"),
            travelers=data.travelers if data.travelers is not None else 1,
            image=data.image,
            includes=_split_includes(data.includes),
            rating=data.rating if data.rating is not None else 4.5,
            price_details=[d.model_dump() for d in data.price_details or []]
        )

        try:
            self.db.add(package)
            self.db.commit()
            self.db.refresh(package)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Slug already exists")

        logger.info("Created package %s", package.slug)
        return package

    def update_package(self, slug: str, data: PackageUpdate) -> Package:
        """Patch whitelisted fields of a package"""
        package = self.get_package(slug)
        if not package:
            raise NotFoundError("Package not found")

        update_data = data.model_dump(exclude_unset=True)

        if "price_nu" in update_data or "price_cents" in update_data:
            price = normalize_submitted_price(
                update_data.pop("price_nu", None), update_data.pop("price_cents", None)
            )
            update_data["price_nu"] = price.price_nu
            update_data["price_cents"] = price.price_cents

        if "duration_days" in update_data:
            duration_days = safe_number(update_data["duration_days"])
            if duration_days:
                update_data["duration_days"] = int(duration_days)
            else:
                del update_data["duration_days"]
        if "duration_days" not in update_data and update_data.get("duration_text"):
            parsed = parse_duration_days(update_data["duration_text"])
            if parsed:
                update_data["duration_days"] = parsed

        if "includes" in update_data:
            update_data["includes"] = _split_includes(update_data["includes"])
        if update_data.get("type") is not None:
            update_data["type"] = data.type.value

        for field, value in update_data.items():
            if value is None and field in ("title", "description", "currency"):
                continue
            setattr(package, field, value)

        self.db.commit()
        self.db.refresh(package)
        logger.info("Updated package %s (%s)", slug, ", ".join(sorted(update_data)))
        return package

    def delete_package(self, slug: str) -> PackageDeleted:
        """Delete a package; bookings referencing it are left untouched"""
        package = self.get_package(slug)
        if not package:
            raise NotFoundError("Package not found")

        deleted = PackageDeleted(deleted_package_id=package.id, slug=package.slug)
        self.db.delete(package)
        self.db.commit()
        logger.info("Deleted package %s", slug)
        return deleted
