from pydantic import Field
from typing import List, Optional, Union
from datetime import datetime
from enum import Enum

from src.schemas import CamelModel

class PackageType(str, Enum):
    """Package category enumeration"""
    BEACH = "beach"
    MOUNTAIN = "mountain"
    CULTURAL = "cultural"
    ADVENTURE = "adventure"
    LUXURY = "luxury"

class PriceDetail(CamelModel):
    """One row of a package's price table"""
    package: str  # "Standard (3★)"
    days: int
    group_size: str  # "Solo" | "2 pax" | "3+ pax"
    tour_price: float
    sdf: float
    total_per_person: float

class PackageFields(CamelModel):
    """Whitelisted package fields shared by create and update"""
    title: Optional[str] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    price_nu: Optional[Union[int, float, str]] = Field(None, alias="priceNU")
    price_cents: Optional[Union[int, float, str]] = None
    duration_days: Optional[Union[int, str]] = None
    duration_text: Optional[str] = None
    location: Optional[str] = None
    type: Optional[PackageType] = None
    travelers: Optional[int] = None
    image: Optional[str] = None
    includes: Optional[Union[List[str], str]] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    price_details: Optional[List[PriceDetail]] = None

class PackageCreate(PackageFields):
    slug: Optional[str] = None

class PackageUpdate(PackageFields):
    pass

class PackageOut(CamelModel):
    id: str
    slug: str
    title: str
    description: str
    currency: str
    price_cents: int
    price_nu: int = Field(..., alias="priceNU")
    duration_days: int
    duration_text: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    travelers: Optional[int] = None
    image: Optional[str] = None
    includes: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    price_details: List[PriceDetail] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PackageCreated(CamelModel):
    id: str
    slug: str

class PackageDeleted(CamelModel):
    ok: bool = True
    deleted_package_id: str
    slug: str
