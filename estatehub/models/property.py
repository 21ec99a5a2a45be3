from pydantic import Field, field_validator
from typing import Any, List, Optional
from datetime import datetime
from enum import Enum
import json

from estatehub.models.common import CamelModel


class PropertyStatus(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"


class SortOption(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    BHK_ASC = "bhk_asc"
    BHK_DESC = "bhk_desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOption":
        """Unknown or missing sort keys fall back to newest first"""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


class MediaHandle(CamelModel):
    """Pointer to an asset stored on the external media host"""
    url: str
    public_id: str


def parse_amenities(value: Any) -> List[str]:
    """
    Normalize amenities to an ordered list of trimmed, non-empty strings.

    Accepts a list, a JSON array string ('["Gym", "Pool"]') or a
    comma-delimited string ("Gym, Pool").
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        items: Any = None
        if text.startswith("["):
            try:
                items = json.loads(text)
            except ValueError:
                items = None
        if not isinstance(items, list):
            items = text.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]

    amenities = []
    for item in items:
        if item is None:
            continue
        cleaned = str(item).strip()
        if cleaned:
            amenities.append(cleaned)
    return amenities


def parse_featured(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class _ListingInput(CamelModel):
    """Form coercions shared by the create and update inputs"""

    @field_validator("title", "description", "city", "address", mode="before", check_fields=False)
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("area", mode="before", check_fields=False)
    @classmethod
    def area_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("amenities", mode="before", check_fields=False)
    @classmethod
    def normalize_amenities(cls, v):
        return v if v is None else parse_amenities(v)

    @field_validator("featured", mode="before", check_fields=False)
    @classmethod
    def normalize_featured(cls, v):
        return v if v is None else parse_featured(v)


class PropertyCreate(_ListingInput):
    """Validated fields for a new listing"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    bhk: int = Field(..., ge=1, le=10)
    bathrooms: int = Field(..., ge=1, le=10)
    city: str = Field(..., min_length=1, max_length=100)
    address: str = Field("", max_length=500)
    area: str = Field(..., min_length=1, max_length=100)
    amenities: List[str] = []
    featured: bool = False
    status: PropertyStatus = PropertyStatus.AVAILABLE


class PropertyUpdate(_ListingInput):
    """Partial update; only fields that are set are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    bhk: Optional[int] = Field(None, ge=1, le=10)
    bathrooms: Optional[int] = Field(None, ge=1, le=10)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=500)
    area: Optional[str] = Field(None, min_length=1, max_length=100)
    amenities: Optional[List[str]] = None
    featured: Optional[bool] = None
    status: Optional[PropertyStatus] = None


class PropertyFilter(CamelModel):
    city: Optional[str] = None
    min_price: Optional[float] = Field(None, allow_inf_nan=False)
    max_price: Optional[float] = Field(None, allow_inf_nan=False)
    bhk: Optional[int] = Field(None, ge=1, le=10)
    sort: SortOption = SortOption.NEWEST

    @field_validator("sort", mode="before")
    @classmethod
    def lenient_sort(cls, v):
        return SortOption.parse(v)


class Property(CamelModel):
    id: str
    title: str
    description: str = ""
    price: float
    bhk: int
    bathrooms: int
    city: str
    address: str = ""
    area: Optional[str] = None
    amenities: List[str] = []
    images: List[MediaHandle] = []
    video: Optional[MediaHandle] = None
    featured: bool = False
    status: PropertyStatus = PropertyStatus.AVAILABLE
    created_at: datetime
    updated_at: datetime


class PropertySummary(CamelModel):
    """Listing fields embedded in enquiry responses"""
    id: str
    title: str
    price: float
    city: str
    address: str = ""


class PropertyListSummary(PropertySummary):
    """Summary shown in the admin enquiry list"""
    images: List[MediaHandle] = []


class PropertyDetailSummary(PropertyListSummary):
    """Summary shown on a single enquiry"""
    video: Optional[MediaHandle] = None
    bhk: int
    bathrooms: int
