from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum
import re

from estatehub.models.common import CamelModel, RawInput, normalize_email
from estatehub.models.property import PropertyDetailSummary, PropertyListSummary, PropertySummary

PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


class EnquiryStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    CLOSED = "closed"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class EnquirySubmission(RawInput):
    """Raw visitor submission; every field is checked by the workflow service"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    property_id: Optional[str] = None


class EnquiryCreate(CamelModel):
    """Submission after presence checks, with format and length rules"""
    name: str = Field(..., min_length=1, max_length=50)
    email: str
    phone: str
    message: str = Field(..., min_length=1, max_length=1000)
    property_id: str

    @field_validator("name", "message", "property_id", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        phone = str(v).strip()
        if not PHONE_PATTERN.fullmatch(phone):
            raise ValueError("Please provide a valid 10-digit phone number")
        return phone


class EnquiryStatusUpdate(RawInput):
    status: Optional[str] = None


class Enquiry(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    message: str
    property_id: str
    property: Optional[PropertySummary] = None
    status: EnquiryStatus = EnquiryStatus.PENDING
    created_at: datetime
    updated_at: datetime


class EnquiryListItem(Enquiry):
    property: Optional[PropertyListSummary] = None


class EnquiryDetail(Enquiry):
    property: Optional[PropertyDetailSummary] = None


class EnquiryStats(CamelModel):
    total: int
    pending: int
    contacted: int
    closed: int


class DeletedEnquiry(CamelModel):
    id: str
