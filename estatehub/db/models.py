from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, Text, JSON, Index
from estatehub.core.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Admin(Base):
    """Admin account allowed to manage listings and enquiries"""
    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=_uuid)

    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index('idx_admins_email', 'email', unique=True),
    )


class Property(Base):
    """Property listing with media handles into the external media host"""
    __tablename__ = "properties"

    id = Column(String(36), primary_key=True, default=_uuid)

    # Basic property information
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    bhk = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)

    # Address and location
    city = Column(String(100), nullable=False)
    address = Column(String(500), nullable=False, default="")
    area = Column(String(100))  # free-form, e.g. "1200" or "1200 sqft"

    amenities = Column(JSON, nullable=False, default=list)  # ordered list of strings

    # Media handles: [{"url": ..., "publicId": ...}]
    images = Column(JSON, nullable=False, default=list)
    video = Column(JSON)  # {"url": ..., "publicId": ...} or NULL

    featured = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="available")  # available, sold, rented

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index('idx_properties_city', 'city'),
        Index('idx_properties_city_price', 'city', 'price'),
        Index('idx_properties_created_at', 'created_at'),
    )


class Enquiry(Base):
    """Visitor enquiry against a listing"""
    __tablename__ = "enquiries"

    id = Column(String(36), primary_key=True, default=_uuid)

    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(10), nullable=False)
    message = Column(Text, nullable=False)

    # Not a foreign key: enquiries outlive the listing they were sent about
    property_id = Column(String(36), nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, contacted, closed

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index('idx_enquiries_property_created', 'property_id', 'created_at'),
        Index('idx_enquiries_status', 'status'),
    )
