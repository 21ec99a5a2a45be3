# Pydantic models for API contracts

from .common import (
    ApiResponse, PaginatedResponse, ListResponse, ErrorResponse, Pagination, RawInput, parse_pagination, paginated,
)
from .property import (
    # Enums
    PropertyStatus, SortOption,

    # Input models
    PropertyCreate, PropertyUpdate, PropertyFilter,

    # Response models
    MediaHandle, Property, PropertySummary, PropertyListSummary, PropertyDetailSummary,
)
from .enquiry import (
    EnquiryStatus, EnquirySubmission, EnquiryCreate, EnquiryStatusUpdate,
    Enquiry, EnquiryListItem, EnquiryDetail, EnquiryStats, DeletedEnquiry,
)
from .admin import AdminRegistration, AdminLogin, AdminProfileUpdate, AdminToken, AdminProfile
from .chat import ChatRole, ChatMessage, ChatRequest, ChatReply

__all__ = [
    # Envelopes
    "ApiResponse", "PaginatedResponse", "ListResponse", "ErrorResponse", "Pagination", "RawInput",
    "parse_pagination", "paginated",

    # Property models
    "PropertyStatus", "SortOption", "PropertyCreate", "PropertyUpdate", "PropertyFilter",
    "MediaHandle", "Property", "PropertySummary", "PropertyListSummary", "PropertyDetailSummary",

    # Enquiry models
    "EnquiryStatus", "EnquirySubmission", "EnquiryCreate", "EnquiryStatusUpdate",
    "Enquiry", "EnquiryListItem", "EnquiryDetail", "EnquiryStats", "DeletedEnquiry",

    # Admin models
    "AdminRegistration", "AdminLogin", "AdminProfileUpdate", "AdminToken", "AdminProfile",

    # Chat models
    "ChatRole", "ChatMessage", "ChatRequest", "ChatReply",
]
