from typing import Any, List, Optional, Tuple, Type
from estatehub.core.exceptions import NotFoundError, ValidationError
from estatehub.db.models import Enquiry as EnquiryRecord, Property as PropertyRecord
from estatehub.models.common import Pagination, is_blank, validate_input
from estatehub.models.enquiry import (
    Enquiry, EnquiryCreate, EnquiryDetail, EnquiryListItem, EnquiryStats, EnquiryStatus, EnquirySubmission
)
from estatehub.models.property import PropertyDetailSummary, PropertyListSummary, PropertySummary
from estatehub.modules.enquiries.repository import EnquiryRepository
from estatehub.modules.listings.repository import ListingRepository
import logging

logger = logging.getLogger(__name__)

# Listing summary embedded in each enquiry view
SUMMARY_MODELS = {
    Enquiry: PropertySummary,
    EnquiryListItem: PropertyListSummary,
    EnquiryDetail: PropertyDetailSummary,
}


class EnquiryService:
    """
    Enquiry submission and admin triage.

    Status transitions are unrestricted: any of pending, contacted and closed
    may follow any other, and a closed enquiry can be reopened.
    """

    def __init__(self, repository: EnquiryRepository, listings: ListingRepository):
        self.repository = repository
        self.listings = listings

    def _with_summary(self, record: EnquiryRecord, property_record: Optional[PropertyRecord],
                      view: Type[Enquiry] = Enquiry) -> Enquiry:
        enquiry = view.model_validate(record)
        if property_record is not None:
            enquiry.property = SUMMARY_MODELS[view].model_validate(property_record)
        return enquiry

    def _with_summaries(self, records: List[EnquiryRecord], view: Type[Enquiry]) -> List[Enquiry]:
        properties = self.listings.get_many([record.property_id for record in records])
        return [
            self._with_summary(record, properties.get(record.property_id), view)
            for record in records
        ]

    async def submit(self, submission: EnquirySubmission) -> Enquiry:
        """Validate a visitor enquiry and store it as pending"""
        data = submission.model_dump()
        if any(is_blank(value) for value in data.values()):
            raise ValidationError("Please provide all required fields")

        enquiry_in = validate_input(EnquiryCreate, data)

        property_record = self.listings.get(enquiry_in.property_id)
        if not property_record:
            raise NotFoundError("Property not found")

        record = self.repository.add(
            name=enquiry_in.name,
            email=enquiry_in.email,
            phone=enquiry_in.phone,
            message=enquiry_in.message,
            property_id=property_record.id,
            status=EnquiryStatus.PENDING.value,
        )
        logger.info(f"Enquiry {record.id} submitted for property {property_record.id}")
        return self._with_summary(record, property_record)

    async def list_enquiries(self, pagination: Pagination,
                             status: Optional[str] = None) -> Tuple[List[Enquiry], int]:
        # Unknown status values mean no status filter
        status_filter = status if status in EnquiryStatus.values() else None
        records, total = self.repository.list(pagination, status=status_filter)
        return self._with_summaries(records, EnquiryListItem), total

    async def list_for_property(self, property_id: str,
                                pagination: Pagination) -> Tuple[List[Enquiry], int]:
        records, total = self.repository.list(pagination, property_id=property_id)
        return self._with_summaries(records, Enquiry), total

    async def get_enquiry(self, enquiry_id: str) -> Enquiry:
        record = self.repository.get(enquiry_id)
        if not record:
            raise NotFoundError("Enquiry not found")
        return self._with_summary(record, self.listings.get(record.property_id), EnquiryDetail)

    async def update_status(self, enquiry_id: str, status: Any) -> Enquiry:
        if status not in EnquiryStatus.values():
            raise ValidationError("Please provide a valid status (pending, contacted, closed)")

        record = self.repository.get(enquiry_id)
        if not record:
            raise NotFoundError("Enquiry not found")

        previous = record.status
        record = self.repository.set_status(record, status)
        logger.info(f"Enquiry {record.id} moved from {previous} to {status}")
        return self._with_summary(record, self.listings.get(record.property_id))

    async def delete_enquiry(self, enquiry_id: str) -> str:
        record = self.repository.get(enquiry_id)
        if not record:
            raise NotFoundError("Enquiry not found")
        self.repository.delete(record)
        logger.info(f"Deleted enquiry {enquiry_id}")
        return enquiry_id

    async def stats(self) -> EnquiryStats:
        counts = self.repository.count_by_status()
        return EnquiryStats(
            total=sum(counts.values()),
            pending=counts.get(EnquiryStatus.PENDING.value, 0),
            contacted=counts.get(EnquiryStatus.CONTACTED.value, 0),
            closed=counts.get(EnquiryStatus.CLOSED.value, 0),
        )
