from typing import Dict, List, Optional, Tuple
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from estatehub.db.models import Enquiry as EnquiryRecord
from estatehub.models.common import Pagination


class EnquiryRepository:
    """Persistence and queries for enquiries"""

    def __init__(self, db: Session):
        self.db = db

    def list(self, pagination: Pagination, status: Optional[str] = None,
             property_id: Optional[str] = None) -> Tuple[List[EnquiryRecord], int]:
        """Newest enquiries first, optionally scoped by status and/or listing"""
        query = self.db.query(EnquiryRecord)
        if status:
            query = query.filter(EnquiryRecord.status == status)
        if property_id is not None:
            query = query.filter(EnquiryRecord.property_id == str(property_id))

        total = query.count()
        records = (
            query.order_by(desc(EnquiryRecord.created_at))
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return records, total

    def get(self, enquiry_id: str) -> Optional[EnquiryRecord]:
        if not enquiry_id:
            return None
        return self.db.query(EnquiryRecord).filter(EnquiryRecord.id == str(enquiry_id)).first()

    def add(self, **fields) -> EnquiryRecord:
        record = EnquiryRecord(**fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except Exception:
            self.db.rollback()
            raise
        return record

    def set_status(self, record: EnquiryRecord, status: str) -> EnquiryRecord:
        record.status = status
        try:
            self.db.commit()
            self.db.refresh(record)
        except Exception:
            self.db.rollback()
            raise
        return record

    def delete(self, record: EnquiryRecord) -> None:
        try:
            self.db.delete(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def count_by_status(self) -> Dict[str, int]:
        rows = (
            self.db.query(EnquiryRecord.status, func.count(EnquiryRecord.id))
            .group_by(EnquiryRecord.status)
            .all()
        )
        return {status: count for status, count in rows}
