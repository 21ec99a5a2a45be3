from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session, Query

from estatehub.db.models import Property as PropertyRecord
from estatehub.models.common import Pagination
from estatehub.models.property import PropertyFilter, SortOption
import logging

logger = logging.getLogger(__name__)


SORT_ORDERS = {
    SortOption.NEWEST: (desc(PropertyRecord.created_at),),
    SortOption.PRICE_ASC: (asc(PropertyRecord.price), desc(PropertyRecord.created_at)),
    SortOption.PRICE_DESC: (desc(PropertyRecord.price), desc(PropertyRecord.created_at)),
    SortOption.BHK_ASC: (asc(PropertyRecord.bhk), desc(PropertyRecord.created_at)),
    SortOption.BHK_DESC: (desc(PropertyRecord.bhk), desc(PropertyRecord.created_at)),
}


class ListingRepository:
    """Persistence and queries for property listings"""

    def __init__(self, db: Session):
        self.db = db

    def _page(self, query: Query, pagination: Pagination,
              order_by=SORT_ORDERS[SortOption.NEWEST]) -> Tuple[List[PropertyRecord], int]:
        total = query.order_by(None).count()
        records = (
            query.order_by(*order_by)
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return records, total

    def list(self, pagination: Pagination) -> Tuple[List[PropertyRecord], int]:
        """Newest listings first"""
        return self._page(self.db.query(PropertyRecord), pagination)

    def filter(self, criteria: PropertyFilter, pagination: Pagination) -> Tuple[List[PropertyRecord], int]:
        query = self.db.query(PropertyRecord)

        if criteria.city:
            # Case-insensitive substring; % and _ in the input are matched literally
            query = query.filter(
                func.lower(PropertyRecord.city).contains(criteria.city.strip().lower(), autoescape=True)
            )
        if criteria.min_price is not None:
            query = query.filter(PropertyRecord.price >= criteria.min_price)
        if criteria.max_price is not None:
            query = query.filter(PropertyRecord.price <= criteria.max_price)
        if criteria.bhk is not None:
            query = query.filter(PropertyRecord.bhk == criteria.bhk)

        return self._page(query, pagination, SORT_ORDERS[criteria.sort])

    def get(self, property_id: str) -> Optional[PropertyRecord]:
        if not property_id:
            return None
        return self.db.query(PropertyRecord).filter(PropertyRecord.id == str(property_id)).first()

    def get_many(self, property_ids: List[str]) -> Dict[str, PropertyRecord]:
        ids = {str(property_id) for property_id in property_ids if property_id}
        if not ids:
            return {}
        records = self.db.query(PropertyRecord).filter(PropertyRecord.id.in_(ids)).all()
        return {record.id: record for record in records}

    def distinct_cities(self) -> List[str]:
        rows = self.db.query(PropertyRecord.city).distinct().all()
        return sorted(row[0] for row in rows if row[0])

    def add(self, fields: Dict[str, Any]) -> PropertyRecord:
        record = PropertyRecord(**fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except Exception:
            self.db.rollback()
            raise
        return record

    def save(self, record: PropertyRecord, changes: Dict[str, Any]) -> PropertyRecord:
        for key, value in changes.items():
            setattr(record, key, value)
        try:
            self.db.commit()
            self.db.refresh(record)
        except Exception:
            self.db.rollback()
            raise
        return record

    def delete(self, record: PropertyRecord) -> None:
        try:
            self.db.delete(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
