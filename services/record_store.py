"""
Record Store
Owner-scoped CRUD access to medication records
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

import models
from services.exceptions import NotFoundError


logger = logging.getLogger(__name__)


@dataclass
class RecordDraft:
    """Fields supplied when creating a record"""
    name: str
    dosage: str
    scheduled_date: date
    scheduled_time: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RecordStore(ABC):
    """
    Storage collaborator for medication records.

    Every operation is scoped to `owner_id`; a record owned by someone
    else behaves exactly like a missing one.
    """

    @abstractmethod
    def list(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[models.MedicationRecord]:
        """Records for the owner within [start, end], ordered by date then time"""

    @abstractmethod
    def get(self, owner_id: str, record_id: int) -> Optional[models.MedicationRecord]:
        """Single record, or None"""

    @abstractmethod
    def insert(self, owner_id: str, draft: RecordDraft) -> int:
        """Create a record and return its id"""

    @abstractmethod
    def update(self, owner_id: str, record_id: int, fields: Dict[str, Any]) -> None:
        """Overwrite the given fields; raises NotFoundError"""

    @abstractmethod
    def delete(self, owner_id: str, record_id: int) -> None:
        """Remove a record; raises NotFoundError"""


class SqlRecordStore(RecordStore):
    """RecordStore backed by a SQLAlchemy session"""

    def __init__(self, session: Session):
        self.session = session

    def _owned(self, owner_id: str, record_id: int):
        return self.session.query(models.MedicationRecord).filter(
            and_(
                models.MedicationRecord.id == record_id,
                models.MedicationRecord.owner_id == owner_id
            )
        )

    def list(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[models.MedicationRecord]:
        query = self.session.query(models.MedicationRecord).filter(
            models.MedicationRecord.owner_id == owner_id
        )
        if start:
            query = query.filter(models.MedicationRecord.scheduled_date >= start)
        if end:
            query = query.filter(models.MedicationRecord.scheduled_date <= end)

        return query.order_by(
            models.MedicationRecord.scheduled_date.asc(),
            models.MedicationRecord.scheduled_time.asc(),
            models.MedicationRecord.id.asc()
        ).all()

    def get(self, owner_id: str, record_id: int) -> Optional[models.MedicationRecord]:
        return self._owned(owner_id, record_id).first()

    def insert(self, owner_id: str, draft: RecordDraft) -> int:
        record = models.MedicationRecord(
            owner_id=owner_id,
            taken=False,
            taken_at=None,
            photo_ref=None,
            **draft.to_dict()
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record.id

    def update(self, owner_id: str, record_id: int, fields: Dict[str, Any]) -> None:
        record = self.get(owner_id, record_id)
        if record is None:
            raise NotFoundError(record_id)

        for key, value in fields.items():
            setattr(record, key, value)

        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def delete(self, owner_id: str, record_id: int) -> None:
        record = self.get(owner_id, record_id)
        if record is None:
            raise NotFoundError(record_id)

        self.session.delete(record)
        self.session.commit()


__all__ = ["RecordDraft", "RecordStore", "SqlRecordStore"]
