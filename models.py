"""
Database Models
SQLAlchemy ORM models for DoseTrack
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, Index
from datetime import datetime
from enum import Enum as PyEnum

from database import Base
from config import TableNames


# ==================== ENUMS ====================

class DayStatus(str, PyEnum):
    """Derived classification of a calendar day (never stored)"""
    TAKEN = "taken"
    MISSED = "missed"
    NONE = "none"


# ==================== MODELS ====================

class MedicationRecord(Base):
    """A single scheduled medication dose and its taken state"""
    __tablename__ = TableNames.MEDICATIONS

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(100), nullable=False, index=True)

    # Dose
    name = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=False)  # e.g., "500mg"

    # Schedule
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(10), nullable=False)  # "08:00", display and ordering only

    # Intake
    taken = Column(Boolean, nullable=False, default=False)
    taken_at = Column(DateTime)
    photo_ref = Column(String(500))  # Blob store reference for evidence

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_medication_owner_date", "owner_id", "scheduled_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<MedicationRecord {self.id} {self.name} "
            f"{self.scheduled_date} {self.scheduled_time} taken={self.taken}>"
        )
