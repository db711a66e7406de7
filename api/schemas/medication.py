"""
Medication Schemas
Pydantic models for medication record API requests and responses
"""

from typing import Optional, List
from datetime import datetime, date
from pydantic import BaseModel, Field, ConfigDict


# ==================== BASE SCHEMAS ====================

class MedicationRecordBase(BaseModel):
    """Base medication record schema"""
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=100)
    scheduled_date: date
    scheduled_time: str = Field(..., min_length=1, max_length=10)


# ==================== REQUEST SCHEMAS ====================

class MedicationRecordCreate(MedicationRecordBase):
    """Schema for scheduling a new dose"""
    pass


class MedicationRecordUpdate(BaseModel):
    """Schema for editing a dose; only supplied fields change"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    dosage: Optional[str] = Field(None, min_length=1, max_length=100)
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = Field(None, min_length=1, max_length=10)


class ToggleTaken(BaseModel):
    """Caller's current view of the taken flag"""
    taken: bool


# ==================== RESPONSE SCHEMAS ====================

class MedicationRecordResponse(MedicationRecordBase):
    """Schema for medication record response"""
    id: int
    owner_id: str
    taken: bool = False
    taken_at: Optional[datetime] = None
    photo_ref: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MedicationRecordList(BaseModel):
    """List of medication records"""
    records: List[MedicationRecordResponse]
    total: int
    taken_count: int
