"""
Medications API Router
Endpoints for scheduling doses and recording intake
"""

from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, status, Query, File, UploadFile, Response
from sqlalchemy.orm import Session

from config import settings

from api.deps import get_db, get_current_owner_id, get_intake_service, services
from api.schemas.medication import (
    MedicationRecordCreate,
    MedicationRecordUpdate,
    ToggleTaken,
    MedicationRecordResponse,
    MedicationRecordList,
)
from services.intake_service import IntakeService


router = APIRouter(prefix="/medications", tags=["medications"])


@router.post("/", response_model=MedicationRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    record_data: MedicationRecordCreate,
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """
    Schedule a dose

    - **name**: Medication name
    - **dosage**: Dosage (e.g., "500mg")
    - **scheduled_date**: Date the dose is due (YYYY-MM-DD)
    - **scheduled_time**: Time of day, display only (e.g., "08:00")
    """
    return await intake.insert(owner_id, record_data.model_dump())


@router.get("/", response_model=MedicationRecordList)
async def list_records(
    on_date: Optional[date] = Query(None, alias="date", description="Only doses due on this date"),
    start: Optional[date] = Query(None, description="Range start (inclusive)"),
    end: Optional[date] = Query(None, description="Range end (inclusive)"),
    owner_id: str = Depends(get_current_owner_id),
    db: Session = Depends(get_db)
):
    """
    List the caller's doses, ordered by date then time
    """
    adherence_service = services.get_adherence_service()

    if on_date:
        records = await adherence_service.get_daily_records(owner_id, on_date, db=db)
    else:
        records = await adherence_service.list_records(owner_id, start, end, db=db)

    return MedicationRecordList(
        records=[MedicationRecordResponse.model_validate(r) for r in records],
        total=len(records),
        taken_count=sum(1 for r in records if r.taken)
    )


@router.get("/{record_id}", response_model=MedicationRecordResponse)
async def get_record(
    record_id: int,
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """Get a single dose"""
    return await intake.get_record(owner_id, record_id)


@router.put("/{record_id}", response_model=MedicationRecordResponse)
async def update_record(
    record_id: int,
    update_data: MedicationRecordUpdate,
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """
    Edit a dose's name, dosage, date or time
    """
    return await intake.update(
        owner_id, record_id, update_data.model_dump(exclude_unset=True)
    )


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: int,
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """Delete a dose"""
    await intake.delete(owner_id, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{record_id}/taken", response_model=MedicationRecordResponse)
async def mark_taken(
    record_id: int,
    evidence: Optional[UploadFile] = File(None, description="Optional photo proof"),
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """
    Mark a dose as taken, optionally uploading a photo as evidence.
    If the upload fails the dose is left unchanged.
    """
    # One byte past the cap is enough for the store to reject oversized evidence
    data = await evidence.read(settings.MAX_EVIDENCE_BYTES + 1) if evidence is not None else None
    return await intake.mark_taken(owner_id, record_id, evidence=data)


@router.post("/{record_id}/toggle", response_model=MedicationRecordResponse)
async def toggle_taken(
    record_id: int,
    toggle: ToggleTaken,
    owner_id: str = Depends(get_current_owner_id),
    intake: IntakeService = Depends(get_intake_service)
):
    """
    Flip the taken flag. `taken` is the value the caller currently sees;
    concurrent toggles are last-writer-wins.
    """
    return await intake.toggle_taken(owner_id, record_id, toggle.taken)
