"""
Adherence API Router
Endpoints for adherence metrics
"""

from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import get_db, get_current_owner_id, services
from api.schemas.adherence import AdherenceSummaryResponse
from services.exceptions import ValidationError


router = APIRouter(prefix="/adherence", tags=["adherence"])


@router.get("/summary", response_model=AdherenceSummaryResponse)
async def get_adherence_summary(
    reference_date: Optional[date] = Query(None, description="Day treated as today"),
    period_start: Optional[date] = Query(None, description="Defaults to first of the month"),
    period_end: Optional[date] = Query(None, description="Defaults to last of the month"),
    owner_id: str = Depends(get_current_owner_id),
    db: Session = Depends(get_db)
):
    """
    Per-day status, current streak and adherence rate

    Without parameters this is the current calendar month as of today.
    """
    if period_start and period_end and period_start > period_end:
        raise ValidationError("period_start must not be after period_end")

    adherence_service = services.get_adherence_service()
    summary = await adherence_service.get_summary(
        owner_id,
        reference_date=reference_date,
        period_start=period_start,
        period_end=period_end,
        db=db
    )
    return AdherenceSummaryResponse.from_summary(summary)
