"""
Adherence Schemas
Pydantic models for adherence summary responses
"""

from typing import Dict, List
from datetime import date
from pydantic import BaseModel

from models import DayStatus
from services.adherence_engine import AdherenceSummary


# ==================== RESPONSE SCHEMAS ====================

class AdherenceSummaryResponse(BaseModel):
    """Day statuses, streak and rate for a period"""
    reference_date: date
    period_start: date
    period_end: date
    streak: int
    adherence_rate: int
    today_status: bool
    day_status: Dict[str, DayStatus]  # ISO date -> status
    taken_dates: List[date]
    missed_dates: List[date]

    @classmethod
    def from_summary(cls, summary: AdherenceSummary) -> "AdherenceSummaryResponse":
        return cls(
            reference_date=summary.reference_date,
            period_start=summary.period_start,
            period_end=summary.period_end,
            streak=summary.streak,
            adherence_rate=summary.adherence_rate,
            today_status=summary.today_status,
            day_status={
                day.isoformat(): status
                for day, status in sorted(summary.day_status.items())
            },
            taken_dates=sorted(summary.taken_dates),
            missed_dates=sorted(summary.missed_dates),
        )
