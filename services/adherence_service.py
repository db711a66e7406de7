"""
Adherence Service
Loads an owner's record snapshot and runs the adherence engine over it
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from database import get_db_context
import models
from services import clock
from services.adherence_engine import AdherenceSummary, compute, month_bounds
from services.record_store import SqlRecordStore


logger = logging.getLogger(__name__)


class AdherenceService:
    """
    Service for adherence metrics and record listings.

    Nothing is cached: every call reads a fresh snapshot and recomputes.
    """

    async def get_summary(
        self,
        owner_id: str,
        reference_date: Optional[date] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        db: Optional[Session] = None
    ) -> AdherenceSummary:
        """
        Compute day statuses, streak and adherence rate

        Args:
            owner_id: Owner whose records are read
            reference_date: Day treated as today (defaults to the UTC date)
            period_start: Defaults to the first of reference_date's month
            period_end: Defaults to the last of reference_date's month
            db: Database session

        Returns:
            AdherenceSummary for the period
        """
        reference_date = reference_date or clock.today()
        month_start, month_end = month_bounds(reference_date)
        period_start = period_start or month_start
        period_end = period_end or month_end

        def _summary(session: Session) -> AdherenceSummary:
            records = SqlRecordStore(session).list(owner_id, period_start, period_end)
            summary = compute(records, reference_date, period_start, period_end)
            logger.debug(
                f"Summary for owner {owner_id} {period_start}..{period_end}: "
                f"{len(records)} records, streak {summary.streak}, "
                f"rate {summary.adherence_rate}%"
            )
            return summary

        if db:
            return _summary(db)

        with get_db_context() as session:
            return _summary(session)

    async def get_daily_records(
        self,
        owner_id: str,
        day: date,
        db: Optional[Session] = None
    ) -> List[models.MedicationRecord]:
        """Records scheduled on one date, ordered by time"""
        def _get(session: Session) -> List[models.MedicationRecord]:
            return SqlRecordStore(session).list(owner_id, day, day)

        if db:
            return _get(db)

        with get_db_context() as session:
            return _get(session)

    async def list_records(
        self,
        owner_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        db: Optional[Session] = None
    ) -> List[models.MedicationRecord]:
        """All of an owner's records, ordered by date then time"""
        def _get(session: Session) -> List[models.MedicationRecord]:
            return SqlRecordStore(session).list(owner_id, start, end)

        if db:
            return _get(db)

        with get_db_context() as session:
            return _get(session)


# Singleton instance
adherence_service = AdherenceService()
