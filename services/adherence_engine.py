"""
Adherence Engine
Pure computation of per-day status, streak and adherence rate
from a snapshot of medication records
"""

import calendar
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from config import adherence_config
from models import DayStatus


@dataclass(frozen=True)
class AdherenceSummary:
    """Engine output for one period"""
    reference_date: date
    period_start: date
    period_end: date
    day_status: Dict[date, DayStatus] = field(default_factory=dict)
    streak: int = 0
    adherence_rate: int = 0
    taken_dates: Set[date] = field(default_factory=set)
    missed_dates: Set[date] = field(default_factory=set)

    @property
    def today_status(self) -> bool:
        """True when every dose on the reference date is taken"""
        return self.day_status.get(self.reference_date) == DayStatus.TAKEN

    def status_for(self, day: date) -> DayStatus:
        return self.day_status.get(day, DayStatus.NONE)


def _as_date(val: Any) -> Optional[date]:
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if isinstance(val, str):
        try:
            return date.fromisoformat(val.strip()[:10])
        except ValueError:
            return None
    return None


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date in [start, end]"""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last date of the calendar month containing `day`"""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def group_by_date(records: Iterable[Any]) -> Dict[date, List[Any]]:
    """Group records by scheduled date, skipping undatable ones"""
    grouped: Dict[date, List[Any]] = defaultdict(list)
    for record in records:
        day = _as_date(getattr(record, "scheduled_date", None))
        if day is None:
            continue
        grouped[day].append(record)
    return grouped


def classify_day(records: List[Any], day: date, reference_date: date) -> DayStatus:
    """
    Classify one date from its records.

    All taken -> TAKEN. Otherwise a past date is MISSED (mixed completion
    included) and today or later stays NONE.
    """
    if not records:
        return DayStatus.NONE
    if all(bool(getattr(r, "taken", False)) for r in records):
        return DayStatus.TAKEN
    if day < reference_date:
        return DayStatus.MISSED
    return DayStatus.NONE


def _streak(day_status: Dict[date, DayStatus], reference_date: date) -> int:
    streak = 0
    day = reference_date
    while streak < adherence_config.STREAK_CAP_DAYS and day_status.get(day) == DayStatus.TAKEN:
        streak += 1
        day -= timedelta(days=1)
    return streak


def _rate(taken_dates: Set[date], period_start: date, reference_date: date) -> int:
    days_elapsed = (reference_date - period_start).days + 1
    if days_elapsed < 1:
        return 0
    taken = sum(1 for d in taken_dates if period_start <= d <= reference_date)
    # Half-up rounding
    return int(math.floor(100 * taken / days_elapsed + 0.5))


def compute(
    records: Iterable[Any],
    reference_date: date,
    period_start: date,
    period_end: date,
) -> AdherenceSummary:
    """
    Compute adherence metrics for a record snapshot.

    Args:
        records: Objects exposing `scheduled_date` and `taken`
        reference_date: The day treated as "today"
        period_start: First day of the period (must not be after reference_date)
        period_end: Last day of the period

    Returns:
        AdherenceSummary with day statuses, streak and rate
    """
    day_status: Dict[date, DayStatus] = {
        day: DayStatus.NONE for day in iter_days(period_start, period_end)
    }
    taken_dates: Set[date] = set()
    missed_dates: Set[date] = set()

    for day, day_records in group_by_date(records).items():
        status = classify_day(day_records, day, reference_date)
        day_status[day] = status
        if status == DayStatus.TAKEN:
            taken_dates.add(day)
        elif status == DayStatus.MISSED:
            missed_dates.add(day)

    return AdherenceSummary(
        reference_date=reference_date,
        period_start=period_start,
        period_end=period_end,
        day_status=day_status,
        streak=_streak(day_status, reference_date),
        adherence_rate=_rate(taken_dates, period_start, reference_date),
        taken_dates=taken_dates,
        missed_dates=missed_dates,
    )


__all__ = [
    "AdherenceSummary",
    "compute",
    "classify_day",
    "group_by_date",
    "iter_days",
    "month_bounds",
]
