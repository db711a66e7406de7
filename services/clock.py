"""
Service Clock
Single source of "now" and "today" for the service layer
"""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current UTC time, naive, matching the naive DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    """Current UTC calendar date"""
    return utcnow().date()


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are read as UTC"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


__all__ = ["utcnow", "today", "epoch_millis"]
