"""
Date windows used by the calendar, the ledger and the dashboard.

Stored timestamps are naive datetimes in the clinic's local time. Aware
datetimes are converted to that time zone before any comparison, so a
period is always a half-open interval ``[start, end)`` of local time.
"""
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Tuple
from zoneinfo import ZoneInfo

from .config import settings

WEEK_LENGTH = 6  # Monday to Saturday
FIRST_HOUR = 8
LAST_HOUR = 18
WORKING_HOURS = list(range(FIRST_HOUR, LAST_HOUR + 1))


class Period(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


def to_local(moment: datetime) -> datetime:
    """Return ``moment`` as a naive datetime in the clinic time zone."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(settings.CLINIC_TIMEZONE)).replace(tzinfo=None)


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.CLINIC_TIMEZONE)).replace(tzinfo=None)


def period_bounds(period: Period, anchor: date) -> Tuple[datetime, datetime]:
    """Return the ``[start, end)`` window of ``period`` containing ``anchor``."""
    period = Period(period)
    if period is Period.DAY:
        start = datetime.combine(anchor, time.min)
        return start, start + timedelta(days=1)
    if period is Period.MONTH:
        start = datetime(anchor.year, anchor.month, 1)
        if anchor.month == 12:
            return start, datetime(anchor.year + 1, 1, 1)
        return start, datetime(anchor.year, anchor.month + 1, 1)
    start = datetime(anchor.year, 1, 1)
    return start, datetime(anchor.year + 1, 1, 1)


def in_period(moment: datetime, period: Period, anchor: date) -> bool:
    start, end = period_bounds(period, anchor)
    return start <= to_local(moment) < end


def start_of_week(anchor: date) -> date:
    """Monday of the week holding ``anchor``; a Sunday belongs to the week before."""
    return anchor - timedelta(days=anchor.weekday())


def week_days(anchor: date) -> List[date]:
    monday = start_of_week(anchor)
    return [monday + timedelta(days=offset) for offset in range(WEEK_LENGTH)]
