"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import List

# date.weekday(): Monday=0 ... Saturday=5, Sunday=6
WEEKEND_DAYS = (5, 6)


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def month_dates(year: int, month: int) -> List[date]:
    """Every calendar day of the given month"""
    days_in_month = calendar.monthrange(year, month)[1]
    return generate_date_range(date(year, month, 1), date(year, month, days_in_month))


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def to_epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch; naive datetimes are treated as UTC"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def from_epoch_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
