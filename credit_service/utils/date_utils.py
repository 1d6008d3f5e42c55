"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Tuple


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last calendar day of the month containing `day`"""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def day_window(start: date, end: date) -> Tuple[datetime, datetime]:
    """Half-open UTC window [start 00:00, end+1 00:00) covering whole days"""
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc),
    )


def utc_date(moment: datetime) -> date:
    """UTC calendar day of a timestamp; naive values are taken as UTC already"""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
