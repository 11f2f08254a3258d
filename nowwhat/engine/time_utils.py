"""Date helpers for NowWhat.

Weeks start on Sunday and weekdays are numbered Sunday=1 ... Saturday=7,
matching UserProfile.work_days.
"""

from datetime import date, datetime, timedelta

from nowwhat.models.user import UserProfile, weekday_number

__all__ = [
    "start_of_day",
    "start_of_week",
    "start_of_month",
    "weekday_number",
    "work_minutes_for_range",
]


def start_of_day(dt: datetime) -> datetime:
    """Midnight of the given datetime's day."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(dt: datetime) -> datetime:
    """Midnight of the Sunday on or before the given datetime."""
    midnight = start_of_day(dt)
    return midnight - timedelta(days=weekday_number(midnight.date()) - 1)


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def work_minutes_for_range(user: UserProfile, start: date, end: date) -> int:
    """Work minutes between two dates (both inclusive), ignoring calendar busy time.

    Args:
        user: Profile supplying work hours and work days
        start: First day of the range
        end: Last day of the range

    Returns:
        Sum of daily work minutes over the work days in the range
    """
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()

    total = 0
    current = start
    while current <= end:
        if user.is_work_date(current):
            total += user.daily_work_minutes
        current += timedelta(days=1)
    return total
