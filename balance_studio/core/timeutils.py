"""Time helpers shared by models and services.

Everything is stored in UTC; calendar logic (days, weeks, "today") is evaluated
in the studio timezone from the settings.
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from ..config import get_settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    # SQLite hands back naive values for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def studio_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().timezone)


def studio_today(now: datetime | None = None) -> date:
    current = ensure_aware(now or utc_now())
    return current.astimezone(studio_zone()).date()


def local_date(value: datetime) -> date:
    return ensure_aware(value).astimezone(studio_zone()).date()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return the UTC range ``[start, end)`` covering a studio-local day."""
    zone = studio_zone()
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[datetime, datetime]:
    monday = week_start(day)
    start, _ = day_bounds(monday)
    end, _ = day_bounds(monday + timedelta(days=7))
    return start, end


def combine_local(day: date, at: time) -> datetime:
    return datetime.combine(day, at, tzinfo=studio_zone()).astimezone(timezone.utc)


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_month_start(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


__all__ = [
    "utc_now",
    "ensure_aware",
    "studio_zone",
    "studio_today",
    "local_date",
    "day_bounds",
    "week_start",
    "week_bounds",
    "combine_local",
    "month_start",
    "next_month_start",
]
