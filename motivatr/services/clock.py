"""Calendar-day helpers.

Timestamps are stored as naive UTC; calendar days (streaks, "completed
today") are evaluated in the configured APP_TIMEZONE.
"""
from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from motivatr.config import get_settings
from motivatr.models.base import utcnow


def _zone() -> tzinfo:
    name = get_settings().APP_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def local_today(now: Optional[datetime] = None) -> date:
    """Calendar date of ``now`` (naive UTC) in the app timezone."""
    now = now or utcnow()
    return now.replace(tzinfo=timezone.utc).astimezone(_zone()).date()


def day_start_utc(day: date) -> datetime:
    """Naive UTC instant at which ``day`` begins in the app timezone."""
    local_midnight = datetime.combine(day, time.min, tzinfo=_zone())
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def sunday_index(day: date) -> int:
    """Weekday index with Sunday=0 ... Saturday=6."""
    return (day.weekday() + 1) % 7


__all__ = ["utcnow", "local_today", "day_start_utc", "sunday_index"]
