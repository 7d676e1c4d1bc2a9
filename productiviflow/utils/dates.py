"""Calendar helpers shared by the streak and calendar logic."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from productiviflow.config import settings


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


@lru_cache()
def get_timezone(name: str | None = None) -> tzinfo:
    """Return the zone calendar days are cut in."""

    name = name or settings.TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def local_day(value: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar day ``value`` falls on in the configured zone."""

    return ensure_aware(value).astimezone(tz or get_timezone()).date()


def day_start(day: date, tz: tzinfo | None = None) -> datetime:
    """Return local midnight of ``day`` as an aware UTC datetime."""

    return datetime.combine(day, time.min, tzinfo=tz or get_timezone()).astimezone(timezone.utc)


def day_range(first: date, last: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Return the half-open UTC interval covering ``first`` through ``last``."""

    return day_start(first, tz), day_start(last + timedelta(days=1), tz)


__all__ = [
    "day_range",
    "day_start",
    "ensure_aware",
    "get_timezone",
    "local_day",
    "utcnow",
]
