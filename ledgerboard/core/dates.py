import calendar
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ledgerboard.config import get_settings


def as_utc(value):
    if value is None:
        return None
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            value = datetime.fromisoformat(value_text)
        except ValueError:
            return None
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if not isinstance(value, datetime):
        return None
    # naive timestamps are stored and read back as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now():
    return datetime.now(timezone.utc)


@lru_cache
def _zone(name):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def business_timezone():
    return _zone(get_settings().BUSINESS_TIMEZONE)


def start_of_day(value, tz):
    local = as_utc(value).astimezone(tz)
    return datetime.combine(local.date(), time.min, tzinfo=tz)


def start_of_month(value, tz):
    local = as_utc(value).astimezone(tz)
    return datetime(local.year, local.month, 1, tzinfo=tz)


def shift_months(value, months):
    """Move by whole calendar months, clamping the day to the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def next_day(value):
    return (value + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


__all__ = [
    "as_utc",
    "business_timezone",
    "next_day",
    "shift_months",
    "start_of_day",
    "start_of_month",
    "utc_now",
]
