from dataclasses import dataclass
from datetime import datetime, timedelta

from ledgerboard.core.constants import REPORT_PERIODS, WEEKLY_BUCKETS
from ledgerboard.core.dates import as_utc, next_day, shift_months, start_of_day, start_of_month
from ledgerboard.core.errors import ValidationError


@dataclass(frozen=True)
class Window:
    """A time range over which transactions are aggregated.

    The start is always inclusive. The end is exclusive unless
    ``inclusive_end`` is set.
    """

    start: datetime
    end: datetime
    inclusive_end: bool = False

    def contains(self, value) -> bool:
        moment = as_utc(value)
        if moment is None:
            return False
        if moment < as_utc(self.start):
            return False
        if self.inclusive_end:
            return moment <= as_utc(self.end)
        return moment < as_utc(self.end)

    @property
    def duration(self) -> timedelta:
        return as_utc(self.end) - as_utc(self.start)


@dataclass(frozen=True)
class Bucket:
    label: str
    window: Window


def normalize_period(period):
    value = str(period or "").strip().lower()
    if value not in REPORT_PERIODS:
        raise ValidationError(
            "period must be one of: {}".format(", ".join(REPORT_PERIODS))
        )
    return value


def day_window(now, tz):
    start = start_of_day(now, tz)
    return Window(start=start, end=next_day(start))


def month_window(now, tz):
    start = start_of_month(now, tz)
    return Window(start=start, end=shift_months(start, 1))


def period_window(period, now, tz):
    """Window from the period's lower bound up to and including ``now``."""
    period = normalize_period(period)
    local_now = as_utc(now).astimezone(tz)
    if period == "today":
        start = start_of_day(local_now, tz)
    elif period == "week":
        start = local_now - timedelta(days=7)
    elif period == "month":
        start = shift_months(local_now, -1)
    else:
        start = shift_months(local_now, -12)
    return Window(start=start, end=local_now, inclusive_end=True)


def previous_window(window):
    """Same duration, immediately preceding ``window`` and ending where it starts."""
    return Window(start=window.start - window.duration, end=window.start)


def weekly_buckets(now, count=WEEKLY_BUCKETS):
    """Sliding 7-day buckets anchored on ``now``, oldest first.

    Bucket ``i`` starts ``7 * i`` days before ``now`` and spans six days
    forward, both ends inclusive. Labels run "count" .. "1".
    """
    anchor = as_utc(now)
    buckets = []
    for index in range(count):
        start = anchor - timedelta(days=7 * index)
        end = start + timedelta(days=6)
        buckets.insert(
            0,
            Bucket(label=str(index + 1), window=Window(start=start, end=end, inclusive_end=True)),
        )
    return buckets


__all__ = [
    "Bucket",
    "Window",
    "day_window",
    "month_window",
    "normalize_period",
    "period_window",
    "previous_window",
    "weekly_buckets",
]
