"""
Timestamp helpers: parsing, canonical storage form, durations and the
display strings shown in the UI ("03月05日07时-03月05日15时 共睡了8小时").

Stored timestamps are always canonical: UTC with millisecond precision,
e.g. ``2024-01-01T22:00:00.000Z``. Canonical strings sort in time order,
so the store can compare them as plain text. Display strings use the
local calendar.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple

from tracker.errors import ValidationError


class Duration(NamedTuple):
    hours: int
    minutes: int
    total_minutes: int


def round_half_up(value: float) -> int:
    """Round .5 towards +infinity (round() would round to even)."""
    return int(math.floor(value + 0.5))


def now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime) -> datetime:
    """
    Parse an ISO-8601 string into an aware datetime.

    A trailing "Z" means UTC, a missing offset means local time and a bare
    date means midnight UTC (how browsers read ``new Date("2024-01-01")``).
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.astimezone()
    text = (value or "").strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), datetime.min.time(), timezone.utc)
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    return parsed if parsed.tzinfo else parsed.astimezone()


def canonical(value: str | datetime) -> str:
    dt = parse_timestamp(value).astimezone(timezone.utc)
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return canonical(now())


def days_before(moment: datetime, days: int) -> str:
    """
    Canonical timestamp ``days`` calendar days before ``moment``.

    The step is taken on the local wall clock, so a window spanning a DST
    change still starts at the same local hour.
    """
    try:
        wall = parse_timestamp(moment).astimezone().replace(tzinfo=None) - timedelta(days=days)
        # a naive wall time is resolved with the local DST rules in effect on that date
        return canonical(wall)
    except (OverflowError, OSError, ValueError):
        raise ValidationError(f"days out of range: {days}")


def duration(start: str | datetime, end: str | datetime) -> Duration:
    """
    Break ``end - start`` into whole hours, leftover minutes and total minutes.

    Negative spans are not rejected; they come out as negative numbers.
    """
    ms = (parse_timestamp(end) - parse_timestamp(start)) / timedelta(milliseconds=1)
    return Duration(
        hours=math.floor(ms / 3_600_000),
        # fmod keeps the sign of the span
        minutes=round_half_up(math.fmod(ms / 60_000, 60)),
        total_minutes=round_half_up(ms / 60_000),
    )


def display_moment(value: str | datetime) -> str:
    """Render as MM月DD日HH时 in local time."""
    dt = parse_timestamp(value).astimezone()
    return f"{dt:%m}月{dt:%d}日{dt:%H}时"


def display_session(start: str | datetime, end: str | datetime) -> str:
    span = duration(start, end)
    if span.total_minutes < 60:
        slept = f"共睡了{span.minutes}分钟"
    elif span.minutes == 0:
        slept = f"共睡了{span.hours}小时"
    else:
        slept = f"共睡了{span.hours}小时{span.minutes}分钟"
    return f"{display_moment(start)}-{display_moment(end)} {slept}"


def display_meal(time: str | datetime, category: str) -> str:
    return f"{display_moment(time)} ({category})"


def local_date(value: str | datetime) -> str:
    """YYYY-MM-DD of the timestamp in local time."""
    return parse_timestamp(value).astimezone().strftime("%Y-%m-%d")
