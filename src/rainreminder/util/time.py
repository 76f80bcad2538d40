from __future__ import annotations

from datetime import UTC, date, datetime, time, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import ConfigurationError

END_OF_DAY = time(23, 59, 59)
# Start time given to periods whose startTime is missing or unparseable.
ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


def now_utc() -> datetime:
    return datetime.now(UTC)


def load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unable to load time zone {name!r}") from exc


def end_of_local_day(now: datetime, tz: tzinfo) -> datetime:
    """23:59:59 on the calendar date that ``now`` falls on in ``tz``."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    today = now.astimezone(tz).date()
    return datetime.combine(today, END_OF_DAY, tzinfo=tz)


def local_today(tz_name: str, now: datetime | None = None) -> date:
    now = now or now_utc()
    return now.astimezone(load_zone(tz_name)).date()


def format_notify_date(day: date) -> str:
    return day.strftime("%m-%d-%Y")
