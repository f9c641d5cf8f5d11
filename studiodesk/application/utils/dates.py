from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def week_start(moment: date | datetime) -> date:
    """Monday of the week containing `moment`."""
    day = moment.date() if isinstance(moment, datetime) else moment
    return day - timedelta(days=day.weekday())


def ensure_aware(moment: datetime, tz: ZoneInfo) -> datetime:
    """Interpret naive datetimes in the studio timezone."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def default_clock(tz: ZoneInfo):
    """Return a zero-argument callable giving the current time in `tz`."""
    return lambda: datetime.now(tz)
