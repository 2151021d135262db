# src/nongli/core/timeutil.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from zoneinfo import ZoneInfo

from .config import DEFAULT_TZ


def today_in(tz: Optional[str] = None) -> date:
    """
    Current calendar date in the given IANA timezone.

    Parameters
    ----------
    tz:
        Zone name, e.g. "Asia/Shanghai". None means DEFAULT_TZ.

    Raises
    ------
    zoneinfo.ZoneInfoNotFoundError
        If tz is not a known zone.
    """
    return datetime.now(ZoneInfo(tz or DEFAULT_TZ)).date()


def resolve_today(today: Optional[date], tz: Optional[str] = None) -> date:
    """
    Use `today` when given (tests, fixed-date callers), else the clock.
    """
    if today is not None:
        if isinstance(today, datetime):
            return today.date()
        return today
    return today_in(tz)


def safe_date(year: int, month: int, day: int) -> Optional[date]:
    """
    date(year, month, day), or None for an impossible calendar date.
    """
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None
