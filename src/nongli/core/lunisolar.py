# src/nongli/core/lunisolar.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from itertools import accumulate
from typing import Iterable, Optional, Sequence, Tuple

from .ganzhi import ANIMALS, GAN, ZHI, animal_index, branch_index, stem_index
from .lunar_table import (
    EPOCH,
    MAX_YEAR,
    MIN_YEAR,
    in_table,
    lunar_year_days,
    month_spans,
)
from .timeutil import safe_date

log = logging.getLogger("nongli.core.lunisolar")


# ============================================================
# Result types
# ============================================================

@dataclass(frozen=True)
class LunarDate:
    """
    公历 -> 农历 conversion result.

    - month: 1..12 (闰月 keeps the number of its host month)
    - is_leap: True only inside the leap month, i.e. month == leap_month(year)
    - month_days: length of the month the date falls in (29 / 30)
    """
    year: int
    month: int
    day: int
    is_leap: bool
    stem_index: int
    branch_index: int
    animal_index: int
    month_days: int

    @property
    def year_ganzhi(self) -> str:
        return GAN[self.stem_index] + ZHI[self.branch_index]

    @property
    def animal(self) -> str:
        return ANIMALS[self.animal_index]

    @property
    def label(self) -> str:
        prefix = "闰" if self.is_leap else ""
        return f"{prefix}{self.month:02d}/{self.day:02d}"


@dataclass(frozen=True)
class SolarRange:
    """
    Gregorian span of one lunar month, both ends inclusive.
    """
    start: date
    end: date
    days: int


# ============================================================
# offset walk
# ============================================================

def _split_offset(offset: int, lengths: Sequence[int]) -> Optional[Tuple[int, int]]:
    """
    Consume whole spans from a day offset.

    Pre:  offset >= 0
    Post: (i, rest) with sum(lengths[:i]) + rest == offset and
          0 <= rest < lengths[i].

    rest == 0 means "first day of span i": a date that lands exactly on the
    end of 四月 belongs to 闰四月 day 1 when that leap month follows, and a date
    on the end of 闰四月 belongs to 五月 day 1.
    Returns None if offset runs past the last span.
    """
    rest = int(offset)
    for i, n in enumerate(lengths):
        if rest < n:
            return i, rest
        rest -= n
    return None


def _days_before(index: int, lengths: Sequence[int]) -> int:
    """
    Inverse of _split_offset for rest == 0.
    """
    return sum(lengths[:index])


@lru_cache(maxsize=1)
def _year_lengths() -> Tuple[int, ...]:
    return tuple(lunar_year_days(y) for y in range(MIN_YEAR, MAX_YEAR + 1))


@lru_cache(maxsize=1)
def _year_start_offsets() -> Tuple[int, ...]:
    # offsets from EPOCH of 正月初一, one per table year
    return (0,) + tuple(accumulate(_year_lengths()))[:-1]


def _span_lengths(year: int) -> Tuple[int, ...]:
    return tuple(n for _, _, n in month_spans(year))


# ============================================================
# 公历 -> 农历
# ============================================================

def solar_date_to_lunar(d: date) -> Optional[LunarDate]:
    """
    公历日期 -> 农历.

    Returns None when d is outside the table: year not in [1900, 2100], or
    before 1900-01-31 (those days still belong to lunar 1899).
    """
    if not in_table(d.year):
        return None

    offset = (d - EPOCH).days
    if offset < 0:
        return None

    hit = _split_offset(offset, _year_lengths())
    if hit is None:
        log.error("year walk ran past the lunar table: date=%s offset=%d", d, offset)
        return None
    year_pos, rest = hit
    year = MIN_YEAR + year_pos

    spans = month_spans(year)
    hit = _split_offset(rest, _span_lengths(year))
    if hit is None:
        # rest < lunar_year_days(year) == sum of spans; a miss means a broken table entry
        log.error("month walk ran past lunar year %d: date=%s rest=%d", year, d, rest)
        return None
    month_pos, rest = hit
    month, is_leap, days = spans[month_pos]

    return LunarDate(
        year=year,
        month=month,
        day=rest + 1,
        is_leap=is_leap,
        stem_index=stem_index(year),
        branch_index=branch_index(year),
        animal_index=animal_index(year),
        month_days=days,
    )


def solar_to_lunar(year: int, month: int, day: int) -> Optional[LunarDate]:
    """
    公历 (year, month, day) -> 农历.

    None for a year outside [1900, 2100], a date before the epoch, or an
    impossible Gregorian date (e.g. 2023-02-30). Never raises for range input.
    """
    if not in_table(year):
        return None
    d = safe_date(year, month, day)
    if d is None:
        return None
    return solar_date_to_lunar(d)


def lunar_dates_between(start: date, end: date) -> Iterable[Tuple[date, Optional[LunarDate]]]:
    """
    [start, end) 逐日转换 (days outside the table yield None).
    """
    d = start
    while d < end:
        yield d, solar_date_to_lunar(d)
        d += timedelta(days=1)


# ============================================================
# 农历 -> 公历
# ============================================================

def lunar_month_solar_range(
    lunar_year: int,
    lunar_month: int,
    *,
    is_leap: bool = False,
) -> Optional[SolarRange]:
    """
    Gregorian start/end of a lunar month.

    - is_leap=False: the ordinary month (days of an earlier 闰月 are counted)
    - is_leap=True : the leap month of that number; None if the year has none

    None for lunar_year outside [1900, 2100] or lunar_month outside [1, 12].
    """
    if not in_table(lunar_year) or not (1 <= int(lunar_month) <= 12):
        return None

    year = int(lunar_year)
    spans = month_spans(year)
    pos = next(
        (i for i, (m, leap, _) in enumerate(spans) if m == int(lunar_month) and leap == bool(is_leap)),
        None,
    )
    if pos is None:
        return None

    offset = _year_start_offsets()[year - MIN_YEAR] + _days_before(pos, _span_lengths(year))
    days = spans[pos][2]
    start = EPOCH + timedelta(days=offset)
    return SolarRange(start=start, end=start + timedelta(days=days - 1), days=days)


def lunar_to_solar(
    lunar_year: int,
    lunar_month: int,
    lunar_day: int,
    *,
    is_leap: bool = False,
) -> Optional[date]:
    """
    农历 -> 公历. None when the month does not exist or the day exceeds it.
    """
    rng = lunar_month_solar_range(lunar_year, lunar_month, is_leap=is_leap)
    if rng is None:
        return None
    if not (1 <= int(lunar_day) <= rng.days):
        return None
    return rng.start + timedelta(days=int(lunar_day) - 1)
