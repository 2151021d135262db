# src/nongli/core/lunar_table.py
from __future__ import annotations

"""
Packed lunar year data (农历数据表), 1900..2100.

Each entry is a 17-bit integer (stored in 20 bits):

    bit 16      : leap month length (1 -> 30 days, 0 -> 29 days)
    bits 15..4  : ordinary months 1..12, month m <-> bit (0x10000 >> m)
                  (bit 15 = 正月, bit 4 = 腊月), 1 -> 30 days, 0 -> 29 days
    bits 3..0   : leap month index (0 = no leap month)

Out-of-table years and out-of-range months read as 0 (or an empty span tuple);
nothing here raises for range input.
"""

from datetime import date
from typing import Optional, Tuple

MIN_YEAR = 1900
MAX_YEAR = 2100

# 公历 1900-01-31 = 农历 1900 正月初一
EPOCH = date(1900, 1, 31)

LUNAR_INFO: Tuple[int, ...] = (
    0x04bd8, 0x04ae0, 0x0a570, 0x054d5, 0x0d260, 0x0d950, 0x16554, 0x056a0, 0x09ad0, 0x055d2,  # 1900
    0x04ae0, 0x0a5b6, 0x0a4d0, 0x0d250, 0x1d255, 0x0b540, 0x0d6a0, 0x0ada2, 0x095b0, 0x14977,  # 1910
    0x04970, 0x0a4b0, 0x0b4b5, 0x06a50, 0x06d40, 0x1ab54, 0x02b60, 0x09570, 0x052f2, 0x04970,  # 1920
    0x06566, 0x0d4a0, 0x0ea50, 0x06e95, 0x05ad0, 0x02b60, 0x186e3, 0x092e0, 0x1c8d7, 0x0c950,  # 1930
    0x0d4a0, 0x1d8a6, 0x0b550, 0x056a0, 0x1a5b4, 0x025d0, 0x092d0, 0x0d2b2, 0x0a950, 0x0b557,  # 1940
    0x06ca0, 0x0b550, 0x15355, 0x04da0, 0x0a5b0, 0x14573, 0x052b0, 0x0a9a8, 0x0e950, 0x06aa0,  # 1950
    0x0aea6, 0x0ab50, 0x04b60, 0x0aae4, 0x0a570, 0x05260, 0x0f263, 0x0d950, 0x05b57, 0x056a0,  # 1960
    0x096d0, 0x04dd5, 0x04ad0, 0x0a4d0, 0x0d4d4, 0x0d250, 0x0d558, 0x0b540, 0x0b6a0, 0x195a6,  # 1970
    0x095b0, 0x049b0, 0x0a974, 0x0a4b0, 0x0b27a, 0x06a50, 0x06d40, 0x0af46, 0x0ab60, 0x09570,  # 1980
    0x04af5, 0x04970, 0x064b0, 0x074a3, 0x0ea50, 0x06b58, 0x055c0, 0x0ab60, 0x096d5, 0x092e0,  # 1990
    0x0c960, 0x0d954, 0x0d4a0, 0x0da50, 0x07552, 0x056a0, 0x0abb7, 0x025d0, 0x092d0, 0x0cab5,  # 2000
    0x0a950, 0x0b4a0, 0x0baa4, 0x0ad50, 0x055d9, 0x04ba0, 0x0a5b0, 0x15176, 0x052b0, 0x0a930,  # 2010
    0x07954, 0x06aa0, 0x0ad50, 0x05b52, 0x04b60, 0x0a6e6, 0x0a4e0, 0x0d260, 0x0ea65, 0x0d530,  # 2020
    0x05aa0, 0x076a3, 0x096d0, 0x04afb, 0x04ad0, 0x0a4d0, 0x1d0b6, 0x0d250, 0x0d520, 0x0dd45,  # 2030
    0x0b5a0, 0x056d0, 0x055b2, 0x049b0, 0x0a577, 0x0a4b0, 0x0aa50, 0x1b255, 0x06d20, 0x0ada0,  # 2040
    0x14b63, 0x09370, 0x049f8, 0x04970, 0x064b0, 0x168a6, 0x0ea50, 0x06b20, 0x1a6c4, 0x0aae0,  # 2050
    0x0a2e0, 0x0d2e3, 0x0c960, 0x0d557, 0x0d4a0, 0x0da50, 0x05d55, 0x056a0, 0x0a6d0, 0x055d4,  # 2060
    0x052d0, 0x0a9b8, 0x0a950, 0x0b4a0, 0x0b6a6, 0x0ad50, 0x055a0, 0x0aba4, 0x0a5b0, 0x052b0,  # 2070
    0x0b273, 0x06930, 0x07337, 0x06aa0, 0x0ad50, 0x14b55, 0x04b60, 0x0a570, 0x054e4, 0x0d160,  # 2080
    0x0e968, 0x0d520, 0x0daa0, 0x16aa6, 0x056d0, 0x04ae0, 0x0a9d4, 0x0a2d0, 0x0d150, 0x0f252,  # 2090
    0x0d520,                                                                                    # 2100
)

LEAP_INDEX_MASK = 0xF
LEAP_LONG_BIT = 0x10000

# (month, is_leap, days)
MonthSpan = Tuple[int, bool, int]


def in_table(year: int) -> bool:
    return MIN_YEAR <= int(year) <= MAX_YEAR


def _info(year: int) -> Optional[int]:
    # None outside 1900..2100; negative indexes must never reach the tuple
    if not in_table(year):
        return None
    return LUNAR_INFO[int(year) - MIN_YEAR]


def leap_month(year: int) -> int:
    """
    Leap month index of the lunar year (0 = no leap month, or year not in table).
    e.g. 2023 -> 2 (闰二月)
    """
    info = _info(year)
    if info is None:
        return 0
    return info & LEAP_INDEX_MASK


def leap_month_days(year: int) -> int:
    """
    0 if the year has no leap month (or is not in the table), else 29 or 30.
    """
    info = _info(year)
    if info is None or (info & LEAP_INDEX_MASK) == 0:
        return 0
    return 30 if (info & LEAP_LONG_BIT) else 29


def month_days(year: int, month: int) -> int:
    """
    Length of ordinary month 1..12 (大月 30 / 小月 29).
    0 for a year outside the table or a month outside 1..12.
    """
    info = _info(year)
    m = int(month)
    if info is None or not (1 <= m <= 12):
        return 0
    return 30 if (info & (LEAP_LONG_BIT >> m)) else 29


def lunar_year_days(year: int) -> int:
    """
    Total days of the lunar year: 12 * 29 + one per 大月 + leap month days.
    0 for a year outside the table.
    """
    info = _info(year)
    if info is None:
        return 0
    big = sum(1 for m in range(1, 13) if info & (LEAP_LONG_BIT >> m))
    return 348 + big + leap_month_days(year)


def month_spans(year: int) -> Tuple[MonthSpan, ...]:
    """
    All months of the lunar year in order, as (month, is_leap, days).

    The leap month comes right after its host month, so a year with 闰四月 reads
    (..., (4, False, n), (4, True, n'), (5, False, n''), ...).
    Both conversion directions walk this sequence. Empty outside the table.
    """
    if not in_table(year):
        return ()
    leap = leap_month(year)
    spans = []
    for m in range(1, 13):
        spans.append((m, False, month_days(year, m)))
        if m == leap:
            spans.append((m, True, leap_month_days(year)))
    return tuple(spans)
