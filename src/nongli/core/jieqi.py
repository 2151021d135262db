# src/nongli/core/jieqi.py
from __future__ import annotations

"""
Solar-term month (节气月) resolver.

A 节气月 runs from one "节" to the next: 寅月 starts at 立春, 卯月 at 惊蛰, ...,
丑月 at 小寒. The 节气年 changes at 立春.

This is a fixed-day approximation, not an astronomical one: each 节 is pinned
to the Gregorian day it usually falls on. Real instants drift by about one day
between years. Content records are keyed by the result, so the table must not
change.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from .ganzhi import branch_index, stem_index

# 公历月 -> (节气月 starting inside that month, approximate start day)
#   1 = 寅月 (立春) ... 11 = 子月 (大雪), 12 = 丑月 (小寒)
JIEQI_MONTH_STARTS: Dict[int, Tuple[int, int]] = {
    1:  (12, 6),  # 小寒
    2:  (1, 4),   # 立春
    3:  (2, 6),   # 惊蛰
    4:  (3, 5),   # 清明
    5:  (4, 6),   # 立夏
    6:  (5, 6),   # 芒种
    7:  (6, 7),   # 小暑
    8:  (7, 8),   # 立秋
    9:  (8, 8),   # 白露
    10: (9, 8),   # 寒露
    11: (10, 7),  # 立冬
    12: (11, 7),  # 大雪
}

# 立春 ≈ 2月4日
LICHUN_MONTH = 2
LICHUN_DAY = JIEQI_MONTH_STARTS[LICHUN_MONTH][1]

FALLBACK_JIEQI_MONTH = 1


@dataclass(frozen=True)
class JieQiMonth:
    """
    (节气年, 节气月) addressing key. Not a lunar month.
    """
    year: int
    month: int

    @property
    def stem_index(self) -> int:
        return stem_index(self.year)

    @property
    def branch_index(self) -> int:
        return branch_index(self.year)


def _previous_jieqi_month(month: int) -> int:
    return 12 if month == 1 else month - 1


def jieqi_month_of(d: date) -> int:
    """
    节气月 1..12 for a Gregorian date.
    """
    entry = JIEQI_MONTH_STARTS.get(d.month)
    if entry is None:
        return FALLBACK_JIEQI_MONTH
    start_month, start_day = entry
    if d.day >= start_day:
        return start_month
    return _previous_jieqi_month(start_month)


def jieqi_year_of(d: date) -> int:
    """
    节气年: dates before 立春 still belong to the previous year.
    """
    if d.month < LICHUN_MONTH or (d.month == LICHUN_MONTH and d.day < LICHUN_DAY):
        return d.year - 1
    return d.year


def jieqi_year_month(d: date) -> JieQiMonth:
    """
    Resolve (节气年, 节气月). Never fails.

    e.g. 2024-02-03 -> (2023, 12 丑月), 2024-02-05 -> (2024, 1 寅月)
    """
    return JieQiMonth(year=jieqi_year_of(d), month=jieqi_month_of(d))
