# src/nongli/features/config.py
from __future__ import annotations

"""
Feature-level labels / display names.

- 农历月名 (正月..腊月), 农历日名 (初一..三十)
- 节气月: 1 = 寅月 (立春) .. 12 = 丑月 (小寒), full name / short name / start term

Lookups for lunar months and 节气月 return "" for out-of-range numbers instead
of raising; API callers validate ranges before formatting.
"""

from typing import List

from nongli.core.ganzhi import ZHI

# ============================================================
# 农历月 / 日
# ============================================================

LUNAR_MONTH_NAMES: List[str] = ["正", "二", "三", "四", "五", "六", "七", "八", "九", "十", "冬", "腊"]

LUNAR_DAY_NAMES: List[str] = [
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
]


def lunar_month_name(month: int) -> str:
    """
    1 -> "正月", 11 -> "冬月", 12 -> "腊月"; "" when out of range.
    """
    m = int(month)
    if not (1 <= m <= 12):
        return ""
    return LUNAR_MONTH_NAMES[m - 1] + "月"


def lunar_month_display_name(month: int, is_leap: bool) -> str:
    base = lunar_month_name(month)
    if not base:
        return ""
    return f"闰{base}" if is_leap else base


def lunar_day_name(day: int) -> str:
    d = int(day)
    if not (1 <= d <= 30):
        return ""
    return LUNAR_DAY_NAMES[d - 1]


# ============================================================
# 节气月
#   NOTE:
#     节气月 1 is 寅月, so its branch is ZHI[(month + 1) % 12]:
#       1 -> 寅, 11 -> 子, 12 -> 丑
# ============================================================

JIEQI_MONTH_NAMES: List[str] = [
    "寅月（正月）", "卯月（二月）", "辰月（三月）", "巳月（四月）",
    "午月（五月）", "未月（六月）", "申月（七月）", "酉月（八月）",
    "戌月（九月）", "亥月（十月）", "子月（冬月）", "丑月（腊月）",
]

JIEQI_MONTH_SHORT_NAMES: List[str] = [ZHI[(m + 1) % 12] for m in range(1, 13)]

# 每个节气月的起始"节"
JIEQI_START_TERMS: List[str] = [
    "立春", "惊蛰", "清明", "立夏", "芒种", "小暑",
    "立秋", "白露", "寒露", "立冬", "大雪", "小寒",
]


def jieqi_month_name(month: int) -> str:
    m = int(month)
    if not (1 <= m <= 12):
        return ""
    return JIEQI_MONTH_NAMES[m - 1]


def jieqi_month_short_name(month: int) -> str:
    """
    1 -> "寅月"; "" when out of range.
    """
    m = int(month)
    if not (1 <= m <= 12):
        return ""
    return JIEQI_MONTH_SHORT_NAMES[m - 1] + "月"


def jieqi_start_term(month: int) -> str:
    m = int(month)
    if not (1 <= m <= 12):
        return ""
    return JIEQI_START_TERMS[m - 1]
