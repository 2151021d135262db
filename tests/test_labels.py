from __future__ import annotations

import pytest

from nongli.features.config import (
    jieqi_month_name,
    jieqi_month_short_name,
    jieqi_start_term,
    lunar_day_name,
    lunar_month_display_name,
    lunar_month_name,
)


def test_lunar_month_names():
    assert lunar_month_name(1) == "正月"
    assert lunar_month_name(11) == "冬月"
    assert lunar_month_name(12) == "腊月"
    assert lunar_month_display_name(4, True) == "闰四月"
    assert lunar_month_display_name(4, False) == "四月"


def test_lunar_day_names():
    assert lunar_day_name(1) == "初一"
    assert lunar_day_name(20) == "二十"
    assert lunar_day_name(21) == "廿一"
    assert lunar_day_name(30) == "三十"


def test_jieqi_month_short_names_follow_branches():
    assert [jieqi_month_short_name(m) for m in range(1, 13)] == [
        "寅月", "卯月", "辰月", "巳月", "午月", "未月",
        "申月", "酉月", "戌月", "亥月", "子月", "丑月",
    ]


@pytest.mark.parametrize("month", [0, 13, -1])
def test_out_of_range_is_empty(month):
    assert jieqi_month_name(month) == ""
    assert jieqi_month_short_name(month) == ""
    assert jieqi_start_term(month) == ""
    assert lunar_month_name(month) == ""
    assert lunar_month_display_name(month, True) == ""


def test_day_name_out_of_range_is_empty():
    assert lunar_day_name(0) == ""
    assert lunar_day_name(31) == ""


def test_jieqi_month_name_and_term():
    assert jieqi_month_name(1) == "寅月（正月）"
    assert jieqi_month_name(11) == "子月（冬月）"
    assert jieqi_start_term(3) == "清明"
    assert jieqi_start_term(12) == "小寒"
