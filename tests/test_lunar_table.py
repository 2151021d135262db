from __future__ import annotations

import pytest

from nongli.core.lunar_table import (
    LUNAR_INFO,
    MAX_YEAR,
    MIN_YEAR,
    leap_month,
    leap_month_days,
    lunar_year_days,
    month_days,
    month_spans,
)

ALL_YEARS = range(MIN_YEAR, MAX_YEAR + 1)


def test_table_covers_1900_to_2100():
    assert len(LUNAR_INFO) == MAX_YEAR - MIN_YEAR + 1 == 201
    assert isinstance(LUNAR_INFO, tuple)


@pytest.mark.parametrize(
    "year, leap",
    [
        (2020, 4),   # 闰四月
        (2023, 2),   # 闰二月
        (2025, 6),   # 闰六月
        (2017, 6),   # 闰六月
        (2024, 0),
        (2021, 0),
    ],
)
def test_leap_month_index(year, leap):
    assert leap_month(year) == leap


def test_leap_month_days():
    assert leap_month_days(2020) == 29
    assert leap_month_days(2023) == 29
    assert leap_month_days(2024) == 0


def test_month_bit_order():
    # 2024 正月 = 2024-02-10..2024-03-09 (29 days), 2023 二月 = 30 days
    assert month_days(2024, 1) == 29
    assert month_days(2023, 2) == 30
    assert month_days(2020, 4) == 30


@pytest.mark.parametrize("month", [0, 13, -1])
def test_month_days_bad_month_is_zero(month):
    assert month_days(2024, month) == 0


@pytest.mark.parametrize("year", [MIN_YEAR - 1, MAX_YEAR + 1, 1800, 0])
def test_out_of_table_year_reads_as_zero(year):
    assert leap_month(year) == 0
    assert leap_month_days(year) == 0
    assert month_days(year, 1) == 0
    assert lunar_year_days(year) == 0
    assert month_spans(year) == ()


def test_1899_does_not_wrap_to_2100():
    # a negative index would silently read the last table entry
    assert lunar_year_days(2100) > 0
    assert lunar_year_days(1899) != lunar_year_days(2100)
    assert leap_month(MIN_YEAR - 1) == 0


def test_day_count_conservation():
    for y in ALL_YEARS:
        total = sum(month_days(y, m) for m in range(1, 13)) + leap_month_days(y)
        assert lunar_year_days(y) == total
        assert 353 <= total <= 385, y


def test_leap_years_have_13_months():
    for y in ALL_YEARS:
        spans = month_spans(y)
        if leap_month(y):
            assert len(spans) == 13
            assert 383 <= lunar_year_days(y) <= 385
        else:
            assert len(spans) == 12
            assert 353 <= lunar_year_days(y) <= 355
        assert sum(n for _, _, n in spans) == lunar_year_days(y)


def test_leap_span_follows_host_month():
    spans = month_spans(2020)
    assert spans[3] == (4, False, 30)
    assert spans[4] == (4, True, 29)
    assert spans[5][:2] == (5, False)
