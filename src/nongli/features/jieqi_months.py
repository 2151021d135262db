# src/nongli/features/jieqi_months.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from nongli.core.ganzhi import year_ganzhi
from nongli.core.jieqi import JieQiMonth, jieqi_year_month
from nongli.core.timeutil import resolve_today
from nongli.features.config import jieqi_month_name, jieqi_month_short_name, jieqi_start_term


@dataclass(frozen=True)
class JieQiYearMonth:
    """
    节气年月 with display labels.

    - year: 节气年 (switches at 立春)
    - month: 1..12, 1 = 寅月
    """
    year: int
    month: int
    month_name: str
    short_name: str
    year_ganzhi: str
    start_term: str

    @property
    def key(self) -> JieQiMonth:
        return JieQiMonth(year=self.year, month=self.month)


def enrich_jieqi_month(jm: JieQiMonth) -> JieQiYearMonth:
    return JieQiYearMonth(
        year=jm.year,
        month=jm.month,
        month_name=jieqi_month_name(jm.month),
        short_name=jieqi_month_short_name(jm.month),
        year_ganzhi=year_ganzhi(jm.year),
        start_term=jieqi_start_term(jm.month),
    )


def jieqi_year_month_for(d: date) -> JieQiYearMonth:
    return enrich_jieqi_month(jieqi_year_month(d))


def current_jieqi_year_month(today: Optional[date] = None, *, tz: Optional[str] = None) -> JieQiYearMonth:
    """
    当前节气年月 (content addressing key). Never fails.
    """
    return jieqi_year_month_for(resolve_today(today, tz))
