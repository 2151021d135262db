# src/nongli/features/lunar_months.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from nongli.core.ganzhi import year_animal, year_ganzhi
from nongli.core.lunisolar import LunarDate, solar_date_to_lunar
from nongli.core.timeutil import resolve_today
from nongli.features.config import lunar_day_name, lunar_month_display_name, lunar_month_name


@dataclass(frozen=True)
class LunarYearMonth:
    year: int
    month: int
    is_leap: bool
    month_name: str
    year_ganzhi: str
    animal: str

    @property
    def label(self) -> str:
        return lunar_month_display_name(self.month, self.is_leap)


def describe_lunar_date(ld: LunarDate) -> dict:
    """
    LunarDate -> JSON-ready dict with display labels.
    """
    return {
        "year": int(ld.year),
        "month": int(ld.month),
        "day": int(ld.day),
        "leap": bool(ld.is_leap),
        "month_days": int(ld.month_days),
        "label": ld.label,
        "month_name": lunar_month_display_name(ld.month, ld.is_leap),
        "day_name": lunar_day_name(ld.day),
        "year_ganzhi": ld.year_ganzhi,
        "animal": ld.animal,
    }


def lunar_year_month_for(d: date) -> Optional[LunarYearMonth]:
    ld = solar_date_to_lunar(d)
    if ld is None:
        return None
    return LunarYearMonth(
        year=ld.year,
        month=ld.month,
        is_leap=ld.is_leap,
        month_name=lunar_month_name(ld.month),
        year_ganzhi=year_ganzhi(ld.year),
        animal=year_animal(ld.year),
    )


def current_lunar_year_month(today: Optional[date] = None, *, tz: Optional[str] = None) -> Optional[LunarYearMonth]:
    """
    当前农历年月. month_name carries no 闰 prefix; use .label for display.
    """
    return lunar_year_month_for(resolve_today(today, tz))
