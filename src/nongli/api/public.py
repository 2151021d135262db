from __future__ import annotations

import logging
import time
from datetime import date
from functools import lru_cache
from typing import List, Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from nongli.core.config import NongliConfig, load_config
from nongli.core.jieqi import jieqi_year_month
from nongli.core.lunar_table import MAX_YEAR, MIN_YEAR
from nongli.core.lunisolar import LunarDate, lunar_dates_between, lunar_month_solar_range, solar_date_to_lunar
from nongli.core.timeutil import resolve_today
from nongli.features.config import jieqi_month_short_name, lunar_day_name, lunar_month_display_name
from nongli.features.jieqi_months import JieQiYearMonth, current_jieqi_year_month, jieqi_year_month_for
from nongli.features.lunar_months import current_lunar_year_month
from nongli.features.mingpi import (
    InMemoryMingpiRepository,
    MingpiRepository,
    MingpiService,
)

router = APIRouter(prefix="/api/v1", tags=["calendar"])
mingpi_router = APIRouter(prefix="/api/v1/mingpi", tags=["mingpi"])

log = logging.getLogger("nongli.api.public")


# ============================================================
# Response Models
# ============================================================
class LunarDateModel(BaseModel):
    year: int
    month: int
    day: int
    is_leap: bool = Field(default=False, description="闰月为 true")
    month_days: int
    label: str
    month_name: str
    day_name: str
    year_ganzhi: str
    animal: str


class ConvertResponse(BaseModel):
    date: date
    lunar: LunarDateModel


class SolarRangeResponse(BaseModel):
    lunar_year: int
    lunar_month: int
    is_leap: bool
    start: date
    end: date
    days: int


class LunarYearMonthResponse(BaseModel):
    year: int
    month: int
    is_leap: bool
    month_name: str
    label: str
    year_ganzhi: str
    animal: str


class JieQiYearMonthResponse(BaseModel):
    year: int = Field(..., description="节气年，以立春为界")
    month: int = Field(..., ge=1, le=12, description="1 = 寅月")
    month_name: str
    short_name: str
    year_ganzhi: str
    start_term: str


class CalendarDay(BaseModel):
    date: date
    weekday: int = Field(..., description="0 = Monday")
    lunar: Optional[LunarDateModel] = None
    jieqi_year: int
    jieqi_month: int
    jieqi_short_name: str


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    days: List[CalendarDay]


# ============================================================
# Dependencies
# ============================================================
@lru_cache(maxsize=1)
def get_config() -> NongliConfig:
    return load_config()


def get_tz(config: NongliConfig = Depends(get_config)) -> str:
    tz = config.calendar.tz
    try:
        ZoneInfo(tz)
    except ZoneInfoNotFoundError as e:
        raise HTTPException(status_code=500, detail=f"Unknown timezone: {tz}") from e
    return tz


def get_today() -> Optional[date]:
    """
    None = read the clock. Overridden in tests to pin "today".
    """
    return None


@lru_cache(maxsize=1)
def _default_repository() -> MingpiRepository:
    seed = get_config().content.seed_path
    if seed is None:
        return InMemoryMingpiRepository()
    if not seed.exists():
        log.warning("mingpi seed file not found, starting empty: %s", seed)
        return InMemoryMingpiRepository()
    return InMemoryMingpiRepository.from_json(seed)


def get_repository() -> MingpiRepository:
    return _default_repository()


def get_service(
    repository: MingpiRepository = Depends(get_repository),
    tz: str = Depends(get_tz),
    config: NongliConfig = Depends(get_config),
) -> MingpiService:
    return MingpiService(repository, tz=tz, content=config.content)


# ============================================================
# Helpers
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _lunar_model(ld: LunarDate) -> LunarDateModel:
    return LunarDateModel(
        year=ld.year,
        month=ld.month,
        day=ld.day,
        is_leap=ld.is_leap,
        month_days=ld.month_days,
        label=ld.label,
        month_name=lunar_month_display_name(ld.month, ld.is_leap),
        day_name=lunar_day_name(ld.day),
        year_ganzhi=ld.year_ganzhi,
        animal=ld.animal,
    )


def _jieqi_model(jq: JieQiYearMonth) -> JieQiYearMonthResponse:
    return JieQiYearMonthResponse(
        year=jq.year,
        month=jq.month,
        month_name=jq.month_name,
        short_name=jq.short_name,
        year_ganzhi=jq.year_ganzhi,
        start_term=jq.start_term,
    )


def _out_of_table(d: date) -> HTTPException:
    return HTTPException(status_code=404, detail=f"date out of lunar table ({MIN_YEAR}-01-31..{MAX_YEAR}-12-31): {d}")


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": message})


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"detail": message})


# ============================================================
# Calendar endpoints
# ============================================================
@router.get("/lunar/convert", response_model=ConvertResponse)
def convert(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> ConvertResponse:
    d = _parse_iso_date(date_str)
    ld = solar_date_to_lunar(d)
    if ld is None:
        raise _out_of_table(d)
    return ConvertResponse(date=d, lunar=_lunar_model(ld))


@router.get("/lunar/month-range", response_model=SolarRangeResponse)
def month_range(
    year: int = Query(..., description="农历年"),
    month: int = Query(..., description="农历月 1..12"),
    leap: bool = Query(False, description="闰月"),
) -> SolarRangeResponse:
    rng = lunar_month_solar_range(year, month, is_leap=leap)
    if rng is None:
        raise HTTPException(status_code=404, detail=f"lunar month not found: {year}/{'闰' if leap else ''}{month}")
    return SolarRangeResponse(
        lunar_year=year,
        lunar_month=month,
        is_leap=leap,
        start=rng.start,
        end=rng.end,
        days=rng.days,
    )


@router.get("/lunar/current", response_model=LunarYearMonthResponse)
def lunar_current(
    today: Optional[date] = Depends(get_today),
    tz: str = Depends(get_tz),
) -> LunarYearMonthResponse:
    d = resolve_today(today, tz)
    lym = current_lunar_year_month(d)
    if lym is None:
        raise _out_of_table(d)
    return LunarYearMonthResponse(
        year=lym.year,
        month=lym.month,
        is_leap=lym.is_leap,
        month_name=lym.month_name,
        label=lym.label,
        year_ganzhi=lym.year_ganzhi,
        animal=lym.animal,
    )


@router.get("/jieqi/current", response_model=JieQiYearMonthResponse)
def jieqi_current(
    today: Optional[date] = Depends(get_today),
    tz: str = Depends(get_tz),
) -> JieQiYearMonthResponse:
    return _jieqi_model(current_jieqi_year_month(today, tz=tz))


@router.get("/jieqi/resolve", response_model=JieQiYearMonthResponse)
def jieqi_resolve(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> JieQiYearMonthResponse:
    return _jieqi_model(jieqi_year_month_for(_parse_iso_date(date_str)))


@router.get("/calendar/month", response_model=CalendarMonthResponse)
def calendar_month(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    month: int = Query(..., ge=1, le=12),
    timing: bool = Query(False, description="输出 timing 日志（调试用）"),
) -> CalendarMonthResponse:
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)

    t0 = time.perf_counter()
    days: List[CalendarDay] = []
    for d, ld in lunar_dates_between(start, end):
        jq = jieqi_year_month(d)
        days.append(
            CalendarDay(
                date=d,
                weekday=d.weekday(),
                lunar=None if ld is None else _lunar_model(ld),
                jieqi_year=jq.year,
                jieqi_month=jq.month,
                jieqi_short_name=jieqi_month_short_name(jq.month),
            )
        )
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /calendar/month year=%d month=%d days=%d total=%.3fs", year, month, len(days), t1 - t0)

    return CalendarMonthResponse(year=year, month=month, days=days)


# ============================================================
# 命批 endpoints
#   {"success": true, "data": ...} envelope
#   unexpected repository failures are logged and answered with 500
# ============================================================
@mingpi_router.get("/current")
def mingpi_current(
    user_id: int = Query(..., ge=1),
    today: Optional[date] = Depends(get_today),
    service: MingpiService = Depends(get_service),
):
    try:
        result = service.current(user_id, today)
    except Exception:
        log.exception("mingpi lookup failed: user_id=%d today=%s", user_id, today)
        return _server_error("获取命批失败")
    return {"success": True, "data": result.to_dict()}


@mingpi_router.get("/profile")
def mingpi_profile(
    user_id: int = Query(..., ge=1),
    service: MingpiService = Depends(get_service),
):
    try:
        profile = service.profile(user_id)
    except Exception:
        log.exception("profile lookup failed: user_id=%d", user_id)
        return _server_error("获取用户资料失败")
    return {"success": True, "data": None if profile is None else profile.to_dict()}


@mingpi_router.get("/yearly-fortune")
def yearly_fortune_current(
    user_id: int = Query(..., ge=1),
    today: Optional[date] = Depends(get_today),
    service: MingpiService = Depends(get_service),
):
    try:
        fortune = service.yearly_fortune(user_id, today)
    except Exception:
        log.exception("yearly fortune lookup failed: user_id=%d today=%s", user_id, today)
        return _server_error("获取年度运势失败")
    return {"success": True, "data": None if fortune is None else fortune.to_dict()}


@mingpi_router.get("/yearly-fortune/{year}")
def yearly_fortune_for_year(
    year: str,
    user_id: int = Query(..., ge=1),
    service: MingpiService = Depends(get_service),
):
    try:
        fortune = service.yearly_fortune_for_year(user_id, int(year))
    except ValueError:
        return _bad_request("无效的年份参数")
    except Exception:
        log.exception("yearly fortune lookup failed: user_id=%d year=%s", user_id, year)
        return _server_error("获取年度运势失败")
    return {"success": True, "data": None if fortune is None else fortune.to_dict()}


# NOTE: two-segment catch-all, keep it registered last
@mingpi_router.get("/{year}/{month}")
def mingpi_for_month(
    year: str,
    month: str,
    user_id: int = Query(..., ge=1),
    service: MingpiService = Depends(get_service),
):
    try:
        result = service.for_month(user_id, int(year), int(month))
    except ValueError:
        return _bad_request("无效的年月参数")
    except Exception:
        log.exception("mingpi lookup failed: user_id=%d year=%s month=%s", user_id, year, month)
        return _server_error("获取命批失败")
    return {"success": True, "data": result.to_dict()}


def startup_check() -> Optional[LunarDate]:
    """
    Convert today once at startup; logs when the clock is past the table.
    """
    cfg = get_config()
    log.info("nongli api config: tz=%s mingpi_seed=%s", cfg.calendar.tz, cfg.content.seed_path)
    d = resolve_today(None, cfg.calendar.tz)
    ld = solar_date_to_lunar(d)
    if ld is None:
        log.error("today is outside the lunar table: %s", d)
    return ld
