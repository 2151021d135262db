# src/nongli/features/mingpi.py
from __future__ import annotations

"""
命批 / 年运 lookup.

- 命批 records are keyed by (user_id, 节气年, 节气月): the current key comes from
  the solar-term resolver, never from the lunar month.
- 年运 records are keyed by (user_id, 农历年).
- 命盘资料 (八字 pillars, 起运 age, 命局 analysis) is one record per user.
- A missing 命批 falls back to a random default tip (is_default=True).
"""

import json
import logging
import random
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

from nongli.core.config import ContentConfig
from nongli.features.config import jieqi_month_name
from nongli.features.jieqi_months import current_jieqi_year_month
from nongli.features.lunar_months import current_lunar_year_month

log = logging.getLogger("nongli.features.mingpi")

DEFAULT_TIPS: List[str] = [
    "岁月如流，时光荏苒，愿你珍惜当下每一天。",
    "春有百花秋有月，夏有凉风冬有雪。若无闲事挂心头，便是人间好时节。",
    "天行健，君子以自强不息；地势坤，君子以厚德载物。",
    "行到水穷处，坐看云起时。",
    "人生若只如初见，何事秋风悲画扇。",
    "山不在高，有仙则名；水不在深，有龙则灵。",
    "采菊东篱下，悠然见南山。",
    "宠辱不惊，看庭前花开花落；去留无意，望天上云卷云舒。",
]


class InvalidYearMonth(ValueError):
    """
    Direct {year}/{month} lookup outside the configured year window or 1..12.
    """


# ============================================================
# Records / repository
# ============================================================

@dataclass(frozen=True)
class YearlyFortune:
    """
    年运: 大运 / 流年 + 四季 text for one lunar year.
    """
    lunar_year: int
    dayun: Optional[str] = None
    liunian: Optional[str] = None
    spring_content: Optional[str] = None
    summer_content: Optional[str] = None
    autumn_content: Optional[str] = None
    winter_content: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "lunarYear": self.lunar_year,
            "dayun": self.dayun,
            "liunian": self.liunian,
            "springContent": self.spring_content,
            "summerContent": self.summer_content,
            "autumnContent": self.autumn_content,
            "winterContent": self.winter_content,
        }


@dataclass(frozen=True)
class UserProfile:
    """
    命盘资料: 四柱, 起运 age and free-text 命局 analysis.
    """
    year_pillar: Optional[str] = None
    month_pillar: Optional[str] = None
    day_pillar: Optional[str] = None
    hour_pillar: Optional[str] = None
    qiyun_age: Optional[str] = None
    analysis: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "yearPillar": self.year_pillar,
            "monthPillar": self.month_pillar,
            "dayPillar": self.day_pillar,
            "hourPillar": self.hour_pillar,
            "qiyunAge": self.qiyun_age,
            "analysis": self.analysis,
        }


@runtime_checkable
class MingpiRepository(Protocol):
    def get_content(self, user_id: int, year: int, month: int) -> Optional[str]:
        ...

    def get_yearly_fortune(self, user_id: int, lunar_year: int) -> Optional[YearlyFortune]:
        ...

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        ...


class InMemoryMingpiRepository:
    """
    Dict-backed repository. Written at setup, read-only while serving.
    """

    def __init__(self) -> None:
        self._contents: Dict[Tuple[int, int, int], str] = {}
        self._fortunes: Dict[Tuple[int, int], YearlyFortune] = {}
        self._profiles: Dict[int, UserProfile] = {}

    def put_content(self, user_id: int, year: int, month: int, content: str) -> None:
        self._contents[(int(user_id), int(year), int(month))] = str(content)

    def put_yearly_fortune(self, user_id: int, fortune: YearlyFortune) -> None:
        self._fortunes[(int(user_id), int(fortune.lunar_year))] = fortune

    def put_profile(self, user_id: int, profile: UserProfile) -> None:
        self._profiles[int(user_id)] = profile

    def get_content(self, user_id: int, year: int, month: int) -> Optional[str]:
        return self._contents.get((int(user_id), int(year), int(month)))

    def get_yearly_fortune(self, user_id: int, lunar_year: int) -> Optional[YearlyFortune]:
        return self._fortunes.get((int(user_id), int(lunar_year)))

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        return self._profiles.get(int(user_id))

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InMemoryMingpiRepository":
        """
        Seed file shape:

            {
              "mingpi": [{"user_id": 1, "year": 2024, "month": 1, "content": "..."}],
              "yearly_fortune": [{"user_id": 1, "lunar_year": 2024, "dayun": "...", "spring_content": "..."}],
              "profile": [{"user_id": 1, "year_pillar": "甲子", "qiyun_age": "3岁", "analysis": "..."}]
            }
        """
        p = Path(path).expanduser()
        raw = json.loads(p.read_text(encoding="utf-8"))

        repo = cls()
        for row in raw.get("mingpi", []):
            repo.put_content(row["user_id"], row["year"], row["month"], row["content"])
        for row in raw.get("yearly_fortune", []):
            repo.put_yearly_fortune(
                row["user_id"],
                YearlyFortune(
                    lunar_year=int(row["lunar_year"]),
                    dayun=row.get("dayun"),
                    liunian=row.get("liunian"),
                    spring_content=row.get("spring_content"),
                    summer_content=row.get("summer_content"),
                    autumn_content=row.get("autumn_content"),
                    winter_content=row.get("winter_content"),
                ),
            )
        for row in raw.get("profile", []):
            repo.put_profile(
                row["user_id"],
                UserProfile(
                    year_pillar=row.get("year_pillar"),
                    month_pillar=row.get("month_pillar"),
                    day_pillar=row.get("day_pillar"),
                    hour_pillar=row.get("hour_pillar"),
                    qiyun_age=row.get("qiyun_age"),
                    analysis=row.get("analysis"),
                ),
            )
        log.info(
            "mingpi seed loaded: path=%s mingpi=%d yearly_fortune=%d profile=%d",
            p,
            len(repo._contents),
            len(repo._fortunes),
            len(repo._profiles),
        )
        return repo


# ============================================================
# Service
# ============================================================

@dataclass(frozen=True)
class MingpiResult:
    year: int
    month: int
    month_name: str
    content: str
    is_default: bool
    year_ganzhi: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "lunarYear": self.year,
            "lunarMonth": self.month,
            "lunarMonthName": self.month_name,
            "content": self.content,
            "isDefault": self.is_default,
        }
        if self.year_ganzhi is not None:
            out["yearGanZhi"] = self.year_ganzhi
        return out


def validate_year_month(year: int, month: int, content: Optional[ContentConfig] = None) -> Tuple[int, int]:
    cfg = content or ContentConfig()
    y = int(year)
    m = int(month)
    if not (cfg.min_year <= y <= cfg.max_year) or not (1 <= m <= 12):
        raise InvalidYearMonth(f"invalid year/month: {year}/{month}")
    return y, m


class MingpiService:
    def __init__(
        self,
        repository: MingpiRepository,
        *,
        tz: Optional[str] = None,
        content: Optional[ContentConfig] = None,
        rng: Optional[random.Random] = None,
        tips: Optional[List[str]] = None,
    ) -> None:
        self.repository = repository
        self.tz = tz
        self.content = content or ContentConfig()
        self._rng = rng or random.Random()
        self._tips = list(tips or DEFAULT_TIPS)

    def _default_tip(self) -> str:
        return self._rng.choice(self._tips)

    def _lookup(self, user_id: int, year: int, month: int) -> Tuple[str, bool]:
        content = self.repository.get_content(user_id, year, month)
        if content is None:
            return self._default_tip(), True
        return content, False

    def current(self, user_id: int, today: Optional[date] = None) -> MingpiResult:
        """
        命批 for the current 节气年月.
        """
        jq = current_jieqi_year_month(today, tz=self.tz)
        content, is_default = self._lookup(user_id, jq.year, jq.month)
        return MingpiResult(
            year=jq.year,
            month=jq.month,
            month_name=jq.month_name,
            content=content,
            is_default=is_default,
            year_ganzhi=jq.year_ganzhi,
        )

    def for_month(self, user_id: int, year: int, month: int) -> MingpiResult:
        """
        命批 for an explicit 节气年月 (not a lunar month).

        Raises
        ------
        InvalidYearMonth
            year outside content.min_year..content.max_year or month outside 1..12.
        """
        y, m = validate_year_month(year, month, self.content)
        content, is_default = self._lookup(user_id, y, m)
        return MingpiResult(
            year=y,
            month=m,
            month_name=jieqi_month_name(m),
            content=content,
            is_default=is_default,
        )

    def profile(self, user_id: int) -> Optional[UserProfile]:
        return self.repository.get_profile(user_id)

    def yearly_fortune(self, user_id: int, today: Optional[date] = None) -> Optional[YearlyFortune]:
        """
        年运 for the current 农历年; None when there is no record.
        """
        lym = current_lunar_year_month(today, tz=self.tz)
        if lym is None:
            return None
        return self.repository.get_yearly_fortune(user_id, lym.year)

    def yearly_fortune_for_year(self, user_id: int, lunar_year: int) -> Optional[YearlyFortune]:
        """
        年运 for an explicit 农历年.

        Raises
        ------
        InvalidYearMonth
            lunar_year outside content.min_year..content.max_year.
        """
        y = int(lunar_year)
        if not (self.content.min_year <= y <= self.content.max_year):
            raise InvalidYearMonth(f"invalid lunar year: {lunar_year}")
        return self.repository.get_yearly_fortune(user_id, y)
