from __future__ import annotations

import json
import random
from datetime import date

import pytest

from nongli.core.config import ContentConfig
from nongli.features.mingpi import (
    DEFAULT_TIPS,
    InMemoryMingpiRepository,
    InvalidYearMonth,
    MingpiRepository,
    MingpiService,
    UserProfile,
    YearlyFortune,
)


def _service(repo=None) -> MingpiService:
    return MingpiService(repo or InMemoryMingpiRepository(), tz="Asia/Shanghai", rng=random.Random(7))


def test_repository_protocol():
    assert isinstance(InMemoryMingpiRepository(), MingpiRepository)


def test_current_is_keyed_by_jieqi_month():
    repo = InMemoryMingpiRepository()
    repo.put_content(1, 2023, 12, "丑月命批")
    repo.put_content(1, 2024, 1, "寅月命批")
    svc = _service(repo)

    before = svc.current(1, today=date(2024, 2, 3))
    assert (before.year, before.month) == (2023, 12)
    assert before.content == "丑月命批"
    assert before.is_default is False
    assert before.year_ganzhi == "癸卯"

    after = svc.current(1, today=date(2024, 2, 5))
    assert (after.year, after.month) == (2024, 1)
    assert after.content == "寅月命批"
    assert after.month_name == "寅月（正月）"


def test_missing_record_falls_back_to_default_tip():
    res = _service().current(42, today=date(2024, 6, 10))
    assert res.is_default is True
    assert res.content in DEFAULT_TIPS


def test_records_are_per_user():
    repo = InMemoryMingpiRepository()
    repo.put_content(1, 2024, 5, "user1")
    res = _service(repo).for_month(2, 2024, 5)
    assert res.is_default is True


def test_for_month():
    repo = InMemoryMingpiRepository()
    repo.put_content(3, 2024, 11, "子月")
    res = _service(repo).for_month(3, 2024, 11)
    assert res.content == "子月"
    assert res.month_name == "子月（冬月）"
    d = res.to_dict()
    assert d == {
        "lunarYear": 2024,
        "lunarMonth": 11,
        "lunarMonthName": "子月（冬月）",
        "content": "子月",
        "isDefault": False,
    }


@pytest.mark.parametrize("year, month", [(1899, 1), (2101, 1), (2024, 0), (2024, 13)])
def test_for_month_rejects_out_of_range(year, month):
    with pytest.raises(InvalidYearMonth):
        _service().for_month(1, year, month)


def test_yearly_fortune_uses_lunar_year():
    repo = InMemoryMingpiRepository()
    repo.put_yearly_fortune(1, YearlyFortune(lunar_year=2023, dayun="癸卯运"))
    repo.put_yearly_fortune(1, YearlyFortune(lunar_year=2024, dayun="甲辰运"))
    svc = _service(repo)

    # 2024-02-09 is still lunar 2023 (腊月三十)
    assert svc.yearly_fortune(1, today=date(2024, 2, 9)).dayun == "癸卯运"
    assert svc.yearly_fortune(1, today=date(2024, 2, 10)).dayun == "甲辰运"
    assert svc.yearly_fortune(2, today=date(2024, 2, 10)) is None


def test_yearly_fortune_for_year():
    repo = InMemoryMingpiRepository()
    repo.put_yearly_fortune(1, YearlyFortune(lunar_year=2030, spring_content="春"))
    svc = _service(repo)
    assert svc.yearly_fortune_for_year(1, 2030).to_dict()["springContent"] == "春"
    assert svc.yearly_fortune_for_year(1, 2031) is None
    with pytest.raises(InvalidYearMonth):
        svc.yearly_fortune_for_year(1, 1800)



def test_year_window_comes_from_content_config():
    cfg = ContentConfig(min_year=2000, max_year=2050)
    svc = MingpiService(InMemoryMingpiRepository(), content=cfg, rng=random.Random(7))
    assert svc.for_month(1, 2000, 1).year == 2000
    assert svc.for_month(1, 2050, 12).month == 12
    with pytest.raises(InvalidYearMonth):
        svc.for_month(1, 1999, 1)
    with pytest.raises(InvalidYearMonth):
        svc.for_month(1, 2051, 1)
    with pytest.raises(InvalidYearMonth):
        svc.yearly_fortune_for_year(1, 2060)
    assert svc.yearly_fortune_for_year(1, 2030) is None


def test_profile():
    repo = InMemoryMingpiRepository()
    repo.put_profile(1, UserProfile(year_pillar="甲子", day_pillar="丙寅", qiyun_age="3岁", analysis="身旺"))
    svc = _service(repo)
    assert svc.profile(2) is None
    assert svc.profile(1).to_dict() == {
        "yearPillar": "甲子",
        "monthPillar": None,
        "dayPillar": "丙寅",
        "hourPillar": None,
        "qiyunAge": "3岁",
        "analysis": "身旺",
    }


def test_from_json(tmp_path):
    p = tmp_path / "seed.json"
    p.write_text(
        json.dumps(
            {
                "mingpi": [{"user_id": 5, "year": 2024, "month": 3, "content": "辰月"}],
                "yearly_fortune": [{"user_id": 5, "lunar_year": 2024, "liunian": "流年", "winter_content": "冬"}],
                "profile": [{"user_id": 5, "hour_pillar": "戊午", "analysis": "命局"}],
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    repo = InMemoryMingpiRepository.from_json(p)
    assert repo.get_content(5, 2024, 3) == "辰月"
    f = repo.get_yearly_fortune(5, 2024)
    assert f.liunian == "流年"
    assert f.winter_content == "冬"
    assert f.dayun is None
    prof = repo.get_profile(5)
    assert prof.hour_pillar == "戊午"
    assert prof.analysis == "命局"
    assert repo.get_profile(6) is None
