from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from nongli.core.config import DEFAULT_TZ, load_config
from nongli.core.timeutil import resolve_today, safe_date


def test_defaults(monkeypatch):
    monkeypatch.delenv("NONGLI_TZ", raising=False)
    monkeypatch.delenv("NONGLI_MINGPI_PATH", raising=False)
    cfg = load_config()
    assert cfg.calendar.tz == DEFAULT_TZ == "Asia/Shanghai"
    assert cfg.content.seed_path is None


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("NONGLI_TZ", "Asia/Taipei")
    monkeypatch.setenv("NONGLI_MINGPI_PATH", str(tmp_path / "seed.json"))
    cfg = load_config()
    assert cfg.calendar.tz == "Asia/Taipei"
    assert cfg.content.seed_path == Path(tmp_path / "seed.json")


def test_resolve_today():
    assert resolve_today(date(2024, 2, 4)) == date(2024, 2, 4)
    assert resolve_today(datetime(2024, 2, 4, 23, 0)) == date(2024, 2, 4)
    assert isinstance(resolve_today(None, "Asia/Shanghai"), date)


def test_safe_date():
    assert safe_date(2024, 2, 29) == date(2024, 2, 29)
    assert safe_date(2023, 2, 29) is None
