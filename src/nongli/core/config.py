# src/nongli/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

NONGLI_TZ_ENV = "NONGLI_TZ"
NONGLI_MINGPI_PATH_ENV = "NONGLI_MINGPI_PATH"

DEFAULT_TZ = "Asia/Shanghai"


@dataclass(frozen=True)
class CalendarConfig:
    """
    Calendar-side settings.

    "today" is always taken in `tz`; conversions themselves work on plain
    calendar dates and never look at a clock.
    """
    tz: str = DEFAULT_TZ


@dataclass(frozen=True)
class ContentConfig:
    """
    Content (命批 / 年运) lookup settings.
    """
    # Optional JSON seed file for the in-memory repository
    seed_path: Optional[Path] = None

    # Direct {year}/{month} lookups are validated against this window
    min_year: int = 1900
    max_year: int = 2100


@dataclass(frozen=True)
class NongliConfig:
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    content: ContentConfig = field(default_factory=ContentConfig)


def load_config() -> NongliConfig:
    """
    Build config from environment variables (NONGLI_TZ, NONGLI_MINGPI_PATH).
    """
    tz = os.environ.get(NONGLI_TZ_ENV, "").strip() or DEFAULT_TZ

    seed_raw = os.environ.get(NONGLI_MINGPI_PATH_ENV, "").strip()
    seed_path = Path(seed_raw).expanduser() if seed_raw else None

    return NongliConfig(
        calendar=CalendarConfig(tz=tz),
        content=ContentConfig(seed_path=seed_path),
    )
