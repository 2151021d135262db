from __future__ import annotations

import argparse
import json
import os
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

from nongli.core.config import DEFAULT_TZ, NONGLI_TZ_ENV
from nongli.core.timeutil import today_in


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="YYYY-MM-DD")
    parser.add_argument("--start", help="YYYY-MM-DD")
    parser.add_argument("--end", help="YYYY-MM-DD")
    parser.add_argument("--today", action="store_true", help="use today's date in --tz")
    parser.add_argument("--tz", default="")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def parse_date(s: str) -> date:
    return date.fromisoformat(s)


def iter_dates(start: date, end: date) -> Iterable[date]:
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def resolve_tz(tz_arg: str) -> str:
    return (tz_arg or "").strip() or os.environ.get(NONGLI_TZ_ENV, "").strip() or DEFAULT_TZ


def resolve_date_range(args: argparse.Namespace) -> Tuple[Optional[date], Optional[date]]:
    if args.start and args.end:
        return parse_date(args.start), parse_date(args.end)
    if args.date:
        d = parse_date(args.date)
        return d, d
    if args.today:
        d = today_in(resolve_tz(args.tz))
        return d, d
    return None, None


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))
