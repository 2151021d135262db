from __future__ import annotations

"""
Lunar (农历) check script.

Uses:
- nongli.core.lunisolar.solar_date_to_lunar
- nongli.features.lunar_months.describe_lunar_date
"""

import argparse

from nongli.core.lunisolar import solar_date_to_lunar
from nongli.features.lunar_months import describe_lunar_date

from tools.common import add_common_args, resolve_date_range, dump_json, iter_dates


def main() -> None:
    parser = argparse.ArgumentParser(description="Lunar (农历) check")
    add_common_args(parser)
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date, --start/--end or --today required")
    if end < start:
        parser.error("--end must be >= --start")

    rows = []
    prev_month = None
    for cur in iter_dates(start, end):
        l = solar_date_to_lunar(cur)
        if l is None:
            if args.json:
                rows.append({"date": cur.isoformat(), "lunar": None})
            else:
                print(f"{cur.isoformat()}  out of table")
            continue

        info = describe_lunar_date(l)
        if args.json:
            rows.append({"date": cur.isoformat(), "lunar": info})
        else:
            sep = ""
            if prev_month is not None and l.day == 1:
                sep = "\n"
            line = f"{sep}{cur.isoformat()}  L={l.label}  {info['month_name']}{info['day_name']}"
            if args.verbose:
                line += f"  year={l.year} {l.year_ganzhi}({l.animal}) month_days={l.month_days}"
            print(line)
        prev_month = (l.month, l.is_leap)

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
