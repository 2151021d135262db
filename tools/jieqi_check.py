from __future__ import annotations

"""
节气月 check script.

Uses:
- nongli.features.jieqi_months.jieqi_year_month_for
"""

import argparse

from nongli.features.jieqi_months import jieqi_year_month_for

from tools.common import add_common_args, resolve_date_range, dump_json, iter_dates


def main() -> None:
    parser = argparse.ArgumentParser(description="JieQi month (节气月) check")
    add_common_args(parser)
    parser.add_argument("--changes-only", action="store_true", help="print only days where the month changes")
    args = parser.parse_args()

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date, --start/--end or --today required")
    if end < start:
        parser.error("--end must be >= --start")

    rows = []
    prev = None
    for cur in iter_dates(start, end):
        jq = jieqi_year_month_for(cur)
        key = (jq.year, jq.month)
        changed = prev is None or key != prev
        prev = key
        if args.changes_only and not changed:
            continue

        if args.json:
            rows.append(
                {
                    "date": cur.isoformat(),
                    "year": jq.year,
                    "month": jq.month,
                    "month_name": jq.month_name,
                    "short_name": jq.short_name,
                    "year_ganzhi": jq.year_ganzhi,
                    "start_term": jq.start_term,
                }
            )
        else:
            print(f"{cur.isoformat()}  {jq.year}({jq.year_ganzhi}) {jq.short_name}  {jq.month_name}")

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
