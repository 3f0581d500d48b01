from __future__ import annotations

from datetime import date
import argparse
from typing import List, Tuple

import calzh


DEFAULT_CALENDARS: List[Tuple[str, str]] = [
    ("China", "china"),
    ("Korea", "korea"),
    ("Vietnam", "vietnam"),
]


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_calendars(arg: str) -> List[Tuple[str, str]]:
    """
    Parse calendar list from CLI.
    Example:
      --calendars "CN=china,KR=korea"
    If you pass just engines, names will be capitalized engines:
      --calendars "china,vietnam"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, eng = it.split("=", 1)
            out.append((name.strip(), eng.strip()))
        else:
            out.append((it.capitalize(), it))
    return out


def spring_festival_rows(calendars: List[Tuple[str, str]], y0: int, y1: int) -> List[Tuple[int, List[date]]]:
    return [(Y, [calzh.new_year_day(Y, engine=eng) for _, eng in calendars]) for Y in range(y0, y1 + 1)]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print Spring Festival (month 1 day 1) dates for several civil offsets."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--calendars",
        type=str,
        default="",
        help='Comma list like "CN=china,KR=korea" (default: china, korea, vietnam).',
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    args = p.parse_args(argv)

    calendars = parse_calendars(args.calendars) if args.calendars else DEFAULT_CALENDARS

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + [name for name, _ in calendars]
    colw = [5] + [max(10 if args.dates == "iso" else 6, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    disagreements: list[tuple[int, list[date]]] = []
    for Y, days in spring_festival_rows(calendars, Y0, Y1):
        row = [str(Y).ljust(colw[0])] + [fmt(d).ljust(w) for d, w in zip(days, colw[1:])]
        print("  ".join(row))
        if len(set(days)) > 1:
            disagreements.append((Y, days))

    print(f"\nYears where the calendars disagree: {len(disagreements)}")
    for Y, days in disagreements:
        print(f"{Y}  " + "  ".join(f"{name}={d.isoformat()}" for (name, _), d in zip(calendars, days)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
