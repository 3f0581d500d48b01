from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import calzh
from calzh.service.i18n import lunar_day_name


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def weeks_from(first: date, days: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "") for _ in range(first.weekday())]  # Monday=0
    for top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def lunar_month_calendar(engine: str, Y: int, M: int, is_leap: bool, *, names: bool = False) -> None:
    d0 = calzh.lunar_to_solar(Y, M, 1, is_leap=is_leap, engine=engine)
    length = calzh.solar_to_lunar(d0, engine=engine).month_length
    d1 = d0 + timedelta(days=length - 1)

    days = []
    for i in range(length):
        d = d0 + timedelta(days=i)
        top = lunar_day_name(i + 1) if names else f"{i + 1:2d}"
        days.append((top, f"{d.month:02d}-{d.day:02d}"))

    leap_tag = "L" if is_leap else ""
    title = f"{engine} lunar month  Y={Y}  M={M}{leap_tag}   ({d0} .. {d1}, {length} days)"
    print_grid(title, weeks_from(d0, days))


def gregorian_month_calendar(engine: str, gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    days = []
    d = first
    while d <= last:
        t = calzh.solar_to_lunar(d, engine=engine)
        leap_tag = "L" if t.is_leap else ""
        days.append((f"{d.day:2d}", f"{t.month:02d}{leap_tag}-{t.day:02d}"))
        d += timedelta(days=1)

    title = f"{engine} Gregorian month  {gy}-{gm:02d}"
    print_grid(title, weeks_from(first, days))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a lunar-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--engine", default="china", help="china|china-first|korea|vietnam (default: china)")

    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: civil year and month (e.g. 2023 2)")
    p.add_argument("--leap", action="store_true",
                   help="If set, the lunar month is the leap instance of that number.")
    p.add_argument("--names", action="store_true", help="Show day names (初一 ...) instead of numbers.")

    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2023 3)")

    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        lunar_month_calendar(args.engine, Y=2023, M=2, is_leap=True, names=args.names)
        gregorian_month_calendar(args.engine, gy=2023, gm=3)
        return 0

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(args.engine, Y=Y, M=M, is_leap=args.leap, names=args.names)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(args.engine, gy=gy, gm=gm)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
