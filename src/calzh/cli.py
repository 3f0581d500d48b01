from __future__ import annotations

import argparse
from datetime import date, datetime
import importlib
import inspect
import logging
import re
import sys

from calzh.core.errors import CalzhError


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _parse_when(s: str):
    """YYYY-MM-DD (a civil date) or an ISO timestamp (naive means UTC, a trailing Z is UTC)."""
    if "T" in s or " " in s:
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        return datetime.fromisoformat(s)
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import calzh

    p = argparse.ArgumentParser(prog="calzh day", description="Gregorian -> lunar date label")
    p.add_argument("date", help="YYYY-MM-DD or YYYY-MM-DDTHH:MM[:SS] (UTC)")
    p.add_argument("--engine", default="china")
    p.add_argument("--debug", action="store_true", help="print the full explanation record")
    args = p.parse_args(argv)

    when = _parse_when(args.date)
    if args.debug:
        for k, v in calzh.explain(when, engine=args.engine).items():
            print(f"{k}: {v}")
        return 0
    print(calzh.solar_to_lunar(when, engine=args.engine))
    return 0


def cmd_year(argv: list[str]) -> int:
    import calzh

    p = argparse.ArgumentParser(prog="calzh year", description="Months between the winter solstices of Y and Y+1")
    p.add_argument("year", type=int)
    p.add_argument("--engine", default="china")
    args = p.parse_args(argv)

    ctx = calzh.lunar_year(args.year, engine=args.engine)
    leap = ctx.leap_month
    print(f"Lunar year context {ctx.year} ({args.engine}): {len(ctx)} months, "
          f"leap = {leap.label if leap else 'none'}")
    for rec in calzh.months_in_year(args.year, engine=args.engine):
        terms = ",".join(str(k) for k in rec["principal_terms"]) or "-"
        print(f"  {rec['label']:>4}  {rec['start_utc']:%Y-%m-%d %H:%M}  ->  "
              f"{rec['end_utc']:%Y-%m-%d %H:%M}  terms: {terms}")
    return 0


def cmd_to_solar(argv: list[str]) -> int:
    import calzh

    p = argparse.ArgumentParser(prog="calzh to-solar", description="Lunar label -> Gregorian date")
    p.add_argument("year", type=int, help="civil lunar year (counted from the Spring Festival)")
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--leap", action="store_true", help="the leap month of that number")
    p.add_argument("--engine", default="china")
    args = p.parse_args(argv)

    d = calzh.lunar_to_solar(args.year, args.month, args.day, is_leap=args.leap, engine=args.engine)
    print(d.isoformat())
    return 0


def cmd_new_moon(argv: list[str]) -> int:
    import calzh

    p = argparse.ArgumentParser(prog="calzh new-moon", description="True new moon near a UTC timestamp")
    p.add_argument("date", help="YYYY-MM-DD or ISO timestamp (UTC)")
    p.add_argument("--direction", choices=["nearest", "prev", "next"], default="nearest")
    p.add_argument("--engine", default="china")
    args = p.parse_args(argv)

    nm = calzh.new_moon(_parse_when(args.date), direction=args.direction, engine=args.engine)
    print(nm.isoformat(timespec="seconds"))
    return 0


def cmd_describe(argv: list[str]) -> int:
    from calzh.service import LunarService, ServiceConfig

    p = argparse.ArgumentParser(prog="calzh describe", description="Localized lunar description of a date")
    p.add_argument("date", help="YYYY-MM-DD or ISO timestamp (UTC)")
    p.add_argument("--engine", default="china")
    p.add_argument("--locale", default="zh-CN")
    p.add_argument("--precise-li-chun", action="store_true", help="use the solved 315° instant for the Ganzhi year")
    args = p.parse_args(argv)

    svc = LunarService(ServiceConfig(locale=args.locale, engine=args.engine, precise_li_chun=args.precise_li_chun))
    info = svc.from_date(_parse_when(args.date))
    print(f"{info.solar_text}  {info.display}")
    print(f"  astro year {info.astro_year}, civil year {info.civil_year}, ganzhi year {info.ganzhi_year}")
    print(f"  month {info.month}{' (leap)' if info.is_leap else ''}, day {info.day} of {info.month_length}")
    return 0


def cmd_solar(argv: list[str]) -> int:
    from calzh.reference import solar
    from calzh.reference import time_scales as ts
    from calzh.reference.deltat import delta_t_seconds
    from calzh.core.types import Instant, TimeScale

    p = argparse.ArgumentParser(prog="calzh solar", description="True solar longitude of the truncated theory.")
    p.add_argument("--jd-ut", type=float, default=2451545.0, help="Julian Date in UT")
    args = p.parse_args(argv)

    t_ut = Instant(args.jd_ut, TimeScale.UT)
    t_tt = ts.to_tt(t_ut)
    coords = solar.solar_coordinates(t_tt)

    print("Time Input:")
    print(f"  JD_UT  = {t_ut.jd:.6f}")
    print(f"  JD_TT  = {t_tt.jd:.6f}")
    print(f"  ΔT (s) = {delta_t_seconds(ts.decimal_year(t_ut.jd)):.2f}")
    print()
    print("Solar Position (degrees):")
    print(f"  Mean Longitude      (L0)     = {coords.L_mean_deg:.6f}")
    print(f"  Equation of Center  (C)      = {coords.C_deg:.6f}")
    print(f"  True Longitude      (L_true) = {coords.L_true_deg:.6f}")
    return 0


def cmd_lunar(argv: list[str]) -> int:
    from calzh.reference import lunar
    from calzh.reference import solar
    from calzh.core.types import Instant, TimeScale

    p = argparse.ArgumentParser(prog="calzh lunar", description="True lunar longitude and elongation.")
    p.add_argument("--jd-tt", type=float, default=2451545.0, help="Julian Date in TT (default: J2000.0 = 2451545.0)")
    args = p.parse_args(argv)

    t = Instant(args.jd_tt, TimeScale.TT)

    print("Time Input:")
    print(f"  JD_TT = {t.jd:.6f}")
    print()
    print("Positions (degrees):")
    print(f"  Moon True Longitude = {lunar.moon_longitude(t):.6f}")
    print(f"  Sun True Longitude  = {solar.solar_longitude(t):.6f}")
    print(f"  Elongation (Moon - Sun) = {lunar.elongation(t):.6f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `calzh YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = argparse.ArgumentParser(prog="calzh", description="Chinese lunisolar calendar toolkit CLI.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging threshold")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> lunar date label")
    sub.add_parser("year", help="Month structure of a lunar year context")
    sub.add_parser("to-solar", help="Lunar label -> Gregorian date")
    sub.add_parser("new-moon", help="True new moon near a timestamp")
    sub.add_parser("describe", help="Localized description (month/day names, Ganzhi year)")
    sub.add_parser("solar", help="True solar longitude at a JD(UT)")
    sub.add_parser("lunar", help="True lunar longitude and elongation at a JD(TT)")

    # diagnostics
    sub.add_parser("pretty-month", help="Print lunar/Gregorian month calendars (diagnostics)")
    sub.add_parser("new-years", help="Print Spring Festival table (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["leap-months", "new-moon-drift"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(message)s")

    commands = {
        "day": cmd_day,
        "year": cmd_year,
        "to-solar": cmd_to_solar,
        "new-moon": cmd_new_moon,
        "describe": cmd_describe,
        "solar": cmd_solar,
        "lunar": cmd_lunar,
    }
    tool_map = {
        "leap-months": "calzh.diagnostics.leap_months",
        "new-moon-drift": "calzh.diagnostics.new_moon_drift",
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd == "pretty-month":
            return _run_module_main("calzh.diagnostics.pretty_month", rest)
        if args.cmd == "new-years":
            return _run_module_main("calzh.diagnostics.new_years_table", rest)
        if args.cmd == "diag":
            return _run_module_main(tool_map[args.tool], rest)
    except (CalzhError, ValueError) as e:
        print(f"calzh: {type(e).__name__}: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
