"""
calzh.engines.date_mapper
-------------------------
Instant -> lunar date label, and the inverse from a label to a civil date.

Year contexts are obtained through a `lunar_year(year)` callable so the
caller decides about memoization.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Callable, Optional, Tuple

from ..core.errors import NotFoundError
from ..core.types import Instant, LunarDate, LunarYearContext, TimeScale
from ..reference.time_scales import civil_from_instant, jdn_to_date, local_day

LOGGER = logging.getLogger(__name__)

YearProvider = Callable[[int], LunarYearContext]


def _month_index(ctx: LunarYearContext, day: int) -> Optional[int]:
    off = ctx.civil_offset_hours
    for i, m in enumerate(ctx.months):
        if local_day(m.start, off) <= day < local_day(m.end, off):
            return i
    return None


def first_month_index(ctx: LunarYearContext) -> int:
    """Index of month 1 (the Spring Festival month) inside a year context."""
    for i, m in enumerate(ctx.months):
        if m.ordinal == 1 and not m.is_leap:
            return i
    raise NotFoundError(f"year context {ctx.year} has no first month")


def locate_month(t: Instant, lunar_year: YearProvider) -> Tuple[LunarYearContext, int]:
    """Year context and month index whose civil days contain t."""
    t.require(TimeScale.UT)
    gy = civil_from_instant(t).year

    ctx = lunar_year(gy - 1)
    day = local_day(t, ctx.civil_offset_hours)
    idx = _month_index(ctx, day)
    if idx is None:
        LOGGER.debug(json.dumps({"event": "context_rebuilt", "from_year": gy - 1, "to_year": gy}))
        ctx = lunar_year(gy)
        day = local_day(t, ctx.civil_offset_hours)
        idx = _month_index(ctx, day)
    if idx is None:
        raise NotFoundError(f"no lunar month contains JD {t.jd:.6f} (years {gy - 1}, {gy})")
    return ctx, idx


def solar_to_lunar(t: Instant, lunar_year: YearProvider) -> LunarDate:
    ctx, idx = locate_month(t, lunar_year)
    gy = civil_from_instant(t).year
    off = ctx.civil_offset_hours
    day = local_day(t, off)
    m = ctx.months[idx]
    first = local_day(m.start, off)
    civil_year = ctx.year + 1 if idx >= first_month_index(ctx) else ctx.year
    return LunarDate(
        year=gy if m.ordinal < 11 else gy - 1,
        month=m.ordinal,
        day=day - first + 1,
        is_leap=m.is_leap,
        month_length=local_day(m.end, off) - first,
        civil_year=civil_year,
    )


def lunar_to_solar(
    civil_year: int,
    month: int,
    day: int,
    lunar_year: YearProvider,
    *,
    is_leap: bool = False,
) -> date:
    """
    Civil date of a lunar label. `civil_year` counts from the Spring Festival:
    months 1-10 of civil year N live in the context of N-1, months 11-12 in
    the context of N.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")

    ctx = lunar_year(civil_year if month >= 11 else civil_year - 1)
    split = first_month_index(ctx)
    candidates = ctx.months[:split] if month >= 11 else ctx.months[split:]

    for m in candidates:
        if m.ordinal == month and m.is_leap == is_leap:
            break
    else:
        tag = "leap " if is_leap else ""
        raise NotFoundError(f"civil year {civil_year} has no {tag}month {month}")

    off = ctx.civil_offset_hours
    first = local_day(m.start, off)
    length = local_day(m.end, off) - first
    if not 1 <= day <= length:
        raise ValueError(f"day must be in 1..{length} for month {m.label} of {civil_year}, got {day}")
    return jdn_to_date(first + day - 1)
