"""
calzh.engines.year_builder
--------------------------
Assembles the lunar months between two winter solstices.

The year context of `year` starts with the month that contains the winter
solstice of `year` (month 11) and ends where the month containing the
solstice of `year + 1` begins. It holds 12 or 13 months; with 13, the first
month without a principal solar term is the leap month and repeats the
number of the month before it.

Membership (which month holds a solstice or a principal term) is decided on
civil days under the engine's UTC offset, as in the published calendars.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from ..core.errors import InconsistencyError
from ..core.types import Instant, LunarMonth, LunarYearContext, SolverParams
from ..reference.time_scales import local_day
from .new_moon import next_new_moon, prev_new_moon
from .solar_terms import principal_terms_between, winter_solstice

LOGGER = logging.getLogger(__name__)

LEAP_POLICIES = ("strict", "first")

FIRST_ORDINAL = 11
LAST_ORDINAL = 10

# Two conjunctions closer than this are the same new moon found from different seeds.
_SAME_MOON_DAYS = 1.0
_MAX_MONTHS = 14


def solstice_month_start(ws: Instant, *, civil_offset_hours: float, solver: SolverParams) -> Instant:
    """Start of the month whose civil days contain the winter solstice `ws`."""
    start = prev_new_moon(ws, solver)
    following = next_new_moon(start.shift(_SAME_MOON_DAYS), solver)
    if local_day(following, civil_offset_hours) <= local_day(ws, civil_offset_hours):
        return following
    return start


def _month_bounds(first: Instant, last: Instant, solver: SolverParams) -> List[Instant]:
    bounds = [first]
    cur = first
    while last.days_since(cur) > _SAME_MOON_DAYS:
        cur = next_new_moon(cur.shift(_SAME_MOON_DAYS), solver)
        bounds.append(cur)
        if len(bounds) > _MAX_MONTHS + 1:
            raise InconsistencyError(f"new-moon walk from JD {first.jd:.5f} did not reach JD {last.jd:.5f}")
    if abs(cur.days_since(last)) > _SAME_MOON_DAYS:
        raise InconsistencyError(
            f"new-moon walk overshot the closing solstice month ({cur.jd:.5f} vs {last.jd:.5f})"
        )
    return bounds


def _pick_leap(year: int, terms: List[Tuple[int, ...]], leap_policy: str) -> Optional[int]:
    if len(terms) == 12:
        return None
    missing = [i for i, t in enumerate(terms) if not t]
    if not missing:
        raise InconsistencyError(f"13-month year {year} has no month without a principal term")
    if len(missing) > 1 and leap_policy == "strict":
        raise InconsistencyError(
            f"13-month year {year} has {len(missing)} months without a principal term "
            f"(positions {missing}); leap month is ambiguous"
        )
    if missing[0] == 0:
        raise InconsistencyError(f"year {year}: the winter-solstice month has no principal term")
    return missing[0]


def build_lunar_year(
    year: int,
    *,
    civil_offset_hours: float = 8.0,
    leap_policy: str = "strict",
    solver: SolverParams = SolverParams(),
) -> LunarYearContext:
    if leap_policy not in LEAP_POLICIES:
        raise ValueError(f"leap_policy must be one of {LEAP_POLICIES}, got {leap_policy!r}")

    ws = winter_solstice(year, solver)
    ws_next = winter_solstice(year + 1, solver)
    first = solstice_month_start(ws, civil_offset_hours=civil_offset_hours, solver=solver)
    last = solstice_month_start(ws_next, civil_offset_hours=civil_offset_hours, solver=solver)

    bounds = _month_bounds(first, last, solver)
    spans = list(zip(bounds[:-1], bounds[1:]))
    if len(spans) not in (12, 13):
        raise InconsistencyError(f"year {year} has {len(spans)} lunar months; expected 12 or 13")

    terms = [
        principal_terms_between(s, e, civil_offset_hours=civil_offset_hours, solver=solver)
        for s, e in spans
    ]
    leap_index = _pick_leap(year, terms, leap_policy)

    months: List[LunarMonth] = []
    ordinal = FIRST_ORDINAL
    for i, (s, e) in enumerate(spans):
        if i == leap_index:
            months.append(LunarMonth(s, e, months[-1].ordinal, is_leap=True,
                                     has_principal_term=False, principal_terms=()))
            continue
        months.append(LunarMonth(s, e, ordinal, is_leap=False,
                                 has_principal_term=bool(terms[i]), principal_terms=terms[i]))
        ordinal = ordinal % 12 + 1

    if months[-1].ordinal != LAST_ORDINAL:
        raise InconsistencyError(f"year {year} ends on month {months[-1].label}, expected {LAST_ORDINAL}")

    ctx = LunarYearContext(
        year=year,
        civil_offset_hours=civil_offset_hours,
        months=tuple(months),
        winter_solstice=ws,
        next_winter_solstice=ws_next,
    )
    LOGGER.debug(
        json.dumps(
            {
                "event": "lunar_year_built",
                "year": year,
                "months": len(months),
                "leap": ctx.leap_month.label if ctx.leap_month else None,
                "civil_offset_hours": civil_offset_hours,
            }
        )
    )
    return ctx
