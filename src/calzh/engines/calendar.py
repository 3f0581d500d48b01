"""
calzh.engines.calendar
----------------------
The Orchestrator. Binds a CalendarSpec (civil offset, leap policy, solver
settings) to the astronomical searches and memoizes year contexts.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Dict, Literal

from ..core.engine import CivilLike
from ..core.types import CalendarSpec, EngineId, Instant, LunarDate, LunarYearContext
from ..reference.time_scales import civil_from_instant, instant_from_civil, local_date, local_noon
from . import date_mapper, new_moon, solar_terms
from .year_builder import LEAP_POLICIES, build_lunar_year


@lru_cache(maxsize=256)
def _cached_year(spec: CalendarSpec, year: int) -> LunarYearContext:
    return build_lunar_year(
        year,
        civil_offset_hours=spec.civil_offset_hours,
        leap_policy=spec.leap_policy,
        solver=spec.solver,
    )


class LunisolarEngine:
    """
    Gregorian instants <-> Chinese-rule lunar labels for one configuration.
    """
    def __init__(self, spec: CalendarSpec, *, cache_years: bool = True):
        if spec.leap_policy not in LEAP_POLICIES:
            raise ValueError(f"leap_policy must be one of {LEAP_POLICIES}, got {spec.leap_policy!r}")
        if not -14.0 <= spec.civil_offset_hours <= 14.0:
            raise ValueError(f"civil_offset_hours out of range: {spec.civil_offset_hours}")
        self.spec = spec
        self.cache_years = cache_years

    @property
    def id(self) -> EngineId:
        return self.spec.id

    @property
    def civil_offset_hours(self) -> float:
        return self.spec.civil_offset_hours

    def info(self) -> Dict[str, Any]:
        return {
            "id": asdict(self.spec.id),
            "civil_offset_hours": self.spec.civil_offset_hours,
            "leap_policy": self.spec.leap_policy,
            "solver": asdict(self.spec.solver),
            "meta": dict(self.spec.meta),
        }

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    def lunar_year(self, year: int) -> LunarYearContext:
        if self.cache_years:
            return _cached_year(self.spec, year)
        return _cached_year.__wrapped__(self.spec, year)

    # ---------------------------------------------------------
    # Forward / inverse
    # ---------------------------------------------------------

    def _day_instant(self, when: CivilLike) -> Instant:
        # a bare date names a civil day under this engine's offset
        if isinstance(when, date) and not isinstance(when, datetime):
            return local_noon(when, self.spec.civil_offset_hours)
        return instant_from_civil(when)

    def day_info(self, when: CivilLike) -> LunarDate:
        return date_mapper.solar_to_lunar(self._day_instant(when), self.lunar_year)

    def to_gregorian(self, civil_year: int, month: int, day: int, *, is_leap: bool = False) -> date:
        return date_mapper.lunar_to_solar(civil_year, month, day, self.lunar_year, is_leap=is_leap)

    def new_year_day(self, civil_year: int) -> date:
        return self.to_gregorian(civil_year, 1, 1)

    def explain(self, when: CivilLike) -> Dict[str, Any]:
        t = self._day_instant(when)
        ctx, idx = date_mapper.locate_month(t, self.lunar_year)
        month = ctx.months[idx]
        off = self.spec.civil_offset_hours
        return {
            "instant_utc": civil_from_instant(t).isoformat(),
            "civil_date": local_date(t, off).isoformat(),
            "lunar": date_mapper.solar_to_lunar(t, self.lunar_year).as_dict(),
            "month_start_utc": civil_from_instant(month.start).isoformat(),
            "month_end_utc": civil_from_instant(month.end).isoformat(),
            "principal_terms": list(month.principal_terms),
            "context_year": ctx.year,
            "context_months": [m.label for m in ctx.months],
            "winter_solstice_utc": civil_from_instant(ctx.winter_solstice).isoformat(),
            "engine": self.info(),
        }

    # ---------------------------------------------------------
    # Astronomical events
    # ---------------------------------------------------------

    def winter_solstice(self, year: int) -> Instant:
        return solar_terms.winter_solstice(year, self.spec.solver)

    def li_chun(self, year: int) -> Instant:
        return solar_terms.li_chun(year, self.spec.solver)

    def new_moon(self, when: CivilLike, direction: Literal["nearest", "prev", "next"] = "nearest") -> Instant:
        t = instant_from_civil(when)
        if direction == "nearest":
            return new_moon.true_new_moon(t, self.spec.solver)
        if direction == "prev":
            return new_moon.prev_new_moon(t, self.spec.solver)
        if direction == "next":
            return new_moon.next_new_moon(t, self.spec.solver)
        raise ValueError(f"direction must be 'nearest', 'prev' or 'next', got {direction!r}")
