"""
calzh.engines.specs
-------------------
Named calendar configurations. All share the astronomical rules; they differ
in the civil offset that decides day boundaries, and in how an ambiguous
leap month is handled.
"""

from __future__ import annotations

from typing import Dict

from ..core.types import CalendarSpec, EngineId, SolverParams

DEFAULT_SOLVER = SolverParams(solar_iterations=12, conjunction_iterations=15, tolerance_days=1e-7)

CHINA = CalendarSpec(
    id=EngineId("astro", "china", "1"),
    civil_offset_hours=8.0,
    leap_policy="strict",
    solver=DEFAULT_SOLVER,
    meta=(("zone", "UTC+8"), ("label", "Chinese (Beijing time)")),
)

# Same rules, traditional "first month without a principal term" pick when
# a 13-month year has more than one candidate (e.g. the 2033 leap 11th month).
CHINA_FIRST = CHINA.tweak(
    id=EngineId("astro", "china-first", "1"),
    leap_policy="first",
    meta=(("zone", "UTC+8"), ("label", "Chinese, first-candidate leap rule")),
)

KOREA = CalendarSpec(
    id=EngineId("astro", "korea", "1"),
    civil_offset_hours=9.0,
    leap_policy="first",
    solver=DEFAULT_SOLVER,
    meta=(("zone", "UTC+9"), ("label", "Korean (Seoul time)")),
)

VIETNAM = CalendarSpec(
    id=EngineId("astro", "vietnam", "1"),
    civil_offset_hours=7.0,
    leap_policy="first",
    solver=DEFAULT_SOLVER,
    meta=(("zone", "UTC+7"), ("label", "Vietnamese (Hanoi time)")),
)

ALL_SPECS: Dict[str, CalendarSpec] = {
    "china": CHINA,
    "china-first": CHINA_FIRST,
    "korea": KOREA,
    "vietnam": VIETNAM,
}
