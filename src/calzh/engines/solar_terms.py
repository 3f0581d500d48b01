"""
calzh.engines.solar_terms
-------------------------
Instants at which the true solar longitude crosses a given value:
winter solstice (270°), the twelve principal terms (multiples of 30°) and
Li Chun (315°). Searches run on the UT axis; the longitude is evaluated at
the corresponding TT instant.
"""

from __future__ import annotations

from datetime import date
from typing import Tuple

from ..core.types import Instant, SolverParams, TimeScale
from ..reference.astro_args import angle_diff
from ..reference.solar import solar_longitude
from ..reference.time_scales import instant_from_civil, local_day, to_tt
from ._solver import solve_angle

WINTER_SOLSTICE_DEG = 270.0
LI_CHUN_DEG = 315.0
PRINCIPAL_TERMS_DEG = tuple(range(0, 360, 30))

# Seed offset into a month when searching its principal terms.
TERM_SEED_DAYS = 15.0

# Window (degrees of solar longitude, relative to the month start) that can
# hold a principal term of that month. The sun covers at most ~31° per
# lunation; the small negative margin admits a term that precedes the new
# moon instant on the same civil day.
_TERM_WINDOW = (-2.0, 35.0)

_DEFAULT_SOLVER = SolverParams()


def _sun_at_ut(t: Instant) -> float:
    return solar_longitude(to_tt(t))


def solve_solar_longitude(
    seed: Instant, target_deg: float, solver: SolverParams = _DEFAULT_SOLVER
) -> Instant:
    """UT instant near `seed` when the true solar longitude equals target_deg."""
    seed.require(TimeScale.UT)
    return solve_angle(
        _sun_at_ut,
        target=target_deg,
        t0=seed,
        max_iter=solver.solar_iterations,
        tol_days=solver.tolerance_days,
        what=f"solar longitude {target_deg:g}",
    )


def winter_solstice(year: int, solver: SolverParams = _DEFAULT_SOLVER) -> Instant:
    """December solstice of a Gregorian year, seeded at Dec 21 00:00 UTC."""
    return solve_solar_longitude(instant_from_civil(date(year, 12, 21)), WINTER_SOLSTICE_DEG, solver)


def li_chun(year: int, solver: SolverParams = _DEFAULT_SOLVER) -> Instant:
    """Start of spring (solar longitude 315°), seeded at Feb 4 00:00 UTC."""
    return solve_solar_longitude(instant_from_civil(date(year, 2, 4)), LI_CHUN_DEG, solver)


def principal_terms_between(
    start: Instant,
    end: Instant,
    *,
    civil_offset_hours: float,
    solver: SolverParams = _DEFAULT_SOLVER,
) -> Tuple[int, ...]:
    """
    Principal-term longitudes whose civil day lies in
    [local_day(start), local_day(end)).
    """
    lon0 = _sun_at_ut(start)
    first_day = local_day(start, civil_offset_hours)
    last_day = local_day(end, civil_offset_hours)
    seed = start.shift(TERM_SEED_DAYS)

    found = []
    for k in PRINCIPAL_TERMS_DEG:
        ahead = angle_diff(k, lon0)
        if not (_TERM_WINDOW[0] < ahead < _TERM_WINDOW[1]):
            continue
        t = solve_solar_longitude(seed, float(k), solver)
        if first_day <= local_day(t, civil_offset_hours) < last_day:
            found.append((ahead, k))
    return tuple(k for _, k in sorted(found))
