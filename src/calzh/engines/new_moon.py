"""
calzh.engines.new_moon
----------------------
True new moons (solar-lunar conjunctions) near a UT instant.
"""

from __future__ import annotations

from ..core.errors import NumericalError
from ..core.types import Instant, SolverParams, TimeScale
from ..reference.astro_args import SYNODIC_MONTH
from ..reference.lunar import moon_longitude
from ..reference.solar import solar_longitude
from ..reference.time_scales import to_tt, to_ut
from ._solver import solve_angle

MAX_ATTEMPTS = 15

# The "next" search skips most of the current lunation before the first solve.
NEXT_SEED_FRACTION = 0.8

_DEFAULT_SOLVER = SolverParams()


def _moon_minus_sun(t: Instant) -> float:
    return moon_longitude(t) - solar_longitude(t)


def true_new_moon(guess: Instant, solver: SolverParams = _DEFAULT_SOLVER) -> Instant:
    """Conjunction closest (in elongation) to a UT guess, returned in UT."""
    guess.require(TimeScale.UT)
    t_tt = solve_angle(
        _moon_minus_sun,
        target=0.0,
        t0=to_tt(guess),
        max_iter=solver.conjunction_iterations,
        tol_days=solver.tolerance_days,
        what="conjunction",
    )
    return to_ut(t_tt)


def prev_new_moon(t: Instant, solver: SolverParams = _DEFAULT_SOLVER) -> Instant:
    """Latest conjunction at or before t."""
    seed = t
    for _ in range(MAX_ATTEMPTS):
        nm = true_new_moon(seed, solver)
        if nm <= t:
            return nm
        seed = seed.shift(-SYNODIC_MONTH)
    raise NumericalError(f"no new moon found at or before JD {t.jd:.6f} in {MAX_ATTEMPTS} attempts")


def next_new_moon(t: Instant, solver: SolverParams = _DEFAULT_SOLVER) -> Instant:
    """
    Conjunction at or after t, seeding the search 0.8 lunations ahead.

    A conjunction within the first days after t is skipped, so passing the
    instant of a new moon (plus a margin) yields the following one.
    """
    seed = t.shift(SYNODIC_MONTH * NEXT_SEED_FRACTION)
    for _ in range(MAX_ATTEMPTS):
        nm = true_new_moon(seed, solver)
        if nm >= t:
            return nm
        seed = seed.shift(SYNODIC_MONTH)
    raise NumericalError(f"no new moon found at or after JD {t.jd:.6f} in {MAX_ATTEMPTS} attempts")
