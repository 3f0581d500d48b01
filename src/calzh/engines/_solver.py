"""
calzh.engines._solver
---------------------
Newton iteration for "angle(t) == target" problems on a tagged time axis.

The slope is a one-minute forward difference and the residual is the
shortest signed angle, so targets next to the 0/360 seam behave like any
other. The iteration stops on a step tolerance; the iteration cap only
bounds the work.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..core.errors import NumericalError
from ..core.types import Instant
from ..reference.astro_args import angle_diff

LOGGER = logging.getLogger(__name__)

STEP_DAYS = 1.0 / 1440.0      # forward-difference step: one minute
MIN_SLOPE_DEG_PER_DAY = 1e-6  # slower than any solar or lunar motion
MAX_STEP_DAYS = 400.0


class SolveStatus(str, Enum):
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class RootResult:
    instant: Instant
    status: SolveStatus
    iterations: int
    residual_deg: float

    @property
    def converged(self) -> bool:
        return self.status is SolveStatus.CONVERGED


AngleFn = Callable[[Instant], float]


def find_angle_root(
    value: AngleFn,
    *,
    target: float,
    t0: Instant,
    max_iter: int,
    tol_days: float = 1e-7,
) -> RootResult:
    """
    t_{n+1} = t_n - f(t_n) / ((f(t_n + 1min) - f(t_n)) * 1440)
    with f(t) = angle_diff(value(t), target).

    Never raises; the status says whether the estimate can be trusted.
    """
    t = t0
    f = angle_diff(value(t), target)
    for i in range(1, max_iter + 1):
        f2 = angle_diff(value(t.shift(STEP_DAYS)), target)
        slope = (f2 - f) / STEP_DAYS
        if not math.isfinite(slope) or abs(slope) < MIN_SLOPE_DEG_PER_DAY:
            return RootResult(t, SolveStatus.DIVERGED, i, f)
        step = f / slope
        if not math.isfinite(step) or abs(step) > MAX_STEP_DAYS:
            return RootResult(t, SolveStatus.DIVERGED, i, f)
        t = t.shift(-step)
        f = angle_diff(value(t), target)
        if not math.isfinite(f):
            return RootResult(t, SolveStatus.DIVERGED, i, f)
        if abs(step) < tol_days:
            return RootResult(t, SolveStatus.CONVERGED, i, f)
    return RootResult(t, SolveStatus.EXHAUSTED, max_iter, f)


def solve_angle(
    value: AngleFn,
    *,
    target: float,
    t0: Instant,
    max_iter: int,
    tol_days: float = 1e-7,
    what: str = "angle",
) -> Instant:
    """find_angle_root, raising NumericalError when the iteration diverges."""
    res = find_angle_root(value, target=target, t0=t0, max_iter=max_iter, tol_days=tol_days)
    if res.status is SolveStatus.DIVERGED:
        raise NumericalError(
            f"{what} search diverged after {res.iterations} iterations "
            f"(target={target}, seed JD {t0.jd:.6f} {t0.scale.value})"
        )
    if res.status is SolveStatus.EXHAUSTED:
        LOGGER.warning(
            json.dumps(
                {
                    "event": "solver_exhausted",
                    "what": what,
                    "target": target,
                    "jd": res.instant.jd,
                    "residual_deg": res.residual_deg,
                }
            )
        )
    return res.instant
