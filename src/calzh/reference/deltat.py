"""
calzh.reference.deltat

ΔT (= TT − UT) model used by every engine.

A piecewise polynomial over decimal years: linear segments between 1700 and
1986, the NASA (Espenak–Meeus) quintic for 1986–2005 and the quadratic
extrapolation from 2005 on. Before 1700 a long-term parabola is used.

The breakpoints are part of the calendar definition: changing them moves new
moons and solar terms by seconds, which can move a month boundary across a
civil midnight. Keep them bit-exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple


@dataclass(frozen=True)
class DeltaTSegment:
    """ΔT on the half-open decimal-year interval [lo, hi)."""
    lo: float
    hi: float
    fn: Callable[[float], float]

    def covers(self, y: float) -> bool:
        return self.lo <= y < self.hi


def _long_term(y: float) -> float:
    u = (y - 2000.0) / 100.0
    return 120.0 + 80.0 * u * u


def _nasa_1986_2005(y: float) -> float:
    t = y - 2000.0
    return (
        63.86
        + 0.3345 * t
        - 0.060374 * t * t
        + 0.0017275 * t * t * t
        + 0.000651814 * t * t * t * t
        + 0.00002373599 * t * t * t * t * t
    )


def _nasa_2005_on(y: float) -> float:
    t = y - 2000.0
    return 62.92 + 0.32217 * t + 0.005589 * t * t


_INF = float("inf")

SEGMENTS: Tuple[DeltaTSegment, ...] = (
    DeltaTSegment(-_INF, 1700.0, _long_term),
    DeltaTSegment(1700.0, 1800.0, lambda y: 8.83 + 0.1603 * (y - 1700.0)),
    DeltaTSegment(1800.0, 1860.0, lambda y: 13.72 - 0.332447 * (y - 1800.0)),
    DeltaTSegment(1860.0, 1900.0, lambda y: 7.62 + 0.5737 * (y - 1860.0)),
    DeltaTSegment(1900.0, 1920.0, lambda y: -2.79 + 1.494119 * (y - 1900.0)),
    DeltaTSegment(1920.0, 1941.0, lambda y: 21.20 + 0.84493 * (y - 1920.0)),
    DeltaTSegment(1941.0, 1961.0, lambda y: 29.07 + 0.407 * (y - 1950.0)),
    DeltaTSegment(1961.0, 1986.0, lambda y: 45.45 + 1.067 * (y - 1975.0)),
    DeltaTSegment(1986.0, 2005.0, _nasa_1986_2005),
    DeltaTSegment(2005.0, _INF, _nasa_2005_on),
)


def delta_t_seconds(y: float) -> float:
    """ΔT in seconds at decimal year y."""
    for seg in SEGMENTS:
        if seg.covers(y):
            return seg.fn(y)
    raise ValueError(f"decimal year is not a finite number: {y!r}")
