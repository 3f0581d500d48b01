# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.types import Instant, TimeScale
from . import astro_args as aa


@dataclass(frozen=True)
class SolarCoordinates:
    """Mean and true solar longitude (degrees) with the equation of center."""
    L_mean_deg: float
    C_deg: float
    L_true_deg: float


def solar_coordinates(t: Instant) -> SolarCoordinates:
    """
    Truncated low-precision solar theory for a TT instant:
    mean longitude plus a two-harmonic equation of center.
    """
    T = aa.T_centuries(t.require(TimeScale.TT))
    sm = aa.solar_mean_elements(T)
    M_rad = math.radians(sm.M_deg)

    C_sun = (
        (1.914602 - 0.004817 * T) * math.sin(M_rad)
        + 0.019993 * math.sin(2.0 * M_rad)
    )

    return SolarCoordinates(
        L_mean_deg=sm.L0_deg,
        C_deg=C_sun,
        L_true_deg=aa.wrap_deg(sm.L0_deg + C_sun),
    )


def solar_longitude(t: Instant) -> float:
    """True solar longitude in [0,360) degrees at a TT instant."""
    return solar_coordinates(t).L_true_deg
