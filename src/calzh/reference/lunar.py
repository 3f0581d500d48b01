# reference/lunar.py

from __future__ import annotations

import math

from ..core.types import Instant, TimeScale
from . import astro_args as aa
from .solar import solar_longitude


# (d, m', coefficient in degrees): amp * sin(d*D + m'*M')
# Equation of center, evection, variation, second-order center term and the
# elongation term of the truncated theory.
LUNAR_LON_TERMS = (
    (0, 1, 6.289),
    (2, -1, 1.274),
    (2, 0, 0.658),
    (0, 2, 0.214),
    (1, 0, 0.11),
)


def moon_longitude(t: Instant) -> float:
    """
    True lunar longitude in [0,360) degrees at a TT instant.
    """
    T = aa.T_centuries(t.require(TimeScale.TT))
    lm = aa.lunar_mean_elements(T)

    D_rad = math.radians(lm.D_deg)
    Mp_rad = math.radians(lm.Mp_deg)

    corr = 0.0
    for d, mp, coef in LUNAR_LON_TERMS:
        corr += coef * math.sin(d * D_rad + mp * Mp_rad)

    return aa.wrap_deg(lm.Lp_deg + corr)


def elongation(t: Instant) -> float:
    """Moon minus Sun longitude in [0,360) degrees at a TT instant."""
    return aa.wrap_deg(moon_longitude(t) - solar_longitude(t))
