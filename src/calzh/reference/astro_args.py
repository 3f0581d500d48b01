from __future__ import annotations

from dataclasses import dataclass
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative value can round back up to 360.0
    if y >= 360.0:
        y -= 360.0
    return y

def angle_diff(a_deg: float, b_deg: float) -> float:
    """Signed difference a - b in degrees, wrapped to (-180, 180]."""
    d = wrap_deg(a_deg) - wrap_deg(b_deg)
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return d


# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0

# Mean synodic month (days), used to step new-moon searches.
SYNODIC_MONTH = 29.530588853


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Mean elements of the truncated series (degrees, wrapped)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMeanElements:
    L0_deg: float  # mean longitude
    M_deg: float   # mean anomaly


@dataclass(frozen=True)
class LunarMeanElements:
    Lp_deg: float  # mean longitude
    Mp_deg: float  # mean anomaly
    D_deg: float   # mean elongation


def solar_mean_elements(T: float) -> SolarMeanElements:
    return SolarMeanElements(
        L0_deg=wrap_deg(280.46646 + 36000.76983 * T),
        M_deg=wrap_deg(357.52911 + 35999.05029 * T),
    )


def lunar_mean_elements(T: float) -> LunarMeanElements:
    return LunarMeanElements(
        Lp_deg=wrap_deg(218.3164477 + 481267.88123421 * T),
        Mp_deg=wrap_deg(134.9633964 + 477198.8675055 * T),
        D_deg=wrap_deg(297.8501921 + 445267.1114034 * T),
    )
