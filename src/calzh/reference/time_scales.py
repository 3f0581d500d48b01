from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
import math
from typing import Union

from ..core.types import Instant, TimeScale
from .deltat import delta_t_seconds


# ============================================================
# Basic JD / JDN helpers
# ============================================================

def jd_to_jdn(jd: float) -> int:
    """
    Convert Julian Date (JD, days from noon) to Julian Day Number (JDN, integer day starting at midnight).

    Standard relation:
      JDN = floor(JD + 0.5)
    """
    return int(math.floor(jd + 0.5))


def jdn_to_jd(jdn: int) -> float:
    """
    Convert Julian Day Number (JDN) to the JD at midnight of that day.
    """
    return float(jdn) - 0.5


# ============================================================
# Gregorian calendar date <-> JDN  (Fliegel–Van Flandern)
# ============================================================

def date_to_jdn(d: date) -> int:
    """
    Gregorian date -> JDN (proleptic Gregorian).
    """
    y = d.year
    m = d.month
    day = d.day

    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3

    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return int(jdn)


def jdn_to_date(jdn: int) -> date:
    """
    JDN -> Gregorian date (proleptic Gregorian).
    """
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)

    return date(int(year), int(month), int(day))


# ============================================================
# civil timestamp (UTC) <-> Instant(UT)
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

CivilLike = Union[date, datetime]


def instant_from_civil(value: CivilLike) -> Instant:
    """
    Calendar timestamp -> Instant(UT).

    Aware datetimes are converted to UTC, naive datetimes are read as UTC and
    plain dates stand for 00:00 UTC of that day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            dt_utc = value.replace(tzinfo=timezone.utc)
        else:
            dt_utc = value.astimezone(timezone.utc)
    elif isinstance(value, date):
        dt_utc = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    else:
        raise TypeError(f"expected date or datetime, got {type(value).__name__}")
    days = (dt_utc - _UNIX_EPOCH) / timedelta(days=1)
    return Instant(_JD_UNIX_EPOCH + days, TimeScale.UT)


def civil_from_instant(t: Instant) -> datetime:
    """
    Instant(UT) -> timezone-aware datetime in UTC.
    """
    jd = t.require(TimeScale.UT)
    return _UNIX_EPOCH + timedelta(days=jd - _JD_UNIX_EPOCH)


# ============================================================
# Civil day boundaries under a fixed UTC offset
# ============================================================

def local_day(t: Instant, civil_offset_hours: float = 8.0) -> int:
    """
    Integer civil day index (a local JDN) of a UT instant:
      floor(JD_UT + offset/24 + 0.5)
    """
    jd = t.require(TimeScale.UT)
    return int(math.floor(jd + civil_offset_hours / 24.0 + 0.5))


def local_date(t: Instant, civil_offset_hours: float = 8.0) -> date:
    """Civil calendar date of a UT instant under the given offset."""
    return jdn_to_date(local_day(t, civil_offset_hours))


def local_noon(d: date, civil_offset_hours: float = 8.0) -> Instant:
    """
    Instant(UT) of 12:00 local time on civil date d.

    local_day(local_noon(d, off), off) == date_to_jdn(d) for every offset.
    """
    return Instant(date_to_jdn(d) - civil_offset_hours / 24.0, TimeScale.UT)


# ============================================================
# Decimal years (for ΔT)
# ============================================================

def calendar_year(jd: float) -> int:
    """Gregorian year of the civil day (UTC midnight based) containing jd."""
    return jdn_to_date(jd_to_jdn(jd)).year


def jan1_jd(year: int) -> float:
    """JD at 00:00 of January 1 of a Gregorian year."""
    return jdn_to_jd(date_to_jdn(date(year, 1, 1)))


def decimal_year(jd: float) -> float:
    """
    Calendar year plus the linear progress between that year's Jan-1 and the next.
    """
    y = calendar_year(jd)
    start = jan1_jd(y)
    end = jan1_jd(y + 1)
    return y + (jd - start) / (end - start)


# ============================================================
# TT <-> UT conversions (via ΔT)
# ============================================================

def to_tt(t: Instant) -> Instant:
    """
    Instant(UT) -> Instant(TT):
      TT = UT + ΔT(decimal year of the UT instant)
    """
    jd_ut = t.require(TimeScale.UT)
    dT = delta_t_seconds(decimal_year(jd_ut))
    return Instant(jd_ut + dT / 86400.0, TimeScale.TT)


def to_ut(t: Instant) -> Instant:
    """
    Instant(TT) -> Instant(UT).

    ΔT is evaluated at the integer calendar year of the TT instant, so this
    is not an exact inverse of to_tt; the asymmetry is part of the calendar
    definition and moves results by well under a second.
    """
    jd_tt = t.require(TimeScale.TT)
    dT = delta_t_seconds(float(calendar_year(jd_tt)))
    return Instant(jd_tt - dT / 86400.0, TimeScale.UT)
