from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import total_ordering
from typing import Any, Dict, Literal, Optional, Tuple

from .errors import ScaleMismatchError


class TimeScale(str, Enum):
    UT = "UT"
    TT = "TT"


@total_ordering
@dataclass(frozen=True)
class Instant:
    """
    A Julian Date tagged with its time scale.

    Instants on different scales never compare or subtract; convert first
    with time_scales.to_tt / time_scales.to_ut.
    """
    jd: float
    scale: TimeScale = TimeScale.UT

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", TimeScale(self.scale))

    def _same_scale(self, other: "Instant") -> None:
        if other.scale != self.scale:
            raise ScaleMismatchError(
                f"cannot combine {self.scale.value} and {other.scale.value} instants"
            )

    def require(self, scale: TimeScale) -> float:
        """Return the raw JD, asserting the expected scale."""
        if self.scale != scale:
            raise ScaleMismatchError(f"expected a {scale.value} instant, got {self.scale.value}")
        return self.jd

    def shift(self, days: float) -> "Instant":
        return Instant(self.jd + days, self.scale)

    def days_since(self, other: "Instant") -> float:
        self._same_scale(other)
        return self.jd - other.jd

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        self._same_scale(other)
        return self.jd < other.jd


@dataclass(frozen=True)
class EngineId:
    family: Literal["astro", "custom"]
    name: str
    version: str


@dataclass(frozen=True)
class SolverParams:
    solar_iterations: int = 12
    conjunction_iterations: int = 15
    tolerance_days: float = 1e-7


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload for constructing a lunisolar engine."""
    id: EngineId
    civil_offset_hours: float = 8.0
    leap_policy: Literal["strict", "first"] = "strict"
    solver: SolverParams = field(default_factory=SolverParams)
    meta: Tuple[Tuple[str, str], ...] = ()

    def tweak(self, **changes: Any) -> "CalendarSpec":
        return replace(self, **changes)


@dataclass(frozen=True)
class LunarMonth:
    start: Instant
    end: Instant
    ordinal: int
    is_leap: bool = False
    has_principal_term: bool = True
    principal_terms: Tuple[int, ...] = ()

    @property
    def label(self) -> str:
        return f"{self.ordinal}{'L' if self.is_leap else ''}"


@dataclass(frozen=True)
class LunarYearContext:
    """Months from the winter-solstice month of `year` up to that of `year + 1`."""
    year: int
    civil_offset_hours: float
    months: Tuple[LunarMonth, ...]
    winter_solstice: Instant
    next_winter_solstice: Instant

    def __len__(self) -> int:
        return len(self.months)

    @property
    def start(self) -> Instant:
        return self.months[0].start

    @property
    def end(self) -> Instant:
        return self.months[-1].end

    @property
    def leap_month(self) -> Optional[LunarMonth]:
        for m in self.months:
            if m.is_leap:
                return m
        return None


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap: bool
    month_length: int
    civil_year: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "is_leap": self.is_leap,
            "month_length": self.month_length,
            "civil_year": self.civil_year,
        }
