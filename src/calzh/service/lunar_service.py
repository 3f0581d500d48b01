"""
calzh.service.lunar_service
---------------------------
Presentation layer on top of an engine: localized month/day names and the
three year numberings a lunar date carries.

* astro_year   -- winter-solstice reckoning (the core `LunarDate.year`)
* civil_year   -- counted from the Spring Festival
* ganzhi_year  -- sexagenary year, turning over at Li Chun
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from ..core.engine import CivilLike, EngineRegistry
from ..core.types import LunarDate
from ..reference.time_scales import civil_from_instant, instant_from_civil
from .i18n import locale_text, lunar_day_name, lunar_month_name

# Calendar threshold used when the precise 315° instant is not requested.
LI_CHUN_FALLBACK = (2, 4)


@dataclass(frozen=True)
class ServiceConfig:
    locale: str = "zh-CN"
    engine: str = "china"
    precise_li_chun: bool = False

    def __post_init__(self) -> None:
        locale_text(self.locale)


@dataclass(frozen=True)
class GanzhiYear:
    year: int
    ganzhi: str
    animal: str


@dataclass(frozen=True)
class LunarInfo:
    solar_text: str
    astro_year: int
    civil_year: int
    ganzhi_year: int
    month: int
    day: int
    is_leap: bool
    month_length: int
    month_name: str
    day_name: str
    ganzhi: GanzhiYear
    display: str


class LunarService:
    """
    Single entry point for localized lunar information.

    The Li Chun boundary is a declared capability of the configuration:
    `precise_li_chun=True` uses the solved 315° instant, otherwise the
    February 4 calendar threshold.
    """

    def __init__(self, config: ServiceConfig = ServiceConfig(), *, registry: Optional[EngineRegistry] = None):
        if registry is None:
            from ..api import _reg
            registry = _reg()
        self.config = config
        self.engine = registry.get(config.engine)

    def _after_li_chun(self, when: CivilLike) -> bool:
        dt = civil_from_instant(instant_from_civil(when))
        if self.config.precise_li_chun:
            return instant_from_civil(when) >= self.engine.li_chun(dt.year)
        return (dt.month, dt.day) >= LI_CHUN_FALLBACK

    def ganzhi_year(self, when: CivilLike) -> GanzhiYear:
        text = locale_text(self.config.locale)
        year = civil_from_instant(instant_from_civil(when)).year
        gz_year = year if self._after_li_chun(when) else year - 1
        index = (gz_year - 4) % 60
        return GanzhiYear(
            year=gz_year,
            ganzhi=text.stems[index % 10] + text.branches[index % 12],
            animal=text.animals[index % 12],
        )

    def from_date(self, when: CivilLike) -> LunarInfo:
        lunar: LunarDate = self.engine.day_info(when)
        gz = self.ganzhi_year(when)
        month_name = lunar_month_name(lunar.month, lunar.is_leap, self.config.locale)
        day_name = lunar_day_name(lunar.day)
        return LunarInfo(
            solar_text=civil_from_instant(instant_from_civil(when)).date().isoformat(),
            astro_year=lunar.year,
            civil_year=lunar.civil_year,
            ganzhi_year=gz.year,
            month=lunar.month,
            day=lunar.day,
            is_leap=lunar.is_leap,
            month_length=lunar.month_length,
            month_name=month_name,
            day_name=day_name,
            ganzhi=gz,
            display=f"{gz.ganzhi}年（{gz.animal}） {month_name} {day_name}",
        )

    def same_solar_date_this_year(self, when: CivilLike, *, today: Optional[date] = None) -> LunarInfo:
        """Lunar info for the same month/day in the current year (Feb 29 falls back to Feb 28)."""
        today = today or datetime.now(timezone.utc).date()
        d = civil_from_instant(instant_from_civil(when)).date()
        try:
            target = d.replace(year=today.year)
        except ValueError:
            target = date(today.year, 2, 28)
        return self.from_date(target)
