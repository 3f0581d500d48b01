from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from .core.engine import CalendarEngine, CivilLike, EngineRegistry
from .core.types import CalendarSpec, LunarDate, LunarYearContext
from .engines.factory import make_engine as _make_engine
from .reference.time_scales import civil_from_instant

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str) -> Dict[str, Any]:
    return _reg().get(engine).info()

def make_engine(spec: CalendarSpec) -> CalendarEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Conversions
# ============================================================

def solar_to_lunar(when: CivilLike, *, engine: str = "china") -> LunarDate:
    """Lunar label of a UTC timestamp, or of a bare civil date under the engine's offset."""
    return _reg().get(engine).day_info(when)

def lunar_to_solar(
    civil_year: int,
    month: int,
    day: int,
    *,
    is_leap: bool = False,
    engine: str = "china",
) -> date:
    """Civil date of a lunar label; `civil_year` counts from the Spring Festival."""
    return _reg().get(engine).to_gregorian(civil_year, month, day, is_leap=is_leap)

def lunar_year(year: int, *, engine: str = "china") -> LunarYearContext:
    return _reg().get(engine).lunar_year(year)

def new_year_day(civil_year: int, *, engine: str = "china") -> date:
    return _reg().get(engine).new_year_day(civil_year)

def explain(when: CivilLike, *, engine: str = "china") -> Dict[str, Any]:
    return _reg().get(engine).explain(when)

# ============================================================
# Astronomical events (returned as aware UTC datetimes)
# ============================================================

def winter_solstice(year: int, *, engine: str = "china") -> datetime:
    return civil_from_instant(_reg().get(engine).winter_solstice(year))

def li_chun(year: int, *, engine: str = "china") -> datetime:
    return civil_from_instant(_reg().get(engine).li_chun(year))

def new_moon(
    when: CivilLike,
    *,
    direction: Literal["nearest", "prev", "next"] = "nearest",
    engine: str = "china",
) -> datetime:
    return civil_from_instant(_reg().get(engine).new_moon(when, direction))

# ============================================================
# Month-level debug API
# ============================================================

def months_in_year(year: int, *, engine: str = "china") -> List[Dict[str, Any]]:
    """One record per month of the context that starts at the solstice of `year`."""
    eng = _reg().get(engine)
    ctx = eng.lunar_year(year)
    out = []
    for m in ctx.months:
        out.append({
            "label": m.label,
            "ordinal": m.ordinal,
            "is_leap": m.is_leap,
            "start_utc": civil_from_instant(m.start),
            "end_utc": civil_from_instant(m.end),
            "principal_terms": m.principal_terms,
        })
    return out

def describe(when: CivilLike, *, engine: str = "china", locale: Optional[str] = None) -> str:
    """One-line localized description, e.g. "癸卯年（兔） 闰二月 初一"."""
    from .service.lunar_service import LunarService, ServiceConfig

    cfg = ServiceConfig(engine=engine) if locale is None else ServiceConfig(locale=locale, engine=engine)
    return LunarService(cfg, registry=_reg()).from_date(when).display
