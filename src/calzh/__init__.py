"""calzh public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    solar_to_lunar,
    lunar_to_solar,
    lunar_year,
    new_year_day,
    explain,
    describe,
    winter_solstice,
    li_chun,
    new_moon,
    months_in_year,
    list_engines,
    engine_info,
    make_engine,
    register_engine,
)
from .core.errors import (
    CalzhError,
    InconsistencyError,
    NotFoundError,
    NumericalError,
    ScaleMismatchError,
    UnsupportedConfigurationError,
)
from .core.types import CalendarSpec, Instant, LunarDate, LunarMonth, LunarYearContext, TimeScale

__all__ = [
    "solar_to_lunar",
    "lunar_to_solar",
    "lunar_year",
    "new_year_day",
    "explain",
    "describe",
    "winter_solstice",
    "li_chun",
    "new_moon",
    "months_in_year",
    "list_engines",
    "engine_info",
    "make_engine",
    "register_engine",
    "CalzhError",
    "InconsistencyError",
    "NotFoundError",
    "NumericalError",
    "ScaleMismatchError",
    "UnsupportedConfigurationError",
    "CalendarSpec",
    "Instant",
    "LunarDate",
    "LunarMonth",
    "LunarYearContext",
    "TimeScale",
]
