from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Protocol, Union

from .types import Instant, LunarDate, LunarYearContext

CivilLike = Union[date, datetime]

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def lunar_year(self, year: int) -> LunarYearContext: ...
    def day_info(self, when: CivilLike) -> LunarDate: ...
    def to_gregorian(self, civil_year: int, month: int, day: int, *, is_leap: bool = False) -> date: ...
    def new_year_day(self, civil_year: int) -> date: ...
    def explain(self, when: CivilLike) -> Dict[str, Any]: ...
    def winter_solstice(self, year: int) -> Instant: ...
    def li_chun(self, year: int) -> Instant: ...
    def new_moon(self, when: CivilLike, direction: str = "nearest") -> Instant: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
