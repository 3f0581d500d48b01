"""
calzh.engines.factory
---------------------
Transforms pure data specifications into live, executable Engine objects.
"""

from __future__ import annotations
from calzh.core.types import CalendarSpec
from calzh.engines.calendar import LunisolarEngine


def make_engine(spec: CalendarSpec, *, cache_years: bool = True) -> LunisolarEngine:
    """The universal entry point."""
    if not isinstance(spec, CalendarSpec):
        raise TypeError(f"Unknown spec type: {type(spec)}")
    return LunisolarEngine(spec, cache_years=cache_years)
