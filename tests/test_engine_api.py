# tests/test_engine_api.py

from datetime import date, datetime, timedelta, timezone

import pytest

import calzh
from calzh import api
from calzh.bootstrap import build_registry
from calzh.core.types import CalendarSpec, EngineId
from calzh.engines.calendar import LunisolarEngine
from calzh.engines.specs import ALL_SPECS, CHINA

def test_registry_lists_builtin_engines():
    assert {"china", "china-first", "korea", "vietnam"} <= set(calzh.list_engines())
    info = calzh.engine_info("korea")
    assert info["civil_offset_hours"] == 9.0
    assert info["id"]["name"] == "korea"
    with pytest.raises(KeyError):
        calzh.engine_info("tibet")

def test_register_engine_requires_overwrite(monkeypatch):
    monkeypatch.setattr(api, "_registry", build_registry())
    eng = calzh.make_engine(CHINA.tweak(id=EngineId("custom", "test-utc", "1"), civil_offset_hours=0.0))
    calzh.register_engine("test-utc", eng)
    with pytest.raises(KeyError):
        calzh.register_engine("test-utc", eng)
    calzh.register_engine("test-utc", eng, overwrite=True)
    assert "test-utc" in calzh.list_engines()

def test_engine_validates_spec():
    with pytest.raises(ValueError):
        LunisolarEngine(CHINA.tweak(leap_policy="last"))
    with pytest.raises(ValueError):
        LunisolarEngine(CHINA.tweak(civil_offset_hours=15.0))
    with pytest.raises(TypeError):
        calzh.make_engine({"name": "china"})

def test_forward_and_inverse():
    d = calzh.solar_to_lunar(date(2023, 3, 22))
    assert (d.month, d.day, d.is_leap) == (2, 1, True)
    assert calzh.lunar_to_solar(2023, 2, 1, is_leap=True) == date(2023, 3, 22)
    assert calzh.new_year_day(2024) == date(2024, 2, 10)
    assert calzh.new_year_day(2025) == date(2025, 1, 29)

@pytest.mark.parametrize(
    "engine, civil_year, expected",
    [
        ("china", 2007, date(2007, 2, 18)),
        ("vietnam", 2007, date(2007, 2, 17)),
        ("china", 1997, date(1997, 2, 7)),
        ("korea", 1997, date(1997, 2, 8)),
        ("china", 2027, date(2027, 2, 6)),
        ("korea", 2027, date(2027, 2, 7)),
    ],
)
def test_civil_offset_moves_new_year(engine, civil_year, expected):
    assert calzh.new_year_day(civil_year, engine=engine) == expected

@pytest.mark.parametrize("offset", [-5.0, 0.0, 8.0])
def test_bare_date_roundtrip_under_any_offset(offset):
    eng = LunisolarEngine(CHINA.tweak(civil_offset_hours=offset))
    d = date(2023, 5, 1)
    while d <= date(2023, 7, 31):
        ld = eng.day_info(d)
        assert eng.to_gregorian(ld.civil_year, ld.month, ld.day, is_leap=ld.is_leap) == d
        assert eng.explain(d)["civil_date"] == d.isoformat()
        d += timedelta(days=1)

def test_west_offset_keeps_the_civil_day():
    west = LunisolarEngine(CHINA.tweak(civil_offset_hours=-5.0))
    ld = west.day_info(date(2023, 6, 1))
    assert west.to_gregorian(ld.civil_year, ld.month, ld.day, is_leap=ld.is_leap) == date(2023, 6, 1)
    # a timestamp is still read as UTC: 00:00 UTC on June 1 is May 31 at UTC-5
    prev = west.day_info(datetime(2023, 6, 1))
    assert west.to_gregorian(prev.civil_year, prev.month, prev.day, is_leap=prev.is_leap) == date(2023, 5, 31)

def test_leap_policy_engines_differ_in_2033():
    with pytest.raises(calzh.InconsistencyError):
        calzh.lunar_year(2033)
    ctx = calzh.lunar_year(2033, engine="china-first")
    assert ctx.leap_month.label == "11L"

def test_lunar_year_is_memoized():
    assert calzh.lunar_year(2022) is calzh.lunar_year(2022)
    uncached = LunisolarEngine(CHINA, cache_years=False)
    assert uncached.lunar_year(2022) == calzh.lunar_year(2022)
    assert uncached.lunar_year(2022) is not uncached.lunar_year(2022)

def test_event_helpers_return_utc_datetimes():
    ws = calzh.winter_solstice(2024)
    assert ws.tzinfo is not None
    assert ws.date() == date(2024, 12, 21)

    nm = calzh.new_moon(datetime(2024, 1, 20), direction="prev")
    assert abs((nm - datetime(2024, 1, 11, 11, 57, tzinfo=timezone.utc)).total_seconds()) < 600

    nxt = calzh.new_moon(datetime(2024, 1, 20), direction="next")
    assert nxt.date() == date(2024, 2, 9)

    with pytest.raises(ValueError):
        calzh.new_moon(datetime(2024, 1, 20), direction="sideways")

def test_explain_record():
    rec = calzh.explain(date(2023, 3, 22))
    assert rec["civil_date"] == "2023-03-22"
    assert rec["lunar"]["is_leap"] is True
    assert rec["context_year"] == 2022
    assert "2L" in rec["context_months"]
    assert rec["principal_terms"] == []
    assert rec["engine"]["leap_policy"] == "strict"

def test_months_in_year():
    rows = calzh.months_in_year(2023)
    assert len(rows) == 12
    assert rows[0]["label"] == "11"
    assert rows[0]["start_utc"].tzinfo is not None

def test_specs_are_hashable_configs():
    assert set(ALL_SPECS) == {"china", "china-first", "korea", "vietnam"}
    assert isinstance(CHINA, CalendarSpec)
    assert hash(CHINA) == hash(CHINA.tweak())
    assert CHINA.tweak(civil_offset_hours=9.0) != CHINA

def test_describe():
    assert calzh.describe(date(2023, 3, 22)) == "癸卯年（兔） 闰二月 初一"
