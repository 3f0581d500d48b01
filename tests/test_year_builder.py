# tests/test_year_builder.py

from datetime import date

import pytest

from calzh.core.errors import InconsistencyError
from calzh.engines import date_mapper as dm
from calzh.engines import year_builder as yb
from calzh.reference.time_scales import local_date, local_day

# context year -> (leap month number, civil date of its first day in Beijing)
KNOWN_LEAP_MONTHS = {
    1989: (5, date(1990, 6, 23)),
    1994: (8, date(1995, 9, 25)),
    2005: (7, date(2006, 8, 24)),
    2013: (9, date(2014, 10, 24)),
    2016: (6, date(2017, 7, 23)),
    2019: (4, date(2020, 5, 23)),
    2022: (2, date(2023, 3, 22)),
    2024: (6, date(2025, 7, 25)),
    2027: (5, date(2028, 6, 23)),
}

@pytest.fixture(scope="module")
def ctx_2022():
    return yb.build_lunar_year(2022)

@pytest.mark.parametrize("year", sorted(KNOWN_LEAP_MONTHS))
def test_known_leap_months(year):
    ordinal, first_day = KNOWN_LEAP_MONTHS[year]
    ctx = yb.build_lunar_year(year)
    assert len(ctx) == 13
    leap = ctx.leap_month
    assert leap is not None
    assert leap.ordinal == ordinal
    assert local_date(leap.start, 8.0) == first_day

def test_truncated_series_divergences():
    # published: leap 6 from 1987-07-26; the truncated series puts the gap one month later
    ctx = yb.build_lunar_year(1986)
    assert ctx.leap_month.ordinal == 7
    assert local_date(ctx.leap_month.start, 8.0) == date(1987, 8, 24)

    # published: 2030-02-03; the conjunction lands minutes before Beijing midnight
    assert dm.lunar_to_solar(2030, 1, 1, yb.build_lunar_year) == date(2030, 2, 2)

@pytest.mark.parametrize("year", [2020, 2021, 2023, 2025])
def test_ordinary_years_have_twelve_months(year):
    ctx = yb.build_lunar_year(year)
    assert len(ctx) == 12
    assert ctx.leap_month is None
    assert [m.ordinal for m in ctx.months] == [11, 12, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]

def test_structure_of_a_leap_year(ctx_2022):
    labels = [m.label for m in ctx_2022.months]
    assert labels == ["11", "12", "1", "2", "2L", "3", "4", "5", "6", "7", "8", "9", "10"]

    # contiguous, and the first month holds the winter solstice (civil days)
    for a, b in zip(ctx_2022.months[:-1], ctx_2022.months[1:]):
        assert a.end == b.start
    first = ctx_2022.months[0]
    assert local_day(first.start, 8.0) <= local_day(ctx_2022.winter_solstice, 8.0) < local_day(first.end, 8.0)
    assert local_date(first.start, 8.0) == date(2022, 11, 24)

    # exactly one month without a principal term, and it is the leap month
    lacking = [m for m in ctx_2022.months if not m.principal_terms]
    assert lacking == [ctx_2022.leap_month]
    assert not ctx_2022.leap_month.has_principal_term

def test_month_lengths_are_29_or_30(ctx_2022):
    for m in ctx_2022.months:
        n = local_day(m.end, 8.0) - local_day(m.start, 8.0)
        assert n in (29, 30)

def test_ambiguous_leap_year_2033():
    # two months without a principal term: strict refuses, "first" takes the leap 11th month
    with pytest.raises(InconsistencyError):
        yb.build_lunar_year(2033, leap_policy="strict")

    ctx = yb.build_lunar_year(2033, leap_policy="first")
    assert [m.label for m in ctx.months][:4] == ["11", "11L", "12", "1"]
    assert local_date(ctx.leap_month.start, 8.0) == date(2033, 12, 22)
    assert ctx.months[-1].ordinal == yb.LAST_ORDINAL

def test_bad_leap_policy():
    with pytest.raises(ValueError):
        yb.build_lunar_year(2022, leap_policy="latest")

def test_pick_leap_rules():
    terms_12 = [(k,) for k in range(12)]
    assert yb._pick_leap(2000, terms_12, "strict") is None

    full = [(k,) for k in range(13)]
    with pytest.raises(InconsistencyError):
        yb._pick_leap(2000, full, "strict")

    two_gaps = [(0,), (30,), (), (60,), (), (90,)] + [(k,) for k in range(7)]
    with pytest.raises(InconsistencyError):
        yb._pick_leap(2000, two_gaps, "strict")
    assert yb._pick_leap(2000, two_gaps, "first") == 2

    gap_at_anchor = [()] + [(k,) for k in range(12)]
    with pytest.raises(InconsistencyError):
        yb._pick_leap(2000, gap_at_anchor, "first")
