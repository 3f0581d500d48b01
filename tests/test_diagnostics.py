# tests/test_diagnostics.py

import pytest

from calzh.diagnostics import leap_months, new_moon_drift, new_years_table

def test_leap_month_listing():
    found, undecided = leap_months.leap_months("china", 2019, 2024)
    assert found == [(2020, 4), (2023, 2), (2025, 6)]
    assert undecided == []

def test_leap_month_listing_reports_ambiguous_years():
    found, undecided = leap_months.leap_months("china", 2033, 2033)
    assert found == []
    assert undecided == [2033]

    found, _ = leap_months.leap_months("china-first", 2033, 2033)
    assert found == [(2033, 11)]

def test_parse_engines():
    assert leap_months.parse_engines("china, korea") == ["china", "korea"]
    with pytest.raises(SystemExit):
        leap_months.parse_engines("a,b,c,d")

def test_spring_festival_rows():
    rows = new_years_table.spring_festival_rows([("CN", "china"), ("VN", "vietnam")], 2007, 2007)
    (year, days), = rows
    assert year == 2007
    assert [d.isoformat() for d in days] == ["2007-02-18", "2007-02-17"]

def test_mean_new_moon_epoch():
    # Meeus: k = 0 is the new moon of 2000-01-06
    assert new_moon_drift.mean_new_moon_tt(0) == pytest.approx(2451550.09766)

def test_drift_fit_runs(capsys):
    pytest.importorskip("numpy")
    assert new_moon_drift.main(["--year-start", "2000", "--year-end", "2003"]) == 0
    out = capsys.readouterr().out
    assert "Drift fit" in out

def test_offsets_are_bounded():
    xs, ys = new_moon_drift.offsets_hours(2020, 2021)
    assert len(xs) == len(ys) >= 24
    assert max(abs(y) for y in ys) < 16.0

def test_leap_barcode(tmp_path, capsys):
    pytest.importorskip("numpy")
    pytest.importorskip("matplotlib")
    import matplotlib
    matplotlib.use("Agg")
    out = tmp_path / "barcode.png"
    assert leap_months.main(["--start-year", "2019", "--end-year", "2026", "--out", str(out)]) == 0
    assert out.exists()
