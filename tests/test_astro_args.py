# tests/test_astro_args.py

import pytest
from calzh.reference import astro_args as aa

def test_wrap_deg():
    assert aa.wrap_deg(370.0) == pytest.approx(10.0)
    assert aa.wrap_deg(-10.0) == pytest.approx(350.0)
    assert aa.wrap_deg(720.0) == 0.0
    assert 0.0 <= aa.wrap_deg(-1e-15) < 360.0

@pytest.mark.parametrize(
    "a, b, expected",
    [
        (10.0, 350.0, 20.0),
        (350.0, 10.0, -20.0),
        (0.0, 180.0, 180.0),
        (180.0, 0.0, 180.0),
        (90.0, 90.0, 0.0),
        (725.0, -5.0, 10.0),
    ],
)
def test_angle_diff(a, b, expected):
    assert aa.angle_diff(a, b) == pytest.approx(expected)

def test_angle_diff_antisymmetric_and_bounded():
    for a in range(0, 360, 7):
        for b in range(0, 360, 11):
            d = aa.angle_diff(a, b)
            assert -180.0 < d <= 180.0
            if abs(d) < 179.0:
                assert aa.angle_diff(b, a) == pytest.approx(-d)

def test_meeus_example_25a_solar_mean_elements():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 25.a.
    Date: 1992 October 13, 0h TD (TT).
    """
    T = aa.T_centuries(2448908.5)
    assert T == pytest.approx(-0.072183436, abs=1e-9)

    sm = aa.solar_mean_elements(T)
    assert sm.L0_deg == pytest.approx(201.80720, abs=1e-5)
    assert sm.M_deg == pytest.approx(278.99397, abs=1e-5)

def test_meeus_example_47a_lunar_mean_elements():
    """
    Example 47.a, 1992 April 12, 0h TD. The linear mean elements agree with
    the full polynomials to well under 1e-3 degrees.
    """
    T = aa.T_centuries(2448724.5)
    assert T == pytest.approx(-0.077221081451, abs=1e-12)

    lm = aa.lunar_mean_elements(T)
    assert lm.Lp_deg == pytest.approx(134.290182, abs=1e-3)
    assert lm.Mp_deg == pytest.approx(5.150833, abs=1e-3)
    assert lm.D_deg == pytest.approx(113.842304, abs=1e-3)

def test_synodic_month():
    assert aa.SYNODIC_MONTH == pytest.approx(29.530588853)
