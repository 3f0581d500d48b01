# tests/test_instant.py

import pytest

from calzh.core.errors import ScaleMismatchError
from calzh.core.types import Instant, TimeScale

def test_scale_coercion_and_default():
    assert Instant(1.0).scale is TimeScale.UT
    assert Instant(1.0, "TT").scale is TimeScale.TT
    with pytest.raises(ValueError):
        Instant(1.0, "TAI")

def test_same_scale_arithmetic():
    a = Instant(10.0, TimeScale.TT)
    b = a.shift(2.5)
    assert b.scale is TimeScale.TT
    assert b.days_since(a) == pytest.approx(2.5)
    assert a < b
    assert b >= a

def test_mixed_scales_refuse_to_combine():
    ut = Instant(10.0, TimeScale.UT)
    tt = Instant(10.0, TimeScale.TT)
    assert ut != tt
    with pytest.raises(ScaleMismatchError):
        ut < tt
    with pytest.raises(ScaleMismatchError):
        ut.days_since(tt)
    with pytest.raises(ScaleMismatchError):
        tt.require(TimeScale.UT)
    assert tt.require(TimeScale.TT) == 10.0
