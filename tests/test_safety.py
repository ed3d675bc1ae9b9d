import numpy as np
import pytest

from lorenzbeat.core.safety import clamp, clamp_array, safe_array, safe_num, safe_symbols


def test_safe_num_coerces_bad_values():
    assert safe_num("3.5") == 3.5
    assert safe_num(None, default=1.0) == 1.0
    assert safe_num("abc", default=2.0) == 2.0
    assert safe_num(float("nan"), default=0.0) == 0.0
    assert safe_num(float("inf"), default=-1.0) == -1.0


def test_safe_array_promotes_scalars():
    assert safe_array(4).tolist() == [4.0]
    assert safe_array("x", default=9.0).tolist() == [9.0]


def test_clamp_uses_midpoint_for_non_finite():
    assert clamp(float("nan"), 0.0, 10.0) == 5.0
    assert clamp(20.0, 0.0, 10.0) == 10.0
    assert clamp(-3.0, 0.0, 10.0) == 0.0


def test_clamp_array_bounds_and_defaults():
    out = clamp_array([1.0, np.nan, 500.0, None, -2.0], 0.0, 100.0)
    assert out.tolist() == [1.0, 50.0, 100.0, 50.0, 0.0]
    out = clamp_array([np.inf], 36, 96, default=0)
    assert out.tolist() == [36.0]


def test_clamp_array_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        clamp_array([1.0], 5.0, 1.0)


def test_safe_symbols_replaces_unknown():
    assert safe_symbols(["bd", "xx", None, "hh"], ("bd", "hh", "~")) == ["bd", "~", "~", "hh"]
