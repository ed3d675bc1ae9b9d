import numpy as np
import pytest

from lorenzbeat.core.chaos.lorenz import integrate_lorenz
from lorenzbeat.core.features import diff, extract_features, normalize, speed


def test_normalize_constant_is_neutral():
    out = normalize([3.0, 3.0, 3.0, 3.0])
    assert np.all(out == 0.5)


def test_normalize_no_finite_samples_is_neutral():
    out = normalize([np.nan, np.inf, -np.inf])
    assert np.all(out == 0.5)


def test_normalize_scales_to_unit_range():
    out = normalize([2.0, 4.0, 6.0])
    assert out.tolist() == pytest.approx([0.0, 0.5, 1.0])


def test_normalize_ignores_non_finite_samples():
    out = normalize([0.0, np.nan, 10.0, np.inf, 5.0])
    assert out.tolist() == pytest.approx([0.0, 0.5, 1.0, 0.5, 0.5])


def test_normalize_empty():
    assert normalize([]).shape == (0,)


def test_diff_length_and_first_zero():
    values = [1.0, 4.0, 2.0, 2.0]
    out = diff(values)
    assert len(out) == len(values)
    assert out[0] == 0.0
    assert out.tolist() == [0.0, 3.0, -2.0, 0.0]


def test_diff_single_and_empty():
    assert diff([7.0]).tolist() == [0.0]
    assert diff([]).shape == (0,)


def test_speed_treats_non_finite_as_zero():
    out = speed([3.0, np.nan], [4.0, 1.0], [0.0, np.inf])
    assert out.tolist() == pytest.approx([5.0, 1.0])


def test_extract_features_lengths_match():
    traj = integrate_lorenz(200)
    features = extract_features(traj)
    for arr in (features.xs, features.ys, features.zs, features.dxs, features.dys, features.dzs, features.spd):
        assert len(arr) == 200
    assert features.dxs[0] == 0.0
    assert features.spd.min() >= 0.0
    assert features.spd.max() <= 1.0


def test_extract_features_diverged_trajectory_is_finite():
    traj = integrate_lorenz(64, dt=10.0)
    features = extract_features(traj)
    for arr in (features.xs, features.ys, features.zs, features.spd):
        assert np.all(np.isfinite(arr))
        assert np.all((arr >= 0.0) & (arr <= 1.0))


def test_extract_features_empty():
    features = extract_features(integrate_lorenz(0))
    assert len(features) == 0
