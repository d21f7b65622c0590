# Tests for sphharm/math_utils.py

import math

import numpy as np
import pytest

from sphharm.math_utils import (
    azimuth,
    azimuth_array,
    cos_theta,
    gamma_ratio,
    math_error_handler,
    radial_guard,
    radial_guard_array,
    sign,
    vector_norm,
)


@pytest.mark.parametrize("value,expected", [(2.5, 1), (-0.1, -1), (0.0, 0)])
def test_sign(value, expected):
    assert sign(value) == expected


def test_vector_norm():
    assert vector_norm((3.0, 4.0, 12.0)) == pytest.approx(13.0)


def test_cos_theta():
    assert cos_theta(0.0, 3.0, 4.0) == pytest.approx(0.8)
    assert cos_theta(0.0, 0.0, -1e250) == -1.0
    with pytest.raises(ZeroDivisionError):
        cos_theta(0.0, 0.0, 0.0)


def test_vector_norm_of_far_point():
    assert vector_norm((3e200, 4e200, 0.0)) == pytest.approx(5e200)


@pytest.mark.parametrize(
    "r,l,expected",
    [(0.0, 0, False), (0.0, 2, False), (2.0, 3, True), (1e30, 12, True), (1e-200, 5, False)],
)
def test_radial_guard(r, l, expected):  # noqa: E741
    assert radial_guard(r, l) is expected
    assert bool(radial_guard_array(np.array([r]), l)[0]) is expected


@pytest.mark.parametrize(
    "x0,x1,expected",
    [
        (0.0, 2.0, 0.5 * math.pi),
        (0.0, -2.0, -0.5 * math.pi),
        (0.0, 0.0, 0.0),
        (5e-9, 1.0, 0.5 * math.pi),
        (-1.0, 1.0, 0.75 * math.pi),
        (1.0, -1.0, -0.25 * math.pi),
    ],
)
def test_azimuth(x0, x1, expected):
    assert azimuth(x0, x1) == pytest.approx(expected)


def test_azimuth_array_matches_scalar():
    x0 = np.array([0.0, 0.0, 0.0, 5e-9, -1.0, 1.0])
    x1 = np.array([2.0, -2.0, 0.0, 1.0, 1.0, -1.0])
    expected = [azimuth(a, b) for a, b in zip(x0, x1)]
    np.testing.assert_allclose(azimuth_array(x0, x1), expected)


def test_azimuth_custom_tolerance():
    assert azimuth(1e-3, 1.0, tolerance=1e-2) == pytest.approx(0.5 * math.pi)
    assert azimuth(1e-3, 1.0) == pytest.approx(math.atan2(1.0, 1e-3))


def test_gamma_ratio():
    assert gamma_ratio(5, 3) == pytest.approx(12.0)
    assert gamma_ratio(1, 3) == pytest.approx(0.5)


def test_math_error_handler_raises_and_restores():
    before = np.geterr()
    with pytest.raises(FloatingPointError):
        with math_error_handler():
            np.sqrt(np.array([-1.0]))
    assert np.geterr() == before


def test_math_error_handler_custom_policy():
    with math_error_handler(numpy_policy={'invalid': 'ignore'}, special_policy={}):
        result = np.sqrt(np.array([-1.0]))
    assert np.isnan(result[0])
