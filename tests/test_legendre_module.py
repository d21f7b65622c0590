# Tests for sphharm/legendre_module.py

import math

import numpy as np
import pytest
from scipy.special import gamma, lpmv

from sphharm.legendre_module import LegendreTable, lm_to_index
from sphharm.polynomial_module import LegendrePolynomial, PolyTerm

SAMPLE_Z = [-0.7, 0.0, 0.3, 0.95]


@pytest.fixture(scope="module")
def table():
    return LegendreTable(6)


def test_seed_entry():
    t = LegendreTable()
    assert t.max_order == 0
    assert len(t) == 1
    assert t.get(0, 0) == LegendrePolynomial([PolyTerm(0, 0, 1.0)])


@pytest.mark.parametrize("z", [-1.0, -0.5, 0.0, 0.25, 1.0])
def test_p00_is_one(table, z):
    assert table.get(0, 0).evaluate(z) == pytest.approx(1.0)


@pytest.mark.parametrize("l", range(7))
def test_values_at_one(table, l):  # noqa: E741
    for m in range(-l, l + 1):
        expected = 1.0 if m == 0 else 0.0
        assert table.get(l, m).evaluate(1.0) == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize(
    "l,m,closed_form",
    [
        (1, 1, lambda z: -math.sqrt(1.0 - z * z)),
        (1, 0, lambda z: z),
        (1, -1, lambda z: -0.5 * math.sqrt(1.0 - z * z)),
        (2, 0, lambda z: 0.5 * (3.0 * z * z - 1.0)),
        (2, 1, lambda z: -3.0 * z * math.sqrt(1.0 - z * z)),
        (2, 2, lambda z: 3.0 * (1.0 - z * z)),
        (3, 0, lambda z: 0.5 * (5.0 * z ** 3 - 3.0 * z)),
    ],
)
def test_closed_forms(table, l, m, closed_form):  # noqa: E741
    poly = table.get(l, m)
    for z in SAMPLE_Z:
        assert poly.evaluate(z) == pytest.approx(closed_form(z), abs=1e-12)


@pytest.mark.parametrize("l", range(1, 6))
def test_recurrence_consistency(table, l):  # noqa: E741
    for m in range(0, l + 1):
        for z in SAMPLE_Z:
            lhs = (l - m + 1) * table.get(l + 1, m).evaluate(z)
            rhs = (2 * l + 1) * z * table.get(l, m).evaluate(z)
            if m < l:
                rhs -= (l + m) * table.get(l - 1, m).evaluate(z)
            assert lhs == pytest.approx(rhs, rel=1e-10, abs=1e-10)


@pytest.mark.parametrize("l,m", [(3, 1), (3, 2), (4, 3), (5, 1)])
def test_negative_order_relation(table, l, m):  # noqa: E741
    for z in SAMPLE_Z:
        lhs = table.get(l, -m).evaluate(z) * gamma(l + m + 1)
        rhs = table.get(l, m).evaluate(z) * gamma(l - m + 1)
        assert lhs == pytest.approx(rhs, rel=1e-12, abs=1e-12)


@pytest.mark.parametrize("l", range(9))
def test_matches_scipy_lpmv(l):  # noqa: E741
    t = LegendreTable(8)
    z = np.linspace(-0.95, 0.95, 9)
    for m in range(0, l + 1):
        np.testing.assert_allclose(t.get(l, m).evaluate(z), lpmv(m, l, z), rtol=1e-9, atol=1e-9)


def test_get_is_idempotent(table):
    assert table.get(3, 1) == table.get(3, 1)


def test_eager_and_lazy_growth_agree():
    large = LegendreTable(5)
    small = LegendreTable(3)
    lazy = LegendreTable()

    for m in range(-3, 4):
        assert large.get(3, m) == small.get(3, m)
        assert lazy.get(3, m) == small.get(3, m)


def test_lazy_growth_builds_full_degrees():
    t = LegendreTable()
    t.get(4, 2)
    assert t.max_order == 4
    assert len(t) == 25


def test_entries_follow_dense_index(table):
    for position, (l, m, _) in enumerate(table.entries()):  # noqa: E741
        assert lm_to_index(l, m) == position
        assert abs(m) <= l
    assert len(table) == (table.max_order + 1) ** 2


def test_get_returns_copy(table):
    poly = table.get(2, 1)
    before = poly.evaluate(0.3)
    poly.scale(0.0)
    poly.add_term(PolyTerm(5, 0, 1.0))
    assert table.get(2, 1).evaluate(0.3) == pytest.approx(before)


@pytest.mark.parametrize("l,m", [(-1, 0), (2, 3), (2, -3), (0, 1)])
def test_invalid_requests_fail_fast(l, m):  # noqa: E741
    t = LegendreTable()
    with pytest.raises(ValueError):
        t.get(l, m)
    assert t.max_order == 0
