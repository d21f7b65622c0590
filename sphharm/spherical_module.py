"""Complex spherical harmonics evaluated from the symbolic Legendre table."""

from __future__ import annotations

import cmath
from math import pi, sqrt
from typing import Optional, Tuple

import numpy as np

from .legendre_module import LegendreTable, check_lm
from .math_utils import (
    azimuth,
    azimuth_array,
    cos_theta,
    gamma_ratio,
    radial_guard,
    radial_guard_array,
    vector_norm,
)
from .polynomial_module import LegendrePolynomial


def normalization(l: int, m: int) -> float:  # noqa: E741
    """``sqrt((2l+1)/(4 pi) * Gamma(l-m+1)/Gamma(l+m+1))``."""
    return sqrt((2.0 * l + 1.0) / (4.0 * pi) * gamma_ratio(l - m + 1.0, l + m + 1.0))


class SphericalHarmonic:
    """Evaluate Y_l^m(x) = N_l^m P_l^m(cos theta) exp(i m phi).

    The most recently used polynomial is kept so that repeated evaluations
    of the same (l, m) at many points do not copy it out of the table again.

    Note that the magnitude of the point is not folded into the result; only
    the direction matters.  The origin, and points whose ``r**l`` underflows
    to zero, evaluate to ``0j``; an ``r**l`` too large to represent does not
    reject the point.
    """

    def __init__(self, max_order: Optional[int] = None):
        self._table = LegendreTable(max_order)
        self._cached_lm: Optional[Tuple[int, int]] = None
        self._cached_poly: Optional[LegendrePolynomial] = None

    @property
    def table(self) -> LegendreTable:
        return self._table

    def _load_poly(self, l: int, m: int) -> LegendrePolynomial:  # noqa: E741
        if self._cached_lm != (l, m):
            self._cached_poly = self._table.get(l, m)
            self._cached_lm = (l, m)
        return self._cached_poly

    def evaluate(self, l: int, m: int, x0: float, x1: float, x2: float) -> complex:  # noqa: E741
        check_lm(l, m)

        if not radial_guard(vector_norm((x0, x1, x2)), l):
            return complex(0.0, 0.0)

        pfac = normalization(l, m)
        eimphi = cmath.rect(1.0, m * azimuth(x0, x1))
        poly = self._load_poly(l, m)
        return eimphi * float(pfac * poly.evaluate(cos_theta(x0, x1, x2)))

    def evaluate_many(self, l: int, m: int, positions) -> np.ndarray:  # noqa: E741
        """Vectorized :meth:`evaluate` over an ``(N, 3)`` array of points."""
        check_lm(l, m)

        positions = np.asarray(positions, dtype=float).reshape(-1, 3)
        x0, x1, x2 = positions[:, 0], positions[:, 1], positions[:, 2]

        r = np.hypot(np.hypot(x0, x1), x2)
        valid = radial_guard_array(r, l)
        costh = x2 / np.where(valid, r, 1.0)

        pfac = normalization(l, m)
        phase = np.exp(1j * m * azimuth_array(x0, x1))
        values = pfac * self._load_poly(l, m).evaluate(costh) * phase
        return np.where(valid, values, 0.0 + 0.0j)

    def as_string(self, l: int, m: int) -> str:  # noqa: E741
        return self._table.get(l, m).as_string()


__all__ = ["SphericalHarmonic", "normalization"]
