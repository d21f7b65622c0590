"""Small math helpers shared by the Legendre and spherical-harmonic modules.

Gamma ratios go through :func:`scipy.special.gamma` and numerical failures
are routed through :func:`math_error_handler`, which installs the error
policy from :mod:`sphharm.config` for the duration of a ``with`` block.
"""

from __future__ import annotations

from contextlib import contextmanager
from math import atan2, hypot, pi
from typing import Iterator, Optional, Sequence

import numpy as np
from scipy import special

from .config import MATH_ERRORS, SPHERICAL


Vector = Sequence[float]


def vector_norm(vec: Vector) -> float:
    """Euclidean norm of a 3D vector, free of overflow in the squares."""

    return hypot(vec[0], vec[1], vec[2])


def radial_guard(r: float, l: int) -> bool:  # noqa: E741
    """True when ``r**l > 0``; an overflowing power counts as positive.

    The origin (``r == 0``) is always rejected, also for ``l == 0``.
    """

    if not r > 0.0:
        return False
    try:
        return r ** l > 0.0
    except OverflowError:
        return True


def radial_guard_array(r: np.ndarray, l: int) -> np.ndarray:  # noqa: E741
    """Element-wise :func:`radial_guard`."""

    with np.errstate(over='ignore', under='ignore'):
        return (r > 0.0) & (r ** l > 0.0)


def sign(value: float) -> int:
    """Return ``-1``, ``0`` or ``1`` following the sign of *value*."""

    return (value > 0) - (value < 0)


def gamma_ratio(numerator: float, denominator: float) -> float:
    """Return ``Gamma(numerator) / Gamma(denominator)``."""

    return float(special.gamma(numerator) / special.gamma(denominator))


def cos_theta(x0: float, x1: float, x2: float) -> float:
    """Cosine of the colatitude of the point ``(x0, x1, x2)``.

    The origin has no direction; callers reject it with :func:`radial_guard`
    first, otherwise ``ZeroDivisionError`` is raised.
    """

    return x2 / vector_norm((x0, x1, x2))


def azimuth(x0: float, x1: float, tolerance: Optional[float] = None) -> float:
    """Azimuth of the point, measured from +x0 towards +x1.

    Points with ``|x0|`` below *tolerance* are treated as lying on the
    ``x0 = 0`` plane and get ``sign(x1) * pi / 2`` without calling atan2.
    """

    if tolerance is None:
        tolerance = SPHERICAL['phi_axis_tolerance']

    if abs(x0) < tolerance:
        return sign(x1) * 0.5 * pi
    return atan2(x1, x0)


def azimuth_array(x0: np.ndarray, x1: np.ndarray, tolerance: Optional[float] = None) -> np.ndarray:
    """Element-wise :func:`azimuth` for numpy arrays."""

    if tolerance is None:
        tolerance = SPHERICAL['phi_axis_tolerance']

    on_axis = np.abs(x0) < tolerance
    return np.where(on_axis, np.sign(x1) * 0.5 * pi, np.arctan2(x1, x0))


@contextmanager
def math_error_handler(numpy_policy=None, special_policy=None) -> Iterator[None]:
    """Install numpy and scipy.special error policies for the enclosed block.

    Both policies default to ``config.MATH_ERRORS``.  The previous settings
    are restored on exit, also when the block raises.
    """

    if numpy_policy is None:
        numpy_policy = MATH_ERRORS['numpy']
    if special_policy is None:
        special_policy = MATH_ERRORS['special']

    with np.errstate(**numpy_policy), special.errstate(**special_policy):
        yield


__all__ = [
    "azimuth",
    "azimuth_array",
    "cos_theta",
    "gamma_ratio",
    "math_error_handler",
    "radial_guard",
    "radial_guard_array",
    "sign",
    "vector_norm",
]
