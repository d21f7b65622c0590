#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Associated Legendre table module
================================

Builds associated Legendre polynomials P_l^m(z) (Condon-Shortley phase
included) as explicit :class:`LegendrePolynomial` objects, one full degree at
a time, from three sum rules:

1. P_{l+1}^{l+1} = -(2l+1) sqrt(1-z^2) P_l^l
2. (l-m+1) P_{l+1}^m = (2l+1) z P_l^m - (l+m) P_{l-1}^m
3. P_l^{-m} = Gamma(l-m+1)/Gamma(l+m+1) P_l^m

Entry (l, m) is stored at position ``l*l + l - m`` of an append-only list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .config import LEGENDRE
from .math_utils import gamma_ratio
from .polynomial_module import LegendrePolynomial, PolyTerm

logger = logging.getLogger(__name__)


def lm_to_index(l: int, m: int) -> int:  # noqa: E741
    """Dense table position of the entry for degree *l* and order *m*."""
    return l * l + l - m


def check_lm(l: int, m: int) -> None:  # noqa: E741
    """Raise ``ValueError`` unless ``l >= 0`` and ``|m| <= l``."""
    if l < 0:
        raise ValueError(f"degree l must be non-negative, got l={l}")
    if abs(m) > l:
        raise ValueError(f"order m must satisfy |m| <= l, got l={l}, m={m}")


@dataclass
class LegendreEntry:
    l: int  # noqa: E741
    m: int
    poly: LegendrePolynomial


class LegendreTable:
    """Append-only cache of P_l^m for every (l, m) up to ``max_order``.

    Parameters
    ----------
    max_order:
        Degree to build eagerly.  ``None`` uses ``config.LEGENDRE``.
        Higher degrees are built on demand by :meth:`get`.
    """

    def __init__(self, max_order: Optional[int] = None):
        if max_order is None:
            max_order = LEGENDRE['default_max_order']

        self._entries: List[LegendreEntry] = [
            LegendreEntry(0, 0, LegendrePolynomial([PolyTerm(0, 0, 1.0)]))
        ]
        self._max_order = 0
        self.grow_to(max_order)

    @property
    def max_order(self) -> int:
        return self._max_order

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, l: int, m: int) -> LegendrePolynomial:  # noqa: E741
        """Return a copy of P_l^m, growing the table if needed."""
        check_lm(l, m)
        self.grow_to(l)
        return self._poly_handle(l, m).copy()

    def grow_to(self, l: int) -> None:  # noqa: E741
        while l > self._max_order:
            self._grow_to_next_order()

    def entries(self) -> Iterator[Tuple[int, int, LegendrePolynomial]]:
        """Yield ``(l, m, poly)`` in table order; each poly is a copy."""
        for entry in self._entries:
            yield entry.l, entry.m, entry.poly.copy()

    # ------------------------------------------------------------------
    # Recurrence builder
    # ------------------------------------------------------------------

    def _poly_handle(self, l: int, m: int) -> LegendrePolynomial:  # noqa: E741
        # by reference; callers must copy before mutating
        return self._entries[lm_to_index(l, m)].poly

    def _append(self, l: int, m: int, poly: LegendrePolynomial) -> None:  # noqa: E741
        assert len(self._entries) == lm_to_index(l, m)
        self._entries.append(LegendreEntry(l, m, poly))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("l,m = %d,%d\n%s", l, m, poly.as_string())

    def _sumrule_top_order(self, l: int) -> None:  # noqa: E741
        # P_{l+1}^{l+1} = -(2l+1) sqrt(1-z^2) P_l^l
        poly = self._poly_handle(l, l).copy_q_plus_1()
        poly.scale(-(2 * l + 1.0))
        self._append(l + 1, l + 1, poly)

    def _sumrule_raise_degree(self, l: int, m: int) -> None:  # noqa: E741
        # (l-m+1) P_{l+1}^m = (2l+1) z P_l^m - (l+m) P_{l-1}^m
        poly = self._poly_handle(l, m).copy_z_plus_1()
        poly.scale((2 * l + 1) / (l - m + 1.0))
        if m < l:
            lower = self._poly_handle(l - 1, m).copy()
            lower.scale(-(l + m) / (l - m + 1.0))
            poly.add_polynomial(lower)
        self._append(l + 1, m, poly)

    def _sumrule_negative_order(self, l: int, m: int) -> None:  # noqa: E741
        # P_{l+1}^{m} = Gamma(l+1-|m|+1)/Gamma(l+1+|m|+1) P_{l+1}^{|m|}, m < 0
        poly = self._poly_handle(l + 1, -m).copy()
        poly.scale(gamma_ratio(l + m + 2, l - m + 2))
        self._append(l + 1, m, poly)

    def _grow_to_next_order(self) -> None:
        l = self._max_order  # noqa: E741
        logger.debug("building legendre polynomials of order %d", l + 1)

        for m in range(l + 1, -l - 2, -1):
            if m == l + 1:
                self._sumrule_top_order(l)
            elif m >= 0:
                self._sumrule_raise_degree(l, m)
            else:
                self._sumrule_negative_order(l, m)

        self._max_order += 1


__all__ = ["LegendreEntry", "LegendreTable", "check_lm", "lm_to_index"]
