#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Polynomial algebra module
=========================

Terms of the form ``fac * z^zexp * (1-z^2)^(qexp/2)`` and polynomials built
from them.  Every associated Legendre polynomial of integer degree and order
is a finite sum of such terms.
"""

from __future__ import annotations

from math import fsum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np


class PolyTerm:
    """A single term ``fac * z^zexp * sqrt(1-z^2)^qexp``."""

    __slots__ = ("zexp", "qexp", "fac")

    def __init__(self, zexp: int, qexp: int, fac: float):
        if zexp < 0 or qexp < 0:
            raise ValueError(f"exponents must be non-negative, got zexp={zexp}, qexp={qexp}")
        self.zexp = int(zexp)
        self.qexp = int(qexp)
        self.fac = float(fac)

    @property
    def key(self) -> Tuple[int, int]:
        return (self.zexp, self.qexp)

    def copy(self) -> "PolyTerm":
        return PolyTerm(self.zexp, self.qexp, self.fac)

    def copy_z_plus_1(self) -> "PolyTerm":
        return PolyTerm(self.zexp + 1, self.qexp, self.fac)

    def copy_q_plus_1(self) -> "PolyTerm":
        return PolyTerm(self.zexp, self.qexp + 1, self.fac)

    def scale(self, factor: float) -> None:
        self.fac *= factor

    def add(self, amount: float) -> None:
        self.fac += amount

    def evaluate(self, z):
        """Evaluate at *z* (scalar or array); *z* must lie in ``[-1, 1]``."""
        return self.fac * np.sqrt(1.0 - z * z) ** self.qexp * z ** self.zexp

    def as_string(self) -> str:
        if self.zexp == 0 and self.qexp == 0:
            return f"{self.fac}"

        parts = []
        if self.qexp > 0:
            if self.qexp % 2 == 0:
                parts.append(f"(1-z^2)^{self.qexp // 2}")
            else:
                parts.append(f"(1-z^2)^{self.qexp}/2")
        if self.zexp > 0:
            parts.append(f"z^{self.zexp}")
        parts.append(f"{self.fac}")
        return " * ".join(parts)

    def __repr__(self) -> str:
        return f"PolyTerm(zexp={self.zexp}, qexp={self.qexp}, fac={self.fac!r})"


class LegendrePolynomial:
    """Sum of :class:`PolyTerm` with like terms merged on insertion.

    Terms are keyed by their ``(zexp, qexp)`` pair.  The contributions to
    each key are summed with :func:`math.fsum`, so adding the same set of
    terms in any order yields an equal polynomial.  The polynomial owns
    copies of every term it holds.
    """

    def __init__(self, terms: Optional[Iterable[PolyTerm]] = None):
        self._terms: Dict[Tuple[int, int], PolyTerm] = {}
        self._parts: Dict[Tuple[int, int], List[float]] = {}
        if terms is not None:
            for term in terms:
                self.add_term(term)

    def add_term(self, term: PolyTerm) -> None:
        key = term.key
        existing = self._terms.get(key)
        if existing is not None:
            parts = self._parts[key]
            parts.append(term.fac)
            existing.fac = fsum(parts)
        else:
            self._terms[key] = term.copy()
            self._parts[key] = [term.fac]

    def add_polynomial(self, other: "LegendrePolynomial") -> None:
        for term in other.terms:
            self.add_term(term)

    def scale(self, factor: float) -> None:
        for key, term in self._terms.items():
            term.scale(factor)
            self._parts[key] = [term.fac]

    def copy(self) -> "LegendrePolynomial":
        return LegendrePolynomial(self._terms.values())

    def copy_z_plus_1(self) -> "LegendrePolynomial":
        """New polynomial equal to ``z * self``."""
        return LegendrePolynomial(term.copy_z_plus_1() for term in self._terms.values())

    def copy_q_plus_1(self) -> "LegendrePolynomial":
        """New polynomial equal to ``sqrt(1-z^2) * self``."""
        return LegendrePolynomial(term.copy_q_plus_1() for term in self._terms.values())

    def evaluate(self, z):
        """Evaluate at *z*; the empty polynomial is identically zero."""
        value = np.zeros_like(z, dtype=float) if isinstance(z, np.ndarray) else 0.0
        for term in self._terms.values():
            value = value + term.evaluate(z)
        return value

    @property
    def terms(self) -> Tuple[PolyTerm, ...]:
        return tuple(term.copy() for term in self._terms.values())

    def as_string(self) -> str:
        lines = []
        for i, term in enumerate(self._terms.values()):
            prefix = "   " if i == 0 else " + "
            lines.append(prefix + term.as_string())
        return "\n".join(lines)

    def __iter__(self) -> Iterator[PolyTerm]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LegendrePolynomial):
            return NotImplemented
        return self._as_mapping() == other._as_mapping()

    def _as_mapping(self) -> Dict[Tuple[int, int], float]:
        return {key: term.fac for key, term in self._terms.items()}

    def __repr__(self) -> str:
        return f"LegendrePolynomial({list(self._terms.values())!r})"


__all__ = ["LegendrePolynomial", "PolyTerm"]
