#!/usr/bin/env python3
"""Validate the symbolic Legendre table and the CSV output of sphharm_main.

The table check compares every P_l^m built by :class:`LegendreTable` against
:func:`scipy.special.lpmv` on a grid of z values.  Negative orders follow the
relation P_l^{-m} = Gamma(l-m+1)/Gamma(l+m+1) P_l^m used by the table, so the
reference for m < 0 is built from lpmv at |m| rather than from lpmv directly.

The CSV check makes sure a ``ylm_values.csv`` is readable, has the expected
columns and contains finite numbers only.
"""

from __future__ import annotations

import argparse
import csv
import logging
import math
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.special import SpecialFunctionError, lpmv

from sphharm.legendre_module import LegendreTable
from sphharm.math_utils import gamma_ratio, math_error_handler

logger = logging.getLogger(__name__)

DEFAULT_Z_VALUES = (-0.95, -0.7, -0.3, 0.0, 0.3, 0.5, 0.95)

REQUIRED_COLUMNS = ['index', 'x0', 'x1', 'x2', 'l', 'm', 'real', 'imag']
NUMERIC_COLUMNS = ['x0', 'x1', 'x2', 'real', 'imag']


@dataclass
class Mismatch:
    l: int  # noqa: E741
    m: int
    max_error: float

    def describe(self) -> str:
        return f"P_{self.l}^{self.m}: max relative deviation {self.max_error:.3g}"


def reference_legendre(l: int, m: int, z: np.ndarray) -> np.ndarray:  # noqa: E741
    if m >= 0:
        return lpmv(m, l, z)
    return gamma_ratio(l + m + 1, l - m + 1) * lpmv(-m, l, z)


def validate_table(l_max: int, z_values: Sequence[float] = DEFAULT_Z_VALUES, tolerance: float = 1e-9,
                   table: Optional[LegendreTable] = None) -> List[Mismatch]:
    """Return every (l, m) whose polynomial deviates from the scipy reference."""
    if table is None:
        table = LegendreTable(l_max)
    z = np.asarray(z_values, dtype=float)

    failures: List[Mismatch] = []
    for l in range(l_max + 1):  # noqa: E741
        for m in range(l, -l - 1, -1):
            ours = table.get(l, m).evaluate(z)
            ref = reference_legendre(l, m, z)
            scale = np.maximum(np.abs(ref), 1.0)
            error = float(np.max(np.abs(ours - ref) / scale))
            logger.debug("P_%d^%d max deviation %.3g", l, m, error)
            if error > tolerance:
                failures.append(Mismatch(l, m, error))
    return failures


def _read_csv(filepath: str) -> Tuple[List[Dict[str, str]], List[str]]:
    with open(filepath, 'r', newline='', encoding='utf-8') as csvfile:
        reader = csv.DictReader(csvfile)
        rows = list(reader)
        return rows, reader.fieldnames or []


def validate_csv_file(filepath: str) -> Tuple[bool, str]:
    """Check a ylm_values.csv; returns ``(ok, message)``."""
    if not os.path.exists(filepath):
        return False, f"file does not exist: {filepath}"

    rows, columns = _read_csv(filepath)

    if not rows:
        return False, "file is empty"

    missing = set(REQUIRED_COLUMNS) - set(columns)
    if missing:
        return False, f"missing columns: {sorted(missing)}"

    for row_number, row in enumerate(rows, start=1):
        for column in NUMERIC_COLUMNS:
            raw = row.get(column, '')
            try:
                value = float(raw)
            except ValueError:
                return False, f"row {row_number}: column {column} is not a number ({raw!r})"
            if math.isnan(value) or math.isinf(value):
                return False, f"row {row_number}: column {column} is not finite"

    return True, f"{len(rows)} rows"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Validate the associated Legendre table and CSV output')
    parser.add_argument('--l-max', type=int, default=8, help='highest degree to check')
    parser.add_argument('--tolerance', type=float, default=1e-9, help='maximum relative deviation')
    parser.add_argument('--csv', default=None, help='ylm_values.csv to validate')
    parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    success = True

    try:
        with math_error_handler():
            failures = validate_table(args.l_max, tolerance=args.tolerance)
    except (FloatingPointError, SpecialFunctionError) as exc:
        print(f"✗ numerical failure while checking the table: {exc}")
        return 1

    if failures:
        success = False
        for failure in failures:
            print(f"✗ {failure.describe()}")
    else:
        print(f"✓ table matches scipy.special.lpmv up to l = {args.l_max}")

    if args.csv:
        valid, msg = validate_csv_file(args.csv)
        status = "✓" if valid else "✗"
        print(f"{status} {os.path.basename(args.csv)}: {msg}")
        success = success and valid

    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
