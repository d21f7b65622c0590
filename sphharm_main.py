#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Spherical harmonic evaluator - main script
==========================================

Usage:
    python sphharm_main.py 2 1 --point 1 0 1 --point 0 2 0
    python sphharm_main.py 6 -3 --xyz-file frame.xyz --output-dir ./results
    python sphharm_main.py 3 0 --max-order 4 --print-table -v
"""

from __future__ import annotations

import argparse
import csv
import logging
import os
import sys
from typing import Dict, List, Optional, Sequence

import numpy as np
from scipy.special import SpecialFunctionError

from sphharm.config import DEBUG, OUTPUT
from sphharm.math_utils import math_error_handler
from sphharm.spherical_module import SphericalHarmonic

logger = logging.getLogger(__name__)

CSV_COLUMNS = ['index', 'x0', 'x1', 'x2', 'l', 'm', 'real', 'imag']


# ==================== XYZ reading ====================

def read_xyz_positions(xyz_file) -> List[np.ndarray]:
    """Read every frame of an XYZ file as an ``(N, 3)`` array of positions.

    Lines that do not start a frame with an atom count are skipped; a
    truncated trailing frame is dropped.
    """
    frames: List[np.ndarray] = []

    with open(xyz_file, 'r') as f:
        lines = f.readlines()

    i = 0
    while i < len(lines):
        try:
            n_atoms = int(lines[i].strip())
        except ValueError:
            i += 1
            continue

        if i + n_atoms + 1 >= len(lines):
            break

        i += 2  # count and comment lines

        positions: List[List[float]] = []
        for j in range(n_atoms):
            parts = lines[i + j].strip().split()
            if len(parts) >= 4:
                positions.append([float(parts[1]), float(parts[2]), float(parts[3])])

        frames.append(np.asarray(positions, dtype=float).reshape(-1, 3))
        i += n_atoms

    return frames


def centered(positions: np.ndarray) -> np.ndarray:
    """Positions relative to their geometric center."""
    if positions.size == 0:
        return positions
    return positions - positions.mean(axis=0)


# ==================== Output helpers ====================

def ensure_directory(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_csv(path: str, fieldnames: List[str], rows: List[Dict[str, object]]):
    with open(path, 'w', newline='') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow({key: row.get(key, '') for key in fieldnames})


def format_complex(value: complex, float_format: Optional[str] = None) -> str:
    if float_format is None:
        float_format = OUTPUT['float_format']
    return f"({value.real:{float_format}}, {value.imag:{float_format}})"


# ==================== Evaluation ====================

def evaluate_points(harmonic: SphericalHarmonic, l: int, m: int, points: Sequence[Sequence[float]]):  # noqa: E741
    """Evaluate Y_l^m at every point and return one row dict per point."""
    rows: List[Dict[str, object]] = []
    for idx, (x0, x1, x2) in enumerate(points):
        if (idx + 1) % DEBUG['progress_interval'] == 0:
            logger.info("progress: %d/%d", idx + 1, len(points))
        value = harmonic.evaluate(l, m, x0, x1, x2)
        rows.append({
            'index': idx,
            'x0': x0,
            'x1': x1,
            'x2': x2,
            'l': l,
            'm': m,
            'real': value.real,
            'imag': value.imag,
        })
    return rows


def print_table(harmonic: SphericalHarmonic, max_order: int) -> None:
    harmonic.table.grow_to(max_order)
    for l, m, poly in harmonic.table.entries():  # noqa: E741
        if l > max_order:
            break
        print(f"P_{l}^{m}(z) =")
        print(poly.as_string())


def collect_points(args) -> List[List[float]]:
    points: List[List[float]] = []
    if args.point:
        points.extend([list(p) for p in args.point])
    if args.xyz_file:
        for frame in read_xyz_positions(args.xyz_file):
            points.extend(centered(frame).tolist())
    if not points:
        points.append([0.0, 0.0, 1.0])
    return points


# ==================== CLI ====================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Evaluate complex spherical harmonics Y_l^m at Cartesian points',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('l', type=int, help='degree l >= 0')
    parser.add_argument('m', type=int, help='order m, |m| <= l')
    parser.add_argument('--point', nargs=3, type=float, action='append', metavar=('X0', 'X1', 'X2'),
                        help='evaluation point (repeatable)')
    parser.add_argument('--xyz-file', default=None, help='XYZ file; every atom position is used, centered per frame')
    parser.add_argument('--max-order', type=int, default=0, help='degree to build eagerly')
    parser.add_argument('--print-table', action='store_true', help='print every polynomial up to the requested degree')
    parser.add_argument('--output-dir', default=OUTPUT['output_dir'], help='write a CSV of the values here')
    parser.add_argument('-v', '--verbose', action='store_true', default=DEBUG['verbose'], help='enable debug logging')
    return parser.parse_args(argv)


def run(args) -> int:
    if args.l < 0 or abs(args.m) > args.l:
        print(f"ERROR: invalid (l, m) = ({args.l}, {args.m}); need l >= 0 and |m| <= l")
        return 1
    if args.xyz_file and not os.path.exists(args.xyz_file):
        print(f"ERROR: file does not exist: {args.xyz_file}")
        return 1

    harmonic = SphericalHarmonic(max(args.max_order, 0))

    if args.print_table:
        print_table(harmonic, max(args.l, args.max_order))

    points = collect_points(args)
    logger.info("evaluating Y_%d^%d at %d points", args.l, args.m, len(points))
    rows = evaluate_points(harmonic, args.l, args.m, points)

    for row in rows:
        value = complex(row['real'], row['imag'])
        print(f"Y_{args.l}^{args.m}({row['x0']}, {row['x1']}, {row['x2']}) = {format_complex(value)}")

    if args.output_dir:
        ensure_directory(args.output_dir)
        path = os.path.join(args.output_dir, OUTPUT['csv_filename'])
        write_csv(path, CSV_COLUMNS, rows)
        logger.info("wrote %s", path)

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        with math_error_handler():
            return run(args)
    except (FloatingPointError, SpecialFunctionError) as exc:
        print(f"ERROR: numerical failure: {exc}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
