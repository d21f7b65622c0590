#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration parameters
========================

Central place for every tunable parameter of the package.
"""

# ==================== Legendre table ====================
LEGENDRE = {
    # Degree built eagerly when a table is constructed without an explicit maximum.
    'default_max_order': 0,
}

# ==================== Spherical harmonics ====================
SPHERICAL = {
    # |x0| below this is treated as lying on the x0 = 0 plane when computing phi.
    'phi_axis_tolerance': 1e-8,
}

# ==================== Math error handling ====================
MATH_ERRORS = {
    # Keyword arguments for numpy.errstate
    'numpy': {'divide': 'raise', 'over': 'raise', 'invalid': 'raise', 'under': 'ignore'},
    # Keyword arguments for scipy.special.errstate
    'special': {'overflow': 'raise', 'domain': 'raise', 'singular': 'raise'},
}

# ==================== Output ====================
OUTPUT = {
    'csv_filename': 'ylm_values.csv',
    'float_format': '.12g',
    'output_dir': None,
}

# ==================== Debug options ====================
DEBUG = {
    'verbose': False,
    'progress_interval': 1000,
}
