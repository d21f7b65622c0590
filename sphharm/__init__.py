"""Symbolic associated Legendre polynomials and complex spherical harmonics."""

__all__ = [
    "config",
    "math_utils",
    "polynomial_module",
    "legendre_module",
    "spherical_module",
]

__version__ = "0.1.0"
