"""Orthogonal polynomial families.

Gauss-Hermite Polynomials
-------------------------
gauss_hermite_polynomial_array
    Values of H_0, ..., H_n at points by three-term recurrence.
gauss_hermite_polynomial_weight
    Weight function exp(-x^2/2).
gauss_hermite_polynomial_norm
    Integral of H_n(x) exp(-x^2/2) over the real axis.

Exceptions
----------
PolynomialError
    Base exception for polynomial operations.
DegreeError
    Invalid degree.
"""

from ._degree_error import DegreeError
from ._gauss_hermite_polynomial import (
    gauss_hermite_polynomial_array,
    gauss_hermite_polynomial_norm,
    gauss_hermite_polynomial_weight,
)
from ._polynomial_error import PolynomialError

__all__ = [
    # Gauss-Hermite
    "gauss_hermite_polynomial_array",
    "gauss_hermite_polynomial_norm",
    "gauss_hermite_polynomial_weight",
    # Exceptions
    "DegreeError",
    "PolynomialError",
]
