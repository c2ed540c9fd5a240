"""Gauss-Hermite polynomials in the line-of-sight velocity normalization."""

from ._gauss_hermite_polynomial_array import (
    gauss_hermite_polynomial_array,
)
from ._gauss_hermite_polynomial_norm import (
    gauss_hermite_polynomial_norm,
)
from ._gauss_hermite_polynomial_weight import (
    gauss_hermite_polynomial_weight,
)

__all__ = [
    "gauss_hermite_polynomial_array",
    "gauss_hermite_polynomial_norm",
    "gauss_hermite_polynomial_weight",
]
