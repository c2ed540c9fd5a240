"""torchgausshermite: Gauss-Hermite expansions of functions in PyTorch."""

from . import (
    gauss_hermite,
    optimization,
    polynomial,
    quadrature,
    spline,
)

__all__ = [
    "gauss_hermite",
    "optimization",
    "polynomial",
    "quadrature",
    "spline",
]

__version__ = "0.1.0"
