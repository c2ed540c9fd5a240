"""B-spline bases for PyTorch tensors.

B-Splines
---------
b_spline_knots
    Clamped knot vector of the basis defined on a grid.
b_spline_basis
    Evaluate all B-spline basis functions.
b_spline_nonzero_components
    Evaluate only the basis functions that are non-zero at each point.
b_spline_evaluate
    Evaluate a B-spline at query points.
b_spline_fit
    Fit a B-spline to data points.

Data Types
----------
BSpline
    B-spline curve.

Exceptions
----------
SplineError
    Base exception for spline operations.
ExtrapolationError
    Query point outside spline domain.
KnotError
    Invalid knot vector or grid.
DegreeError
    Invalid degree for given knots.
"""

from ._b_spline import (
    BSpline,
    b_spline_basis,
    b_spline_evaluate,
    b_spline_fit,
    b_spline_knots,
    b_spline_nonzero_components,
)
from ._degree_error import DegreeError
from ._extrapolation_error import ExtrapolationError
from ._knot_error import KnotError
from ._spline_error import SplineError

__all__ = [
    "BSpline",
    "DegreeError",
    "ExtrapolationError",
    "KnotError",
    "SplineError",
    "b_spline_basis",
    "b_spline_evaluate",
    "b_spline_fit",
    "b_spline_knots",
    "b_spline_nonzero_components",
]
