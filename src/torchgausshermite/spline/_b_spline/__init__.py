from ._b_spline import BSpline
from ._b_spline_basis import b_spline_basis
from ._b_spline_evaluate import b_spline_evaluate
from ._b_spline_fit import b_spline_fit
from ._b_spline_knots import b_spline_knots
from ._b_spline_nonzero_components import b_spline_nonzero_components

__all__ = [
    "BSpline",
    "b_spline_basis",
    "b_spline_evaluate",
    "b_spline_fit",
    "b_spline_knots",
    "b_spline_nonzero_components",
]
