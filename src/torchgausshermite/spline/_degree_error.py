from ._spline_error import SplineError


class DegreeError(SplineError):
    """Raised when degree is invalid or unsupported for given knots."""

    pass
