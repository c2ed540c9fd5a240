from ._spline_error import SplineError


class KnotError(SplineError):
    """Raised for invalid knot vectors or grids (non-monotonic, too short)."""

    pass
