from tensordict.tensorclass import tensorclass
from torch import Tensor


@tensorclass
class BSpline:
    """B-spline representation with knots and control points.

    Attributes
    ----------
    knots : Tensor
        Knot vector, shape (n_knots,). Non-decreasing.
    control_points : Tensor
        Control points, shape (n_control, *y_dim) where n_control = n_knots - degree - 1.
        For a basis built on a grid with ``b_spline_knots`` these are the
        amplitudes that ``gauss_hermite_matrix`` maps to Gauss-Hermite
        coefficients.
    degree : int
        Polynomial degree (stored as metadata, not tensor)
    extrapolate : str
        How to handle out-of-domain queries: "error", "clamp", "zero"
    """

    knots: Tensor
    control_points: Tensor
    degree: int
    extrapolate: str

    def __call__(self, t: Tensor) -> Tensor:
        from ._b_spline_evaluate import b_spline_evaluate

        return b_spline_evaluate(self, t)
