import torch
from torch import Tensor

from ._b_spline import BSpline
from ._b_spline_basis import b_spline_basis
from ._b_spline_knots import b_spline_knots


def b_spline_fit(
    x: Tensor,
    y: Tensor,
    grid: Tensor,
    degree: int = 3,
    extrapolate: str = "zero",
) -> BSpline:
    """
    Least-squares B-spline on the clamped basis over ``grid``.

    The control points of the result are the amplitudes that
    ``gauss_hermite_matrix`` with the same ``grid`` and ``degree`` maps to
    Gauss-Hermite coefficients.

    Parameters
    ----------
    x : Tensor
        Sample abscissae, shape (n_points,).
    y : Tensor
        Sample values, shape (n_points,) or (n_points, *y_dim).
    grid : Tensor
        Breakpoints, shape (n_grid,). Must be strictly increasing.
    degree : int
        Polynomial degree.
    extrapolate : str
        Extrapolation mode of the returned spline.

    Returns
    -------
    BSpline
        Control points of shape (n_grid + degree - 1, *y_dim).

    Raises
    ------
    KnotError
        If the grid is invalid.
    DegreeError
        If degree is negative.
    ValueError
        If there are fewer samples than basis functions.
    """
    knots = b_spline_knots(grid, degree)
    n_control = knots.shape[0] - degree - 1

    n_points = x.shape[0]
    if n_points < n_control:
        raise ValueError(
            f"Need at least {n_control} samples for {n_control} control "
            f"points, got {n_points}"
        )

    # Collocation matrix, (n_points, n_control)
    collocation = b_spline_basis(x, knots, degree)
    solution = torch.linalg.lstsq(
        collocation, y.reshape(n_points, -1)
    ).solution

    return BSpline(
        knots=knots,
        control_points=solution.reshape(n_control, *y.shape[1:]),
        degree=degree,
        extrapolate=extrapolate,
        batch_size=[],
    )
