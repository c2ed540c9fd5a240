from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._extrapolation_error import ExtrapolationError
from ._b_spline_basis import b_spline_basis

if TYPE_CHECKING:
    from ._b_spline import BSpline


def b_spline_evaluate(
    spline: BSpline,
    t: Tensor,
) -> Tensor:
    """
    Evaluate a B-spline at query points.

    Parameters
    ----------
    spline : BSpline
        B-spline with knots and control points
    t : Tensor
        Query points, shape (*query_shape)

    Returns
    -------
    y : Tensor
        Evaluated values, shape (*query_shape, *y_dim)

    Raises
    ------
    ExtrapolationError
        If any query point is outside the spline domain and
        spline.extrapolate == 'error'
    ValueError
        If spline.extrapolate is not a known mode.

    Notes
    -----
    B-spline evaluation: y(t) = sum_i B_{i,k}(t) * c_i
    where B_{i,k} are basis functions and c_i are control points.

    With extrapolate == 'zero' the spline is taken to vanish outside its
    domain, which is how a velocity distribution represented on a finite
    grid is integrated over the whole real axis.
    """
    knots = spline.knots
    control_points = spline.control_points
    degree = spline.degree
    extrapolate = spline.extrapolate

    # For clamped knots the domain is [knots[0], knots[-1]]
    t_min = knots[degree]
    t_max = knots[-(degree + 1)]
    outside = (t < t_min) | (t > t_max)

    if extrapolate == "error":
        if torch.any(outside):
            raise ExtrapolationError(
                f"Query points outside spline domain [{t_min.item()}, {t_max.item()}]"
            )
    elif extrapolate == "clamp":
        t = torch.clamp(t, t_min, t_max)
    elif extrapolate != "zero":
        raise ValueError(
            f"extrapolate must be 'error', 'clamp' or 'zero', got {extrapolate!r}"
        )

    # (*query_shape, n_control)
    basis = b_spline_basis(t, knots, degree)

    # (*query_shape, n_control) x (n_control, *y_dim) -> (*query_shape, *y_dim)
    y = torch.tensordot(basis, control_points, dims=([-1], [0]))

    if extrapolate == "zero":
        mask = outside.reshape(*outside.shape, *([1] * (control_points.dim() - 1)))
        y = torch.where(mask, 0.0, y)

    return y
