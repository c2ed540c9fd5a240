from typing import Tuple

import torch
from torch import Tensor

from ._b_spline_knots import b_spline_knots


def b_spline_nonzero_components(
    t: Tensor,
    grid: Tensor,
    degree: int,
) -> Tuple[Tensor, Tensor]:
    """
    Evaluate the B-spline basis functions that are non-zero at each point.

    On any grid segment only ``degree + 1`` consecutive basis functions of the
    clamped basis over ``grid`` are non-zero. This returns the index of the
    leftmost one and the values of all of them, without touching the rest
    of the basis.

    Parameters
    ----------
    t : Tensor
        Evaluation points, shape (*query_shape).
    grid : Tensor
        Breakpoints, shape (n_grid,). Must be strictly increasing.
    degree : int
        Polynomial degree.

    Returns
    -------
    left : Tensor
        ``int64`` tensor, shape (*query_shape). Index of the first non-zero
        basis function; ``0 <= left <= n_grid - 2``.
    values : Tensor
        Shape (*query_shape, degree + 1). ``values[..., b]`` is the value of
        basis function ``left + b``. Zero for points outside the grid.

    Raises
    ------
    KnotError
        If the grid has fewer than 2 points or is not strictly increasing.
    DegreeError
        If degree is negative.

    Notes
    -----
    Uses the triangular scheme of de Boor (Piegl & Tiller, "The NURBS Book",
    algorithm A2.2). The last grid point belongs to the last segment.
    """
    knots = b_spline_knots(grid, degree)

    query_shape = t.shape
    t_flat = t.reshape(-1)

    segment = torch.searchsorted(grid, t_flat, right=True) - 1
    segment = segment.clamp(0, grid.shape[0] - 2)
    span = segment + degree

    # left[j] = t - knots[span + 1 - j], right[j] = knots[span + j] - t
    left = [None] + [t_flat - knots[span + 1 - j] for j in range(1, degree + 1)]
    right = [None] + [knots[span + j] - t_flat for j in range(1, degree + 1)]

    values = [torch.ones_like(t_flat)]
    for j in range(1, degree + 1):
        saved = torch.zeros_like(t_flat)
        next_values = []
        for r in range(j):
            temp = values[r] / (right[r + 1] + left[j - r])
            next_values.append(saved + right[r + 1] * temp)
            saved = left[j - r] * temp
        next_values.append(saved)
        values = next_values

    values = torch.stack(values, dim=-1)

    outside = (t_flat < grid[0]) | (t_flat > grid[-1])
    values = torch.where(outside.unsqueeze(-1), 0.0, values)

    return (
        segment.reshape(query_shape),
        values.reshape(*query_shape, degree + 1),
    )
