import torch
from torch import Tensor

from .._degree_error import DegreeError
from .._knot_error import KnotError


def _check_grid(grid: Tensor, degree: int) -> None:
    if degree < 0:
        raise DegreeError(f"Degree must be non-negative, got {degree}")
    if grid.dim() != 1 or grid.shape[0] < 2:
        raise KnotError(
            f"Grid must be 1D with at least 2 points, got shape {tuple(grid.shape)}"
        )
    if not torch.all(grid[1:] > grid[:-1]):
        raise KnotError("Grid must be strictly increasing")


def b_spline_knots(grid: Tensor, degree: int) -> Tensor:
    """
    Clamped knot vector of the B-spline basis defined on a grid.

    The first and last grid points are repeated ``degree`` extra times, so
    the basis has ``len(grid) + degree - 1`` functions and interpolates its
    end control points.

    Parameters
    ----------
    grid : Tensor
        Breakpoints, shape (n_grid,). Must be strictly increasing.
    degree : int
        Polynomial degree.

    Returns
    -------
    knots : Tensor
        Shape (n_grid + 2 * degree,).

    Raises
    ------
    KnotError
        If the grid has fewer than 2 points or is not strictly increasing.
    DegreeError
        If degree is negative.

    Examples
    --------
    >>> b_spline_knots(torch.tensor([0.0, 1.0, 2.0]), 2)
    tensor([0., 0., 0., 1., 2., 2., 2.])
    """
    _check_grid(grid, degree)
    return torch.cat(
        [grid[:1].expand(degree), grid, grid[-1:].expand(degree)]
    )
