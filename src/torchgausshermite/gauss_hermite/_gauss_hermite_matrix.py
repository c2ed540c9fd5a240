"""Linear map from B-spline control points to Gauss-Hermite coefficients."""

import math
from functools import lru_cache
from typing import Union

import torch
from torch import Tensor

from torchgausshermite.polynomial import (
    DegreeError as PolynomialDegreeError,
    gauss_hermite_polynomial_array,
    gauss_hermite_polynomial_weight,
)
from torchgausshermite.quadrature import GaussLegendre, MAX_GAUSS_LEGENDRE_NODES
from torchgausshermite.spline import (
    DegreeError,
    b_spline_knots,
    b_spline_nonzero_components,
)

SUPPORTED_B_SPLINE_DEGREES = (0, 1, 2, 3)

_SQRT2 = math.sqrt(2.0)


def _num_gauss_legendre_nodes(degree: int, order: int) -> int:
    # Exact for the polynomial part B_b * H_m, degree + order
    return min(MAX_GAUSS_LEGENDRE_NODES, max((degree + order + 1) // 2 + 1, 3))


@lru_cache(maxsize=MAX_GAUSS_LEGENDRE_NODES)
def _gauss_legendre_rule(n: int) -> GaussLegendre:
    return GaussLegendre(n)


def gauss_hermite_matrix(
    degree: int,
    grid: Tensor,
    order: int,
    amplitude: Union[float, Tensor],
    center: Union[float, Tensor],
    width: Union[float, Tensor],
) -> Tensor:
    r"""
    Matrix mapping B-spline control points to Gauss-Hermite coefficients.

    For a spline :math:`s(x) = \sum_j p_j B_j(x)` on the clamped basis over
    ``grid``, the coefficients of :math:`s` for the given envelope are
    ``M @ p``. Unlike :func:`gauss_hermite_coefficients`, every segment is
    integrated with Gauss-Legendre quadrature, so the result does not depend
    on a sampling step.

    Parameters
    ----------
    degree : int
        Degree of the B-spline basis. One of 0, 1, 2 or 3.
    grid : Tensor
        Breakpoints, shape (n_grid,). Must be strictly increasing.
    order : int
        Highest coefficient index.
    amplitude, center, width : float or Tensor
        Envelope of the base Gaussian.

    Returns
    -------
    Tensor
        Shape (order + 1, n_grid + degree - 1).

    Raises
    ------
    DegreeError
        If ``degree`` is not supported (:class:`spline.DegreeError`) or
        ``order`` is negative (:class:`polynomial.DegreeError`).
    KnotError
        If the grid has fewer than 2 points or is not strictly increasing.

    Notes
    -----
    .. math::

        M_{m,j} = \frac{\sqrt{2}}{A} \sum_{s} \Delta x_s \sum_k w_k
            e^{-y_{sk}^2/2} H_m(y_{sk}) B_j(x_{sk}),
        \quad y_{sk} = \frac{x_{sk} - c}{w}

    with :math:`x_{sk}` the Gauss-Legendre nodes of segment :math:`s`. Only
    the ``degree + 1`` basis functions non-zero on a segment are evaluated.
    """
    if degree not in SUPPORTED_B_SPLINE_DEGREES:
        raise DegreeError(
            f"B-spline degree must be one of {SUPPORTED_B_SPLINE_DEGREES}, "
            f"got {degree}"
        )
    if order < 0:
        raise PolynomialDegreeError(f"order must be non-negative, got {order}")

    grid = torch.as_tensor(grid, dtype=torch.float64)
    n_basis = b_spline_knots(grid, degree).shape[0] - degree - 1

    amplitude = torch.as_tensor(amplitude, dtype=grid.dtype)
    center = torch.as_tensor(center, dtype=grid.dtype)
    width = torch.as_tensor(width, dtype=grid.dtype)

    rule = _gauss_legendre_rule(_num_gauss_legendre_nodes(degree, order))
    nodes, weights = rule.nodes_and_weights(
        0.0, 1.0, dtype=grid.dtype, device=grid.device
    )

    dx = (grid[1:] - grid[:-1]).unsqueeze(-1)  # (n_segments, 1)
    x = (grid[:-1].unsqueeze(-1) + dx * nodes).reshape(-1)
    dxw = (dx * weights).reshape(-1)

    left, bspl = b_spline_nonzero_components(x, grid, degree)

    y = (x - center) / width
    hpoly = gauss_hermite_polynomial_array(order, y)  # (n_points, order + 1)
    mult = _SQRT2 / amplitude * dxw * gauss_hermite_polynomial_weight(y)

    # (n_points, degree + 1, order + 1)
    contrib = mult[:, None, None] * bspl[:, :, None] * hpoly[:, None, :]
    columns = left.unsqueeze(-1) + torch.arange(degree + 1, device=grid.device)

    result = torch.zeros(
        n_basis, order + 1, dtype=grid.dtype, device=grid.device
    )
    result.index_add_(0, columns.reshape(-1), contrib.reshape(-1, order + 1))

    return result.T.contiguous()
