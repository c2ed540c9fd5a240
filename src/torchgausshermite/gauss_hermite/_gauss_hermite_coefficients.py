"""Gauss-Hermite coefficients of a function for a given envelope."""

import math
from typing import Callable, Union

import torch
import torch.nn.functional as F
from torch import Tensor

from torchgausshermite.polynomial import (
    DegreeError,
    gauss_hermite_polynomial_array,
    gauss_hermite_polynomial_weight,
)

# Nodes are spaced 1/QUADRATURE_ORDER apart out to +-QUADRATURE_ORDER,
# i.e. 2 * 7**2 + 1 = 99 nodes
QUADRATURE_ORDER = 7

_SQRT2 = math.sqrt(2.0)


def gauss_hermite_coefficients(
    f: Callable[[Tensor], Tensor],
    order: int,
    amplitude: Union[float, Tensor],
    center: Union[float, Tensor],
    width: Union[float, Tensor],
    *,
    quadrature_order: int = QUADRATURE_ORDER,
) -> Tensor:
    r"""
    Compute the Gauss-Hermite coefficients of a function.

    Finds :math:`h_0, \dots, h_M` such that

    .. math::

        f(x) \approx \frac{A}{w \sqrt{2\pi}} e^{-y^2/2}
            \sum_{i=0}^{M} h_i H_i(y), \quad y = \frac{x - c}{w},

    for a fixed envelope (amplitude :math:`A`, center :math:`c`, width
    :math:`w`).

    Parameters
    ----------
    f : callable
        Function to expand, applied elementwise to a tensor of abscissae.
    order : int
        Highest coefficient index :math:`M`.
    amplitude, center, width : float or Tensor
        Envelope of the base Gaussian.
    quadrature_order : int
        Number :math:`N` of nodes per unit of :math:`y`; the rule has
        :math:`2N^2 + 1` nodes covering :math:`|y| \le N`.

    Returns
    -------
    Tensor
        Coefficients, shape (order + 1,).

    Raises
    ------
    DegreeError
        If ``order`` is negative.
    ValueError
        If ``quadrature_order`` is less than 1.

    Notes
    -----
    The integrand is only piecewise-polynomial in typical use, so instead of
    a Gauss-Hermite rule the integral is taken on equally spaced nodes
    :math:`y = i/N`:

    .. math::

        \int_{-\infty}^{\infty} g(y) e^{-y^2/2} dy
            \approx \frac{1}{N} \sum_{i=-N^2}^{N^2} g(i/N) e^{-(i/N)^2/2}.

    The sum is folded onto :math:`y \ge 0`: even coefficients accumulate
    :math:`f(c + wy) + f(c - wy)` and odd ones the difference.

    Examples
    --------
    >>> def gaussian(x):
    ...     return torch.exp(-0.5 * x**2) / math.sqrt(2 * math.pi)
    >>> h = gauss_hermite_coefficients(gaussian, 4, 1.0, 0.0, 1.0)
    >>> torch.allclose(h, torch.eye(5, dtype=h.dtype)[0], atol=1e-10)
    True
    """
    if order < 0:
        raise DegreeError(f"order must be non-negative, got {order}")
    if quadrature_order < 1:
        raise ValueError(
            f"quadrature_order must be at least 1, got {quadrature_order}"
        )

    amplitude = torch.as_tensor(amplitude, dtype=torch.float64)
    center = torch.as_tensor(center, dtype=torch.float64)
    width = torch.as_tensor(width, dtype=torch.float64)

    y = (
        torch.arange(quadrature_order**2 + 1, dtype=torch.float64)
        / quadrature_order
    )

    # One call for both halves; the mirror of y = 0 is left out
    n_plus = y.shape[0]
    values = f(torch.cat([center + width * y, center - width * y[1:]]))
    fp = values[:n_plus]
    fm = F.pad(values[n_plus:], (1, 0))

    mult = (
        _SQRT2
        * width
        / (amplitude * quadrature_order)
        * gauss_hermite_polynomial_weight(y)
    )
    hpoly = gauss_hermite_polynomial_array(order, y)  # (n_plus, order + 1)

    odd = torch.arange(order + 1) % 2 == 1
    folded = torch.where(
        odd, (fp - fm).unsqueeze(-1), (fp + fm).unsqueeze(-1)
    )  # (n_plus, order + 1)

    return (mult.unsqueeze(-1) * folded * hpoly).sum(dim=0)
