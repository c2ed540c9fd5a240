"""Gauss-Hermite polynomial values by three-term recurrence."""

from __future__ import annotations

import math

import torch
from torch import Tensor

from torchgausshermite.polynomial._degree_error import DegreeError

_SQRT2 = math.sqrt(2.0)

# sqrt(n) for n = 1, ..., 8
_SQRT_TABLE = (
    1.0,
    math.sqrt(2.0),
    math.sqrt(3.0),
    2.0,
    math.sqrt(5.0),
    math.sqrt(6.0),
    math.sqrt(7.0),
    math.sqrt(8.0),
)


def gauss_hermite_polynomial_array(nmax: int, x: Tensor) -> Tensor:
    r"""Evaluate Gauss-Hermite polynomials of degree 0 through ``nmax``.

    These are neither the physicists' :math:`H_n` nor the probabilists'
    :math:`He_n` polynomials, but the normalization conventional for
    line-of-sight velocity distributions (van der Marel & Franx 1993):

    .. math::

        H_0(x) = 1, \quad H_1(x) = \sqrt{2} x,

        H_{n+1}(x) = \frac{\sqrt{2} x H_n(x) - \sqrt{n} H_{n-1}(x)}{\sqrt{n+1}}.

    Parameters
    ----------
    nmax : int
        Highest degree, ``nmax >= 0``.
    x : Tensor
        Evaluation points, shape (*x_shape).

    Returns
    -------
    Tensor
        Polynomial values, shape (*x_shape, nmax + 1). ``result[..., n]``
        is :math:`H_n(x)`.

    Raises
    ------
    DegreeError
        If ``nmax`` is negative.

    Notes
    -----
    The family satisfies

    .. math::

        \frac{dH_n}{dx} = \sqrt{2n} H_{n-1},

        \int_{-\infty}^{\infty} H_n(x) H_m(x) e^{-x^2} \frac{dx}{2\pi}
            = \frac{\delta_{mn}}{2\sqrt{\pi}},

    and is related to the probabilists' polynomials by
    :math:`H_n(x) = He_n(\sqrt{2} x) / \sqrt{n!}`.

    Examples
    --------
    >>> gauss_hermite_polynomial_array(3, torch.tensor(1.0, dtype=torch.float64))
    tensor([ 1.0000,  1.4142,  0.7071, -0.5774], dtype=torch.float64)
    """
    if nmax < 0:
        raise DegreeError(f"nmax must be non-negative, got {nmax}")

    h0 = torch.ones_like(x)
    if nmax == 0:
        return h0.unsqueeze(-1)

    columns = [h0, _SQRT2 * x]
    sqrt_n = 1.0
    for n in range(1, nmax):
        sqrt_n_plus_1 = _SQRT_TABLE[n] if n < 8 else math.sqrt(n + 1.0)
        columns.append(
            (_SQRT2 * x * columns[n] - sqrt_n * columns[n - 1]) / sqrt_n_plus_1
        )
        sqrt_n = sqrt_n_plus_1

    return torch.stack(columns, dim=-1)
