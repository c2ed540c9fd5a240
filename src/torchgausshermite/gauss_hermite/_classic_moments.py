"""Normalization, mean and dispersion of a function on the real axis."""

from typing import Callable, NamedTuple

import torch
from torch import Tensor

from torchgausshermite.quadrature import cubature_info

# Low accuracy is enough: the moments only seed the envelope fit
MOMENTS_EPSREL = 1e-3
MOMENTS_MAX_EVALUATIONS = 1000


class Moments(NamedTuple):
    """Classic moments of a function.

    Parameters
    ----------
    norm : Tensor
        Integral of f over the real axis.
    mean : Tensor
        Mean of x weighted by f.
    stddev : Tensor
        Standard deviation of x weighted by f.
    """

    norm: Tensor
    mean: Tensor
    stddev: Tensor


def classic_moments(
    f: Callable[[Tensor], Tensor],
    *,
    epsrel: float = MOMENTS_EPSREL,
    max_evaluations: int = MOMENTS_MAX_EVALUATIONS,
    dtype: torch.dtype = torch.float64,
) -> Moments:
    r"""
    Compute the 0th, 1st and 2nd moments of a function over the real axis.

    .. math::

        f_0 = \int f(x) dx, \quad
        f_1 = \frac{1}{f_0} \int f(x) x dx, \quad
        f_2 = \left(\frac{1}{f_0} \int f(x) x^2 dx - f_1^2\right)^{1/2}

    Parameters
    ----------
    f : callable
        Function to integrate, applied elementwise to a tensor of abscissae.
        Should decay at both infinities.
    epsrel : float
        Relative tolerance of the adaptive integration.
    max_evaluations : int
        Budget of integrand evaluations. If it runs out the best estimate is
        used as is.
    dtype : torch.dtype
        Floating dtype of the computation.

    Returns
    -------
    Moments
        ``(norm, mean, stddev)``. If ``norm`` is zero, ``mean`` and
        ``stddev`` are zero too.

    Notes
    -----
    The scaled variable :math:`z \in [0, 1]` maps onto the half-axis by
    :math:`x = \exp(1/(1-z) - 1/z)`, with Jacobian
    :math:`x (1/(1-z)^2 + 1/z^2)`. Each node samples both :math:`f(x)` and
    :math:`f(-x)`, so one sweep of :math:`z` covers the whole real axis.
    Nodes where both samples vanish or the Jacobian overflows contribute
    zero.
    """

    def integrand(points: Tensor) -> Tensor:
        z = points[:, 0]
        x = torch.exp(1 / (1 - z) - 1 / z)
        jac = x * (1 / (1 - z) ** 2 + 1 / z**2)
        fp, fm = f(torch.cat([x, -x])).chunk(2)

        even = (fp + fm) * jac
        odd = (fp - fm) * jac * x
        values = torch.stack([even, odd, even * x * x], dim=-1)

        degenerate = ((fp == 0) & (fm == 0)) | ~torch.isfinite(jac)
        return torch.where(degenerate.unsqueeze(-1), 0.0, values)

    result, _, _ = cubature_info(
        integrand,
        torch.zeros(1, dtype=dtype),
        torch.ones(1, dtype=dtype),
        epsrel=epsrel,
        max_evaluations=max_evaluations,
    )

    norm = result[0]
    if norm == 0:
        zero = torch.zeros((), dtype=dtype)
        return Moments(norm=norm, mean=zero, stddev=zero)

    mean = result[1] / norm
    stddev = torch.sqrt(torch.clamp(result[2] / norm - mean**2, min=0.0))
    return Moments(norm=norm, mean=mean, stddev=stddev)
