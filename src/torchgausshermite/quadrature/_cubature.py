"""Globally adaptive cubature using tensor-product Gauss-Kronrod rules."""

import heapq
import itertools
import warnings
from typing import Callable, Sequence, Tuple, Union

import torch
from torch import Tensor

from torchgausshermite.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchgausshermite.quadrature._rules import GaussKronrod

_RULE = GaussKronrod(15)


def cubature(
    f: Callable[[Tensor], Tensor],
    lower: Union[Sequence[float], Tensor],
    upper: Union[Sequence[float], Tensor],
    *,
    epsabs: float = 0.0,
    epsrel: float = 1.49e-8,
    max_evaluations: int = 100000,
) -> Tensor:
    """
    Integrate a vector-valued function over a box.

    Parameters
    ----------
    f : callable
        Integrand. Takes points of shape ``(n, ndim)`` and returns values of
        shape ``(n, nvalues)``, or ``(n,)`` for a scalar integrand.
    lower, upper : sequence of float or Tensor
        Box corners, shape ``(ndim,)``.
    epsabs : float
        Absolute error tolerance.
    epsrel : float
        Relative error tolerance.
    max_evaluations : int
        Budget of integrand evaluations (points, not calls).

    Returns
    -------
    Tensor
        Integral estimate, shape ``(nvalues,)``, or a scalar for a scalar
        integrand.

    Warns
    -----
    QuadratureWarning
        If the tolerance is not met within ``max_evaluations``; the best
        estimate is returned.

    Examples
    --------
    >>> result = cubature(lambda p: p[:, 0] * p[:, 1], [0.0, 0.0], [1.0, 2.0])
    >>> f"{float(result):.6f}"
    '1.000000'
    """
    result, error, info = cubature_info(
        f,
        lower,
        upper,
        epsabs=epsabs,
        epsrel=epsrel,
        max_evaluations=max_evaluations,
    )

    if not info["converged"]:
        warnings.warn(
            f"Cubature did not converge within {info['neval']} evaluations. "
            f"Error estimate: {torch.linalg.vector_norm(error).item():.2e}",
            QuadratureWarning,
        )

    return result


def cubature_info(
    f: Callable[[Tensor], Tensor],
    lower: Union[Sequence[float], Tensor],
    upper: Union[Sequence[float], Tensor],
    *,
    epsabs: float = 0.0,
    epsrel: float = 1.49e-8,
    max_evaluations: int = 100000,
) -> Tuple[Tensor, Tensor, dict]:
    """
    Like cubature, but returns error estimate and info dict and never warns.

    Each region is integrated with the tensor product of the G7-K15 rule
    (``15**ndim`` points). The region with the largest error is bisected
    along its widest dimension, measured relative to the initial box, until

        ||error||_2 <= max(epsabs, epsrel * ||result||_2)

    or the next bisection would exceed ``max_evaluations``.

    Returns
    -------
    result : Tensor
        Integral estimate.
    error : Tensor
        Estimated absolute error, same shape as ``result``.
    info : dict
        Information dict with keys:
        - "neval": Number of integrand evaluations
        - "nregions": Number of regions in the final partition
        - "converged": Whether tolerance was achieved

    Raises
    ------
    ValueError
        If the bounds are malformed.
    IntegrationError
        If the integrand returns values of the wrong shape.
    """
    if isinstance(lower, Tensor):
        dtype, device = lower.dtype, lower.device
    elif isinstance(upper, Tensor):
        dtype, device = upper.dtype, upper.device
    else:
        dtype, device = torch.float64, torch.device("cpu")

    lower = torch.as_tensor(lower, dtype=dtype, device=device).reshape(-1)
    upper = torch.as_tensor(upper, dtype=dtype, device=device).reshape(-1)

    if lower.shape != upper.shape or lower.numel() == 0:
        raise ValueError(
            f"lower and upper must have the same non-empty shape, got "
            f"{tuple(lower.shape)} and {tuple(upper.shape)}"
        )

    ndim = lower.numel()
    nodes, k_weights, g_weights, g_indices = _RULE.nodes_and_weights(
        dtype=dtype, device=device
    )

    # Tensor-product rule on [-1, 1]^ndim. The embedded Gauss weights are
    # zero at points that are not Gauss nodes in every dimension.
    g_weights_full = torch.zeros_like(k_weights)
    g_weights_full[g_indices] = g_weights

    grids = torch.meshgrid(*([nodes] * ndim), indexing="ij")
    base_points = torch.stack(grids, dim=-1).reshape(-1, ndim)
    kw_grids = torch.meshgrid(*([k_weights] * ndim), indexing="ij")
    base_k_weights = torch.stack(kw_grids, dim=-1).reshape(-1, ndim).prod(-1)
    gw_grids = torch.meshgrid(*([g_weights_full] * ndim), indexing="ij")
    base_g_weights = torch.stack(gw_grids, dim=-1).reshape(-1, ndim).prod(-1)
    npoints = base_points.shape[0]

    scalar_integrand = False

    def integrate_region(lo: Tensor, hi: Tensor) -> Tuple[Tensor, Tensor]:
        nonlocal scalar_integrand
        half_width = (hi - lo) / 2
        center = (hi + lo) / 2
        values = f(center + half_width * base_points)
        if values.dim() == 1:
            scalar_integrand = True
            values = values.unsqueeze(-1)
        if values.dim() != 2 or values.shape[0] != npoints:
            raise IntegrationError(
                f"Integrand must return shape ({npoints},) or ({npoints}, nvalues), "
                f"got {tuple(values.shape)}"
            )
        volume = torch.prod(half_width)
        kronrod = volume * (base_k_weights @ values)
        gauss = volume * (base_g_weights @ values)
        return kronrod, torch.abs(kronrod - gauss)

    initial_width = upper - lower
    initial_width = torch.where(
        initial_width != 0, initial_width, torch.ones_like(initial_width)
    )

    # Max-heap by error norm: (-error, tiebreak, lo, hi, result, error)
    counter = itertools.count()
    result, error = integrate_region(lower, upper)
    heap = [
        (
            -torch.linalg.vector_norm(error).item(),
            next(counter),
            lower,
            upper,
            result,
            error,
        )
    ]
    neval = npoints
    converged = False

    while True:
        total_result = sum(item[4] for item in heap)
        total_error = sum(item[5] for item in heap)

        tolerance = max(
            epsabs, epsrel * torch.linalg.vector_norm(total_result).item()
        )
        if torch.linalg.vector_norm(total_error).item() <= tolerance:
            converged = True
            break

        if neval + 2 * npoints > max_evaluations:
            break

        _, _, lo, hi, _, _ = heapq.heappop(heap)

        # Bisect along the widest dimension
        dim = torch.argmax((hi - lo) / initial_width).item()
        mid = (lo[dim] + hi[dim]) / 2
        hi_left = hi.clone()
        hi_left[dim] = mid
        lo_right = lo.clone()
        lo_right[dim] = mid

        for child_lo, child_hi in ((lo, hi_left), (lo_right, hi)):
            child_result, child_error = integrate_region(child_lo, child_hi)
            heapq.heappush(
                heap,
                (
                    -torch.linalg.vector_norm(child_error).item(),
                    next(counter),
                    child_lo,
                    child_hi,
                    child_result,
                    child_error,
                ),
            )
        neval += 2 * npoints

    if scalar_integrand:
        total_result = total_result.squeeze(-1)
        total_error = total_error.squeeze(-1)

    return (
        total_result,
        total_error,
        {
            "neval": neval,
            "nregions": len(heap),
            "converged": converged,
        },
    )
