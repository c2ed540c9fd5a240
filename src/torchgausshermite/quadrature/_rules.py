"""Quadrature rules with nodes cached per dtype and device."""

from typing import Callable, Dict, Optional, Tuple, Union

import torch
from torch import Tensor

from torchgausshermite.quadrature._nodes import (
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)


class _CachedRule:
    def __init__(self):
        self._cache: Dict[Tuple[torch.dtype, torch.device], tuple] = {}

    def _compute(self, dtype: torch.dtype, device: torch.device) -> tuple:
        raise NotImplementedError

    def _reference(self, dtype: torch.dtype, device: torch.device) -> tuple:
        key = (dtype, torch.device(device))
        if key not in self._cache:
            self._cache[key] = self._compute(dtype, device)
        return self._cache[key]


class GaussLegendre(_CachedRule):
    """
    ``n``-point Gauss-Legendre rule, exact for polynomials of degree
    ``2n - 1``.

    Examples
    --------
    >>> rule = GaussLegendre(5)
    >>> nodes, weights = rule.nodes_and_weights(0.0, 1.0)
    >>> f"{float(rule.integrate(torch.sin, 0.0, torch.pi)):.6f}"
    '2.000000'
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        super().__init__()
        self.n = n

    def _compute(self, dtype, device):
        return gauss_legendre_nodes_weights(self.n, dtype=dtype, device=device)

    def nodes_and_weights(
        self,
        a: Union[float, Tensor] = -1.0,
        b: Union[float, Tensor] = 1.0,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """
        Nodes and weights mapped onto ``[a, b]``.

        Parameters
        ----------
        a, b : float or Tensor
            Interval ends. Tensor ends broadcast against each other and
            give one rule per interval.
        dtype, device : optional
            Taken from tensor ends when not given; float64 on the CPU
            otherwise.

        Returns
        -------
        nodes, weights : Tensor
            Shape (*batch, n), where batch is the broadcast shape of the
            ends ((n,) for scalar ends).
        """
        like = a if isinstance(a, Tensor) else b
        if isinstance(like, Tensor):
            dtype = dtype or like.dtype
            device = device or like.device
        dtype = dtype or torch.float64
        device = device or torch.device("cpu")

        a = torch.as_tensor(a, dtype=dtype, device=device).unsqueeze(-1)
        b = torch.as_tensor(b, dtype=dtype, device=device).unsqueeze(-1)
        reference_nodes, reference_weights = self._reference(dtype, device)

        half = (b - a) / 2
        nodes = half * reference_nodes + (a + b) / 2
        weights = half * reference_weights
        return nodes, weights.expand_as(nodes)

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """Integral of ``f`` over ``[a, b]``, one value per interval."""
        nodes, weights = self.nodes_and_weights(a, b)
        return (f(nodes) * weights).sum(dim=-1)


class GaussKronrod(_CachedRule):
    """
    Gauss-Kronrod pair with its embedded Gauss rule.

    Only ``order=15`` (G7-K15) is tabulated. The difference between the
    Kronrod and Gauss sums over the same evaluations is the error estimate
    used by :func:`cubature`.
    """

    def __init__(self, order: int = 15):
        if order != 15:
            raise ValueError(f"order must be 15, got {order}")
        super().__init__()
        self.order = order

    def _compute(self, dtype, device):
        return gauss_kronrod_nodes_weights(
            self.order, dtype=dtype, device=device
        )

    def nodes_and_weights(
        self,
        *,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
        """
        Reference nodes on [-1, 1].

        Returns
        -------
        nodes, kronrod_weights : Tensor
            Shape (order,).
        gauss_weights, gauss_indices : Tensor
            Shape (order // 2,). ``nodes[gauss_indices]`` are the Gauss
            nodes.
        """
        return self._reference(dtype, device or torch.device("cpu"))
