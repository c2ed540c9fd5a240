"""Node and weight computation for quadrature rules."""

from typing import Optional, Tuple

import torch
from torch import Tensor

# Largest Gauss-Legendre rule used for per-segment integration of
# polynomial-times-Gaussian products.
MAX_GAUSS_LEGENDRE_NODES = 20


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Compute Gauss-Legendre nodes and weights on [-1, 1].

    Uses the Golub-Welsch algorithm (eigenvalues of symmetric tridiagonal matrix).

    Parameters
    ----------
    n : int
        Number of quadrature points.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending.
    weights : Tensor
        Quadrature weights, shape (n,).

    Raises
    ------
    ValueError
        If n < 1.

    Notes
    -----
    Gauss-Legendre quadrature is exact for polynomials of degree <= 2n-1.

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return (
            torch.tensor([0.0], dtype=dtype, device=device),
            torch.tensor([2.0], dtype=dtype, device=device),
        )

    # Jacobi matrix for Legendre: zero diagonal, off-diagonal k / sqrt(4k^2 - 1)
    k = torch.arange(1, n, dtype=dtype, device=device)
    off_diag = k / torch.sqrt(4 * k**2 - 1)
    T = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)

    eigenvalues, eigenvectors = torch.linalg.eigh(T)
    weights = 2 * eigenvectors[0, :] ** 2

    sorted_idx = torch.argsort(eigenvalues)
    return eigenvalues[sorted_idx], weights[sorted_idx]


# G7-K15 pair from QUADPACK (Piessens et al., 1983). Only the non-negative
# half is stored; the rule is symmetric about 0.
_GK15_POSITIVE_NODES = [
    0.000000000000000000000000000000000,
    0.207784955007898467600689403773245,
    0.405845151377397166906606412076961,
    0.586087235467691130294144838258730,
    0.741531185599394439863864773280788,
    0.864864423359769072789712788640926,
    0.949107912342758524526189684047851,
    0.991455371120812639206854697526329,
]

_GK15_POSITIVE_K_WEIGHTS = [
    0.209482141084727828012999174891714,
    0.204432940075298892414161999234649,
    0.190350578064785409913256402421014,
    0.169004726639267902826583426598550,
    0.140653259715525918745189590510238,
    0.104790010322250183839876322541518,
    0.063092092629978553290700663189204,
    0.022935322010529224963732008058970,
]

# G7 weights at positive nodes 0, 2, 4, 6
_GK15_POSITIVE_G_WEIGHTS = [
    0.417959183673469387755102040816327,
    0.381830050505118944950369775488975,
    0.279705391489276667901467771423780,
    0.129484966168869693270611432679082,
]


def gauss_kronrod_nodes_weights(
    order: int = 15,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
    """
    Compute Gauss-Kronrod nodes and weights on [-1, 1].

    Returns both Kronrod weights and the weights of the embedded Gauss rule,
    whose difference gives an error estimate.

    Parameters
    ----------
    order : int
        Kronrod order. Only 15 (G7-K15) is tabulated.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Kronrod nodes, shape (15,), sorted ascending.
    kronrod_weights : Tensor
        Kronrod weights, shape (15,).
    gauss_weights : Tensor
        Gauss weights, shape (7,).
    gauss_indices : Tensor
        Indices into ``nodes`` of the Gauss nodes, shape (7,), ascending.

    Raises
    ------
    ValueError
        If order is not tabulated.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    """
    if order != 15:
        raise ValueError(f"order must be 15, got {order}")

    pos_nodes = torch.tensor(_GK15_POSITIVE_NODES, dtype=dtype, device=device)
    pos_k_weights = torch.tensor(
        _GK15_POSITIVE_K_WEIGHTS, dtype=dtype, device=device
    )
    pos_g_weights = torch.tensor(
        _GK15_POSITIVE_G_WEIGHTS, dtype=dtype, device=device
    )

    # Reflect: [-pos[7], ..., -pos[1], 0, pos[1], ..., pos[7]]
    nodes = torch.cat([-pos_nodes[1:].flip(0), pos_nodes])
    k_weights = torch.cat([pos_k_weights[1:].flip(0), pos_k_weights])

    # Gauss nodes sit at positive indices 0, 2, 4, 6, i.e. full indices 7 +/- idx
    g_indices = torch.tensor(
        [1, 3, 5, 7, 9, 11, 13], dtype=torch.long, device=device
    )
    g_weights = torch.cat([pos_g_weights[1:].flip(0), pos_g_weights])

    return nodes, k_weights, g_weights, g_indices
