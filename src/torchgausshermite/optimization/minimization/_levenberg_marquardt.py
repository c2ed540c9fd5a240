from typing import Callable, Optional

import torch
from torch import Tensor

from torchgausshermite.optimization._result import OptimizeResult

_MIN_DAMPING = 1e-10
_MAX_DAMPING = 1e10


def levenberg_marquardt(
    residuals: Callable[[Tensor], Tensor],
    x0: Tensor,
    *,
    jacobian: Optional[Callable[[Tensor], Tensor]] = None,
    tol: Optional[float] = None,
    maxiter: int = 100,
    damping: float = 1e-3,
) -> OptimizeResult:
    r"""
    Minimize a sum of squared residuals by Levenberg-Marquardt.

    Each iteration solves

    .. math::

        (J^T J + \mu I) \delta = -J^T r

    and accepts :math:`x + \delta` when the actual reduction of
    :math:`\|r\|^2` is at least a quarter of the reduction predicted by the
    linear model. Accepted steps divide :math:`\mu` by 3; rejected steps
    double it.

    Parameters
    ----------
    residuals : Callable[[Tensor], Tensor]
        Maps parameters of shape ``(n,)`` to residuals of shape ``(m,)``.
    x0 : Tensor
        Starting parameters, shape ``(n,)``.
    jacobian : Callable, optional
        Returns the ``(m, n)`` Jacobian of ``residuals``. Defaults to
        ``torch.func.jacrev(residuals)``.
    tol : float, optional
        Stop when ``||J^T r|| < tol`` or when a step, accepted or not,
        satisfies ``||delta|| <= tol * (||x|| + tol)``. The second test keeps
        an approximate ``jacobian`` from spinning at a minimum it cannot
        step out of. Default: ``sqrt(eps)`` of the dtype.
    maxiter : int
        Iteration budget.
    damping : float
        Initial :math:`\mu`.

    Returns
    -------
    OptimizeResult
        ``x`` is the last accepted iterate; ``converged`` is False if the
        budget ran out first.

    Notes
    -----
    Trial residuals that are not all finite count as a rejected step, so a
    residual function can return NaN outside its domain.

    Examples
    --------
    >>> t = torch.linspace(-3, 3, 25, dtype=torch.float64)
    >>> data = 2.0 * torch.exp(-0.5 * ((t - 0.5) / 0.8) ** 2)
    >>> def residuals(p):
    ...     return p[0] * torch.exp(-0.5 * ((t - p[1]) / p[2]) ** 2) - data
    >>> x0 = torch.tensor([1.0, 0.0, 1.0], dtype=torch.float64)
    >>> result = levenberg_marquardt(residuals, x0)
    >>> [f"{v:.4f}" for v in result.x.tolist()]
    ['2.0000', '0.5000', '0.8000']

    References
    ----------
    - Marquardt, D.W. "An algorithm for least-squares estimation of
      nonlinear parameters." Journal of the society for Industrial and
      Applied Mathematics 11.2 (1963): 431-441.
    """
    if tol is None:
        tol = torch.finfo(x0.dtype).eps ** 0.5
    if jacobian is None:
        jacobian = torch.func.jacrev(residuals)

    x = x0.detach().clone()
    identity = torch.eye(x.numel(), dtype=x.dtype, device=x.device)
    mu = damping
    converged = False
    num_iterations = 0

    r = residuals(x)
    for num_iterations in range(1, maxiter + 1):
        J = jacobian(x)
        if J.dim() == 1:
            J = J.unsqueeze(0)

        g = J.T @ r
        if torch.norm(g) < tol:
            converged = True
            break

        JtJ = J.T @ J
        try:
            delta = torch.linalg.solve(JtJ + mu * identity, -g)
        except RuntimeError:
            mu *= 10
            continue

        r_trial = residuals(x + delta)
        predicted = -2 * (g @ delta) - delta @ JtJ @ delta
        rho = (torch.sum(r**2) - torch.sum(r_trial**2)) / (predicted + 1e-10)

        if torch.isfinite(r_trial).all() and rho > 0.25:
            x = x + delta
            r = r_trial
            mu = max(mu / 3, _MIN_DAMPING)
        else:
            mu = min(mu * 2, _MAX_DAMPING)

        if torch.norm(delta) <= tol * (torch.norm(x) + tol):
            converged = True
            break

    return OptimizeResult(
        x=x,
        converged=torch.tensor(converged, device=x.device),
        num_iterations=torch.tensor(num_iterations, dtype=torch.int64),
        fun=torch.sum(r**2),
    )
