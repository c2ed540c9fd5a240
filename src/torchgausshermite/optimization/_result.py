from typing import NamedTuple, Optional

from torch import Tensor


class OptimizeResult(NamedTuple):
    """Result of an optimization routine.

    Parameters
    ----------
    x : Tensor
        Solution tensor: the converged point, or the best iterate when the
        iteration budget ran out.
    converged : Tensor
        Boolean scalar tensor indicating convergence.
    num_iterations : Tensor
        Number of iterations performed. ``int64`` scalar.
    fun : Tensor, optional
        Objective value (sum of squared residuals) at the solution ``x``.
    """

    x: Tensor
    converged: Tensor
    num_iterations: Tensor
    fun: Optional[Tensor] = None
