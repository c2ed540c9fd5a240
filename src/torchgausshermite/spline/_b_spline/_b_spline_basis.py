import torch
from torch import Tensor

from .._degree_error import DegreeError
from .._knot_error import KnotError


def _ratio(numerator: Tensor, span: Tensor) -> Tensor:
    # 0/0 terms of the recursion are 0
    positive = span > 0
    return torch.where(
        positive, numerator / torch.where(positive, span, 1.0), 0.0
    )


def b_spline_basis(t: Tensor, knots: Tensor, degree: int) -> Tensor:
    r"""
    Every B-spline basis function at every point, by Cox-de Boor recursion.

    Parameters
    ----------
    t : Tensor
        Evaluation points, any shape.
    knots : Tensor
        Non-decreasing knot vector, shape (n_knots,).
    degree : int
        Polynomial degree.

    Returns
    -------
    Tensor
        Shape (*t.shape, n_knots - degree - 1).

    Raises
    ------
    DegreeError
        If degree is negative or there are fewer than ``degree + 2`` knots.
    KnotError
        If the knots decrease anywhere.

    Notes
    -----
    .. math::

        B_{j,k}(t) = \frac{t - t_j}{t_{j+k} - t_j} B_{j,k-1}(t)
            + \frac{t_{j+k+1} - t}{t_{j+k+1} - t_{j+1}} B_{j+1,k-1}(t)

    starting from the indicators of :math:`[t_j, t_{j+1})`. The last knot
    belongs to the last non-empty interval, so the basis sums to one on the
    closed domain. For the ``degree + 1`` functions alive at each point only,
    see ``b_spline_nonzero_components``.
    """
    n_knots = knots.shape[0]
    if degree < 0:
        raise DegreeError(f"Degree must be non-negative, got {degree}")
    if n_knots < degree + 2:
        raise DegreeError(
            f"Need at least {degree + 2} knots for degree {degree}, got {n_knots}"
        )
    if not torch.all(knots[1:] >= knots[:-1]):
        raise KnotError("Knots must be non-decreasing")

    points = t.reshape(-1, 1)
    lo, hi = knots[:-1], knots[1:]
    basis = ((points >= lo) & (points < hi)).to(knots.dtype)

    nonempty = torch.nonzero(hi > lo).flatten()
    if nonempty.numel() > 0:
        basis[points[:, 0] == knots[-1], nonempty[-1]] = 1.0

    for k in range(1, degree + 1):
        m = n_knots - k - 1
        left = _ratio(points - knots[:m], knots[k : k + m] - knots[:m])
        right = _ratio(
            knots[k + 1 : k + 1 + m] - points,
            knots[k + 1 : k + 1 + m] - knots[1 : 1 + m],
        )
        basis = left * basis[:, :m] + right * basis[:, 1 : m + 1]

    return basis.reshape(*t.shape, n_knots - degree - 1)
