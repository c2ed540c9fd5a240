import torch
from torch import Tensor


def gauss_hermite_polynomial_weight(
    x: Tensor,
) -> Tensor:
    """Compute the Gauss-Hermite weight function.

    The weight function is w(x) = exp(-x^2/2), the Gaussian envelope that
    multiplies the Gauss-Hermite series in a line-of-sight velocity
    distribution.

    Parameters
    ----------
    x : Tensor
        Points at which to evaluate weight.

    Returns
    -------
    Tensor
        Weight values w(x) = exp(-x^2/2).

    Notes
    -----
    With this weight the Gauss-Hermite polynomials satisfy
        integral_{-inf}^{inf} H_m(x) H_n(x) w(x)^2 dx / (2*pi) = delta_{mn} / (2*sqrt(pi))

    Examples
    --------
    >>> gauss_hermite_polynomial_weight(torch.tensor([0.0, 1.0, 2.0]))
    tensor([1.0000, 0.6065, 0.1353])
    """
    return torch.exp(-x * x / 2.0)
