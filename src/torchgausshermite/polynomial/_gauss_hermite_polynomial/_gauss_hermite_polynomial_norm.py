import math

from torchgausshermite.polynomial._degree_error import DegreeError

# integral of H_n(y) exp(-y^2/2) dy / sqrt(2 pi) for n = 0, 2, 4, 6, 8
_EVEN_NORMS = {
    0: 1.0,
    2: 1.0 / math.sqrt(2.0),
    4: 0.6123724356957945,  # sqrt(6)/4
    6: 0.5590169943749474,  # sqrt(5)/4
    8: 0.5229125165837972,  # sqrt(70)/16
}


def _log_even_norm(n: int) -> float:
    # log(sqrt(n!) / n!!) with n!! = 2**(n/2) (n/2)! for even n
    half = n // 2
    return (
        0.5 * math.lgamma(n + 1)
        - half * math.log(2.0)
        - math.lgamma(half + 1)
    )


def gauss_hermite_polynomial_norm(n: int) -> float:
    r"""Integral of the n-th Gauss-Hermite function over the real axis.

    .. math::

        \int_{-\infty}^{\infty} H_n(y) \, e^{-y^2/2} \, \frac{dy}{\sqrt{2\pi}}
            = \begin{cases}
                \sqrt{n!} / n!! & n \text{ even} \\
                0 & n \text{ odd}
              \end{cases}

    Parameters
    ----------
    n : int
        Degree, ``n >= 0``.

    Returns
    -------
    float
        The integral.

    Raises
    ------
    DegreeError
        If ``n`` is negative.
    """
    if n < 0:
        raise DegreeError(f"Degree must be non-negative, got {n}")
    if n % 2 == 1:
        return 0.0
    if n in _EVEN_NORMS:
        return _EVEN_NORMS[n]
    return math.exp(_log_even_norm(n))
