"""Gauss-Hermite expansion of a function."""

import math
import warnings
from typing import Callable, NamedTuple, Optional, Union

import torch
from torch import Tensor

from torchgausshermite.polynomial import (
    gauss_hermite_polynomial_array,
    gauss_hermite_polynomial_norm,
    gauss_hermite_polynomial_weight,
)

from ._classic_moments import (
    MOMENTS_EPSREL,
    MOMENTS_MAX_EVALUATIONS,
    classic_moments,
)
from ._exceptions import GaussHermiteError, GaussHermiteFitWarning
from ._gauss_hermite_coefficients import (
    QUADRATURE_ORDER,
    gauss_hermite_coefficients,
)
from ._gauss_hermite_fit import FIT_MAXITER, FIT_TOL, gauss_hermite_fit

_SQRT_2PI = math.sqrt(2.0 * math.pi)


class GaussHermiteExpansion(NamedTuple):
    r"""
    A function expanded on a Gaussian envelope.

    .. math::

        f(x) \approx \frac{A}{w \sqrt{2\pi}} e^{-y^2/2}
            \sum_{i=0}^{M} h_i H_i(y), \quad y = \frac{x - c}{w}

    Attributes
    ----------
    amplitude : Tensor
        :math:`A`, scalar.
    center : Tensor
        :math:`c`, scalar.
    width : Tensor
        :math:`w > 0`, scalar.
    coefficients : Tensor
        :math:`h_0, \dots, h_M`, shape (order + 1,).
    converged : bool
        False if the envelope fit ran out of iterations, or if an
        envelope-only fit stopped with :math:`h_1` or :math:`h_2` away from
        zero.
    """

    amplitude: Tensor
    center: Tensor
    width: Tensor
    coefficients: Tensor
    converged: bool = True

    @property
    def order(self) -> int:
        return self.coefficients.shape[0] - 1

    def value(self, x: Union[float, Tensor]) -> Tensor:
        """Evaluate the expansion at ``x`` (any shape)."""
        x = torch.as_tensor(x, dtype=self.coefficients.dtype)
        if self.coefficients.numel() == 0:
            return torch.zeros_like(x)

        y = (x - self.center) / self.width
        hpoly = gauss_hermite_polynomial_array(self.order, y)
        series = hpoly @ self.coefficients
        return (
            self.amplitude
            / (self.width * _SQRT_2PI)
            * gauss_hermite_polynomial_weight(y)
            * series
        )

    def __call__(self, x: Union[float, Tensor]) -> Tensor:
        return self.value(x)

    def norm(self) -> Tensor:
        r"""
        Integral of the expansion over the real axis.

        Odd terms integrate to zero, so this is
        :math:`A \sum_{n \text{ even}} h_n \, \mathrm{normn}(n)`.
        """
        norms = torch.tensor(
            [gauss_hermite_polynomial_norm(n) for n in range(self.order + 1)],
            dtype=self.coefficients.dtype,
        )
        return self.amplitude * (norms * self.coefficients).sum()


def _is_finite(value) -> bool:
    return value is not None and math.isfinite(float(value))


def gauss_hermite_expansion(
    f: Callable[[Tensor], Tensor],
    order: int,
    amplitude: Optional[Union[float, Tensor]] = None,
    center: Optional[Union[float, Tensor]] = None,
    width: Optional[Union[float, Tensor]] = None,
    *,
    fit_shape_terms: bool = False,
    quadrature_order: int = QUADRATURE_ORDER,
    moments_epsrel: float = MOMENTS_EPSREL,
    moments_max_evaluations: int = MOMENTS_MAX_EVALUATIONS,
    tol: float = FIT_TOL,
    maxiter: int = FIT_MAXITER,
) -> GaussHermiteExpansion:
    r"""
    Expand a function in Gauss-Hermite functions.

    If the envelope (``amplitude``, ``center`` and ``width``) is given in
    full and finite, only the coefficients are computed. Otherwise the
    envelope is seeded from the classic moments of f, refined by a
    least-squares fit, and the coefficients are then computed for the
    fitted envelope.

    Parameters
    ----------
    f : callable
        Function to expand, applied elementwise to a tensor of abscissae.
        Should decay at both infinities.
    order : int
        Highest coefficient index. Must be at least 2.
    amplitude, center, width : float or Tensor, optional
        Fixed envelope. A missing or non-finite value in any of them means
        the whole envelope is fitted.
    fit_shape_terms : bool
        Also fit the coefficients of index 3 to ``order`` together with the
        envelope, instead of a pure Gaussian. Only the fitted envelope is
        kept; the coefficients are always recomputed by quadrature.
    quadrature_order : int
        Node density of the coefficient quadrature and of the fit.
    moments_epsrel : float
        Relative tolerance of the moment integrals.
    moments_max_evaluations : int
        Evaluation budget of the moment integrals.
    tol : float
        Convergence tolerance of the envelope fit.
    maxiter : int
        Iteration budget of the envelope fit.

    Returns
    -------
    GaussHermiteExpansion

    Raises
    ------
    GaussHermiteError
        If ``order`` is less than 2, if a given envelope has a non-positive
        width or zero amplitude, or if no positive width can be estimated
        from f.

    Warns
    -----
    GaussHermiteFitWarning
        If the envelope fit does not converge within ``maxiter``, or, without
        ``fit_shape_terms``, if it stops with :math:`|h_1|` or :math:`|h_2|`
        above :math:`\sqrt{\mathrm{tol}}`, which happens when f is far from a
        single Gaussian (e.g. bimodal). The last iterate is used and the
        result has ``converged=False``.

    Examples
    --------
    >>> def gaussian(x):
    ...     return 2.0 * torch.exp(-0.5 * ((x - 1.0) / 0.5) ** 2) / (0.5 * math.sqrt(2 * math.pi))
    >>> expansion = gauss_hermite_expansion(gaussian, 4)
    >>> [f"{float(v):.4f}" for v in expansion[:3]]
    ['2.0000', '1.0000', '0.5000']
    >>> f"{float(expansion.norm()):.4f}"
    '2.0000'
    """
    if order < 2:
        raise GaussHermiteError(f"order must be at least 2, got {order}")

    converged = True
    fitted = not all(_is_finite(v) for v in (amplitude, center, width))
    if not fitted:
        amplitude = torch.as_tensor(amplitude, dtype=torch.float64)
        center = torch.as_tensor(center, dtype=torch.float64)
        width = torch.as_tensor(width, dtype=torch.float64)
        if width <= 0:
            raise GaussHermiteError(f"width must be positive, got {float(width)}")
        if amplitude == 0:
            raise GaussHermiteError("amplitude must be non-zero")
    else:
        moments = classic_moments(
            f,
            epsrel=moments_epsrel,
            max_evaluations=moments_max_evaluations,
        )
        if not (_is_finite(moments.stddev) and moments.stddev > 0):
            raise GaussHermiteError(
                f"cannot seed the envelope fit: moments are {tuple(float(m) for m in moments)}"
            )

        fit = gauss_hermite_fit(
            f,
            moments,
            fit_order=order if fit_shape_terms else 2,
            tol=tol,
            maxiter=maxiter,
            quadrature_order=quadrature_order,
        )
        amplitude, center, width = fit.x[0], fit.x[1], fit.x[2]

        converged = bool(fit.converged)
        if not converged:
            warnings.warn(
                f"Gauss-Hermite envelope fit did not converge in {maxiter} "
                f"iterations (residual sum of squares {float(fit.fun):.3g})",
                GaussHermiteFitWarning,
                stacklevel=2,
            )
        if not (_is_finite(width) and width > 0):
            raise GaussHermiteError(
                f"envelope fit produced an invalid width {float(width)}"
            )

    coefficients = gauss_hermite_coefficients(
        f,
        order,
        amplitude,
        center,
        width,
        quadrature_order=quadrature_order,
    )

    # A converged envelope-only fit has h_1 = h_2 = 0
    if converged and fitted and not fit_shape_terms:
        h1, h2 = coefficients[1].item(), coefficients[2].item()
        if max(abs(h1), abs(h2)) > math.sqrt(tol):
            converged = False
            warnings.warn(
                f"Gauss-Hermite envelope fit stopped away from its optimum "
                f"(h_1 = {h1:.3g}, h_2 = {h2:.3g}); f may not be close to a "
                f"single Gaussian",
                GaussHermiteFitWarning,
                stacklevel=2,
            )

    return GaussHermiteExpansion(
        amplitude=amplitude,
        center=center,
        width=width,
        coefficients=coefficients,
        converged=converged,
    )
