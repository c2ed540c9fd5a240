"""Least-squares fit of the Gauss-Hermite envelope."""

import math
from typing import Callable, Sequence, Union

import torch
from torch import Tensor

from torchgausshermite.optimization import OptimizeResult
from torchgausshermite.optimization.minimization import levenberg_marquardt
from torchgausshermite.polynomial import (
    gauss_hermite_polynomial_array,
    gauss_hermite_polynomial_weight,
)

from ._exceptions import GaussHermiteError
from ._gauss_hermite_coefficients import QUADRATURE_ORDER

FIT_TOL = 1e-6
FIT_MAXITER = 100

_SQRT_2PI = math.sqrt(2.0 * math.pi)


class GaussHermiteFitter:
    r"""
    Residuals and Jacobian of the Gauss-Hermite envelope fit.

    Parameters are ordered ``[amplitude, center, width, h_3, ..., h_order]``.
    At the nodes :math:`y_p = (p - N^2)/N`, :math:`p = 0, \dots, 2N^2`, with
    :math:`x_p = c + w y_p`:

    .. math::

        r_p = \sqrt{w} f(x_p) - A \frac{e^{-y_p^2/2}}{\sqrt{2\pi w}}
            \left(1 + \sum_{n \ge 3} h_n H_n(y_p)\right)

    The :math:`\sqrt{w}` factor makes the residual norm an approximation of
    the :math:`L^2` distance between f and the model, independent of the
    width.

    Parameters
    ----------
    f : callable
        Function to fit, applied elementwise to a tensor of abscissae.
    order : int
        Highest Hermite index in the model. Must be at least 2; terms of
        index 3 and above are the shape parameters.
    quadrature_order : int
        Node density :math:`N`.

    Raises
    ------
    GaussHermiteError
        If ``order`` is less than 2 or ``quadrature_order`` is less than 1.
    """

    def __init__(
        self,
        f: Callable[[Tensor], Tensor],
        order: int,
        *,
        quadrature_order: int = QUADRATURE_ORDER,
    ):
        if order < 2:
            raise GaussHermiteError(f"fit order must be at least 2, got {order}")
        if quadrature_order < 1:
            raise GaussHermiteError(
                f"quadrature_order must be at least 1, got {quadrature_order}"
            )

        self.f = f
        self.order = order
        self.quadrature_order = quadrature_order

        q2 = quadrature_order**2
        self.y = (
            torch.arange(2 * q2 + 1, dtype=torch.float64) - q2
        ) / quadrature_order
        self._weight = gauss_hermite_polynomial_weight(self.y)
        # The nodes do not move with the envelope, so neither do H_n(y)
        self._shape_polynomials = gauss_hermite_polynomial_array(order, self.y)[
            :, 3:
        ]

    @property
    def num_parameters(self) -> int:
        return self.order + 1

    @property
    def num_residuals(self) -> int:
        return self.y.shape[0]

    def _base(self, params: Tensor) -> Tensor:
        return self._weight / (_SQRT_2PI * torch.sqrt(params[2]))

    def _shape_sum(self, params: Tensor) -> Tensor:
        return 1.0 + self._shape_polynomials @ params[3:]

    def residuals(self, params: Tensor) -> Tensor:
        """Residuals at ``params``, shape (num_residuals,)."""
        amplitude, center, width = params[0], params[1], params[2]
        mult = self._base(params) * self._shape_sum(params)
        return torch.sqrt(width) * self.f(center + width * self.y) - amplitude * mult

    def jacobian(self, params: Tensor) -> Tensor:
        """Jacobian of the residuals, shape (num_residuals, num_parameters).

        The derivatives are those of the model term at fixed abscissae; they
        match the exact Jacobian wherever the model equals f.
        """
        amplitude, width = params[0], params[2]
        base = self._base(params)
        mult = base * self._shape_sum(params)

        envelope = torch.stack(
            [
                -mult,
                -mult * amplitude / width * self.y,
                mult * amplitude / width * (1.0 - self.y**2),
            ],
            dim=-1,
        )
        shape = -(base * amplitude).unsqueeze(-1) * self._shape_polynomials
        return torch.cat([envelope, shape], dim=-1)


def gauss_hermite_fit(
    f: Callable[[Tensor], Tensor],
    initial: Union[Tensor, Sequence[Union[float, Tensor]]],
    *,
    fit_order: int = 2,
    tol: float = FIT_TOL,
    maxiter: int = FIT_MAXITER,
    quadrature_order: int = QUADRATURE_ORDER,
) -> OptimizeResult:
    """
    Fit the envelope of a Gauss-Hermite expansion by Levenberg-Marquardt.

    Parameters
    ----------
    f : callable
        Function to fit.
    initial : Tensor or sequence
        Starting ``(amplitude, center, width)``. Any further entries are
        ignored; shape parameters start at zero.
    fit_order : int
        Highest Hermite index in the model. The default of 2 fits a pure
        Gaussian.
    tol : float
        Convergence tolerance of the minimizer.
    maxiter : int
        Iteration budget of the minimizer.
    quadrature_order : int
        Node density of the residuals.

    Returns
    -------
    OptimizeResult
        ``x`` is ``[amplitude, center, width, h_3, ..., h_fit_order]``.

    Raises
    ------
    GaussHermiteError
        If ``fit_order`` is less than 2 or the initial width is not a
        positive finite number.
    """
    fitter = GaussHermiteFitter(f, fit_order, quadrature_order=quadrature_order)

    envelope = torch.stack(
        [torch.as_tensor(v, dtype=torch.float64).reshape(()) for v in initial[:3]]
    )
    if not (torch.isfinite(envelope).all() and envelope[2] > 0):
        raise GaussHermiteError(
            f"initial envelope must be finite with positive width, "
            f"got {envelope.tolist()}"
        )

    x0 = torch.cat(
        [envelope, torch.zeros(fit_order - 2, dtype=envelope.dtype)]
    )
    return levenberg_marquardt(
        fitter.residuals,
        x0,
        jacobian=fitter.jacobian,
        tol=tol,
        maxiter=maxiter,
    )
