"""Gauss-Hermite expansions of functions on the real axis.

Expansions
----------
gauss_hermite_expansion
    Fit an envelope to a function and expand it in Gauss-Hermite functions.
GaussHermiteExpansion
    Envelope and coefficients, evaluable and integrable.

Building Blocks
---------------
classic_moments
    Normalization, mean and standard deviation of a function.
gauss_hermite_coefficients
    Coefficients of a function for a fixed envelope.
gauss_hermite_fit
    Least-squares fit of the envelope.
GaussHermiteFitter
    Residuals and Jacobian of the envelope fit.
gauss_hermite_matrix
    Linear map from B-spline control points to coefficients.

Exceptions
----------
GaussHermiteError
    Invalid order or envelope.
GaussHermiteFitWarning
    The envelope fit did not converge.
"""

from ._classic_moments import (
    MOMENTS_EPSREL,
    MOMENTS_MAX_EVALUATIONS,
    Moments,
    classic_moments,
)
from ._exceptions import GaussHermiteError, GaussHermiteFitWarning
from ._gauss_hermite_coefficients import (
    QUADRATURE_ORDER,
    gauss_hermite_coefficients,
)
from ._gauss_hermite_expansion import (
    GaussHermiteExpansion,
    gauss_hermite_expansion,
)
from ._gauss_hermite_fit import (
    FIT_MAXITER,
    FIT_TOL,
    GaussHermiteFitter,
    gauss_hermite_fit,
)
from ._gauss_hermite_matrix import (
    SUPPORTED_B_SPLINE_DEGREES,
    gauss_hermite_matrix,
)

__all__ = [
    # Expansions
    "GaussHermiteExpansion",
    "gauss_hermite_expansion",
    # Building blocks
    "GaussHermiteFitter",
    "Moments",
    "classic_moments",
    "gauss_hermite_coefficients",
    "gauss_hermite_fit",
    "gauss_hermite_matrix",
    # Defaults
    "FIT_MAXITER",
    "FIT_TOL",
    "MOMENTS_EPSREL",
    "MOMENTS_MAX_EVALUATIONS",
    "QUADRATURE_ORDER",
    "SUPPORTED_B_SPLINE_DEGREES",
    # Exceptions
    "GaussHermiteError",
    "GaussHermiteFitWarning",
]
