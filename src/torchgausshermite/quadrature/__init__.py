"""
Numerical integration (quadrature) module.

Function-based integration (evaluates callable):
    cubature, cubature_info

Quadrature rule classes:
    GaussLegendre, GaussKronrod

Node/weight computation for Gaussian quadrature:
    gauss_legendre_nodes_weights, gauss_kronrod_nodes_weights,
    MAX_GAUSS_LEGENDRE_NODES

Exceptions:
    QuadratureWarning, IntegrationError
"""

from torchgausshermite.quadrature._cubature import cubature, cubature_info
from torchgausshermite.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchgausshermite.quadrature._nodes import (
    MAX_GAUSS_LEGENDRE_NODES,
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)
from torchgausshermite.quadrature._rules import (
    GaussKronrod,
    GaussLegendre,
)

__all__ = [
    # Function-based
    "cubature",
    "cubature_info",
    # Rule classes
    "GaussLegendre",
    "GaussKronrod",
    # Node/weight computation
    "MAX_GAUSS_LEGENDRE_NODES",
    "gauss_legendre_nodes_weights",
    "gauss_kronrod_nodes_weights",
    # Exceptions
    "QuadratureWarning",
    "IntegrationError",
]
