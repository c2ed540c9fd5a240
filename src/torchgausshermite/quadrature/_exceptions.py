"""Exceptions for quadrature integration."""


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., evaluation budget exhausted)."""

    pass


class IntegrationError(Exception):
    """Error when integration cannot be carried out."""

    pass
