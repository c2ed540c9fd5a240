"""Exceptions for Gauss-Hermite expansions."""


class GaussHermiteError(ValueError):
    """Invalid Gauss-Hermite expansion configuration or envelope."""

    pass


class GaussHermiteFitWarning(UserWarning):
    """The envelope fit stopped before reaching its tolerance."""

    pass
