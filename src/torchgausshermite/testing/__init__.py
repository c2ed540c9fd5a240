"""Testing helpers for torchgausshermite.

Hypothesis strategies live in :mod:`torchgausshermite.testing.strategies`;
they require the ``test`` extra.
"""

from . import strategies

__all__ = [
    "strategies",
]
