"""Hypothesis strategies for Gauss-Hermite testing."""

from ._gauss_hermite_envelopes import gauss_hermite_envelopes
from ._positive_real_numbers import positive_real_numbers
from ._real_numbers import real_numbers
from ._recurrence_test_values import recurrence_test_values

__all__ = [
    # Numeric strategies
    "positive_real_numbers",
    "real_numbers",
    # Tensor strategies
    "recurrence_test_values",
    # Expansion strategies
    "gauss_hermite_envelopes",
]
