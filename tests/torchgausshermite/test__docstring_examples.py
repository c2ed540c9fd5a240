import doctest
import importlib

import pytest

MODULES = [
    "torchgausshermite.gauss_hermite._gauss_hermite_coefficients",
    "torchgausshermite.gauss_hermite._gauss_hermite_expansion",
    "torchgausshermite.optimization.minimization._levenberg_marquardt",
    "torchgausshermite.polynomial._gauss_hermite_polynomial._gauss_hermite_polynomial_array",
    "torchgausshermite.polynomial._gauss_hermite_polynomial._gauss_hermite_polynomial_weight",
    "torchgausshermite.quadrature._cubature",
    "torchgausshermite.quadrature._rules",
    "torchgausshermite.spline._b_spline._b_spline_knots",
]


@pytest.mark.parametrize("name", MODULES)
def test_examples(name):
    module = importlib.import_module(name)
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS)
    assert result.attempted > 0
    assert result.failed == 0
