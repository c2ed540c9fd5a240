from . import minimization
from ._result import OptimizeResult

__all__ = [
    "OptimizeResult",
    "minimization",
]
