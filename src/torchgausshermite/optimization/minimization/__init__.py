from ._levenberg_marquardt import levenberg_marquardt

__all__ = [
    "levenberg_marquardt",
]
