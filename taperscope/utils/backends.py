"""
Numeric routines that only some windows need.

scipy is imported when a backend is first requested, not at package import,
so that the rest of taperscope works without it.
Each accessor raises `MissingDependencyError` if its routine cannot be imported.
"""

from typing import Callable

import numpy as np

from taperscope.config import MissingDependencyError

__all__ = ["bessel_i0", "dominant_eigenvector"]


def bessel_i0() -> "Callable[[np.ndarray], np.ndarray]":
    """Returns the modified Bessel function of the first kind, order 0."""
    try:
        from scipy.special import i0
    except ImportError as e:
        raise MissingDependencyError(
            "kaiser window requires scipy.special.i0 (pip install scipy)"
        ) from e
    return i0


def dominant_eigenvector(diagonal: np.ndarray, off_diagonal: np.ndarray) -> np.ndarray:
    """
    Eigenvector of the largest eigenvalue of a symmetric tridiagonal matrix.

    Parameters
    ----------
    diagonal : ndarray, shape (M,)
    off_diagonal : ndarray, shape (M-1,)

    Returns
    -------
    v : ndarray, shape (M,)
        Unit-norm eigenvector. Its sign is unspecified.
    """
    try:
        from scipy.linalg import eigh_tridiagonal
    except ImportError as e:
        raise MissingDependencyError(
            "dpss window requires scipy.linalg.eigh_tridiagonal (pip install scipy)"
        ) from e

    M = len(diagonal)
    _, vectors = eigh_tridiagonal(
        diagonal, off_diagonal, select="i", select_range=(M - 1, M - 1)
    )
    return vectors[:, 0]
