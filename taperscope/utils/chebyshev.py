from typing import Union

import numpy as np

from taperscope.config import InvalidConfigurationError

__all__ = ["chebyshev_poly"]


def chebyshev_poly(n: int, x: "Union[float, complex, np.ndarray]") -> np.ndarray:
    """
    Evaluate the Chebyshev polynomial of the first kind T_n at `x`.

    Uses the three-term recurrence T_0 = 1, T_1 = x,
    T_k = 2x T_{k-1} - T_{k-2}, which stays real-valued outside [-1, 1]
    (unlike cos(n arccos(x))). The Dolph-Chebyshev window evaluates
    points with abs(x) > 1.

    Parameters
    ----------
    n : int
        Polynomial order, non-negative.
    x : float, complex or array_like
        Evaluation point(s).

    Returns
    -------
    T : ndarray or scalar
        T_n(x), with the same shape as `x`.
    """
    if int(n) != n or n < 0:
        raise InvalidConfigurationError(
            f"Chebyshev polynomial order must be a non-negative integer, got {n}"
        )
    n = int(n)

    x = np.asarray(x)
    x = x.astype(np.result_type(x, np.float64), copy=False)

    prev = np.ones_like(x)
    if n == 0:
        return prev[()]

    curr = x.copy()
    twox = 2 * x
    for _ in range(n - 1):
        prev, curr = curr, twox * curr - prev

    # [()] unwraps 0-d arrays into numpy scalars.
    return curr[()]
