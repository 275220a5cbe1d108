"""
Conversion between the two bases of a (Blackman-Harris) cosine sum.

Multiple-angle basis (alternating signs, as published for window tables):

    a0 - a1 cos(t) + a2 cos(2t) - a3 cos(3t) + a4 cos(4t)

Power basis (polynomial in c = cos(t), cheaper to evaluate):

    c0 + c1 c + c2 c**2 + c3 c**3 + c4 c**4

The map is the substitution cos(2t) = 2c**2 - 1, cos(3t) = 4c**3 - 3c,
cos(4t) = 8c**4 - 8c**2 + 1. Shorter coefficient lists are zero-extended,
transformed, then truncated back to their original length.
"""

from typing import Sequence

import numpy as np

from taperscope.config import InvalidArityError

__all__ = ["MAX_TERMS", "multiple_angle_to_power", "power_to_multiple_angle"]


MAX_TERMS = 5


def _padded(coeffs: Sequence[float]) -> np.ndarray:
    coeffs = np.asarray(coeffs, dtype=np.float64)
    if coeffs.ndim != 1 or not 1 <= len(coeffs) <= MAX_TERMS:
        raise InvalidArityError(
            f"cosine sum needs 1 to {MAX_TERMS} coefficients, got {np.shape(coeffs)}"
        )
    return np.pad(coeffs, (0, MAX_TERMS - len(coeffs)), "constant")


def multiple_angle_to_power(a: Sequence[float]) -> np.ndarray:
    """Returns power-basis coefficients [c0, c1, ...] (lowest order first)
    of the multiple-angle coefficients `a`."""
    a0, a1, a2, a3, a4 = _padded(a)
    nterm = np.size(a)

    c = np.array(
        [
            a0 - a2 + a4,
            -a1 + 3 * a3,
            2 * a2 - 8 * a4,
            -4 * a3,
            8 * a4,
        ]
    )
    return c[:nterm]


def power_to_multiple_angle(c: Sequence[float]) -> np.ndarray:
    """Inverse of `multiple_angle_to_power`."""
    c0, c1, c2, c3, c4 = _padded(c)
    nterm = np.size(c)

    a = np.array(
        [
            c0 + c2 / 2 + 3 * c4 / 8,
            -c1 - 3 * c3 / 4,
            (c2 + c4) / 2,
            -c3 / 4,
            c4 / 8,
        ]
    )
    return a[:nterm]
