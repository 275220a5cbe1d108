import sys
from typing import TypeVar, Optional, Any, Sequence

import numpy as np


T = TypeVar("T")


def coalesce(*args: Optional[T]) -> T:
    if len(args) == 0:
        raise TypeError("coalesce expected 1 argument, got 0")
    for arg in args:
        if arg is not None:
            return arg
    raise TypeError("coalesce() called with all None")


def obj_name(obj: Any) -> str:
    return type(obj).__name__


def as_float_array(data: Sequence[float]) -> np.ndarray:
    """Converts a sample sequence into a contiguous 1D float64 array."""
    arr = np.ascontiguousarray(data, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError("The array must be 1D, not {}.".format(arr.ndim))
    return arr


def perr(*args, **kwargs) -> None:
    print(*args, file=sys.stderr, **kwargs)
