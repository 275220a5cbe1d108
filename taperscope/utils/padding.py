import numpy as np

__all__ = ["rightpad"]


def rightpad(data: np.ndarray, n: int, constant_values: float = 0) -> np.ndarray:
    """Truncates or pads `data` on the right to exactly `n` samples."""
    if not n > 0:
        raise ValueError(f"rightpad(n={n}) must be > 0")

    data = data[:n]

    # _validate_lengths() raises error on negative values.
    data = np.pad(data, (0, n - len(data)), "constant", constant_values=constant_values)

    return data
