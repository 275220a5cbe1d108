"""
Frequency-domain analysis of window samples.

Every function takes a sample sequence (not a window name),
so it works equally on catalog windows and user-supplied arrays.
"""

from enum import unique, auto
from typing import Sequence

import attr
import numpy as np

from taperscope.config import (
    KeywordAttrs,
    DumpEnumAsStr,
    InvalidSizeError,
    NumericDegeneracyError,
)
from taperscope.util import as_float_array
from taperscope.utils.padding import rightpad

__all__ = [
    "DEFAULT_MIN_BINS",
    "AxisUnit",
    "SpectrumConfig",
    "frequency_response",
    "magnitude_response",
    "response_db",
    "bin_axis",
    "enbw",
    "coherent_gain",
    "processing_gain",
    "scalloping_loss",
    "scalloping_loss_db",
    "WindowMetrics",
    "compute_metrics",
]


DEFAULT_MIN_BINS = 1000


@unique
class AxisUnit(DumpEnumAsStr):
    # Fraction of the Nyquist frequency. Centered axis spans [-1, 1).
    nyquist = auto()
    # Cycles per sample. Centered axis spans [-0.5, 0.5).
    sample = auto()
    # DFT bin index.
    bin = auto()


class SpectrumConfig(KeywordAttrs):
    """
    How to compute and present a frequency response.

    The response is computed on at least `min_bins` DFT bins
    (the window is zero-padded on the right). More bins interpolate the
    response more finely, but do not change its shape.
    """

    min_bins: int = DEFAULT_MIN_BINS

    # If True, fftshift the response so index 0 is -Nyquist.
    centered: bool = False

    unit: AxisUnit = attr.ib(default=AxisUnit.nyquist, converter=AxisUnit.by_name)


# Frequency response


def _n_bins(nsamp: int, min_bins: int) -> int:
    if not min_bins > 0:
        raise InvalidSizeError(f"min_bins={min_bins} must be > 0")
    return max(nsamp, min_bins)


def frequency_response(
    samples: Sequence[float], min_bins: int = DEFAULT_MIN_BINS
) -> np.ndarray:
    """DFT of `samples` right-padded with zeros to ``max(len(samples), min_bins)``.

    Output is complex, in raw DFT order (index 0 is DC)."""
    data = as_float_array(samples)
    n_bins = _n_bins(len(data), min_bins)

    # Passing n to fft() would also zero-pad, but truncates when n < len(data).
    return np.fft.fft(rightpad(data, n_bins))


def magnitude_response(
    samples: Sequence[float],
    min_bins: int = DEFAULT_MIN_BINS,
    centered: bool = False,
) -> np.ndarray:
    """abs(frequency_response()).
    If `centered`, index 0 is -Nyquist and DC is at index ``n_bins // 2``."""
    spectrum = np.abs(frequency_response(samples, min_bins))
    if centered:
        spectrum = np.fft.fftshift(spectrum)
    return spectrum


def response_db(
    samples: Sequence[float],
    min_bins: int = DEFAULT_MIN_BINS,
    centered: bool = False,
) -> np.ndarray:
    """Magnitude response in dB, normalized so the peak is 0 dB.
    Exact zeros map to -inf."""
    spectrum = magnitude_response(samples, min_bins, centered)
    peak = np.max(spectrum)
    if peak == 0:
        raise NumericDegeneracyError("cannot normalize an all-zero response")

    with np.errstate(divide="ignore"):
        return 20 * np.log10(spectrum / peak)


def bin_axis(
    n_bins: int, unit: AxisUnit = AxisUnit.nyquist, centered: bool = False
) -> np.ndarray:
    """
    Frequency of each response index, in the requested unit.

    Parameters
    ----------
    n_bins : int
        Length of the response.
    unit : AxisUnit or str
        ``nyquist``, ``sample`` or ``bin``.
    centered : bool
        Whether the response was fftshifted.
        If False, index k is bin k (frequencies from 0 up to, but excluding,
        the sampling rate).
        If True, bins run from ``-(n_bins // 2)`` to ``(n_bins - 1) // 2``.
    """
    unit = AxisUnit.by_name(unit)
    if not n_bins > 0:
        raise InvalidSizeError(f"n_bins={n_bins} must be > 0")

    if centered:
        k = np.fft.fftshift(np.fft.fftfreq(n_bins)) * n_bins
    else:
        k = np.arange(n_bins, dtype=float)

    if unit == AxisUnit.bin:
        return k
    if unit == AxisUnit.sample:
        return k / n_bins
    if unit == AxisUnit.nyquist:
        return 2 * k / n_bins
    assert False, unit


# Scalar metrics


def _nonempty(samples: Sequence[float]) -> np.ndarray:
    data = as_float_array(samples)
    if len(data) == 0:
        raise InvalidSizeError("metric requires at least 1 sample")
    return data


def _nonzero_sum(data: np.ndarray, metric: str) -> float:
    total = np.sum(data)
    if total == 0:
        raise NumericDegeneracyError(f"{metric} undefined, window samples sum to 0")
    return total


def enbw(samples: Sequence[float]) -> float:
    """Equivalent noise bandwidth in bins, ``N sum(w**2) / sum(w)**2``.

    1.0 for a rectangular window, 1.5 for a periodic Hann window."""
    data = _nonempty(samples)
    total = _nonzero_sum(data, "ENBW")
    return float(len(data) * np.sum(data ** 2) / total ** 2)


def coherent_gain(samples: Sequence[float]) -> float:
    """Mean sample value (the DC gain relative to a rectangular window)."""
    return float(np.mean(_nonempty(samples)))


def processing_gain(samples: Sequence[float]) -> float:
    """Reciprocal of ENBW."""
    return 1.0 / enbw(samples)


def scalloping_loss(samples: Sequence[float]) -> float:
    """
    Amplitude of a tone halfway between two DFT bins,
    relative to a tone on a bin center.

    This is the ratio ``abs(W(1/(2N))) / abs(W(0))`` of the window's DTFT
    ``W(f) = sum_n w[n] exp(-2j pi f n)``, evaluated exactly
    (not read off a zero-padded DFT grid).
    About 0.637 for a rectangular window and 0.849 for a Hann window.
    """
    data = _nonempty(samples)
    total = _nonzero_sum(data, "scalloping loss")

    N = len(data)
    half_bin = np.sum(data * np.exp(-1j * np.pi * np.arange(N) / N))
    return float(np.abs(half_bin) / np.abs(total))


def scalloping_loss_db(samples: Sequence[float]) -> float:
    """Scalloping loss as a positive number of dB (3.92 for rectangular)."""
    return float(-20 * np.log10(scalloping_loss(samples)))


@attr.dataclass(frozen=True)
class WindowMetrics:
    enbw: float
    coherent_gain: float
    processing_gain: float
    scalloping_loss: float
    scalloping_loss_db: float


def compute_metrics(samples: Sequence[float]) -> WindowMetrics:
    data = _nonempty(samples)
    return WindowMetrics(
        enbw=enbw(data),
        coherent_gain=coherent_gain(data),
        processing_gain=processing_gain(data),
        scalloping_loss=scalloping_loss(data),
        scalloping_loss_db=scalloping_loss_db(data),
    )
