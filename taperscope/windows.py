"""
Copyright (c) 2001, 2002 Enthought, Inc.
All rights reserved.

Copyright (c) 2003-2019 SciPy Developers.
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

  a. Redistributions of source code must retain the above copyright notice,
     this list of conditions and the following disclaimer.
  b. Redistributions in binary form must reproduce the above copyright
     notice, this list of conditions and the following disclaimer in the
     documentation and/or other materials provided with the distribution.
  c. Neither the name of Enthought nor the names of the SciPy Developers
     may be used to endorse or promote products derived from this software
     without specific prior written permission.


THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDERS OR CONTRIBUTORS
BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY,
OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF
THE POSSIBILITY OF SUCH DAMAGE.
"""

import warnings
from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np
from numpy.polynomial import polynomial

from taperscope.catalog import WindowKind, WindowSpec, COSINE_COEFFS
from taperscope.config import InvalidConfigurationError, TaperWarning
from taperscope.utils.backends import bessel_i0, dominant_eigenvector
from taperscope.utils.chebyshev import chebyshev_poly
from taperscope.utils.coefficients import multiple_angle_to_power

__all__ = ["generate", "get_window", "cosine_sum"]


# Every kernel below takes M >= 1 and returns the symmetric window of length M.
# generate() handles M == 0 and periodic windows.
WindowFunc = Callable[..., np.ndarray]
_GENERATORS: Dict[WindowKind, WindowFunc] = {}


def register_window(kind: WindowKind) -> Callable[[WindowFunc], WindowFunc]:
    """@register_window(WindowKind.foo)
    def foo(M): ...
    """

    def inner(func: WindowFunc) -> WindowFunc:
        _GENERATORS[kind] = func
        return func

    return inner


def _extend(M: int, sym: bool) -> Tuple[int, bool]:
    """Extend window by 1 sample if needed for DFT-even symmetry"""
    if not sym:
        return M + 1, True
    else:
        return M, False


def _truncate(w: np.ndarray, needed: bool) -> np.ndarray:
    """Truncate window by 1 sample if needed for DFT-even symmetry"""
    if needed:
        return w[:-1]
    else:
        return w


def _grid(M: int, start: float, stop: float) -> np.ndarray:
    """M evenly spaced points from start to stop inclusive (spacing divides by M-1).
    A 1-point grid holds the midpoint."""
    if M == 1:
        return np.array([(start + stop) / 2.0])
    return np.linspace(start, stop, M)


def _require_positive(name: str, value: float) -> None:
    if not value > 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")


def generate(spec: WindowSpec) -> np.ndarray:
    """Return the samples of the window described by `spec`.

    Periodic windows of length N are the first N samples
    of the symmetric window of length N+1.

    Returns
    -------
    w : ndarray
        float64 array of length ``spec.n``.
    """
    if spec.n == 0:
        return np.zeros(0)

    M, needs_trunc = _extend(spec.n, not spec.periodic)
    w = _GENERATORS[spec.kind](M, *spec.params)
    w = np.asarray(w, dtype=np.float64)
    assert w.shape == (M,), (spec, w.shape)

    return _truncate(w, needs_trunc)


def get_window(
    window: Union[WindowKind, str], n: int, *params: float, periodic: bool = False
) -> np.ndarray:
    """
    Return a window of a given name and length.

    Parameters
    ----------
    window : str or WindowKind
        Name of the window, see `taperscope.catalog.list_kinds()`.
    n : int
        Number of points in the output window.
    *params : float
        Window parameters, exactly as many as the window declares.
    periodic : bool, optional
        When False (default), generates a symmetric window, for use in filter
        design.
        When True, generates a periodic window, for use in spectral analysis.

    Raises
    ------
    InvalidKindError, InvalidArityError, InvalidSizeError,
    InvalidConfigurationError, MissingDependencyError

    Examples
    --------
    >>> get_window("hann", 4)
    array([0.  , 0.75, 0.75, 0.  ])
    """
    return generate(WindowSpec(window, n, params, periodic))


# Cosine sums


def cosine_sum(M: int, a: Sequence[float]) -> np.ndarray:
    r"""
    Generic weighted sum of cosine terms window

    .. math::  w_k = \sum_{i=0}^{m} (-1)^i a_i \cos(i t_k),
               \quad t_k = \frac{2 \pi k}{M - 1}

    Since cos(i t) = T_i(cos t), the sum is a polynomial in cos(t).
    It is evaluated in the power basis (one cosine per sample and Horner's
    rule) instead of summing separate cosine multiples.

    Parameters
    ----------
    M : int
        Number of points in the output window, at least 1.
    a : array_like
        1 to 5 coefficients a0..a4, with alternating signs implied
        (so these are typically all positive).

    References
    ----------
    .. [1] A. Nuttall, "Some windows with very good sidelobe behavior," IEEE
           Transactions on Acoustics, Speech, and Signal Processing, vol. 29,
           no. 1, pp. 84-91, Feb 1981. :doi:`10.1109/TASSP.1981.1163506`.
    """
    t = _grid(M, 0, 2 * np.pi)
    return polynomial.polyval(np.cos(t), multiple_angle_to_power(a))


def _register_cosine_table(kind: WindowKind) -> None:
    coeffs = COSINE_COEFFS[kind]

    def window(M: int) -> np.ndarray:
        return cosine_sum(M, coeffs)

    window.__name__ = kind.name
    window.__doc__ = f"Cosine-sum window with coefficients {list(coeffs)}."
    register_window(kind)(window)


for _kind in [
    WindowKind.hamming,
    WindowKind.hann,
    WindowKind.blackman,
    WindowKind.blackman_exact,
    WindowKind.blackman_harris,
    WindowKind.blackman_nuttall,
    WindowKind.nuttall,
    WindowKind.flattop,
]:
    _register_cosine_table(_kind)
del _kind


@register_window(WindowKind.bartlett_hann)
def bartlett_hann(M: int) -> np.ndarray:
    """Return a modified Bartlett-Hann window.

    A cosine sum [0.62, 0.38] plus a triangular term
    ``-0.48 * abs(k / (M-1) - 1/2)``."""
    t = _grid(M, 0, 2 * np.pi)
    fac = np.abs(t / (2 * np.pi) - 0.5)
    return cosine_sum(M, COSINE_COEFFS[WindowKind.bartlett_hann]) - 0.48 * fac


@register_window(WindowKind.blackman_gen)
def blackman_gen(M: int, alpha: float) -> np.ndarray:
    """Generalized Blackman window, [(1 - alpha)/2, 1/2, alpha/2].
    alpha = 0.16 is the classic Blackman window."""
    return cosine_sum(M, [(1 - alpha) / 2, 0.5, alpha / 2])


@register_window(WindowKind.blackman_gen3)
def blackman_gen3(M: int, a0: float, a1: float, a2: float) -> np.ndarray:
    return cosine_sum(M, [a0, a1, a2])


@register_window(WindowKind.blackman_gen4)
def blackman_gen4(M: int, a0: float, a1: float, a2: float, a3: float) -> np.ndarray:
    return cosine_sum(M, [a0, a1, a2, a3])


@register_window(WindowKind.blackman_gen5)
def blackman_gen5(
    M: int, a0: float, a1: float, a2: float, a3: float, a4: float
) -> np.ndarray:
    return cosine_sum(M, [a0, a1, a2, a3, a4])


# Elementary windows


@register_window(WindowKind.rectangular)
def rectangular(M: int) -> np.ndarray:
    """Return a boxcar or rectangular window.

    Also known as a Dirichlet window, this is equivalent to no window at all.
    """
    return np.ones(M, float)


@register_window(WindowKind.triangular)
def triangular(M: int) -> np.ndarray:
    """Return a triangular window which does not touch zero.

    ``1 - abs(x)`` over ``x = (2k - (M-1)) / M``: the [-1, 1] grid shrunk by
    (M-1)/M, so the end samples are 1/M.

    See Also
    --------
    bartlett : A triangular window that touches zero
    """
    x = (2.0 * np.arange(M) - (M - 1)) / M
    return 1 - np.abs(x)


@register_window(WindowKind.bartlett)
def bartlett(M: int) -> np.ndarray:
    """Return a Bartlett window, ``1 - abs(x)`` over x in [-1, 1].

    The end samples are zero.
    """
    x = _grid(M, -1, 1)
    return 1 - np.abs(x)


@register_window(WindowKind.welch)
def welch(M: int) -> np.ndarray:
    """Return a Welch (parabolic) window, ``1 - x**2`` over x in [-1, 1]."""
    x = _grid(M, -1, 1)
    return 1 - x ** 2


@register_window(WindowKind.cosine)
def cosine(M: int) -> np.ndarray:
    """Return a sine window, ``sin(t)`` over t in [0, pi]."""
    t = _grid(M, 0, np.pi)
    return np.sin(t)


@register_window(WindowKind.cos_alpha)
def cos_alpha(M: int, alpha: float) -> np.ndarray:
    """Return a power-of-sine window, ``sin(t)**alpha`` over t in [0, pi].

    alpha = 1 is the cosine window, alpha = 2 the Hann window.
    alpha = 0 is the rectangular window.
    """
    if alpha < 0:
        raise InvalidConfigurationError(
            f"cos_alpha window alpha must be non-negative, got {alpha}"
        )
    t = _grid(M, 0, np.pi)
    # sin(pi) is 1e-16, not 0. Clip so fractional powers never see a negative base.
    return np.clip(np.sin(t), 0, None) ** alpha


@register_window(WindowKind.bohman)
def bohman(M: int) -> np.ndarray:
    r"""Return a Bohman window.

    .. math::  w(x) = (1 - |x|) \cos(\pi |x|) + \frac{1}{\pi} \sin(\pi |x|),
               \quad x \in [-1, 1]
    """
    fac = np.abs(_grid(M, -1, 1))
    return (1 - fac) * np.cos(np.pi * fac) + 1.0 / np.pi * np.sin(np.pi * fac)


@register_window(WindowKind.cauchy)
def cauchy(M: int, alpha: float) -> np.ndarray:
    """Return a Cauchy (Lorentzian) window, ``1 / (1 + (alpha x)**2)``
    over x in [-1, 1]."""
    x = _grid(M, -1, 1)
    return 1 / (1 + (alpha * x) ** 2)


@register_window(WindowKind.exponential)
def exponential(M: int, tau: float) -> np.ndarray:
    r"""Return an exponential window centered on the middle sample.

    .. math::  w(n) = e^{-|n - (M-1)/2| / \tau}

    Parameters
    ----------
    M : int
        Number of points in the output window.
    tau : float
        Decay constant, in samples. Use ``tau = -(M-1) / (2 ln(x))``
        if ``x`` is the fraction of the window remaining at the ends.

    References
    ----------
    S. Gade and H. Herlufsen, "Windows to FFT analysis (Part I)",
    Technical Review 3, Bruel & Kjaer, 1987.
    """
    _require_positive("exponential window tau", tau)
    x = _grid(M, -1, 1)
    return np.exp(-np.abs(x) * (M - 1) / (2.0 * tau))


@register_window(WindowKind.gaussian)
def gaussian(M: int, sigma: float) -> np.ndarray:
    """Return a Gaussian window, ``exp(-(x / sigma)**2 / 2)`` over x in [-1, 1].

    `sigma` is relative to half the window length; sigma <= 0.5 keeps the
    end samples below exp(-2).
    """
    _require_positive("gaussian window sigma", sigma)
    x = _grid(M, -1, 1)
    return np.exp(-0.5 * (x / sigma) ** 2)


@register_window(WindowKind.hann_poisson)
def hann_poisson(M: int, alpha: float) -> np.ndarray:
    """Return a Hann window multiplied by a Poisson window.

    ``0.5 (1 - cos(t)) exp(-alpha abs(pi - t) / pi)`` over t in [0, 2 pi].
    """
    t = _grid(M, 0, 2 * np.pi)
    return 0.5 * (1 - np.cos(t)) * np.exp(-alpha * np.abs(np.pi - t) / np.pi)


@register_window(WindowKind.poisson)
def poisson(M: int, alpha: float) -> np.ndarray:
    """Return a Poisson window, ``exp(-alpha abs(x))`` over x in [-1, 1]."""
    x = _grid(M, -1, 1)
    return np.exp(-alpha * np.abs(x))


@register_window(WindowKind.lanczos)
def lanczos(M: int) -> np.ndarray:
    """Return a Lanczos (sinc) window, ``sin(pi x) / (pi x)`` over x in [-1, 1].

    For odd M the middle sample is 0/0, and is set to its limit 1.
    """
    x = _grid(M, -1, 1)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = np.sin(np.pi * x) / (np.pi * x)
    if M % 2:
        w[M // 2] = 1.0
    return w


def _parzen(x: np.ndarray) -> np.ndarray:
    u = 2 * np.abs(x)
    return np.where(u <= 0.5, 1 - 6 * u ** 2 + 6 * u ** 3, 2 * (1 - u) ** 3)


@register_window(WindowKind.parzen)
def parzen(M: int) -> np.ndarray:
    """Return a Parzen window (piecewise cubic) over x in [-1/2, 1/2].

    The end samples are zero.

    References
    ----------
    .. [1] E. Parzen, "Mathematical Considerations in the Estimation of
           Spectra", Technometrics,  Vol. 3, No. 2 (May, 1961), pp. 167-190
    """
    return _parzen(_grid(M, -0.5, 0.5))


@register_window(WindowKind.parzen_octave)
def parzen_octave(M: int) -> np.ndarray:
    """Return a Parzen window as defined by Octave's parzenwin.

    The abscissa is ``(k - (M-1)/2) / M``, so the end samples are non-zero.
    Has no periodic version.
    """
    x = (np.arange(M) - (M - 1) / 2.0) / M
    return _parzen(x)


@register_window(WindowKind.tukey)
def tukey(M: int, r: float) -> np.ndarray:
    """Return a Tukey window, also known as a tapered cosine window.

    Parameters
    ----------
    M : int
        Number of points in the output window.
    r : float
        Fraction of the window inside the cosine tapered region.
        If zero or less, the Tukey window is a rectangular window.
        If one or more, the Tukey window is a Hann window.

    References
    ----------
    .. [1] Harris, Fredric J. (Jan 1978). "On the use of Windows for Harmonic
           Analysis with the Discrete Fourier Transform". Proceedings of the
           IEEE 66 (1): 51-83. :doi:`10.1109/PROC.1978.10837`
    """
    if r <= 0:
        return np.ones(M, float)
    r = min(r, 1.0)

    fac = np.abs(_grid(M, -1, 1))
    taper = 0.5 * (1 + np.cos(np.pi * (fac - 1 + r) / r))
    return np.where(fac <= 1 - r, 1.0, taper)


@register_window(WindowKind.hann_matlab)
def hann_matlab(M: int) -> np.ndarray:
    """Return a Hann window as defined by MATLAB's hann.

    ``0.5 - 0.5 cos(t)`` with ``t = 2 pi k / (M+1)``, k = 1..M, so neither
    end sample is zero. Has no periodic version.
    """
    t = 2 * np.pi * np.arange(1, M + 1) / (M + 1)
    return 0.5 - 0.5 * np.cos(t)


# Chebyshev and special-function windows


@register_window(WindowKind.chebyshev)
def chebyshev(M: int, at: float) -> np.ndarray:
    r"""Return a Dolph-Chebyshev window.

    Parameters
    ----------
    M : int
        Number of points in the output window.
    at : float
        Attenuation (in dB). The sign is ignored.

    Returns
    -------
    w : ndarray
        The window, with the maximum value always normalized to 1

    Notes
    -----
    This window optimizes for the narrowest main lobe width for a given order
    `M` and sidelobe equiripple attenuation `at`, using Chebyshev
    polynomials. It was originally developed by Dolph to optimize the
    directionality of radio antenna arrays.

    The frequency template ``T_{M-1}(x0 cos(pi k / M))`` has equal-height
    sidelobes; the window is its inverse DFT.

    Only symmetric windows are defined.

    References
    ----------
    .. [1] C. Dolph, "A current distribution for broadside arrays which
           optimizes the relationship between beam width and side-lobe level",
           Proceedings of the IEEE, Vol. 34, Issue 6
    .. [2] Peter Lynch, "The Dolph-Chebyshev Window: A Simple Optimal Filter",
           American Meteorological Society (April 1997)
           http://mathsci.ucd.ie/~plynch/Publications/Dolph.pdf
    """
    if abs(at) < 45:
        warnings.warn(
            "This window is not suitable for spectral analysis "
            "for attenuation values lower than about 45dB because "
            "the equivalent noise bandwidth of a Chebyshev window "
            "does not grow monotonically with increasing sidelobe "
            "attenuation when the attenuation is smaller than "
            "about 45 dB.",
            TaperWarning,
        )
    if M == 1:
        return np.ones(1)

    # compute the parameter beta
    order = M - 1
    beta = np.cosh(1.0 / order * np.arccosh(10 ** (abs(at) / 20.0)))
    k = np.arange(M)
    p = chebyshev_poly(order, beta * np.cos(np.pi * k / M))

    # Appropriate IDFT and filling up
    # depending on even/odd M
    if M % 2:
        w = np.real(np.fft.fft(p))
        n = (M + 1) // 2
        w = w[:n]
        w = np.concatenate((w[n - 1 : 0 : -1], w))
    else:
        p = p * np.exp(1.0j * np.pi / M * k)
        w = np.real(np.fft.fft(p))
        n = M // 2 + 1
        w = np.concatenate((w[n - 1 : 0 : -1], w[1:n]))

    return w / np.max(w)


@register_window(WindowKind.kaiser)
def kaiser(M: int, beta: float) -> np.ndarray:
    r"""Return a Kaiser window.

    .. math::  w(x) = I_0\left( \beta \pi \sqrt{1 - x^2} \right) / I_0(\beta \pi),
               \quad x \in [-1, 1]

    Note that `beta` is scaled by pi here (``kaiser(M, 3)`` matches
    ``scipy.signal.windows.kaiser(M, 3 * pi)``).

    Requires scipy (`scipy.special.i0`).

    References
    ----------
    .. [1] J. F. Kaiser, "Digital Filters" - Ch 7 in "Systems analysis by
           digital computer", Editors: F.F. Kuo and J.F. Kaiser, p 218-285.
           John Wiley and Sons, New York, (1966).
    """
    i0 = bessel_i0()
    x = _grid(M, -1, 1)
    arg = beta * np.pi * np.sqrt(np.clip(1 - x ** 2, 0, None))
    return i0(arg) / i0(beta * np.pi)


@register_window(WindowKind.dpss)
def dpss(M: int, beta: float) -> np.ndarray:
    """Return the first Discrete Prolate Spheroidal (Slepian) Sequence.

    Parameters
    ----------
    M : int
        Number of points in the output window.
    beta : float
        Standardized half bandwidth NW, ``0 < beta < M/2``.
        The half bandwidth is ``W = beta / M``.

    Returns
    -------
    w : ndarray
        The most spectrally concentrated taper, with positive sum and the
        maximum value normalized to 1. Has no periodic version.

    Notes
    -----
    The sequence is the eigenvector with the largest eigenvalue of the
    tridiagonal matrix which commutes with the time-frequency concentration
    operator [1]_. Requires scipy (`scipy.linalg.eigh_tridiagonal`).

    References
    ----------
    .. [1] D. Slepian, "Prolate spheroidal wave functions, Fourier analysis,
           and uncertainty V: The discrete case", Bell System Technical
           Journal, 57(5), 1371-1430, 1978.
    """
    if M == 1:
        return np.ones(1)
    if not 0 < beta < M / 2.0:
        raise InvalidConfigurationError(
            f"dpss window beta must be in (0, M/2) = (0, {M / 2.0}), got {beta}"
        )

    W = float(beta) / M
    nidx = np.arange(M)
    d = ((M - 1 - 2 * nidx) / 2.0) ** 2 * np.cos(2 * np.pi * W)
    e = nidx[1:] * (M - nidx[1:]) / 2.0
    w = dominant_eigenvector(d, e)

    if w.sum() < 0:
        w = -w
    return w / np.max(w)


assert set(_GENERATORS) == set(WindowKind)
