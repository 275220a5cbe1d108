import sys

import hypothesis.strategies as hs
import numpy as np
import pytest
from delayed_assert import expect, assert_expectations
from hypothesis import given
from numpy.testing import assert_allclose, assert_equal
from scipy.signal import windows as sw

from taperscope.catalog import WindowKind, WindowSpec, kind_info
from taperscope.config import (
    InvalidKindError,
    InvalidArityError,
    InvalidConfigurationError,
    InvalidSizeError,
    MissingDependencyError,
    TaperError,
    TaperWarning,
)
from taperscope.windows import generate, get_window, cosine_sum


pytestmark = pytest.mark.filterwarnings("ignore::taperscope.config.TaperWarning")


# Every kind


@pytest.mark.parametrize("n", [1, 2, 3, 8, 9, 100])
def test_length_and_dtype(kind_params, n):
    kind, params = kind_params
    w = get_window(kind, n, *params)
    assert w.shape == (n,)
    assert w.dtype == np.float64
    assert np.all(np.isfinite(w))


def test_empty(kind_params):
    kind, params = kind_params
    assert_equal(get_window(kind, 0, *params), np.zeros(0))


def test_length_one(kind_params):
    """A 1-sample symmetric window is its own center sample."""
    kind, params = kind_params
    assert_allclose(get_window(kind, 1, *params), [1.0], atol=1e-8)


@pytest.mark.parametrize("n", [2, 3, 8, 9, 100])
def test_symmetric(kind_params, n):
    kind, params = kind_params
    w = get_window(kind, n, *params)
    assert_allclose(w, w[::-1], rtol=0, atol=1e-10)


@pytest.mark.parametrize("n", [2, 3, 8, 9, 100])
def test_periodic_is_truncated_symmetric(kind_params, n):
    kind, params = kind_params
    if not kind_info(kind).periodic:
        pytest.skip(f"{kind.name} has no periodic version")

    periodic = get_window(kind, n, *params, periodic=True)
    symmetric = get_window(kind, n + 1, *params)
    assert_equal(periodic, symmetric[:n])


def test_peak_near_one():
    """Sweep all kinds, report every failure at once."""
    from conftest import PARAMS

    for kind in WindowKind:
        params = PARAMS.get(kind, ())
        for n in [9, 64]:
            w = get_window(kind, n, *params)
            expect(0.5 < np.max(w) <= 1 + 1e-6, f"{kind.name}({n}) peak {np.max(w)}")
            expect(np.min(w) > -0.1, f"{kind.name}({n}) min {np.min(w)}")
    assert_expectations()


# Individual kinds


def test_rectangular():
    assert_equal(get_window("rectangular", 7), np.ones(7))


def test_hann():
    assert_allclose(get_window("hann", 4), [0, 0.75, 0.75, 0], atol=1e-12)
    assert_allclose(get_window("hann", 4, periodic=True), [0, 0.5, 1, 0.5], atol=1e-12)


def test_hamming_length_one():
    assert_allclose(get_window("hamming", 1), [1.0])


def test_blackman_harris_empty():
    w = get_window("blackman_harris", 0)
    assert w.shape == (0,)


def test_triangular_vs_bartlett():
    """triangular never touches zero, bartlett does."""
    tri = get_window("triangular", 8)
    bart = get_window("bartlett", 8)

    assert tri[0] == pytest.approx(1 / 8)
    assert tri[-1] == pytest.approx(1 / 8)
    assert bart[0] == pytest.approx(0)
    assert bart[-1] == pytest.approx(0)
    assert np.all(tri[3:5] > 0.8)
    assert np.all(bart[3:5] > 0.8)


def test_lanczos_center():
    w = get_window("lanczos", 9)
    assert w[4] == 1.0
    assert w[0] == pytest.approx(0, abs=1e-12)
    assert np.all(np.isfinite(get_window("lanczos", 8)))


def test_hann_matlab():
    assert_allclose(get_window("hann_matlab", 3), [0.5, 1.0, 0.5], atol=1e-12)
    assert np.all(get_window("hann_matlab", 16) > 0)


def test_tukey_limits():
    assert_equal(get_window("tukey", 10, 0), np.ones(10))
    assert_equal(get_window("tukey", 10, -1), np.ones(10))
    assert_allclose(get_window("tukey", 10, 1), get_window("hann", 10), atol=1e-12)
    assert_allclose(get_window("tukey", 10, 5), get_window("hann", 10), atol=1e-12)


def test_cos_alpha_family():
    assert_allclose(get_window("cos_alpha", 17, 1), get_window("cosine", 17))
    assert_allclose(
        get_window("cos_alpha", 17, 2), get_window("hann", 17), atol=1e-12
    )


def test_blackman_gen_is_blackman():
    assert_allclose(
        get_window("blackman_gen", 33, 0.16), get_window("blackman", 33), atol=1e-12
    )
    assert_allclose(
        get_window("blackman_gen3", 33, 0.42, 0.5, 0.08),
        get_window("blackman", 33),
        atol=1e-12,
    )


def test_parzen_variants():
    assert get_window("parzen", 9)[0] == pytest.approx(0, abs=1e-12)
    assert get_window("parzen_octave", 9)[0] > 0
    assert get_window("parzen", 9)[4] == pytest.approx(1)
    assert get_window("parzen_octave", 9)[4] == pytest.approx(1)


# Compare with reference implementations


@pytest.mark.parametrize("n", [2, 7, 64, 65])
def test_matches_numpy(n):
    assert_allclose(get_window("hann", n), np.hanning(n), atol=1e-12)
    assert_allclose(get_window("hamming", n), np.hamming(n), atol=1e-12)
    assert_allclose(get_window("blackman", n), np.blackman(n), atol=1e-12)
    assert_allclose(get_window("bartlett", n), np.bartlett(n), atol=1e-12)
    assert_allclose(get_window("kaiser", n, 2), np.kaiser(n, 2 * np.pi), atol=1e-12)


@pytest.mark.parametrize("n", [2, 7, 64, 65])
@pytest.mark.parametrize("periodic", [False, True])
def test_matches_scipy(n, periodic):
    def check(ours, theirs):
        assert_allclose(ours, theirs, rtol=1e-9, atol=1e-12)

    sym = not periodic
    check(
        get_window("blackman_harris", n, periodic=periodic),
        sw.blackmanharris(n, sym=sym),
    )
    check(get_window("flattop", n, periodic=periodic), sw.flattop(n, sym=sym))
    check(
        get_window("blackman_nuttall", n, periodic=periodic), sw.nuttall(n, sym=sym)
    )
    check(get_window("bohman", n, periodic=periodic), sw.bohman(n, sym=sym))
    check(get_window("tukey", n, 0.5, periodic=periodic), sw.tukey(n, 0.5, sym=sym))

    # Parameters are relative to the half-length of the (extended) window.
    M = n + periodic
    check(
        get_window("gaussian", n, 0.4, periodic=periodic),
        sw.gaussian(n, 0.4 * (M - 1) / 2, sym=sym),
    )
    check(
        get_window("exponential", n, 3.0, periodic=periodic),
        sw.exponential(n, tau=3.0, sym=sym),
    )


@pytest.mark.parametrize("n", [2, 3, 50, 51])
def test_chebyshev_matches_scipy(n):
    assert_allclose(
        get_window("chebyshev", n, 100), sw.chebwin(n, 100), rtol=1e-8, atol=1e-10
    )


@pytest.mark.parametrize("n", [8, 51, 64])
def test_dpss_matches_scipy(n):
    ours = get_window("dpss", n, 2.5)
    theirs = sw.dpss(n, 2.5)
    assert_allclose(ours, theirs / np.max(theirs), atol=1e-9)


def test_chebyshev():
    w = get_window("chebyshev", 51, 100)
    assert np.max(w) == pytest.approx(1)
    assert np.argmax(w) == 25

    with pytest.warns(TaperWarning):
        get_window("chebyshev", 51, 30)


def test_dpss():
    w = get_window("dpss", 64, 3)
    assert np.max(w) == pytest.approx(1)
    assert np.sum(w) > 0

    for beta in [0, -1, 32, 40]:
        with pytest.raises(InvalidConfigurationError):
            get_window("dpss", 64, beta)


def test_positive_parameters():
    with pytest.raises(InvalidConfigurationError):
        get_window("exponential", 8, 0)
    with pytest.raises(InvalidConfigurationError):
        get_window("gaussian", 8, -0.5)


def test_cos_alpha_negative():
    """sin(pi) is 1e-16, not 0, so a negative power would blow up one end."""
    for alpha in [-1.0, -0.5]:
        with pytest.raises(InvalidConfigurationError):
            get_window("cos_alpha", 8, alpha)

    assert_equal(get_window("cos_alpha", 8, 0), np.ones(8))


# Cosine sums


@given(
    M=hs.integers(2, 64),
    a=hs.lists(hs.floats(-1, 1), min_size=1, max_size=5),
)
def test_cosine_sum(M, a):
    t = np.linspace(0, 2 * np.pi, M)
    expected = sum((-1) ** i * ai * np.cos(i * t) for i, ai in enumerate(a))
    assert_allclose(cosine_sum(M, a), expected, rtol=0, atol=1e-12)


def test_cosine_sum_arity():
    with pytest.raises(InvalidArityError):
        cosine_sum(8, [0.1] * 6)


# Validation


def test_invalid_kind():
    with pytest.raises(InvalidKindError):
        get_window("hanning", 8)
    with pytest.raises(TaperError):
        get_window("", 8)

    # Case-insensitive
    assert_equal(get_window("HANN", 8), get_window("hann", 8))


def test_invalid_arity():
    with pytest.raises(InvalidArityError):
        get_window("hann", 8, 0.5)
    with pytest.raises(InvalidArityError):
        get_window("kaiser", 8)
    with pytest.raises(InvalidArityError):
        get_window("blackman_gen4", 8, 0.1, 0.2, 0.3)


@pytest.mark.parametrize("n", [-1, 2.5, "eight", None])
def test_invalid_size(n):
    with pytest.raises(InvalidSizeError):
        get_window("hann", n)


@pytest.mark.parametrize("kind", ["chebyshev", "hann_matlab", "parzen_octave", "dpss"])
def test_no_periodic_version(kind):
    from conftest import PARAMS

    params = PARAMS.get(WindowKind[kind], ())
    with pytest.raises(InvalidConfigurationError):
        get_window(kind, 8, *params, periodic=True)


def test_generate_spec():
    spec = WindowSpec("kaiser", 16, [3], periodic=True)
    assert_equal(generate(spec), get_window("kaiser", 16, 3.0, periodic=True))


# Backends


def test_missing_bessel(monkeypatch):
    monkeypatch.setitem(sys.modules, "scipy.special", None)
    with pytest.raises(MissingDependencyError) as excinfo:
        get_window("kaiser", 8, 3)
    assert isinstance(excinfo.value, ImportError)

    # Other kinds don't need scipy.
    get_window("hann", 8)


def test_missing_eigensolver(monkeypatch):
    monkeypatch.setitem(sys.modules, "scipy.linalg", None)
    with pytest.raises(MissingDependencyError):
        get_window("dpss", 8, 2)
