"""
The closed catalog of window kinds.

Each `WindowKind` declares its parameter names (and therefore arity),
whether it has a periodic form, and, for the cosine-sum family,
its published coefficient table. `WindowSpec` pairs a kind with a length,
parameters and the periodic flag, and is validated on construction.
"""

from enum import unique, auto
from typing import Dict, Tuple, List, Any, Union, Sequence

import attr

from taperscope.config import (
    DumpableAttrs,
    DumpEnumAsStr,
    InvalidKindError,
    InvalidArityError,
    InvalidConfigurationError,
    InvalidSizeError,
)

__all__ = [
    "WindowKind",
    "KindInfo",
    "COSINE_COEFFS",
    "kind_by_name",
    "kind_info",
    "list_kinds",
    "WindowSpec",
]


@unique
class WindowKind(DumpEnumAsStr):
    # Elementary closed forms
    rectangular = auto()
    triangular = auto()
    bartlett = auto()
    welch = auto()
    cosine = auto()
    cos_alpha = auto()
    bohman = auto()
    cauchy = auto()
    exponential = auto()
    gaussian = auto()
    hann_poisson = auto()
    poisson = auto()
    lanczos = auto()
    parzen = auto()
    parzen_octave = auto()
    tukey = auto()
    hann_matlab = auto()

    # Cosine sums (Blackman-Harris family)
    hamming = auto()
    hann = auto()
    blackman = auto()
    blackman_exact = auto()
    blackman_harris = auto()
    blackman_nuttall = auto()
    nuttall = auto()
    flattop = auto()
    bartlett_hann = auto()
    blackman_gen = auto()
    blackman_gen3 = auto()
    blackman_gen4 = auto()
    blackman_gen5 = auto()

    # Chebyshev and special-function windows
    chebyshev = auto()
    kaiser = auto()
    dpss = auto()


@attr.dataclass(frozen=True)
class KindInfo:
    name: str
    param_names: Tuple[str, ...]
    periodic: bool

    @property
    def arity(self) -> int:
        return len(self.param_names)


# kind: (param_names, has periodic form)
_KIND_TABLE: Dict[WindowKind, Tuple[Tuple[str, ...], bool]] = {
    WindowKind.rectangular: ((), True),
    WindowKind.triangular: ((), True),
    WindowKind.bartlett: ((), True),
    WindowKind.welch: ((), True),
    WindowKind.cosine: ((), True),
    WindowKind.cos_alpha: (("alpha",), True),
    WindowKind.bohman: ((), True),
    WindowKind.cauchy: (("alpha",), True),
    WindowKind.exponential: (("tau",), True),
    WindowKind.gaussian: (("sigma",), True),
    WindowKind.hann_poisson: (("alpha",), True),
    WindowKind.poisson: (("alpha",), True),
    WindowKind.lanczos: ((), True),
    WindowKind.parzen: ((), True),
    WindowKind.parzen_octave: ((), False),
    WindowKind.tukey: (("r",), True),
    WindowKind.hann_matlab: ((), False),
    WindowKind.hamming: ((), True),
    WindowKind.hann: ((), True),
    WindowKind.blackman: ((), True),
    WindowKind.blackman_exact: ((), True),
    WindowKind.blackman_harris: ((), True),
    WindowKind.blackman_nuttall: ((), True),
    WindowKind.nuttall: ((), True),
    WindowKind.flattop: ((), True),
    WindowKind.bartlett_hann: ((), True),
    WindowKind.blackman_gen: (("alpha",), True),
    WindowKind.blackman_gen3: (("a0", "a1", "a2"), True),
    WindowKind.blackman_gen4: (("a0", "a1", "a2", "a3"), True),
    WindowKind.blackman_gen5: (("a0", "a1", "a2", "a3", "a4"), True),
    WindowKind.chebyshev: (("at",), False),
    WindowKind.kaiser: (("beta",), True),
    WindowKind.dpss: (("beta",), False),
}

assert set(_KIND_TABLE) == set(WindowKind)


# Multiple-angle coefficients a0..a4, in the convention
# w = a0 - a1 cos(t) + a2 cos(2t) - a3 cos(3t) + a4 cos(4t).
# Kinds taking coefficients as parameters are absent.
COSINE_COEFFS: Dict[WindowKind, Tuple[float, ...]] = {
    WindowKind.hamming: (0.54, 0.46),
    WindowKind.hann: (0.5, 0.5),
    WindowKind.blackman: (0.42, 0.5, 0.08),
    # Nulls the third and fourth sidelobes.
    WindowKind.blackman_exact: (7938 / 18608, 9240 / 18608, 1430 / 18608),
    # Harris 1978, 4-term -92 dB.
    WindowKind.blackman_harris: (0.35875, 0.48829, 0.14128, 0.01168),
    WindowKind.blackman_nuttall: (0.3635819, 0.4891775, 0.1365995, 0.0106411),
    # Nuttall 1981, continuous first derivative.
    WindowKind.nuttall: (0.355768, 0.487396, 0.144232, 0.012604),
    WindowKind.flattop: (
        0.21557895,
        0.41663158,
        0.277263158,
        0.083578947,
        0.006947368,
    ),
    # Cosine part only. See windows.bartlett_hann().
    WindowKind.bartlett_hann: (0.62, 0.38),
}


def kind_by_name(kind_or_name: Union[WindowKind, str]) -> WindowKind:
    """Case-insensitive lookup. Raises InvalidKindError."""
    if isinstance(kind_or_name, WindowKind):
        return kind_or_name
    try:
        return WindowKind[str(kind_or_name).lower()]
    except KeyError:
        raise InvalidKindError(
            f"unknown window '{kind_or_name}', see `taperscope list` for choices"
        )


def kind_info(kind: Union[WindowKind, str]) -> KindInfo:
    kind = kind_by_name(kind)
    param_names, periodic = _KIND_TABLE[kind]
    return KindInfo(kind.name, param_names, periodic)


def list_kinds(pattern: str = "") -> List[KindInfo]:
    """All window kinds in catalog order,
    optionally filtered by case-insensitive substring `pattern`."""
    pattern = pattern.lower()
    return [kind_info(kind) for kind in WindowKind if pattern in kind.name]


def _size(n: Any) -> int:
    # bool is an int subclass, but True is not a length.
    if isinstance(n, bool):
        raise InvalidSizeError(f"window length must be an integer, got {n!r}")
    try:
        size = int(n)
    except (TypeError, ValueError):
        raise InvalidSizeError(f"window length must be an integer, got {n!r}")
    if size != n or size < 0:
        raise InvalidSizeError(f"window length must be a non-negative integer, got {n!r}")
    return size


def _float_tuple(params: Sequence[float]) -> Tuple[float, ...]:
    if isinstance(params, (str, bytes)):
        raise InvalidConfigurationError(
            f"window parameters must be a list of numbers, got {params!r}"
        )
    try:
        return tuple(float(p) for p in params)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(
            f"window parameters must be a list of numbers, got {params!r}"
        )


class WindowSpec(DumpableAttrs, frozen=True):
    """Which window to generate. Immutable and hashable.

    ```yaml
    !WindowSpec
    kind: kaiser
    n: 64
    params: [3.0]
    periodic: true
    ```
    """

    kind: WindowKind = attr.ib(converter=kind_by_name)
    n: int = attr.ib(converter=_size)
    params: Tuple[float, ...] = attr.ib(default=(), converter=_float_tuple)
    periodic: bool = attr.ib(default=False, converter=bool)

    def __attrs_post_init__(self):
        info = self.info
        if len(self.params) != info.arity:
            raise InvalidArityError(
                f"{info.name} window takes {info.arity} parameter(s) "
                f"{list(info.param_names)}, got {len(self.params)}"
            )
        if self.periodic and not info.periodic:
            raise InvalidConfigurationError(
                f"{info.name} window has no periodic version"
            )

    @property
    def info(self) -> KindInfo:
        return kind_info(self.kind)

    def __getstate__(self) -> Dict[str, Any]:
        state = super().__getstate__()
        # ruamel.yaml represents lists, not tuples.
        if "params" in state:
            state["params"] = list(state["params"])
        return state
