from typing import Optional, Dict, Tuple

import numpy as np

from taperscope.catalog import WindowSpec
from taperscope.spectrum import (
    SpectrumConfig,
    WindowMetrics,
    magnitude_response,
    response_db,
    bin_axis,
    compute_metrics,
)
from taperscope.util import coalesce
from taperscope.windows import generate


class Window:
    """
    Caches the samples, frequency response and metrics of one window.

    Everything is computed on first access.
    Assigning a different `spec` invalidates the cache, as does `invalidate()`.
    Responses are cached per (min_bins, centered), so `scfg` may be changed freely.

    Not thread-safe: share `WindowSpec`s between threads, not `Window`s.
    """

    def __init__(self, spec: WindowSpec, scfg: Optional[SpectrumConfig] = None):
        self._spec = spec
        self.scfg = coalesce(scfg, SpectrumConfig())
        self._samples: Optional[np.ndarray] = None
        self._responses: Dict[Tuple[str, int, bool], np.ndarray] = {}
        self._metrics: Optional[WindowMetrics] = None

    @property
    def spec(self) -> WindowSpec:
        return self._spec

    @spec.setter
    def spec(self, spec: WindowSpec) -> None:
        if spec != self._spec:
            self._spec = spec
            self.invalidate()

    def invalidate(self) -> None:
        self._samples = None
        self._responses.clear()
        self._metrics = None

    @property
    def samples(self) -> np.ndarray:
        if self._samples is None:
            self._samples = generate(self._spec)
            # Callers get a view of the cache.
            self._samples.flags.writeable = False
        return self._samples

    def _response(self, key: str) -> np.ndarray:
        scfg = self.scfg
        cache_key = (key, scfg.min_bins, scfg.centered)
        if cache_key not in self._responses:
            func = response_db if key == "db" else magnitude_response
            response = func(self.samples, scfg.min_bins, scfg.centered)
            response.flags.writeable = False
            self._responses[cache_key] = response
        return self._responses[cache_key]

    @property
    def response(self) -> np.ndarray:
        """Magnitude response, with scfg.min_bins and scfg.centered."""
        return self._response("magnitude")

    @property
    def response_db(self) -> np.ndarray:
        return self._response("db")

    @property
    def frequencies(self) -> np.ndarray:
        """Frequency axis matching `response`, in scfg.unit."""
        return bin_axis(len(self.response), self.scfg.unit, self.scfg.centered)

    @property
    def metrics(self) -> WindowMetrics:
        if self._metrics is None:
            self._metrics = compute_metrics(self.samples)
        return self._metrics

    def __len__(self) -> int:
        return self._spec.n

    def __repr__(self) -> str:
        return f"Window({self._spec!r})"
