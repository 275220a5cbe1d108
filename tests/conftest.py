"""
Fixtures shared by test_windows.py and test_cli.py.
"""

from typing import Tuple

import pytest

from taperscope.catalog import WindowKind

# Valid parameters for each parametrized kind, at every length >= 2.
PARAMS = {
    WindowKind.cos_alpha: (2.0,),
    WindowKind.cauchy: (3.0,),
    WindowKind.exponential: (2.0,),
    WindowKind.gaussian: (0.4,),
    WindowKind.hann_poisson: (2.0,),
    WindowKind.poisson: (2.0,),
    WindowKind.tukey: (0.5,),
    WindowKind.blackman_gen: (0.16,),
    WindowKind.blackman_gen3: (0.42, 0.5, 0.08),
    WindowKind.blackman_gen4: (0.35875, 0.48829, 0.14128, 0.01168),
    WindowKind.blackman_gen5: (
        0.21557895,
        0.41663158,
        0.277263158,
        0.083578947,
        0.006947368,
    ),
    WindowKind.chebyshev: (100.0,),
    WindowKind.kaiser: (3.0,),
    WindowKind.dpss: (0.9,),
}


@pytest.fixture(params=list(WindowKind), ids=lambda kind: kind.name)
def kind_params(request) -> Tuple[WindowKind, Tuple[float, ...]]:
    kind = request.param
    return kind, PARAMS.get(kind, ())
