from pathlib import Path

import attr
import pytest

from taperscope.catalog import WindowKind, WindowSpec
from taperscope.config import (
    yaml,
    DumpableAttrs,
    evolve_compat,
    TaperError,
    TaperWarning,
    InvalidArityError,
    InvalidConfigurationError,
    InvalidKindError,
    InvalidSizeError,
)

# Dumping


def test_window_spec_dump():
    spec = WindowSpec("kaiser", 64, [3], periodic=True)
    assert (
        yaml.dump(spec)
        == """\
!WindowSpec
kind: kaiser
n: 64
params:
- 3.0
periodic: true
"""
    )

    # Default fields are omitted.
    assert (
        yaml.dump(WindowSpec("hann", 8))
        == """\
!WindowSpec
kind: hann
n: 8
"""
    )


def test_dump_enum_no_alias():
    """Dumping the same enum value twice must not produce &id001 anchors."""

    class Pair(DumpableAttrs):
        a: WindowKind
        b: WindowKind

    s = yaml.dump(Pair(WindowKind.hann, WindowKind.hann))
    assert "&" not in s
    assert (
        s
        == """\
!Pair
a: hann
b: hann
"""
    )


def test_dump_load_path(tmp_path: Path):
    """Paths are read and written as UTF-8."""

    class Note(DumpableAttrs):
        text: str

    path = tmp_path / "note.yaml"
    note = Note("Ωmega")
    yaml.dump(note, path)
    assert "Ωmega" in path.read_text(encoding="utf-8")
    assert yaml.load(path) == note

    with pytest.raises(TypeError):
        yaml.load(42)


# Loading


@pytest.mark.parametrize(
    "spec",
    [
        WindowSpec("hann", 8),
        WindowSpec(WindowKind.tukey, 100, (0.25,), periodic=True),
        WindowSpec("blackman_gen5", 1, (0.2, 0.4, 0.3, 0.08, 0.01)),
        WindowSpec("chebyshev", 0, (60,)),
    ],
)
def test_window_spec_round_trip(spec):
    assert yaml.load(yaml.dump(spec)) == spec


def test_window_spec_load_validates():
    with pytest.raises(InvalidKindError):
        yaml.load("!WindowSpec {kind: hanning, n: 8}")

    with pytest.raises(InvalidArityError):
        yaml.load("!WindowSpec {kind: kaiser, n: 8}")

    spec = yaml.load("!WindowSpec {kind: Kaiser, n: 8, params: [2]}")
    assert spec == WindowSpec("kaiser", 8, (2.0,))


@pytest.mark.parametrize(
    "params", ["3", "[abc]", "abc", "null", "[[1, 2]]", "{beta: 3}"]
)
def test_window_spec_load_bad_params(params):
    """Malformed params raise TaperError, which the CLI reports cleanly."""
    s = f"!WindowSpec\nkind: kaiser\nn: 8\nparams: {params}\n"
    with pytest.raises(InvalidConfigurationError):
        yaml.load(s)


def test_window_spec_load_missing_field():
    with pytest.raises(TaperError):
        yaml.load("!WindowSpec {kind: hann}")


def test_ignore_unrecognized_fields():
    """Ensure unrecognized fields yield warning, not exception."""
    s = """\
!WindowSpec
kind: hann
n: 8
beta: 2
"""
    with pytest.warns(TaperWarning):
        assert yaml.load(s) == WindowSpec("hann", 8)


def test_evolve_compat():
    spec = WindowSpec("kaiser", 16, (3,))
    assert evolve_compat(spec, n=32) == WindowSpec("kaiser", 32, (3,))
    assert evolve_compat(spec, periodic=True) == WindowSpec(
        "kaiser", 16, (3,), periodic=True
    )

    with pytest.warns(TaperWarning):
        assert evolve_compat(spec, size=3) == spec


# WindowSpec validation


def test_window_spec_frozen():
    spec = WindowSpec("hann", 8)
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        spec.n = 16

    # Hashable
    assert {spec: 1}[WindowSpec("HANN", 8.0)] == 1
    assert spec.params == ()
    assert spec.kind is WindowKind.hann


@pytest.mark.parametrize("n", [True, False, -1, 2.5, "8", None])
def test_window_spec_size(n):
    with pytest.raises(InvalidSizeError):
        WindowSpec("hann", n)


@pytest.mark.parametrize("params", [3.0, "3", [None], ["abc"]])
def test_window_spec_params(params):
    with pytest.raises(InvalidConfigurationError):
        WindowSpec("kaiser", 8, params)


def test_window_spec_periodic():
    with pytest.raises(InvalidConfigurationError):
        WindowSpec("dpss", 8, (2,), periodic=True)
