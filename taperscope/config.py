"""
The most important class in this module is `DumpableAttrs`.
See its docstring for details.

This module also holds the error taxonomy shared by the whole package
(`TaperError` and its subclasses) and `TaperWarning`.
"""

import warnings
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import (
    TypeVar,
    Type,
    Optional,
    TYPE_CHECKING,
    Dict,
    Any,
    TextIO,
    Union,
)

import attr
from ruamel.yaml import (
    yaml_object,
    YAML,
    Representer,
    RoundTripRepresenter,
)

__all__ = [
    "yaml",
    "DumpableAttrs",
    "evolve_compat",
    "KeywordAttrs",
    "DumpEnumAsStr",
    "TaperError",
    "InvalidKindError",
    "InvalidArityError",
    "InvalidConfigurationError",
    "InvalidSizeError",
    "MissingDependencyError",
    "NumericDegeneracyError",
    "TaperWarning",
]


# Setup YAML loading (yaml object).


class MyYAML(YAML):
    """Reads and writes Path objects as UTF-8, regardless of locale."""

    def dump(
        self, data: Any, stream: "Union[Path, TextIO, None]" = None, **kwargs
    ) -> Optional[str]:
        if isinstance(stream, Path):
            with stream.open("w", encoding="utf-8") as f:
                YAML.dump(self, data, f, **kwargs)

        elif stream is None:
            stream = StringIO()
            YAML.dump(self, data, stream, **kwargs)
            return stream.getvalue()

        else:
            YAML.dump(self, data, stream, **kwargs)

        return None

    def load(self, stream: "Union[Path, str]") -> Any:
        if isinstance(stream, Path):
            stream = stream.read_text(encoding="utf-8")
        if not isinstance(stream, str):
            raise TypeError(f"cannot load YAML from {type(stream).__name__}")
        return YAML.load(self, stream)


class NoAliasRepresenter(RoundTripRepresenter):
    """
    Ensure that dumping 2 identical enum values
    doesn't produce ugly aliases.
    """

    def ignore_aliases(self, data: Any) -> bool:
        if isinstance(data, Enum):
            return True
        return super().ignore_aliases(data)


yaml = MyYAML()
yaml.width = float("inf")

assert yaml.Representer == RoundTripRepresenter
yaml.Representer = NoAliasRepresenter

_yaml_loadable = yaml_object(yaml)


T = TypeVar("T")


# Setup configuration load/dump infrastructure.


class DumpableAttrs:
    """Marks class as attrs, and enables YAML dumping (excludes default fields).

    Subclass `DumpableAttrs`, then add class-level type annotations.
    These annotations are converted into `__init__(...)` constructor parameters.

    ```py
    class Config(DumpableAttrs):
        kind: str
        n: int = 0
    ```

    The YAML representation encodes the Python type, and omits fields equal
    to their defaults. Config("hann") is dumped as:

    ```yaml
    !Config
    kind: hann
    ```

    `class Config(DumpableAttrs, frozen=True)` makes instances immutable
    and hashable.

    Loading calls the constructor, so converters and `__attrs_post_init__`
    validate YAML input just like Python input.
    Unrecognized fields are discarded with a `TaperWarning`.
    """

    if TYPE_CHECKING:

        def __init__(self, *args, **kwargs):
            pass

    def __init_subclass__(cls, kw_only: bool = False, frozen: bool = False):
        _yaml_loadable(attr.dataclass(cls, kw_only=kw_only, frozen=frozen))

    # SafeRepresenter.represent_yaml_object() uses __getstate__ to dump objects.
    def __getstate__(self) -> Dict[str, Any]:
        """Returns init arguments which differ from their defaults."""
        state = {}
        for field in attr.fields(type(self)):
            if not field.init:
                continue

            value = getattr(self, field.name)
            if field.default == value:
                continue
            state[field.name.lstrip("_")] = value

        return state

    # SafeConstructor.construct_yaml_object() uses __setstate__ to load objects.
    def __setstate__(self, state: Dict[str, Any]) -> None:
        # Frozen attrs classes reject plain attribute assignment.
        object.__setattr__(self, "__dict__", self.new_from_state(state).__dict__)

    # If called via instance, cls == type(self).
    @classmethod
    def new_from_state(cls: Type[T], state: Dict[str, Any]) -> T:
        """Drop unrecognized keys (with a warning),
        then call the dataclass constructor (to validate parameters)."""
        init_fields = [field for field in attr.fields(cls) if field.init]
        field_names = {field.name.lstrip("_") for field in init_fields}

        new_state = {}
        for key, value in state.items():
            if key in field_names:
                new_state[key] = value
            else:
                warnings.warn(
                    f'Unrecognized field "{key}" in !{cls.__name__}, ignoring',
                    TaperWarning,
                )

        missing = [
            field.name.lstrip("_")
            for field in init_fields
            if field.default is attr.NOTHING
            and field.name.lstrip("_") not in new_state
        ]
        if missing:
            raise TaperError(f"!{cls.__name__} is missing required fields {missing}")

        return cls(**new_state)


def evolve_compat(obj: DumpableAttrs, **changes):
    """Evolve an object, based on user-specified dict,
    while ignoring unrecognized keywords."""
    # In dictionaries, later values will always override earlier ones
    return obj.new_from_state({**obj.__getstate__(), **changes})


class KeywordAttrs(DumpableAttrs):
    """DumpableAttrs whose constructor only accepts keyword arguments,
    so fields without defaults may follow fields with defaults."""

    if TYPE_CHECKING:

        def __init__(self, **kwargs):
            pass

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(kw_only=True, **kwargs)


# Setup Enum load/dump infrastructure
SomeEnum = TypeVar("SomeEnum", bound=Enum)


@classmethod
def _by_name(cls: Type[SomeEnum], enum_or_name: Union[SomeEnum, str]) -> SomeEnum:
    if isinstance(enum_or_name, cls):
        return enum_or_name
    try:
        return cls[enum_or_name]
    except KeyError:
        raise TaperError(
            f"invalid {cls.__name__} '{enum_or_name}' not in "
            f"{[el.name for el in cls]}"
        )


class DumpEnumAsStr(Enum):
    """Enum dumped to YAML by member name, and loaded through `by_name`."""

    def __init_subclass__(cls):
        _yaml_loadable(cls)

    @classmethod
    def to_yaml(cls, representer: Representer, node: Enum) -> Any:
        return representer.represent_str(node._name_)  # type: ignore

    by_name = _by_name


# Errors


class TaperError(ValueError):
    """Error caused by invalid input (arguments, YAML or command line).
    Caught by the CLI and displayed to user."""


class InvalidKindError(TaperError):
    """Unknown window name."""


class InvalidArityError(TaperError):
    """Wrong number of parameters or coefficients."""


class InvalidConfigurationError(TaperError):
    """Incompatible option combination or out-of-range parameter, such as
    a periodic form of a window which only has a symmetric form."""


class InvalidSizeError(TaperError):
    """Negative or non-integer window length, or an empty window where
    one sample is required."""


class MissingDependencyError(TaperError, ImportError):
    """A numeric backend (Bessel function, eigensolver) cannot be imported."""


class NumericDegeneracyError(TaperError, ZeroDivisionError):
    """A metric would divide by zero (window samples sum to zero)."""


class TaperWarning(UserWarning):
    """Warning about questionable but accepted input (printed to stderr
    by the `warnings` module)."""
