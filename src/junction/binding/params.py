"""Named parameters: one typed, optionally-required input value.

A ``Parameter`` is a closed variant: ``STRING`` and ``INT`` are
built in, ``CUSTOM`` carries a caller-supplied predicate and converter
for everything else (dates, enums, ...).

Usage::

    params = (
        string_parameter("name", required=True),
        int_parameter("age"),
        custom_parameter("born", valid=is_iso_date, convert=date.fromisoformat),
    )
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from junction.errors import ConfigurationError

# Base-10, optional sign, ASCII digits only: no whitespace or underscores
_INTEGER = re.compile(r"[+-]?[0-9]+")

# Integer values, in parameters and record fields, are signed 64-bit
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ParameterKind(Enum):
    STRING = auto()
    INT = auto()
    CUSTOM = auto()


@dataclass(frozen=True, slots=True)
class Parameter:
    """A named input value with a validity check and a conversion."""

    name: str
    kind: ParameterKind
    required: bool = False
    predicate: Callable[[str], bool] | None = None
    converter: Callable[[str], Any] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Parameter name must not be empty."
            raise ConfigurationError(msg)
        if self.kind is ParameterKind.CUSTOM and (self.predicate is None or self.converter is None):
            msg = f"Custom parameter {self.name!r} needs both a predicate and a converter."
            raise ConfigurationError(msg)

    def is_valid(self, raw: str) -> bool:
        """Return True if *raw* is an acceptable value for this parameter."""
        match self.kind:
            case ParameterKind.STRING:
                return True
            case ParameterKind.INT:
                return _parse_int64(raw) is not None
            case ParameterKind.CUSTOM:
                return bool(self.predicate(raw))  # type: ignore[misc]

    def value(self, raw: str) -> Any:
        """Convert *raw* to this parameter's value.

        Only meaningful after ``is_valid(raw)`` returned True.
        """
        match self.kind:
            case ParameterKind.STRING:
                return raw
            case ParameterKind.INT:
                return _parse_int64(raw)
            case ParameterKind.CUSTOM:
                return self.converter(raw)  # type: ignore[misc]


def _parse_int64(raw: str) -> int | None:
    """Parse a base-10 integer, or return None if it is malformed or out of range."""
    if _INTEGER.fullmatch(raw) is None:
        return None
    digits = raw.lstrip("+-").lstrip("0") or "0"
    if len(digits) > 19:
        return None
    number = -int(digits) if raw.startswith("-") else int(digits)
    return number if INT64_MIN <= number <= INT64_MAX else None


def string_parameter(name: str, *, required: bool = False) -> Parameter:
    """A parameter that accepts any value and passes it through unchanged."""
    return Parameter(name=name, kind=ParameterKind.STRING, required=required)


def int_parameter(name: str, *, required: bool = False) -> Parameter:
    """A base-10 signed 64-bit integer parameter (``"42"``, ``"-7"``, ``"+3"``)."""
    return Parameter(name=name, kind=ParameterKind.INT, required=required)


def custom_parameter(
    name: str,
    *,
    valid: Callable[[str], bool],
    convert: Callable[[str], Any],
    required: bool = False,
) -> Parameter:
    """A parameter with a caller-supplied validity check and converter."""
    return Parameter(
        name=name,
        kind=ParameterKind.CUSTOM,
        required=required,
        predicate=valid,
        converter=convert,
    )
