"""Struct binding: request body -> flat dataclass instance.

``StructBinder[T]`` maps body values onto the fields of a dataclass by
field name. Field descriptors are computed once per dataclass and
cached, so no type introspection happens per request.

Two body formats are supported:

- **URL-encoded** (``bind``): each field is looked up by name and its
  raw value is decoded as a JSON scalar. String fields are wrapped in
  quotes first, so every kind goes through the same decoder.
- **JSON** (``bind_json``): the body is one JSON object whose keys are
  field names. Unknown keys are ignored.

Absent fields take the dataclass default, or the zero value of their
kind (``""``, ``0``, ``0.0``, ``False``, ``None`` for optional fields).

Integers must fit in 64 bits and floats must be finite. Every decode
failure raises ``BindingError`` (400).

Usage::

    @dataclass(frozen=True, slots=True)
    class Signup:
        name: str
        age: int = 0
        newsletter: bool = False

    binder = StructBinder(Signup)
    binder.bind(b"name=Ada&age=36")   # Signup(name="Ada", age=36, newsletter=False)
"""

import dataclasses
import functools
import json
import math
import types
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Generic, TypeVar, Union, get_args, get_origin, get_type_hints

from junction.binding.params import INT64_MAX, INT64_MIN
from junction.errors import BindingError, ConfigurationError
from junction.http.forms import parse_urlencoded

T = TypeVar("T")


class FieldKind(Enum):
    STR = auto()
    INT = auto()
    FLOAT = auto()
    BOOL = auto()


_KINDS: dict[Any, FieldKind] = {
    str: FieldKind.STR,
    int: FieldKind.INT,
    float: FieldKind.FLOAT,
    bool: FieldKind.BOOL,
}


_ZERO: dict[FieldKind, Any] = {
    FieldKind.STR: "",
    FieldKind.INT: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.BOOL: False,
}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How to bind one dataclass field."""

    name: str
    kind: FieldKind
    optional: bool
    default: Callable[[], Any]

    @property
    def exported(self) -> bool:
        """Fields with a leading underscore are never bound from a body."""
        return not self.name.startswith("_")

    def decode(self, raw: str) -> Any:
        """Decode a raw URL-encoded value as a JSON scalar."""
        text = f'"{raw}"' if self.kind is FieldKind.STR else raw
        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            raise self._invalid(raw) from None
        return self.coerce(value, raw)

    def coerce(self, value: Any, raw: str | None = None) -> Any:
        """Check an already-decoded JSON value against the field's kind."""
        if value is None:
            return None if self.optional else self.default()
        match self.kind:
            case FieldKind.STR if isinstance(value, str):
                return value
            case FieldKind.INT if isinstance(value, int) and not isinstance(value, bool):
                if INT64_MIN <= value <= INT64_MAX:
                    return value
            case FieldKind.FLOAT if isinstance(value, int | float) and not isinstance(value, bool):
                number = _finite_float(value)
                if number is not None:
                    return number
            case FieldKind.BOOL if isinstance(value, bool):
                return value
        raise self._invalid(json.dumps(value) if raw is None else raw)

    def _invalid(self, shown: str) -> BindingError:
        return BindingError(f"{shown} is invalid for field {self.name}", field=self.name)


def is_record_type(target: Any) -> bool:
    """Return True if *target* is a dataclass type (not an instance)."""
    return isinstance(target, type) and dataclasses.is_dataclass(target)


@functools.cache
def describe(datacls: type) -> tuple[FieldSpec, ...]:
    """Return the cached field descriptors for *datacls*.

    Raises:
        ConfigurationError: If *datacls* is not a dataclass type, or a
            field's annotation is not ``str``, ``int``, ``float``,
            ``bool``, or one of those ``| None``.
    """
    if not is_record_type(datacls):
        msg = f"Binding target must be a dataclass type, got {datacls!r}."
        raise ConfigurationError(msg)

    try:
        hints = get_type_hints(datacls)
    except NameError as exc:
        msg = f"Cannot resolve field annotations of {datacls.__name__}: {exc}"
        raise ConfigurationError(msg) from exc

    specs: list[FieldSpec] = []
    for f in dataclasses.fields(datacls):
        if not f.init:
            continue
        annotation = hints.get(f.name, f.type)
        optional = _is_optional(annotation)
        base = _unwrap_optional(annotation) if optional else annotation
        kind = _KINDS.get(base) if isinstance(base, type) else None
        if kind is None:
            msg = (
                f"Field {datacls.__name__}.{f.name} has unsupported type {annotation!r}; "
                "binding targets are flat records of str, int, float, and bool fields."
            )
            raise ConfigurationError(msg)
        specs.append(
            FieldSpec(
                name=f.name,
                kind=kind,
                optional=optional,
                default=_absent_value(f, kind, optional),
            )
        )
    return tuple(specs)


class StructBinder(Generic[T]):
    """Binds request bodies to instances of one dataclass type.

    Construction validates the target type; a non-record target raises
    ``ConfigurationError`` at registration time, never per request.
    """

    __slots__ = ("_datacls", "_fields")

    def __init__(self, datacls: type[T]) -> None:
        self._datacls = datacls
        self._fields = describe(datacls)

    @property
    def target(self) -> type[T]:
        return self._datacls

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self._fields

    def bind(self, body: bytes | str) -> T:
        """Bind a URL-encoded body."""
        form = parse_urlencoded(body)
        values: dict[str, Any] = {}
        for spec in self._fields:
            raw = form.get(spec.name) if spec.exported else None
            values[spec.name] = spec.default() if raw is None else spec.decode(raw)
        return self._datacls(**values)

    def bind_json(self, body: bytes | str) -> T:
        """Bind a JSON object body."""
        try:
            document = json.loads(body, parse_constant=_reject_constant)
        except ValueError as exc:
            raise BindingError(f"request body is not valid JSON: {exc}") from None
        if not isinstance(document, dict):
            msg = f"expected a JSON object, got {type(document).__name__}"
            raise BindingError(msg)

        values: dict[str, Any] = {}
        for spec in self._fields:
            if spec.exported and spec.name in document:
                values[spec.name] = spec.coerce(document[spec.name])
            else:
                values[spec.name] = spec.default()
        return self._datacls(**values)


def _absent_value(f: dataclasses.Field[Any], kind: FieldKind, optional: bool) -> Callable[[], Any]:
    """Return a factory for the value a field takes when the body lacks it."""
    if f.default is not dataclasses.MISSING:
        default = f.default
        return lambda: default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory
    zero = None if optional else _ZERO[kind]
    return lambda: zero


def _is_optional(annotation: Any) -> bool:
    """Check if an annotation is X | None."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return False


def _unwrap_optional(annotation: Any) -> Any:
    """Extract the non-None type from X | None; multi-type unions stay as-is."""
    non_none = [a for a in get_args(annotation) if a is not type(None)]
    if len(non_none) == 1:
        return non_none[0]
    return annotation


def _finite_float(value: int | float) -> float | None:
    """Return *value* as a float, or None if it overflows or is not finite."""
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _reject_constant(name: str) -> Any:
    """Refuse ``NaN`` and ``Infinity``; they are not JSON."""
    msg = f"{name} is not a JSON number"
    raise ValueError(msg)
