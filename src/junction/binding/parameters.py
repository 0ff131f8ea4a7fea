"""Named-parameter binding: URL-encoded body -> ``{name: value}``.

Parameters are evaluated in list order. The first missing required
parameter or invalid value raises ``ParameterError`` (400), whose
detail is the exact plain-text body sent to the client:

- ``"<name> is required"``
- ``"<value> is invalid for parameter <name>"``

Optional parameters that are absent are left out of the result.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from junction.binding.params import Parameter
from junction.errors import ParameterError
from junction.http.forms import parse_urlencoded


def bind_values(data: Mapping[str, str], parameters: Iterable[Parameter]) -> dict[str, Any]:
    """Bind already-decoded *data* against *parameters*.

    Raises:
        ParameterError: On the first required/validity failure.
    """
    values: dict[str, Any] = {}
    for param in parameters:
        raw = data.get(param.name)
        if raw is None:
            if param.required:
                raise ParameterError(f"{param.name} is required", field=param.name)
            continue

        if not param.is_valid(raw):
            raise ParameterError(f"{raw} is invalid for parameter {param.name}", field=param.name)

        values[param.name] = param.value(raw)
    return values


def bind_parameters(body: bytes | str, parameters: Iterable[Parameter]) -> dict[str, Any]:
    """Decode a URL-encoded *body* and bind it against *parameters*.

    Usage::

        values = bind_parameters(b"age=42", [int_parameter("age", required=True)])
        values["age"]  # 42
    """
    return bind_values(parse_urlencoded(body), parameters)
