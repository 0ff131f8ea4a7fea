"""Path parameter converters for patterns like ``/users/{id:int}``.

A converter only decides which segments a parameter accepts. Captured
values reach handlers as strings in ``request.path_params``.
"""

import re

from junction.errors import ConfigurationError

# converter name -> regex matched against a single path segment
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def compile_converter(param_type: str, pattern: str) -> re.Pattern[str]:
    """Return the compiled segment regex for *param_type*.

    Raises ``ConfigurationError`` naming *pattern* if the converter is
    unknown.
    """
    try:
        regex = CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown converter {param_type!r} in route {pattern!r} (known: {known})"
        raise ConfigurationError(msg) from None
    return re.compile(f"^{regex}$")
