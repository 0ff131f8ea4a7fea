"""Junction exception hierarchy.

Shared across the router, binders, dispatcher, and static file handler
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class JunctionError(Exception):
    """Base for all junction-specific errors."""


class ConfigurationError(JunctionError):
    """Raised when setup is invalid.

    Route patterns, binding targets, and settings are checked at
    registration time, so these surface before the app starts serving.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(JunctionError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, binders, or handlers. The dispatcher catches
    these and turns them into a plain-text response (or hands them to a
    handler registered with ``@app.error()``).
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no pattern in the method's bucket matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818
    """400: the request could not be understood as sent."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class BindingError(BadRequest):
    """400: a request body could not be bound to its target.

    The ``detail`` is the exact plain-text body sent to the client.
    ``field`` names the offending field or parameter when there is one.
    """

    field: str | None = None

    def __init__(self, detail: str, *, field: str | None = None) -> None:
        super().__init__(detail)
        object.__setattr__(self, "field", field)


class ParameterError(BindingError):
    """400: a named parameter was missing or failed its validity check."""
