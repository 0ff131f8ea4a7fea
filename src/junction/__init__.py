"""Junction: method-bucketed HTTP routing with guards and body binding.

Basic usage::

    from junction import App

    app = App()

    @app.get("/index")
    def index(request):
        return "Hello World"

    app.run()

Requests are routed by method first (nine standard methods plus one
catch-all bucket) and by path pattern second. Middleware guards run
before routing and can stop a request. Request bodies can be bound to
named parameters or to flat dataclass records.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "BadRequest",
    "BindingError",
    "ConfigurationError",
    "HTTPError",
    "HTTPMethod",
    "JunctionError",
    "NotFound",
    "Parameter",
    "ParameterError",
    "Redirect",
    "Request",
    "RequestContext",
    "Response",
    "Settings",
    "StructBinder",
    "custom_parameter",
    "int_parameter",
    "string_parameter",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import junction`` fast while providing a clean top-level API.
    """
    if name == "App":
        from junction.app import App

        return App

    if name == "Settings":
        from junction.config import Settings

        return Settings

    if name == "Request":
        from junction.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from junction.http import response as _response

        return getattr(_response, name)

    if name == "HTTPMethod":
        from junction.routing.methods import HTTPMethod

        return HTTPMethod

    if name == "RequestContext":
        from junction.middleware.context import RequestContext

        return RequestContext

    if name in (
        "Parameter",
        "StructBinder",
        "custom_parameter",
        "int_parameter",
        "string_parameter",
    ):
        from junction import binding as _binding

        return getattr(_binding, name)

    if name in (
        "BadRequest",
        "BindingError",
        "ConfigurationError",
        "HTTPError",
        "JunctionError",
        "NotFound",
        "ParameterError",
    ):
        from junction import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
