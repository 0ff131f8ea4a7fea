"""Route, PathSegment, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from junction._internal.types import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/users``     (is_param=False)
    Param:   ``/{id}``      (is_param=True, param_name="id")
    Typed:   ``/{id:int}``  (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition: one handler for one method and pattern.

    ``method`` is the uppercased token as registered; tokens outside
    the nine enumerated methods live in the catch-all bucket.
    """

    method: str
    pattern: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
