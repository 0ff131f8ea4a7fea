"""Compiled pattern router with trie-based path matching.

One ``Router`` backs each method bucket. Routes are added during setup
and the router is frozen by ``compile()`` before the app serves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from junction.errors import ConfigurationError, NotFound
from junction.routing.params import compile_converter
from junction.routing.route import PathSegment, Route, RouteMatch

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [..., PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises:
        ConfigurationError: For Flask-style ``<param>`` segments, stray
            braces, invalid parameter names, unknown converters, or a
            ``path`` parameter that is not the last segment.
    """
    if not path.startswith("/"):
        msg = f"Route pattern {path!r} must start with '/'."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {path!r} uses <param> syntax; "
                "junction expects {param} (e.g. /users/{id})."
            )
            raise ConfigurationError(msg)

        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            param_name, _, param_type = inner.partition(":")
            param_type = param_type or "str"
            if not _IDENTIFIER.match(param_name):
                msg = f"Invalid parameter name {param_name!r} in route {path!r}."
                raise ConfigurationError(msg)
            compile_converter(param_type, path)
            if param_type == "path" and index != len(parts) - 1:
                msg = f"Parameter {{{inner}}} in route {path!r} must be the last segment."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
            continue

        if "{" in part or "}" in part:
            msg = f"Unbalanced braces in segment {part!r} of route {path!r}."
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during setup only."""

    __slots__ = ("catch_all", "children", "param_child", "route")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (path converter), consumes the rest of the path
        self.catch_all: _CatchAllEdge | None = None
        # Route terminating at this node
        self.route: Route | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge: consumes the remaining path."""

    param_name: str
    route: Route


class Router:
    """Pattern router for a single method bucket.

    Matching precedence at each level is static segment, then
    parameter, then catch-all, with backtracking when a branch fails
    deeper down.

    Usage::

        router = Router()
        router.add(Route("GET", "/users/{id:int}", handler))
        router.compile()
        match = router.match("/users/42")
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. A second route with the same pattern replaces the first."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.pattern):
            if seg.is_param and seg.param_type == "path":
                name = seg.param_name or "path"
                if node.catch_all is not None and node.catch_all.param_name != name:
                    msg = (
                        f"Route {route.pattern!r} conflicts with "
                        f"{node.catch_all.route.pattern!r}: catch-all parameter names differ."
                    )
                    raise ConfigurationError(msg)
                node.catch_all = _CatchAllEdge(param_name=name, route=route)
                return

            if seg.is_param:
                edge = node.param_child
                if edge is None:
                    edge = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=compile_converter(seg.param_type, route.pattern),
                        node=_TrieNode(),
                    )
                    node.param_child = edge
                elif (edge.param_name, edge.param_type) != (seg.param_name, seg.param_type):
                    msg = (
                        f"Route {route.pattern!r} conflicts with an existing parameter "
                        f"{{{edge.param_name}:{edge.param_type}}} at segment {seg.value!r}."
                    )
                    raise ConfigurationError(msg)
                node = edge.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        node.route = route

    @property
    def routes(self) -> list[Route]:
        """Every registered route, in trie order."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        if node.route is not None:
            result.append(node.route)
        for child in node.children.values():
            self._collect_routes(child, result)
        if node.param_child is not None:
            self._collect_routes(node.param_child.node, result)
        if node.catch_all is not None:
            result.append(node.catch_all.route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def match(self, path: str) -> RouteMatch:
        """Match a request path against the registered patterns.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no pattern matches.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise NotFound()
        route, params = result
        return RouteMatch(route=route, path_params=params)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[Route, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.route is not None:
                return node.route, params
            if node.catch_all is not None:
                return node.catch_all.route, {**params, node.catch_all.param_name: ""}
            return None

        part = parts[index]

        # 1. Static child (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        edge = node.param_child
        if edge is not None and edge.regex.match(part):
            new_params = {**params, edge.param_name: part}
            result = self._match_node(edge.node, parts, index + 1, new_params)
            if result is not None:
                return result

        # 3. Catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return node.catch_all.route, {**params, node.catch_all.param_name: remaining}

        return None
