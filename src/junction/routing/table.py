"""Per-method routing tables.

``RouteTable`` is the setup-time builder: ten buckets (nine HTTP
methods plus one catch-all for every other token), each a pattern
``Router``. ``freeze()`` compiles every bucket and returns a
``MethodRouter``, an immutable snapshot that concurrent requests can
share without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from junction._internal.types import Handler
from junction.routing.methods import HTTPMethod, bucket_for
from junction.routing.route import Route, RouteMatch
from junction.routing.router import Router

logger = logging.getLogger("junction.app")


class RouteTable:
    """Mutable route registry. Single-threaded, setup time only."""

    __slots__ = ("_buckets", "_custom", "_frozen")

    def __init__(self) -> None:
        self._buckets: dict[HTTPMethod, Router] = {method: Router() for method in HTTPMethod}
        self._custom = Router()
        self._frozen = False

    def add(self, method: str, pattern: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *pattern*.

        Unknown method tokens land in the catch-all bucket. Invalid
        pattern syntax raises ``ConfigurationError``.
        """
        if self._frozen:
            msg = "Cannot register routes after the route table has been frozen."
            raise RuntimeError(msg)
        route = Route(method=method.upper(), pattern=pattern, handler=handler)
        self._bucket(method).add(route)
        logger.debug("route %s %s -> %s", route.method, pattern, _handler_name(handler))
        return route

    def _bucket(self, method: str) -> Router:
        key = bucket_for(method)
        return self._custom if key is None else self._buckets[key]

    def freeze(self) -> MethodRouter:
        """Compile every bucket and return the immutable snapshot."""
        self._frozen = True
        for router in (*self._buckets.values(), self._custom):
            router.compile()
        return MethodRouter(buckets=MappingProxyType(dict(self._buckets)), custom=self._custom)


@dataclass(frozen=True, slots=True)
class MethodRouter:
    """Immutable method -> pattern router lookup."""

    buckets: Mapping[HTTPMethod, Router]
    custom: Router

    def bucket(self, method: str) -> Router:
        """Return the router for *method*, or the catch-all bucket."""
        key = bucket_for(method)
        return self.custom if key is None else self.buckets[key]

    def match(self, method: str, path: str) -> RouteMatch:
        """Select the bucket for *method* and match *path* in it.

        Raises ``NotFound`` when the bucket has no matching pattern,
        including when the bucket is empty.
        """
        return self.bucket(method).match(path)

    @property
    def routes(self) -> list[Route]:
        """Every registered route across all buckets."""
        result: list[Route] = []
        for router in (*self.buckets.values(), self.custom):
            result.extend(router.routes)
        return result


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__
