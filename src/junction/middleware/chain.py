"""Guard protocol and the ordered, short-circuiting middleware chain.

A guard is any callable matching::

    def guard(ctx: RequestContext) -> bool: ...
    async def guard(ctx: RequestContext) -> bool: ...

No base class required. Guards run in registration order before the
router is consulted. Returning ``False`` stops the chain: no later
guard runs and no handler is dispatched. Whatever the guard wrote to
``ctx`` is sent; the chain itself writes nothing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterator
from typing import Protocol

from junction._internal.invoke import invoke
from junction.middleware.context import RequestContext


class Guard(Protocol):
    """Protocol for junction middleware guards.

    Accepts both functions and callable objects::

        # Function guard
        def only_json(ctx: RequestContext) -> bool:
            if ctx.request.content_type != "application/json":
                ctx.respond("expected JSON", status=415)
                return False
            return True

        # Class guard
        class AllowList:
            def __init__(self, clients: set[str]) -> None:
                self.clients = clients

            async def __call__(self, ctx: RequestContext) -> bool:
                ...
    """

    def __call__(self, ctx: RequestContext) -> bool | Awaitable[bool]: ...


class MiddlewareChain:
    """Append-only list of guards, frozen into a tuple before serving."""

    __slots__ = ("_frozen", "_guards")

    def __init__(self, guards: tuple[Guard, ...] = ()) -> None:
        self._guards: list[Guard] | tuple[Guard, ...] = list(guards)
        self._frozen = False

    def add(self, guard: Guard) -> None:
        """Append *guard*. Guards run in the order they were added."""
        if self._frozen:
            msg = "Cannot add middleware after the chain has been frozen."
            raise RuntimeError(msg)
        if not callable(guard):
            msg = f"Middleware guard must be callable, got {type(guard).__name__}."
            raise TypeError(msg)
        self._guards.append(guard)  # type: ignore[union-attr]

    def freeze(self) -> MiddlewareChain:
        """Stop accepting guards and return ``self``."""
        self._guards = tuple(self._guards)
        self._frozen = True
        return self

    def __iter__(self) -> Iterator[Guard]:
        return iter(self._guards)

    def __len__(self) -> int:
        return len(self._guards)

    async def run(self, ctx: RequestContext) -> bool:
        """Run every guard in order.

        Returns ``True`` if the request should be dispatched, ``False``
        as soon as any guard stops the chain.
        """
        for guard in self._guards:
            if not await invoke(guard, ctx):
                return False
        return True
