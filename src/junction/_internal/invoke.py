"""Invoke helpers: call sync or async callables uniformly.

Handlers, guards, and error handlers can be ``def`` or ``async def``.
Anything that calls user code goes through ``invoke`` so the
sync/async check lives in exactly one place.

Usage::

    from junction._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
