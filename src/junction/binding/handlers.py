"""Handler adapters that read and bind the request body first.

Each adapter returns a plain ``handler(request)`` suitable for route
registration. Binder construction happens here, at registration time,
so a bad binding target fails before the app serves.
"""

import functools
from collections.abc import Iterable
from typing import Any, TypeVar

from junction._internal.invoke import invoke
from junction._internal.types import Handler
from junction.binding.parameters import bind_parameters
from junction.binding.params import Parameter
from junction.binding.structs import StructBinder
from junction.errors import BindingError
from junction.http.request import Request

T = TypeVar("T")


def body_handler(handler: Handler) -> Handler:
    """Call ``handler(request, body)`` with the raw body bytes."""

    @functools.wraps(handler)
    async def read_body(request: Request) -> Any:
        return await invoke(handler, request, await request.body())

    return read_body


def parameters_handler(handler: Handler, parameters: Iterable[Parameter]) -> Handler:
    """Call ``handler(request, values)`` with the named parameters bound.

    A missing required parameter or invalid value raises
    ``ParameterError`` before *handler* runs.
    """
    params = tuple(parameters)

    @functools.wraps(handler)
    async def bind_named(request: Request) -> Any:
        values = bind_parameters(await request.body(), params)
        return await invoke(handler, request, values)

    return bind_named


def struct_handler(datacls: type[T], handler: Handler) -> Handler:
    """Call ``handler(request, record)`` with a URL-encoded body bound to *datacls*.

    Binding failures raise ``BindingError`` before *handler* runs.
    """
    binder = StructBinder(datacls)

    @functools.wraps(handler)
    async def bind_struct(request: Request) -> Any:
        record = binder.bind(await request.body())
        return await invoke(handler, request, record)

    return bind_struct


def json_handler(datacls: type[T], handler: Handler) -> Handler:
    """Call ``handler(request, record, error)`` with a JSON body bound to *datacls*.

    Exactly one of ``record`` and ``error`` is ``None``. The handler
    decides how to answer a ``BindingError``::

        def create(request, user: User | None, error: BindingError | None):
            if error is not None:
                return {"error": error.detail}, 422
            ...
    """
    binder = StructBinder(datacls)

    @functools.wraps(handler)
    async def bind_json(request: Request) -> Any:
        try:
            record = binder.bind_json(await request.body())
        except BindingError as exc:
            return await invoke(handler, request, None, exc)
        return await invoke(handler, request, record, None)

    return bind_json
