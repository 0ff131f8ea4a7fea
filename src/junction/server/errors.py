"""Turn exceptions raised while handling a request into responses.

``HTTPError`` (404 from the router, 400 from the binders, anything a
handler raises on purpose) becomes its status with ``detail`` as the
plain-text body. Any other exception is logged and becomes a 500.
Handlers registered with ``App.error()`` take precedence, looked up by
exception type first and status code second.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from junction._internal.invoke import invoke
from junction.errors import HTTPError
from junction.http.request import Request
from junction.http.response import Response
from junction.server.negotiation import negotiate

logger = logging.getLogger("junction.server")

ErrorHandlers = Mapping[int | type, Callable[..., Any]]


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
) -> Response:
    """Call *handler* with as many of ``(request, exc)`` as it accepts.

    A handler that returns a plain 200 keeps the error's *status*.
    """
    arity = len(inspect.signature(handler).parameters)
    result = await invoke(handler, *(request, exc)[: min(arity, 2)])
    response = negotiate(result)
    return response.with_status(status) if response.status == 200 else response


async def handle_http_error(exc: HTTPError, request: Request, handlers: ErrorHandlers) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = handlers.get(type(exc)) or handlers.get(exc.status)
    if handler is not None:
        return await call_error_handler(handler, request, exc, exc.status)

    # detail is the body, verbatim
    return Response(body=exc.detail or str(exc.status), status=exc.status, headers=exc.headers)


async def handle_internal_error(
    exc: Exception, request: Request, handlers: ErrorHandlers
) -> Response:
    logger.exception("500 %s %s", request.method, request.path)

    handler = handlers.get(type(exc)) or handlers.get(500)
    if handler is not None:
        return await call_error_handler(handler, request, exc, 500)
    return Response(body="Internal Server Error", status=500)
