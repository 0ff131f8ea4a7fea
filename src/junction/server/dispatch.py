"""The dispatcher: single ASGI entry point for every HTTP request.

Steps per request:

1. Log method, path, and declared content length.
2. Run the middleware chain; a guard returning ``False`` ends the
   request with whatever response it wrote.
3. Pick the bucket for the (uppercased) method, the catch-all bucket
   for anything outside the nine enumerated methods.
4. Match the path in that bucket and invoke the handler, or answer 404.

The dispatcher is an immutable snapshot built by ``App.freeze()``;
nothing on it changes while requests are in flight.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from junction._internal.asgi import Receive, Scope, Send
from junction._internal.invoke import invoke
from junction.errors import HTTPError
from junction.http.request import Request
from junction.http.response import Response
from junction.middleware.chain import MiddlewareChain
from junction.middleware.context import RequestContext
from junction.routing.table import MethodRouter
from junction.server.errors import handle_http_error, handle_internal_error
from junction.server.negotiation import negotiate
from junction.server.sender import send_response

logger = logging.getLogger("junction.server")


@dataclass(frozen=True, slots=True)
class Dispatcher:
    """Frozen routing state plus the request pipeline."""

    router: MethodRouter
    middleware: MiddlewareChain
    error_handlers: Mapping[int | type, Callable[..., Any]]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        logger.info("%s %s %s", request.method, request.path, request.content_length)

        try:
            response = await self.dispatch(request)
        except HTTPError as exc:
            response = await handle_http_error(exc, request, self.error_handlers)
        except Exception as exc:
            response = await handle_internal_error(exc, request, self.error_handlers)

        await send_response(response, send, method=request.method)

    async def dispatch(self, request: Request) -> Response:
        """Run guards, route, and invoke the handler.

        ``HTTPError`` (including ``NotFound`` and binding errors) and any
        other exception propagate to the caller.
        """
        ctx = RequestContext(request)
        if not await self.middleware.run(ctx):
            return ctx.response if ctx.response is not None else Response()

        match = self.router.match(request.method, request.path)
        result = await invoke(match.route.handler, request.with_path_params(match.path_params))
        return negotiate(result)
