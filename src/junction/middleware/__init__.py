"""Middleware: ordered guards that may short-circuit a request.

A guard is any callable matching:
    def guard(ctx: RequestContext) -> bool
"""

from junction.middleware.chain import Guard, MiddlewareChain
from junction.middleware.context import RequestContext

__all__ = ["Guard", "MiddlewareChain", "RequestContext"]
