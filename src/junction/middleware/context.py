"""Per-request context handed to middleware guards.

A guard that stops the chain writes its response here first::

    def require_token(ctx: RequestContext) -> bool:
        if ctx.request.headers.get("x-token") != "s3cr3t":
            ctx.respond("forbidden", status=403)
            return False
        return True
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from junction.http.request import Request
from junction.http.response import TEXT_PLAIN, Response


@dataclass(slots=True)
class RequestContext:
    """The request being handled plus a slot for a guard's response.

    ``state`` is a free-form dict guards can use to hand values to
    later guards. It lives exactly as long as the request.
    """

    request: Request
    response: Response | None = None
    state: dict[str, Any] = field(default_factory=dict)

    @property
    def responded(self) -> bool:
        """True once a response has been written."""
        return self.response is not None

    def respond(
        self,
        body: str | bytes = "",
        *,
        status: int = 200,
        content_type: str = TEXT_PLAIN,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Write the response for this request, replacing any earlier one."""
        response = Response(body=body, status=status, content_type=content_type)
        if headers:
            response = response.with_headers(headers)
        self.response = response
        return response

    def send(self, response: Response) -> None:
        """Write a prebuilt ``Response``."""
        self.response = response
