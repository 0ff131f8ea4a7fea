"""Immutable request handed to guards and handlers.

Everything the ASGI scope carries is captured up front. The body is
pulled from ``receive`` on first access and kept, so guards, binders
and the handler can all read it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from junction._internal.asgi import Receive, Scope
from junction.http.headers import Headers
from junction.http.query import QueryParams

if TYPE_CHECKING:
    from junction.http.forms import FormData


@dataclass(frozen=True, slots=True)
class Request:
    """One HTTP request.

    ``method`` is the token exactly as the client sent it; routing
    uppercases it, the request does not.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    _receive: Receive
    # Shared by every copy made with ``with_path_params``
    _buffer: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a request from an ASGI http scope."""
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy carrying the parameters the router captured."""
        return replace(self, path_params=path_params)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """Declared ``Content-Length``; ``None`` when missing or not a number."""
        declared = self.headers.get("content-length")
        if declared is None or not declared.isdigit():
            return None
        return int(declared)

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        if not self.query.raw:
            return self.path
        return self.path + "?" + self.query.raw.decode("latin-1")

    async def body(self) -> bytes:
        """The complete body. Read from the transport once."""
        if "body" not in self._buffer:
            parts: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                parts.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._buffer["body"] = b"".join(parts)
        return self._buffer["body"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.body())

    async def form(self) -> FormData:
        """The body decoded as URL-encoded pairs."""
        if "form" not in self._buffer:
            from junction.http.forms import parse_urlencoded

            self._buffer["form"] = parse_urlencoded(await self.body())
        return self._buffer["form"]
