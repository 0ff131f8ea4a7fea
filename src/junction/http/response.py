"""Outgoing responses.

``Response`` is frozen; the ``with_*`` helpers return adjusted copies,
so a guard or error handler can start from a shared base response.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"
OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers, and a body.

    ``headers`` never needs ``Content-Type`` or ``Content-Length``;
    the sender derives both.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT_PLAIN
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        """Copy with one more header; existing headers are kept."""
        return replace(self, headers=self.headers + ((name, value),))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=self.headers + tuple(headers.items()))

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((v for k, v in self.headers if k.lower() == wanted), default)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """Handler return value meaning "go to *url*" (302 unless told otherwise)."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()
