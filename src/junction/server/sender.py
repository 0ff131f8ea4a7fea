"""Write a ``Response`` to the ASGI ``send`` callable."""

from junction._internal.asgi import Send
from junction.http.response import Response

# Informational, No Content and Not Modified responses carry no body
_BODYLESS = frozenset({204, 304})
_DERIVED = frozenset({"content-type", "content-length"})


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Emit ``http.response.start`` followed by a single body message.

    ``Content-Type`` and ``Content-Length`` always come from the
    response itself. A HEAD request gets the length of the body it
    would have received, and an empty body.
    """
    if response.status < 200 or response.status in _BODYLESS:
        body = b""
    else:
        body = response.body_bytes

    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    for name, value in response.headers:
        if name.lower() not in _DERIVED:
            headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if method.upper() == "HEAD" else body})
