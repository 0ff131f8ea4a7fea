"""Plain-HTTP listener that sends every request to the HTTPS site."""

import logging
from dataclasses import dataclass

from junction._internal.asgi import Receive, Scope, Send
from junction.http.response import Response
from junction.server.sender import send_response

logger = logging.getLogger("junction.server")


@dataclass(frozen=True, slots=True)
class HTTPSRedirect:
    """ASGI app answering every request with a 301 to ``https://<host>:<port><path>``."""

    domain: str
    https_port: int = 443

    def location(self, path: str) -> str:
        return f"https://{self.domain}:{self.https_port}{path}"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return
        url = self.location(scope["path"])
        await send_response(
            Response(status=301).with_header("Location", url),
            send,
            method=scope["method"],
        )
        logger.info("Redirect: http to https 301 to %s", url)
