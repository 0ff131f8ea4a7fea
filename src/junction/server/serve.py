"""Run an ASGI app on the pounce server.

``pounce.Server`` takes the live ASGI callable directly, so the app
object built during setup is the one that serves.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from junction.server.redirect import HTTPSRedirect

if TYPE_CHECKING:
    from junction.config import Settings

logger = logging.getLogger("junction.server")


def serve(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    log_level: str = "info",
    ssl_certfile: str | None = None,
    ssl_keyfile: str | None = None,
) -> None:
    """Start a pounce server for *app* and block until it stops."""
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
        ssl_certfile=ssl_certfile,
        ssl_keyfile=ssl_keyfile,
    )
    Server(config, app).run()


def start_https_redirect(settings: Settings) -> threading.Thread:
    """Serve ``HTTPSRedirect`` on the HTTP port from a daemon thread."""
    redirect = HTTPSRedirect(domain=settings.domain, https_port=settings.https_port)
    thread = threading.Thread(
        target=serve,
        args=(redirect, settings.bind, settings.http_port),
        kwargs={"log_level": settings.log_level},
        name="junction-https-redirect",
        daemon=True,
    )
    thread.start()
    logger.info("HTTP redirect listening on %s:%d", settings.bind, settings.http_port)
    return thread


def run_settings(app: object, settings: Settings) -> None:
    """Serve *app* as described by *settings*.

    With ``use_https`` the app listens on the HTTPS port with TLS, and
    ``use_http_redirect`` adds the plain-HTTP redirect listener.
    """
    if settings.use_https and settings.use_http_redirect:
        start_https_redirect(settings)

    logger.info("WebServer running on %s", settings.url)
    serve(
        app,
        settings.bind,
        settings.port,
        workers=settings.workers,
        log_level=settings.log_level,
        ssl_certfile=settings.cert_file if settings.use_https else None,
        ssl_keyfile=settings.key_file if settings.use_https else None,
    )
