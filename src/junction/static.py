"""Static file serving below a root directory.

Registered by ``App`` as the GET catch-all route ``/{path:path}`` when
``Settings.root`` is set, so explicit GET routes always win.

Outcomes:

- extension in the filter list -> 403
- file missing, path has no extension or ends in ``.html`` -> 307 to
  the fallback redirect page
- file missing otherwise -> 404
- any other read failure -> 500
- success -> 200 with a ``mimetypes`` content type
"""

import logging
import mimetypes
from pathlib import Path, PurePosixPath

from junction.config import Settings
from junction.errors import ConfigurationError
from junction.http.request import Request
from junction.http.response import OCTET_STREAM, Response

logger = logging.getLogger("junction.static")


class StaticFiles:
    """Route handler serving files from ``settings.root``.

    Security: resolves symlinks and verifies the final path is within
    the root directory to prevent path traversal.
    """

    __slots__ = ("_blocked", "_directory", "_fallback_url")

    def __init__(self, settings: Settings) -> None:
        if settings.root is None:
            msg = "StaticFiles needs settings.root to be set."
            raise ConfigurationError(msg)
        self._directory = Path(settings.root).resolve()
        self._blocked = frozenset(e.lower() for e in settings.file_extension_filter)
        self._fallback_url = settings.url_https + settings.fallback_redirect

    async def __call__(self, request: Request) -> Response:
        relative = request.path_params.get("path", request.path.lstrip("/"))
        extension = PurePosixPath(relative).suffix.lstrip(".").lower()

        if extension and extension in self._blocked:
            logger.info("File Handler: 403: %s (%s)", extension, request.path)
            return Response(body="Forbidden", status=403)

        file_path = (self._directory / relative).resolve()
        if not file_path.is_relative_to(self._directory):
            logger.info("File Handler: 403: outside root (%s)", request.path)
            return Response(body="Forbidden", status=403)

        try:
            body = file_path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            logger.info("File Handler: 404: %s", exc)
            if extension in ("", "html"):
                return self._fallback_redirect()
            return Response(body="", status=404)
        except OSError:
            logger.exception("File Handler: 500: %s", request.path)
            return Response(body="", status=500)

        content_type, _ = mimetypes.guess_type(file_path.name)
        logger.info("File Handler: 200: %s", request.path)
        return Response(body=body, content_type=content_type or OCTET_STREAM)

    def _fallback_redirect(self) -> Response:
        logger.info("Fallback Redirect to %s", self._fallback_url)
        return Response(body="", status=307).with_header("Location", self._fallback_url)
