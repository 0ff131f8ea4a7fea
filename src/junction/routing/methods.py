"""HTTP method tokens with dedicated routing buckets.

Nine methods get their own bucket. Any other token (WebDAV verbs,
custom extension methods) is routed through the catch-all bucket.
"""

from enum import StrEnum


class HTTPMethod(StrEnum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


def bucket_for(method: str) -> HTTPMethod | None:
    """Map a method token to its bucket key.

    Tokens are compared case-insensitively. Returns ``None`` for
    anything outside the nine enumerated methods, meaning the
    catch-all bucket.

    Examples::

        bucket_for("get")       -> HTTPMethod.GET
        bucket_for("PROPFIND")  -> None
    """
    try:
        return HTTPMethod(method.upper())
    except ValueError:
        return None
