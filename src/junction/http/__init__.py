"""HTTP primitives: immutable request, response, headers, query, and form data."""

from junction.http.forms import FormData, parse_urlencoded
from junction.http.headers import Headers
from junction.http.query import QueryParams
from junction.http.request import Request
from junction.http.response import Redirect, Response

__all__ = [
    "FormData",
    "Headers",
    "QueryParams",
    "Redirect",
    "Request",
    "Response",
    "parse_urlencoded",
]
