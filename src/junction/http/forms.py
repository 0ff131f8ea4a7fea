"""URL-encoded body decoding.

Both binders read request bodies as ``application/x-www-form-urlencoded``
key/value pairs. Decoding uses stdlib ``urllib.parse``; the first value
wins when a key is repeated.
"""

from urllib.parse import parse_qs

from junction._internal.multimap import MultiValueMapping
from junction.errors import BindingError


class FormData(MultiValueMapping):
    """Immutable decoded form body.

    Usage::

        form = parse_urlencoded(b"name=Ada&tag=a&tag=b")
        form["name"]            # "Ada"
        form.get_list("tag")    # ["a", "b"]
    """

    __slots__ = ()


def parse_urlencoded(body: bytes | str) -> FormData:
    """Decode a URL-encoded body into ``FormData``.

    Blank values are kept (``name=`` binds the empty string, which is
    different from the key being absent).

    Raises:
        BindingError: If the body is not valid UTF-8.
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = "request body is not valid UTF-8"
            raise BindingError(msg) from exc
    else:
        text = body
    return FormData(parse_qs(text, keep_blank_values=True))
