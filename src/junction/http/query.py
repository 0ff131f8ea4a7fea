"""Immutable query string parameters."""

from urllib.parse import parse_qs

from junction._internal.multimap import MultiValueMapping


class QueryParams(MultiValueMapping):
    """Parsed query string.

    Attributes:
        _data: Parsed query string as field name -> list of values.
        _raw: Raw query string bytes.
    """

    __slots__ = ("_raw",)

    _raw: bytes

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qs(query_string.decode("latin-1"), keep_blank_values=True))
        object.__setattr__(self, "_raw", query_string)

    @property
    def raw(self) -> bytes:
        """The query string exactly as received."""
        return self._raw

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
