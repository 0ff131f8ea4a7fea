"""Read-only ``name -> values`` mapping for URL-encoded data.

A key may repeat (``tag=a&tag=b``). Plain lookups see the first value,
``get_list`` sees every value in order.
"""

from collections.abc import Iterator, Mapping


class MultiValueMapping(Mapping[str, str]):
    """Base for ``QueryParams`` and ``FormData``."""

    __slots__ = ("_data",)

    _data: dict[str, list[str]]

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", data or {})

    def get_list(self, key: str) -> list[str]:
        return list(self._data.get(key, ()))

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self.get_list(key)
        return values[0] if values else default

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self)!r})"
