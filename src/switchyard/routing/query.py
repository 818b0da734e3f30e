"""Immutable query string parameters.

Implements ``Mapping[str, str]`` with insertion order preserved, plus
``get_list`` for repeated keys.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl, urlencode


class QueryParams(Mapping[str, str]):
    """Immutable, ordered view over a query string.

    Attributes:
        _pairs: Parsed ``(key, value)`` pairs in query order.
        _data: Field name -> list of values, keys in first-seen order.
        _raw: Raw query string without the leading ``?``.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _pairs: tuple[tuple[str, str], ...]
    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_pairs", "_raw")

    def __init__(self, query_string: str = "") -> None:
        raw = query_string.removeprefix("?")
        pairs = tuple(parse_qsl(raw, keep_blank_values=True))
        data: dict[str, list[str]] = {}
        for key, value in pairs:
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_pairs", pairs)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "QueryParams is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def __str__(self) -> str:
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def multi_items(self) -> list[tuple[str, str]]:
        """Return every ``(key, value)`` pair in query order."""
        return list(self._pairs)

    def replace(self, updates: Mapping[str, str | None]) -> "QueryParams":
        """Return new params with keys set, or removed when the value is None.

        A key that already exists keeps its position; its repeated values
        collapse to the single new value. New keys are appended.
        """
        pairs: list[tuple[str, str]] = []
        seen: set[str] = set()
        for key, value in self._pairs:
            if key not in updates:
                pairs.append((key, value))
            elif key not in seen:
                seen.add(key)
                new_value = updates[key]
                if new_value is not None:
                    pairs.append((key, new_value))
        for key, new_value in updates.items():
            if key not in seen and key not in self._data and new_value is not None:
                pairs.append((key, new_value))
        return QueryParams(urlencode(pairs))
