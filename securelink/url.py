"""Mutable URL value with a raw, order-preserving query parameter list."""

from typing import Optional, Union
from urllib.parse import quote, unquote, urlsplit, urlunsplit

# Characters left unescaped when writing a new parameter value.
_VALUE_SAFE = "-._~:/@!$'()*,;"


def _decode(text: str) -> str:
    return unquote(text.replace("+", " "))


class URL:
    """URL whose query string is kept as raw ``(name, value)`` pairs.

    Parameters already present in the parsed text are never re-encoded, so
    serializing a URL gives back exactly what was parsed plus whatever was
    added through ``set``/``append``. A parameter written without ``=`` keeps
    ``None`` as its value and is serialized the same way.

    Instances are not thread-safe; do not mutate one URL from several callers
    at once.
    """

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise ValueError(f"URL must be a string, got {type(text).__name__}")
        try:
            parts = urlsplit(text)
        except ValueError as e:
            raise ValueError(f"Invalid URL: {e}") from e

        self.scheme = parts.scheme
        self.netloc = parts.netloc
        self.path = parts.path
        if self.netloc and not self.path:
            self.path = "/"
        if not self.path:
            raise ValueError(f"URL has no path: {text!r}")
        self.fragment = parts.fragment
        self._params: list[tuple[str, Optional[str]]] = self._split_query(parts.query)

    @classmethod
    def parse(cls, text: str) -> "URL":
        return cls(text)

    @staticmethod
    def _split_query(query: str) -> list[tuple[str, Optional[str]]]:
        params = []
        for segment in query.split("&"):
            if not segment:
                continue
            if "=" in segment:
                name, value = segment.split("=", 1)
                params.append((name, value))
            else:
                params.append((segment, None))
        return params

    @staticmethod
    def _join_query(params: list[tuple[str, Optional[str]]]) -> str:
        return "&".join(name if value is None else f"{name}={value}" for name, value in params)

    @property
    def query(self) -> str:
        """Serialized query string, without the leading ``?``."""
        return self._join_query(self._params)

    def query_without(self, name: str) -> str:
        """Serialized query string with every ``name`` parameter removed."""
        return self._join_query([p for p in self._params if _decode(p[0]) != name])

    def params(self) -> list[tuple[str, str]]:
        """Decoded parameters in wire order."""
        return [(_decode(n), _decode(v) if v is not None else "") for n, v in self._params]

    def get(self, name: str) -> Optional[str]:
        """Return the first decoded value for ``name``, or None if absent."""
        for param_name, value in self.params():
            if param_name == name:
                return value
        return None

    def get_all(self, name: str) -> list[str]:
        return [value for param_name, value in self.params() if param_name == name]

    def has(self, name: str) -> bool:
        return any(_decode(n) == name for n, _ in self._params)

    def append(self, name: str, value: Union[str, int]) -> None:
        """Append ``name=value`` to the end of the query string."""
        self._params.append((quote(name, safe=""), quote(str(value), safe=_VALUE_SAFE)))

    def remove(self, name: str) -> None:
        """Remove every parameter called ``name``."""
        self._params = [p for p in self._params if _decode(p[0]) != name]

    def set(self, name: str, value: Union[str, int]) -> None:
        """Replace all ``name`` parameters with a single one at the end."""
        self.remove(name)
        self.append(name, value)

    def copy(self) -> "URL":
        return URL(str(self))

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))

    def __repr__(self) -> str:
        return f"URL({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, URL):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
