"""Raw JSON documents stored as bytes."""

from __future__ import annotations

import json
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal: {name}")


class JSON(bytes):
    """Raw JSON text kept as bytes."""

    def __new__(cls, data: bytes | str = b"") -> "JSON":
        if isinstance(data, str):
            data = data.encode("utf-8")
        if isinstance(data, int):
            raise TypeError("JSON requires bytes or str")
        return super().__new__(cls, data)

    def __str__(self) -> str:
        return self.decode("utf-8", errors="replace")

    def unmarshal(self) -> Any:
        """Decode the document into Python objects."""
        return json.loads(self, parse_constant=_reject_constant)

    @classmethod
    def marshal(cls, obj: Any) -> "JSON":
        """Encode ``obj`` as compact JSON."""
        text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return cls(text)

    @classmethod
    def from_json(cls, data: bytes | str) -> "JSON":
        """Return a copy of the given JSON text."""
        return cls(data)

    def to_json(self) -> bytes:
        """Return the document unchanged."""
        return bytes(self)

    def value(self) -> bytes:
        """Return the document as a database value after checking it is valid."""
        self.unmarshal()
        return bytes(self)

    @classmethod
    def scan(cls, src: object) -> "JSON":
        """Build a document from a database string or bytes."""
        if isinstance(src, str):
            return cls(src)
        if isinstance(src, (bytes, bytearray, memoryview)):
            return cls(bytes(src))
        raise TypeError("incompatible type for json")