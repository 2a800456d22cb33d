"""A single byte that travels as a one-character string."""

from __future__ import annotations

import json
import operator
from typing import Callable


def _truncated_mod(value: int, divisor: int) -> int:
    remainder = abs(value) % divisor
    return -remainder if value < 0 else remainder


class Byte(int):
    """An integer in 0..255 that serialises as a one-character JSON string."""

    def __new__(cls, code: int) -> "Byte":
        code = operator.index(code)
        if not 0 <= code <= 255:
            raise ValueError(f"byte value out of range: {code}")
        return super().__new__(cls, code)

    def __str__(self) -> str:
        return chr(self)

    def __repr__(self) -> str:
        return f"Byte({int(self)})"

    @classmethod
    def from_json(cls, data: bytes | str) -> "Byte":
        """Build a byte from a JSON string holding at most one byte."""
        text = json.loads(data)
        if not isinstance(text, str):
            raise ValueError(f"json: cannot unmarshal {type(text).__name__} into byte")
        encoded = text.encode("utf-8")
        if len(encoded) > 1:
            raise ValueError("json: cannot convert to byte, text len is greater than one")
        if not encoded:
            raise ValueError("json: cannot convert empty text to byte")
        return cls(encoded[0])

    def to_json(self) -> bytes:
        """Return the byte wrapped in double quotes."""
        return bytes((0x22, self, 0x22))

    def value(self) -> bytes:
        """Return the byte as a database value."""
        return bytes((self,))

    @classmethod
    def scan(cls, src: object) -> "Byte":
        """Build a byte from an integer, or the first byte of a string or bytes."""
        if isinstance(src, bool):
            raise TypeError("incompatible type for byte")
        if isinstance(src, int):
            return cls(src)
        if isinstance(src, str):
            data = src.encode("utf-8")
        elif isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
        else:
            raise TypeError("incompatible type for byte")
        if not data:
            raise ValueError("cannot scan an empty value into a byte")
        return cls(data[0])

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> "Byte":
        """Return a random printable ASCII byte drawn from ``next_int``."""
        return cls(_truncated_mod(next_int(), 60) + 65)