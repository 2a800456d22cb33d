"""Arbitrary-precision decimals for DECIMAL columns."""

from __future__ import annotations

import decimal as _decimal
from dataclasses import dataclass
from typing import Callable, Union

_NULL = b"null"

_Source = Union[bytes, str]


def _truncated_mod(value: int, divisor: int) -> int:
    remainder = abs(value) % divisor
    return -remainder if value < 0 else remainder


def _parse(text: str) -> _decimal.Decimal:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f'invalid decimal syntax: "{text}"')
    try:
        return _decimal.Decimal(text)
    except _decimal.InvalidOperation:
        raise ValueError(f'invalid decimal syntax: "{text}"') from None


def _value(big: _decimal.Decimal | None, can_null: bool) -> str | None:
    if big is None:
        return None if can_null else "0"
    if big.is_nan():
        raise ValueError("refusing to allow NaN into database")
    if big.is_infinite():
        raise ValueError("refusing to allow infinity into database")
    return str(big)


def _scan(val: object, can_null: bool) -> _decimal.Decimal | None:
    if val is None:
        if not can_null:
            raise ValueError("null cannot be scanned into decimal")
        return None
    if isinstance(val, bool):
        raise TypeError(f"cannot scan decimal value: {val!r}")
    if isinstance(val, (float, int)):
        return _decimal.Decimal(val)
    if isinstance(val, str):
        return _parse(val)
    if isinstance(val, (bytes, bytearray, memoryview)):
        try:
            text = bytes(val).decode("ascii")
        except UnicodeDecodeError:
            raise ValueError(f"invalid decimal syntax: {bytes(val)!r}") from None
        return _parse(text)
    raise TypeError(f"cannot scan decimal value: {val!r}")


def _json_text(data: _Source) -> str:
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = bytes(data).decode("utf-8")
    text = data.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    return text


def _random_big(next_int: Callable[[], int]) -> _decimal.Decimal:
    text = f"{_truncated_mod(next_int(), 10)}.{_truncated_mod(next_int(), 10)}"
    try:
        return _parse(text)
    except ValueError:
        raise ValueError("randVal could not be turned into a decimal") from None


@dataclass(frozen=True)
class Decimal:
    """A DECIMAL value that is never NULL; a missing number stands for zero."""

    big: _decimal.Decimal | None = None

    def __str__(self) -> str:
        return "0" if self.big is None else str(self.big)

    def value(self) -> str:
        """Return the number as database text, refusing NaN and infinity."""
        result = _value(self.big, False)
        assert result is not None
        return result

    @classmethod
    def scan(cls, val: object) -> "Decimal":
        """Build a decimal from a float, int, string or bytes; NULL is an error."""
        return cls(_scan(val, False))

    @classmethod
    def from_json(cls, data: _Source) -> "Decimal":
        """Build a decimal from a JSON number or string; ``null`` gives zero."""
        text = _json_text(data)
        if text == "null":
            return cls(_decimal.Decimal(0))
        return cls(_parse(text))

    def to_json(self) -> bytes:
        """Return the number as a quoted JSON string."""
        return f'"{self}"'.encode("ascii")

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> "Decimal":
        """Return a random one-digit decimal drawn from ``next_int``."""
        return cls(_random_big(next_int))


@dataclass(frozen=True)
class NullDecimal:
    """A DECIMAL value that may be NULL, held as ``big is None``."""

    big: _decimal.Decimal | None = None

    def __str__(self) -> str:
        return "nil" if self.big is None else str(self.big)

    def value(self) -> str | None:
        """Return the number as database text, or None for NULL."""
        return _value(self.big, True)

    @classmethod
    def scan(cls, val: object) -> "NullDecimal":
        """Build a nullable decimal from a database value."""
        return cls(_scan(val, True))

    @classmethod
    def from_json(cls, data: _Source) -> "NullDecimal":
        """Build a nullable decimal from JSON; ``null`` gives NULL."""
        text = _json_text(data)
        if text == "null":
            return cls(None)
        return cls(_parse(text))

    def to_json(self) -> bytes:
        """Return the number as bare JSON text, or ``null``."""
        if self.big is None:
            return _NULL
        return str(self.big).encode("ascii")

    def is_zero(self) -> bool:
        """Return True when the value is NULL."""
        return self.big is None

    @classmethod
    def randomize(
        cls, next_int: Callable[[], int], field_type: str, should_be_null: bool
    ) -> "NullDecimal":
        """Return NULL when asked for, otherwise a random one-digit decimal."""
        if should_be_null:
            return cls(None)
        return cls(_random_big(next_int))