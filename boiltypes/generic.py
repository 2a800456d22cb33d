"""Array values of any element type and nesting depth."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from boiltypes.arraytext import (
    ArrayError,
    format_dims,
    parse_array,
    quote_array_element,
)
from boiltypes.pgtext import encode

_DEFAULT_DELIMITER = ","
_BYTES_LIKE = (bytes, bytearray, memoryview)


def _delimiter_of(obj: object) -> str:
    """Return the ``array_delimiter`` string an object or type declares, or a comma."""
    return getattr(obj, "array_delimiter", _DEFAULT_DELIMITER)


def _is_nested(item: object) -> bool:
    """True for lists and tuples that do not convert themselves with ``value()``."""
    return isinstance(item, (list, tuple)) and not callable(getattr(item, "value", None))


def _convert(item: object) -> object:
    converter = getattr(item, "value", None)
    if callable(converter):
        return converter()
    return item


def _append_element(item: object) -> tuple[bytes, str]:
    """Render one element; return its text and the delimiter to put after it."""
    if _is_nested(item):
        if item:
            return _append_array(item)
        return b"", ""

    delimiter = _delimiter_of(item)
    converted = _convert(item)
    if converted is None:
        return b"NULL", delimiter
    if isinstance(converted, (str, *_BYTES_LIKE)):
        return quote_array_element(converted), delimiter
    return encode(converted), delimiter


def _append_array(items: list | tuple) -> tuple[bytes, str]:
    pieces: list[bytes] = []
    delimiter = _DEFAULT_DELIMITER
    for index, item in enumerate(items):
        if index:
            pieces.append(delimiter.encode("utf-8"))
        text, delimiter = _append_element(item)
        pieces.append(text)
    return b"{" + b"".join(pieces) + b"}", delimiter


@dataclass
class GenericArray:
    """An array literal of any element type.

    ``a`` holds the array: a list or tuple, possibly nested, or None for
    NULL. Scanning needs ``element_type``, a type with a ``scan`` class
    method that takes the element's bytes or None. ``length`` fixes the
    number of elements a scan must produce; None allows any number.
    Element types may set an ``array_delimiter`` string to replace the comma.
    """

    a: Any = None
    element_type: type | None = None
    length: int | None = None

    def _describe(self) -> str:
        name = getattr(self.element_type, "__name__", "Any")
        if self.length is None:
            return f"list[{name}]"
        return f"list[{name}] of length {self.length}"

    def _scan_element(self, index: int, elem: bytes | None) -> Any:
        scanner = getattr(self.element_type, "scan", None)
        if not callable(scanner):
            name = getattr(self.element_type, "__name__", "Any")
            raise ArrayError(
                f"boil: parsing array element index {index}: boil: scanning to "
                f"{name} is not implemented; only types with a scan method"
            )
        try:
            return scanner(elem)
        except (ValueError, TypeError) as exc:
            raise ArrayError(
                f"boil: parsing array element index {index}: {exc}"
            ) from exc

    def scan(self, src: object) -> list | None:
        """Parse a one-dimensional array literal into ``a`` and return it.

        ``a`` is left untouched when the literal cannot be converted.
        """
        if src is None:
            if self.length is None:
                self.a = None
                return None
            raise ArrayError(f"boil: cannot convert None to {self._describe()}")
        if isinstance(src, str):
            data = src.encode("utf-8")
        elif isinstance(src, _BYTES_LIKE):
            data = bytes(src)
        else:
            raise TypeError(
                f"boil: cannot convert {type(src).__name__} to {self._describe()}"
            )

        delimiter = (
            _delimiter_of(self.element_type)
            if self.element_type is not None
            else _DEFAULT_DELIMITER
        )
        dims, elems = parse_array(data, delimiter)
        if len(dims) > 1:
            raise ArrayError(
                f"boil: scanning from multidimensional ARRAY{format_dims(dims)} "
                "is not implemented"
            )
        if not dims:
            dims = [0]
        if self.length is not None and self.length != dims[0]:
            raise ArrayError(
                f"boil: cannot convert ARRAY{format_dims(dims)} to {self._describe()}"
            )

        values = [self._scan_element(index, elem) for index, elem in enumerate(elems)]
        self.a = values
        return values

    def value(self) -> str | None:
        """Render ``a`` as an array literal, or None when it is None."""
        if self.a is None:
            return None
        if not isinstance(self.a, (list, tuple)):
            raise TypeError(
                f"boil: Unable to convert {type(self.a).__name__} to array"
            )
        if not self.a:
            return "{}"
        text, _ = _append_array(self.a)
        return text.decode("utf-8", errors="surrogateescape")