"""Parsing and quoting of PostgreSQL array literals in text format."""

from __future__ import annotations

from typing import Union

_Text = Union[bytes, bytearray, memoryview, str]

_OPEN = 0x7B  # {
_CLOSE = 0x7D  # }
_QUOTE = 0x22  # "
_BACKSLASH = 0x5C  # \

_NAMED_ESCAPES = {
    0x07: "\\a",
    0x08: "\\b",
    0x0C: "\\f",
    0x0A: "\\n",
    0x0D: "\\r",
    0x09: "\\t",
    0x0B: "\\v",
    0x27: "\\'",
    0x5C: "\\\\",
}


class ArrayError(ValueError):
    """Raised when an array literal cannot be parsed or converted."""


def _as_bytes(data: _Text) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _describe_char(code: int) -> str:
    """Quote a single character the way error messages show it."""
    if code in _NAMED_ESCAPES:
        return f"'{_NAMED_ESCAPES[code]}'"
    if 0x20 <= code < 0x7F:
        return f"'{chr(code)}'"
    if code < 0x80:
        return f"'\\x{code:02x}'"
    return f"'\\u{code:04x}'"


def _unexpected(src: bytes, offset: int) -> ArrayError:
    return ArrayError(
        "boil: unable to parse array; unexpected "
        f"{_describe_char(src[offset])} at offset {offset}"
    )


def format_dims(dims: list[int]) -> str:
    """Render dimensions as ``[2][1]``."""
    return "[" + "][".join(str(d) for d in dims) + "]"


def _read_quoted(src: bytes, i: int) -> tuple[bytes | None, int]:
    """Read a quoted element starting at the opening quote.

    Returns the element and the index after the closing quote, or None and
    the end of input when the quote never closes.
    """
    elem = bytearray()
    escape = False
    i += 1
    while i < len(src):
        byte = src[i]
        if escape:
            elem.append(byte)
            escape = False
        elif byte == _BACKSLASH:
            escape = True
        elif byte == _QUOTE:
            return bytes(elem), i + 1
        else:
            elem.append(byte)
        i += 1
    return None, i


def _read_elements(
    src: bytes,
    delim: bytes,
    i: int,
    depth: int,
    dims: list[int],
    elems: list[bytes | None],
) -> tuple[int, int]:
    n = len(src)
    while True:
        while i < n:
            byte = src[i]
            if byte == _OPEN:
                if depth == len(dims):
                    break
                depth += 1
                dims[depth - 1] = 0
                i += 1
            elif byte == _QUOTE:
                elem, i = _read_quoted(src, i)
                if elem is not None:
                    elems.append(elem)
                    break
            else:
                start = i
                found = False
                while i < n:
                    if src.startswith(delim, i) or src[i] == _CLOSE:
                        elem = src[start:i]
                        if not elem:
                            raise _unexpected(src, i)
                        elems.append(None if elem == b"NULL" else elem)
                        found = True
                        break
                    i += 1
                if found:
                    break

        while i < n:
            if depth > 0 and src.startswith(delim, i):
                dims[depth - 1] += 1
                i += len(delim)
                break
            if depth > 0 and src[i] == _CLOSE:
                dims[depth - 1] += 1
                depth -= 1
                i += 1
            else:
                raise _unexpected(src, i)
        else:
            return i, depth


def parse_array(
    src: _Text, delimiter: _Text = b","
) -> tuple[list[int], list[bytes | None]]:
    """Split an array literal into its dimensions and flat list of elements.

    NULL elements come back as None. Only the layout the server emits is
    accepted: whitespace is significant and NULL is case-sensitive.
    """
    data = _as_bytes(src)
    delim = _as_bytes(delimiter)
    n = len(data)

    if not data.startswith(b"{"):
        raise ArrayError("boil: unable to parse array; expected '{' at offset 0")

    depth = i = 0
    while i < n and data[i] == _OPEN:
        depth += 1
        i += 1

    elems: list[bytes | None] = []
    if i < n and data[i] == _CLOSE:
        dims: list[int] = []
    else:
        dims = [0] * i
        i, depth = _read_elements(data, delim, i, depth, dims, elems)

    while i < n:
        if data[i] == _CLOSE and depth > 0:
            depth -= 1
            i += 1
        else:
            raise _unexpected(data, i)

    if depth > 0:
        raise ArrayError(f"boil: unable to parse array; expected '}}' at offset {i}")

    if any(d == 0 or len(elems) % d for d in dims):
        raise ArrayError(
            "boil: multidimensional arrays must have elements with matching dimensions"
        )
    return dims, elems


def scan_linear_array(
    src: _Text, delimiter: _Text, type_name: str
) -> list[bytes | None]:
    """Parse a one-dimensional array literal and return its elements."""
    dims, elems = parse_array(src, delimiter)
    if len(dims) > 1:
        raise ArrayError(f"boil: cannot convert ARRAY{format_dims(dims)} to {type_name}")
    return elems


def quote_array_element(data: _Text) -> bytes:
    """Double-quote an element, escaping quotes and backslashes."""
    raw = _as_bytes(data)
    escaped = raw.replace(b"\\", b"\\\\").replace(b'"', b'\\"')
    return b'"' + escaped + b'"'