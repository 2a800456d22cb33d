"""PostgreSQL text-format helpers: bytea, timestamps and scalar encoding."""

from __future__ import annotations

import binascii
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from functools import lru_cache

BYTEA_OID = 17
"""Type OID of the PostgreSQL ``bytea`` type."""

INFINITY_TS_ENABLED_ALREADY = "pq: infinity timestamp enabled already"
INFINITY_TS_NEGATIVE_MUST_BE_SMALLER = (
    "pq: infinity timestamp: negative value must be smaller (before) than positive"
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_TZ_OR_SPACE = re.compile(r"[-+ ]")


@dataclass
class _InfinityBounds:
    enabled: bool = False
    negative: datetime | None = None
    positive: datetime | None = None


_infinity = _InfinityBounds()


def parse_bytea(data: bytes | str) -> bytes:
    """Decode a bytea value in either the ``hex`` or the legacy ``escape`` format."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)
    if data.startswith(b"\\x"):
        try:
            return binascii.unhexlify(data[2:])
        except binascii.Error as exc:
            raise ValueError(f"invalid hex bytea value: {exc}") from exc

    result = bytearray()
    rest = data
    while rest:
        if rest[:1] == b"\\":
            if rest[1:2] == b"\\":
                result.append(0x5C)
                rest = rest[2:]
                continue
            if len(rest) < 4:
                raise ValueError(f"invalid bytea sequence {list(rest)}")
            result.append(_parse_octal_byte(rest[1:4]))
            rest = rest[4:]
        else:
            end = rest.find(b"\\")
            if end == -1:
                result += rest
                break
            result += rest[:end]
            rest = rest[end:]
    return bytes(result)


def _parse_octal_byte(digits: bytes) -> int:
    text = digits.decode("latin-1")
    if not re.fullmatch(r"[+-]?[0-7]+", text):
        raise ValueError(
            f"could not parse bytea value: parsing {text!r}: invalid syntax"
        )
    number = int(text, 8)
    if not -256 <= number <= 255:
        raise ValueError(
            f"could not parse bytea value: parsing {text!r}: value out of range"
        )
    return number & 0xFF


def encode_bytea(server_version: int, data: bytes) -> bytes:
    """Encode bytes as bytea text, using hex on 9.0+ servers and escapes before."""
    data = bytes(data)
    if server_version >= 90000:
        return b"\\x" + binascii.hexlify(data)
    out = bytearray()
    for byte in data:
        if byte == 0x5C:
            out += b"\\\\"
        elif byte < 0x20 or byte > 0x7E:
            out += f"\\{byte:03o}".encode("ascii")
        else:
            out.append(byte)
    return bytes(out)


def enable_infinity_ts(negative: datetime, positive: datetime) -> None:
    """Map ``-infinity``/``infinity`` timestamps to the given bounds.

    May be called only once; ``negative`` must be before ``positive``.
    """
    if _infinity.enabled:
        raise RuntimeError(INFINITY_TS_ENABLED_ALREADY)
    if not negative < positive:
        raise ValueError(INFINITY_TS_NEGATIVE_MUST_BE_SMALLER)
    _infinity.enabled = True
    _infinity.negative = negative
    _infinity.positive = positive


def disable_infinity_ts() -> None:
    """Switch infinity handling off again."""
    _infinity.enabled = False


@lru_cache(maxsize=None)
def _fixed_zone(offset_seconds: int) -> timezone:
    return timezone(timedelta(seconds=offset_seconds))


def parse_ts(current_location: tzinfo | None, text: str) -> datetime | bytes:
    """Parse a timestamp, honouring the infinity mapping when it is enabled."""
    if text == "-infinity":
        return _infinity.negative if _infinity.enabled else text.encode("ascii")
    if text == "infinity":
        return _infinity.positive if _infinity.enabled else text.encode("ascii")
    return parse_timestamp(current_location, text)


def parse_timestamp(current_location: tzinfo | None, text: str) -> datetime:
    """Parse PostgreSQL's ISO text format for dates and timestamps.

    The result is expressed in ``current_location`` when that zone agrees
    with the offset sent by the server; otherwise it carries the server's
    fixed offset.
    """

    def expect(char: str, pos: int) -> None:
        if pos + 1 > len(text):
            raise ValueError("invalid timestamp")
        if text[pos] != char:
            raise ValueError(f"expected {char!r} at position {pos}; got {text[pos]!r}")

    def number(begin: int, end: int) -> int:
        if begin < 0 or end < 0 or begin > end or end > len(text):
            raise ValueError("invalid timestamp")
        piece = text[begin:end]
        if not _INTEGER.fullmatch(piece):
            raise ValueError(f"expected number; got {text!r}")
        return int(piece)

    mon_sep = text.find("-")
    year = number(0, mon_sep)
    day_sep = mon_sep + 3
    month = number(mon_sep + 1, day_sep)
    expect("-", day_sep)
    time_sep = day_sep + 3
    day = number(day_sep + 1, time_sep)

    hour = minute = second = 0
    if len(text) > mon_sep + len("01-01") + 1:
        expect(" ", time_sep)
        min_sep = time_sep + 3
        expect(":", min_sep)
        hour = number(time_sep + 1, min_sep)
        sec_sep = min_sep + 3
        expect(":", sec_sep)
        minute = number(min_sep + 1, sec_sep)
        second = number(sec_sep + 1, sec_sep + 3)

    remainder = mon_sep + len("01-01 00:00:00") + 1
    nanos = 0
    tz_offset = 0

    if remainder < len(text) and text[remainder] == ".":
        frac_start = remainder + 1
        found = _TZ_OR_SPACE.search(text, frac_start)
        frac_len = (found.start() - frac_start) if found else len(text) - frac_start
        fraction = number(frac_start, frac_start + frac_len)
        nanos = fraction * (1_000_000_000 // 10**frac_len)
        remainder += frac_len + 1

    if remainder < len(text) and text[remainder] in "-+":
        sign = -1 if text[remainder] == "-" else 1
        tz_hours = number(remainder + 1, remainder + 3)
        remainder += 3
        tz_minutes = tz_seconds = 0
        if remainder < len(text) and text[remainder] == ":":
            tz_minutes = number(remainder + 1, remainder + 3)
            remainder += 3
        if remainder < len(text) and text[remainder] == ":":
            tz_seconds = number(remainder + 1, remainder + 3)
            remainder += 3
        tz_offset = sign * (tz_hours * 3600 + tz_minutes * 60 + tz_seconds)

    if text[remainder : remainder + 3] == " BC":
        iso_year = 1 - year
        remainder += 3
    else:
        iso_year = year

    if remainder < len(text):
        raise ValueError(f"expected end of input, got {text[remainder:]}")

    result = datetime(
        iso_year,
        month,
        day,
        hour,
        minute,
        second,
        nanos // 1000,
        tzinfo=_fixed_zone(tz_offset),
    )

    if current_location is not None:
        local = result.astimezone(current_location)
        if local.utcoffset() == timedelta(seconds=tz_offset):
            result = local
    return result


def format_ts(t: datetime) -> bytes:
    """Format a timestamp, mapping the infinity bounds when they are enabled."""
    if _infinity.enabled:
        if not t > _infinity.negative:
            return b"-infinity"
        if not t < _infinity.positive:
            return b"infinity"
    return format_timestamp(t)


def format_timestamp(t: datetime) -> bytes:
    """Format a datetime in PostgreSQL's timestamp text format.

    A naive datetime is written as UTC.
    """
    offset = t.utcoffset()
    offset_seconds = 0 if offset is None else int(offset.total_seconds())
    text = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    if t.microsecond:
        text += "." + f"{t.microsecond:06d}".rstrip("0")
    if offset_seconds == 0:
        text += "Z"
    else:
        sign = "-" if offset_seconds < 0 else "+"
        magnitude = abs(offset_seconds)
        text += f"{sign}{magnitude // 3600:02d}:{magnitude // 60 % 60:02d}"
        if magnitude % 60:
            text += f":{magnitude % 60:02d}"
    return text.encode("ascii")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def encode(value: object, pg_type_oid: int = 0, server_version: int = 0) -> bytes:
    """Encode a Python scalar as PostgreSQL text.

    Bytes and strings are bytea-encoded when ``pg_type_oid`` is ``BYTEA_OID``.
    """
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, int):
        return str(value).encode("ascii")
    if isinstance(value, float):
        return _format_float(value).encode("ascii")
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
        return encode_bytea(server_version, data) if pg_type_oid == BYTEA_OID else data
    if isinstance(value, str):
        data = value.encode("utf-8")
        return encode_bytea(server_version, data) if pg_type_oid == BYTEA_OID else data
    if isinstance(value, datetime):
        return format_ts(value)
    raise TypeError(f"pq: encode: unknown type for {type(value).__name__}")