"""PostgreSQL geometric types and their text representations."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal as _Dec
from typing import Callable, Iterable

_NUM = r"-?[0-9]+(?:\.[0-9]+)?"
_POINT = re.compile(rf"\(({_NUM}),({_NUM})\)")
_POINT_ANY = re.compile(rf"\((?:{_NUM}),(?:{_NUM})\)")
_LINE = re.compile(rf"\{{({_NUM}),({_NUM}),({_NUM})\}}")

NextInt = Callable[[], int]


def _format_float(value: float) -> str:
    """Format a float the shortest way, switching to exponent form when large or small."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = _Dec(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    exp = point - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float: {text!r}")
    return float(text)


def _to_text(src: object) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src).decode("utf-8")
    raise TypeError(f"incompatible type {type(src).__name__}")


def _rand_num(next_int: NextInt) -> float:
    return float(next_int())


def parse_point(text: str) -> "Point":
    """Parse ``(x,y)`` into a point."""
    match = _POINT.fullmatch(text)
    if match is None:
        raise ValueError("wrong point")
    return Point(float(match.group(1)), float(match.group(2)))


def parse_points(text: str) -> list["Point"]:
    """Find every ``(x,y)`` group in the text, in order."""
    return [parse_point(m.group(0)) for m in _POINT_ANY.finditer(text)]


def format_point(point: "Point") -> str:
    """Format a point as ``(x,y)``."""
    return f"({_format_float(point.x)},{_format_float(point.y)})"


def format_points(points: Iterable["Point"]) -> str:
    """Format points separated by commas."""
    return ",".join(format_point(p) for p in points)


def _parse_points_src(src: object) -> list["Point"]:
    return parse_points(_to_text(src))


@dataclass(frozen=True)
class Point:
    """A two-dimensional point."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def value(self) -> str:
        """Return the point as database text."""
        return format_point(self)

    @classmethod
    def scan(cls, src: object) -> "Point":
        """Build a point from database text; NULL gives the origin."""
        if src is None:
            return cls(0.0, 0.0)
        return parse_point(_to_text(src))

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Point":
        """Return a point whose coordinates come from ``next_int``."""
        return cls(_rand_num(next_int), _rand_num(next_int))


def _rand_points(next_int: NextInt, count: int) -> tuple[Point, ...]:
    return tuple(Point.randomize(next_int, "", False) for _ in range(max(count, 0)))


@dataclass(frozen=True)
class Line:
    """An infinite line ``a*x + b*y + c = 0``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0

    def __post_init__(self) -> None:
        for name in ("a", "b", "c"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def value(self) -> str:
        """Return the line as ``{a,b,c}``."""
        return "{" + ",".join(_format_float(v) for v in (self.a, self.b, self.c)) + "}"

    @classmethod
    def scan(cls, src: object) -> "Line":
        """Build a line from database text; NULL gives the zero line."""
        if src is None:
            return cls(0.0, 0.0, 0.0)
        match = _LINE.fullmatch(_to_text(src))
        if match is None:
            raise ValueError("wrong line")
        return cls(*(float(g) for g in match.groups()))

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Line":
        """Return a line with random ``a`` and ``b`` and ``c`` of zero."""
        return cls(_rand_num(next_int), _rand_num(next_int), 0.0)


@dataclass(frozen=True)
class Lseg:
    """A line segment between two end points."""

    a: Point = Point()
    b: Point = Point()

    def value(self) -> str:
        """Return the segment as ``[(x,y),(x,y)]``."""
        return f"[{format_points((self.a, self.b))}]"

    @classmethod
    def scan(cls, src: object) -> "Lseg":
        """Build a segment from database text; NULL gives a zero segment."""
        if src is None:
            return cls()
        points = _parse_points_src(src)
        if len(points) != 2:
            raise ValueError("wrong lseg")
        return cls(points[0], points[1])

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Lseg":
        """Return a segment with random end points."""
        return cls(*_rand_points(next_int, 2))


@dataclass(frozen=True)
class Box:
    """A box given by two opposite corners."""

    a: Point = Point()
    b: Point = Point()

    def value(self) -> str:
        """Return the box as ``((x,y),(x,y))``."""
        return f"({format_points((self.a, self.b))})"

    @classmethod
    def scan(cls, src: object) -> "Box":
        """Build a box from database text; NULL gives a zero box."""
        if src is None:
            return cls()
        points = _parse_points_src(src)
        if len(points) != 2:
            raise ValueError("wrong box")
        return cls(points[0], points[1])

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Box":
        """Return a box with random corners."""
        return cls(*_rand_points(next_int, 2))


@dataclass(frozen=True)
class Path:
    """Connected points, either open or closed."""

    points: tuple[Point, ...] = ()
    closed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def value(self) -> str:
        """Return the path in parentheses when closed, brackets when open."""
        inner = format_points(self.points)
        return f"({inner})" if self.closed else f"[{inner}]"

    @classmethod
    def scan(cls, src: object) -> "Path":
        """Build a path from database text; NULL gives an empty path."""
        if src is None:
            return cls()
        text = _to_text(src)
        points = parse_points(text)
        if len(points) < 2:
            raise ValueError("wrong path")
        return cls(tuple(points), text.startswith("(("))

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Path":
        """Return a three-point path, closed when the next number is below 40."""
        points = _rand_points(next_int, 3)
        return cls(points, _rand_num(next_int) < 40)


@dataclass(frozen=True)
class Polygon:
    """A polygon given by its vertices."""

    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def value(self) -> str:
        """Return the polygon as ``((x,y),...)``."""
        return f"({format_points(self.points)})"

    @classmethod
    def scan(cls, src: object) -> "Polygon":
        """Build a polygon of at least three points; NULL gives an empty polygon."""
        if src is None:
            return cls()
        points = _parse_points_src(src)
        if len(points) <= 2:
            raise ValueError("wrong polygon")
        return cls(tuple(points))

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Polygon":
        """Return a triangle with random vertices."""
        return cls(_rand_points(next_int, 3))


@dataclass(frozen=True)
class Circle:
    """A circle given by its centre and radius."""

    center: Point = Point()
    radius: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", float(self.radius))

    def value(self) -> str:
        """Return the circle as ``<(x,y),r>``."""
        return f"<{format_point(self.center)},{_format_float(self.radius)}>"

    @classmethod
    def scan(cls, src: object) -> "Circle":
        """Build a circle from database text; NULL gives a zero circle."""
        if src is None:
            return cls()
        text = _to_text(src)
        points = parse_points(text)
        pieces = text.split("),")
        if len(points) != 1 or len(pieces) != 2:
            raise ValueError("wrong circle")
        return cls(points[0], _parse_float(pieces[1].strip(">")))

    @classmethod
    def randomize(cls, next_int: NextInt, field_type: str, should_be_null: bool) -> "Circle":
        """Return a circle with a random centre and radius."""
        center = Point.randomize(next_int, field_type, False)
        return cls(center, _rand_num(next_int))