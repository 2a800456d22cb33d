import itertools

import pytest

from boiltypes.pgeo.geometry import (
    Box,
    Circle,
    Line,
    Lseg,
    Path,
    Point,
    Polygon,
    format_point,
    format_points,
    parse_point,
    parse_points,
)

POINTS = [Point(0, 0), Point(1.5, -2), Point(-3.25, 4), Point(100, 0.5)]


def counter():
    return itertools.count(1).__next__


def test_point_value_pinned():
    assert Point(1.5, -2).value() == "(1.5,-2)"


@pytest.mark.parametrize("point", POINTS)
def test_point_round_trip(point):
    assert Point.scan(point.value()) == point
    assert Point.scan(point.value().encode()) == point
    assert parse_point(format_point(point)) == point


def test_point_scan_null():
    assert Point.scan(None) == Point(0, 0)


@pytest.mark.parametrize("text", ["(1,2", "(a,b)", "(1, 2)", "1,2", "(1,2)x"])
def test_point_scan_rejects(text):
    with pytest.raises(ValueError, match="wrong point"):
        Point.scan(text)


def test_scan_rejects_other_types():
    with pytest.raises(TypeError, match="incompatible type"):
        Point.scan(5)


def test_parse_points():
    assert parse_points("((1,2),(3,4))") == [Point(1, 2), Point(3, 4)]
    assert parse_points("nothing") == []
    assert parse_points(format_points(POINTS)) == POINTS


def test_line_round_trip_and_errors():
    line = Line(1, -2.5, 3)
    assert Line.scan(line.value()) == line
    assert Line.scan(None) == Line(0, 0, 0)
    with pytest.raises(ValueError, match="wrong line"):
        Line.scan("{1,2}")


def test_lseg_round_trip_and_errors():
    seg = Lseg(Point(1, 2), Point(3, 4))
    text = seg.value()
    assert text.startswith("[") and text.endswith("]")
    assert Lseg.scan(text) == seg
    assert Lseg.scan(None) == Lseg(Point(), Point())
    with pytest.raises(ValueError, match="wrong lseg"):
        Lseg.scan("[(1,2),(3,4),(5,6)]")


def test_box_round_trip_and_errors():
    box = Box(Point(5, 6), Point(-1, 0.5))
    text = box.value()
    assert text.startswith("(") and text.endswith(")")
    assert Box.scan(text) == box
    assert Box.scan(None) == Box()
    with pytest.raises(ValueError, match="wrong box"):
        Box.scan("((1,2))")


def test_path_closed_value_pinned():
    assert Path((Point(0, 0), Point(1, 1)), True).value() == "((0,0),(1,1))"


@pytest.mark.parametrize("closed", [True, False])
def test_path_round_trip(closed):
    path = Path(tuple(POINTS), closed)
    assert Path.scan(path.value()) == path


def test_path_errors_and_null():
    with pytest.raises(ValueError, match="wrong path"):
        Path.scan("[(1,2)]")
    assert Path.scan(None) == Path()


def test_polygon_round_trip_and_errors():
    poly = Polygon(POINTS[:3])
    assert Polygon.scan(poly.value()) == poly
    with pytest.raises(ValueError, match="wrong polygon"):
        Polygon.scan("((1,2),(3,4))")
    assert Polygon.scan(None) == Polygon()


def test_circle_value_pinned():
    assert Circle(Point(1, 2), 3).value() == "<(1,2),3>"


def test_circle_round_trip_and_errors():
    circle = Circle(Point(-1.5, 2), 0.25)
    assert Circle.scan(circle.value()) == circle
    assert Circle.scan(None) == Circle()
    with pytest.raises(ValueError, match="wrong circle"):
        Circle.scan("<(1,2)>")
    with pytest.raises(ValueError):
        Circle.scan("<(1,2),x>")


def test_randomize():
    assert Point.randomize(counter(), "point", False) == Point(1, 2)
    assert Line.randomize(counter(), "line", False) == Line(1, 2, 0)
    path = Path.randomize(counter(), "path", False)
    assert path.points == (Point(1, 2), Point(3, 4), Point(5, 6))
    assert path.closed is True
    assert len(Polygon.randomize(counter(), "polygon", False).points) == 3
    circle = Circle.randomize(counter(), "circle", False)
    assert circle == Circle(Point(1, 2), 3)
    assert Box.randomize(counter(), "box", False) == Box(Point(1, 2), Point(3, 4))
    assert Lseg.randomize(counter(), "lseg", False) == Lseg(Point(1, 2), Point(3, 4))