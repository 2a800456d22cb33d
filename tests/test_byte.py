import pytest

from boiltypes.byte import Byte


def test_string():
    assert str(Byte(ord("b"))) == "b"


def test_from_json():
    assert Byte.from_json(b'"b"') == ord("b")


def test_to_json():
    assert Byte(ord("b")).to_json() == b'"b"'


def test_json_round_trip():
    value = Byte(ord("z"))
    assert Byte.from_json(value.to_json()) == value


def test_value():
    value = Byte(ord("b"))
    assert value.value() == bytes([value])


def test_scan_string():
    assert Byte.scan("b") == ord("b")


def test_scan_bytes_and_int():
    assert Byte.scan(b"bc") == ord("b")
    assert Byte.scan(98) == 98


def test_scan_incompatible():
    with pytest.raises(TypeError, match="incompatible type for byte"):
        Byte.scan(1.5)


def test_scan_empty():
    with pytest.raises(ValueError):
        Byte.scan("")


def test_from_json_too_long():
    with pytest.raises(ValueError, match="text len is greater than one"):
        Byte.from_json(b'"ab"')


def test_from_json_not_a_string():
    with pytest.raises(ValueError):
        Byte.from_json(b"5")


def test_out_of_range():
    with pytest.raises(ValueError):
        Byte(256)


@pytest.mark.parametrize("seed", [0, 1, 59, 60, 1000, 123456789])
def test_randomize_is_printable(seed):
    value = Byte.randomize(lambda: seed, "char", False)
    assert 65 <= value <= 124
    assert Byte.randomize(lambda: seed, "char", True) == value