import decimal

import pytest

from boiltypes.decimals import Decimal, NullDecimal

CASES = ["3.14", "0", "43.4292"]


@pytest.mark.parametrize("text", CASES)
def test_decimal_value(text):
    assert Decimal(decimal.Decimal(text)).value() == text


def test_decimal_zero_value():
    assert Decimal().value() == "0"


@pytest.mark.parametrize("special", ["Infinity", "NaN"])
def test_decimal_value_rejects_special(special):
    with pytest.raises(ValueError):
        Decimal(decimal.Decimal(special)).value()


@pytest.mark.parametrize("text", CASES)
def test_decimal_scan(text):
    assert str(Decimal.scan(text)) == text


def test_decimal_scan_null():
    with pytest.raises(ValueError, match="null cannot be scanned"):
        Decimal.scan(None)


def test_decimal_scan_other_sources():
    assert Decimal.scan(42).big == 42
    assert Decimal.scan(1.5).big == decimal.Decimal("1.5")
    assert Decimal.scan(b"3.14").big == decimal.Decimal("3.14")


def test_decimal_scan_errors():
    with pytest.raises(ValueError, match="invalid decimal syntax"):
        Decimal.scan("abc")
    with pytest.raises(TypeError, match="cannot scan decimal value"):
        Decimal.scan(True)
    with pytest.raises(TypeError):
        Decimal.scan([1])


@pytest.mark.parametrize("text", CASES)
def test_null_decimal_value(text):
    assert NullDecimal(decimal.Decimal(text)).value() == text


def test_null_decimal_zero_value():
    assert NullDecimal().value() is None


@pytest.mark.parametrize("special", ["Infinity", "NaN"])
def test_null_decimal_value_rejects_special(special):
    with pytest.raises(ValueError):
        NullDecimal(decimal.Decimal(special)).value()


@pytest.mark.parametrize("text", CASES)
def test_null_decimal_scan(text):
    assert str(NullDecimal.scan(text)) == text


def test_null_decimal_scan_null():
    assert NullDecimal.scan(None).big is None
    assert str(NullDecimal.scan(None)) == "nil"


def test_decimal_json():
    d = Decimal.from_json(b'"54.45"')
    assert d.big == decimal.Decimal("54.45")
    assert Decimal.from_json(d.to_json()) == d


def test_decimal_json_null_is_zero():
    assert Decimal.from_json("null").big == 0


def test_null_decimal_json():
    n = NullDecimal.from_json(b'"54.45"')
    assert n.big == decimal.Decimal("54.45")
    assert n.to_json() == b"54.45"
    assert NullDecimal.from_json(n.to_json()) == n


def test_null_decimal_json_nil():
    assert NullDecimal().to_json() == b"null"
    assert NullDecimal.from_json(b"null").big is None


def test_null_decimal_is_zero():
    assert NullDecimal().is_zero() is True
    assert NullDecimal(decimal.Decimal(0)).is_zero() is False


def test_randomize():
    d = Decimal.randomize(iter([3, 4]).__next__, "numeric", True)
    assert d.big == decimal.Decimal("3.4")
    n = NullDecimal.randomize(iter([5, 6]).__next__, "numeric", False)
    assert n.big == decimal.Decimal("5.6")
    assert NullDecimal.randomize(iter([]).__next__, "numeric", True).big is None