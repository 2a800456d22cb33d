import pytest

from boiltypes.jsontype import JSON


def test_string():
    assert str(JSON("hello")) == "hello"


def test_unmarshal():
    result = JSON('{"Name":"hi","Age":15}').unmarshal()
    assert result["Name"] == "hi"
    assert result["Age"] == 15


def test_marshal():
    j = JSON.marshal({"Name": "hi", "Age": 15})
    assert str(j) == '{"Name":"hi","Age":15}'


def test_marshal_round_trip():
    obj = {"list": [1, 2.5, None, True], "text": "é<&>"}
    assert JSON.marshal(obj).unmarshal() == obj


def test_marshal_escapes_html():
    assert b"<" not in JSON.marshal("<a>")
    assert b"&" not in JSON.marshal("a&b")


def test_marshal_rejects_nan():
    with pytest.raises(ValueError):
        JSON.marshal(float("nan"))


def test_from_json():
    j = JSON.from_json(JSON('"hi"'))
    assert str(j) == '"hi"'


def test_to_json():
    assert JSON('"hi"').to_json() == b'"hi"'


def test_value():
    j = JSON('{"Name":"hi","Age":15}')
    assert j.value() == bytes(j)


def test_value_invalid():
    with pytest.raises(ValueError):
        JSON("{not json").value()


def test_value_rejects_nan_literal():
    with pytest.raises(ValueError):
        JSON("NaN").value()


def test_scan():
    assert JSON.scan('"hello"') == b'"hello"'
    assert JSON.scan(b'"hello"') == b'"hello"'


def test_scan_incompatible():
    with pytest.raises(TypeError, match="incompatible type for json"):
        JSON.scan(5)