# boiltypes

Value types for moving data between Python and PostgreSQL's text formats.
Most types are built from a database value with the `scan` class method and
turned back into one with `value`. `value` returns `None` where the database
should store NULL.

The package has no dependencies outside the standard library.

## What is included

- `boiltypes.arraytext`: the array literal parser. `parse_array` splits a
  literal into its dimensions and a flat list of elements (NULL elements come
  back as `None`); `scan_linear_array` does the same for one-dimensional
  arrays only; `quote_array_element` double-quotes an element. Errors are
  raised as `ArrayError`, a subclass of `ValueError`.
- `boiltypes.generic`: `GenericArray`, which writes lists and tuples of any
  nesting depth as array literals, and reads one-dimensional literals into
  any element type that has a `scan` class method. An element type may set
  an `array_delimiter` string to replace the comma.
- `boiltypes.pgtext`: bytea decoding and encoding (`parse_bytea`,
  `encode_bytea`), timestamp parsing and formatting (`parse_timestamp`,
  `parse_ts`, `format_timestamp`, `format_ts`), optional mapping of
  `-infinity`/`infinity` to fixed bounds (`enable_infinity_ts`,
  `disable_infinity_ts`), and `encode` for scalars.
- `boiltypes.hstore`: `HStore`, a `dict` of strings whose values may be `None`.
- `boiltypes.jsontype`: `JSON`, raw JSON text held as `bytes`, checked for
  validity before it is written.
- `boiltypes.byte`: `Byte`, a single byte that travels as a one-character string.
- `boiltypes.decimals`: `Decimal`, which is never NULL, and `NullDecimal`,
  which may be.
- `boiltypes.pgeo.geometry`: `Point`, `Line`, `Lseg`, `Box`, `Path`,
  `Polygon` and `Circle`, plus `parse_point`, `parse_points`, `format_point`
  and `format_points`.

## Installing

```
pip install boiltypes
```

## Examples

Array literals:

```python
from boiltypes.arraytext import parse_array
from boiltypes.generic import GenericArray
from boiltypes.decimals import NullDecimal

parse_array(b"{{a,b}}", b",")                 # ([1, 2], [b"a", b"b"])
GenericArray([1, 2, 3]).value()               # '{1,2,3}'
GenericArray(["a", "d,e"]).value()            # '{"a","d,e"}'

arr = GenericArray(element_type=NullDecimal)
arr.scan("{1.5,NULL}")
# [NullDecimal(big=Decimal('1.5')), NullDecimal(big=None)]
```

Bytea and timestamps:

```python
from datetime import datetime, timezone
from boiltypes.pgtext import parse_bytea, format_timestamp

parse_bytea(b"\\xdead")                        # b'\xde\xad'
format_timestamp(datetime(2001, 2, 3, 4, 5, 6, tzinfo=timezone.utc))
# b'2001-02-03 04:05:06Z'
```

hstore, JSON and bytes:

```python
from boiltypes.hstore import HStore
from boiltypes.jsontype import JSON
from boiltypes.byte import Byte

HStore.scan(b'"a"=>"1", "b"=>NULL')            # {'a': '1', 'b': None}
HStore({"a": "1"}).value()                     # b'"a"=>"1"'
JSON.marshal({"Name": "hi", "Age": 15})        # JSON(b'{"Name":"hi","Age":15}')
str(Byte.scan("b"))                            # 'b'
```

Geometry:

```python
from boiltypes.pgeo.geometry import Point, Box

Point.scan("(1.5,-2)")                         # Point(x=1.5, y=-2.0)
Box(Point(0, 0), Point(1, 1)).value()          # '((0,0),(1,1))'
```

Decimals:

```python
from boiltypes.decimals import Decimal, NullDecimal

Decimal.scan("3.14").value()                   # '3.14'
NullDecimal.scan(None).value()                 # None
```

If a value cannot be read, `scan` raises `ValueError` or `TypeError`;
array literals raise `ArrayError`.

## What it does not do

- It does not connect to a database; it only converts values to and from
  their text forms.
- There are no ready-made typed array classes for booleans, integers,
  floats, strings, bytea or decimals; use `GenericArray` with an element
  type, or `scan_linear_array` and convert the elements yourself.
- The geometric types have no nullable forms: scanning NULL gives a zero
  value (the origin, a zero box, an empty path and so on) rather than a
  NULL marker.

## Running the tests

```
pip install -e ".[test]"
pytest
```