# pdfcore

Low-level building blocks for working with PDF data. The package has no runtime dependencies.

## Modules

- `pdfcore.lexer`: `Lexer` and `Substr`. They split raw PDF bytes into lexemes at whitespace and
  delimiters, skip `%` comments, step backwards, seek substrings and read byte runs. The module also
  has the helpers `is_whitespace`, `boundary` and `boundary_rev`.
- `pdfcore.primitive`: `Dictionary`, `PdfStream`, `PlainRef`, `ParseOptions`, the abstract
  `Resolver` and `NoResolve`. It also has the functions `serialize`, `display`, `debug_name` and
  `resolve`, and accessors such as `as_integer`, `as_u8`, `as_u32`, `as_number`, `as_bool`,
  `as_name`, `as_string`, `as_array`, `as_reference`, `as_dictionary`, `as_stream`, `as_text` and
  `to_string_lossy`. The accessors raise `UnexpectedPrimitive` when a value has the wrong kind.
- `pdfcore.strings`: `Name` and `PdfString`. This module handles literal/hex serialization and
  UTF-16BE (with byte order mark) or UTF-8 decoding. Decoding is available in a lossy form and in a
  strict form. It also has the functions `serialize_name`, `utf16be_to_string_lossy` and
  `utf16be_to_string`.
- `pdfcore.dates`: `Date` and `TimeRel`, for date strings such as `D:199812231952-08'00`.
- `pdfcore.xref`: `XRefTable` and `XRefSection`, with the entry kinds `XRefFree`, `XRefRaw`,
  `XRefStream`, `XRefPromised` and `XRefInvalid`. It also has `XRefInfo`, `gen_nr` and `byte_len`.
- `pdfcore.path`: `PathBuilder` and `FillMode`. They write path construction operators to a text
  stream.
- `pdfcore.errors`: the `PdfError` hierarchy, for example `EndOfFile`, `UnexpectedPrimitive`,
  `MissingEntry`, `KeyValueMismatch`, `UnexpectedLexeme`, `NotFound`, `ParseError` and
  `DecodeError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Primitives

Primitives are plain Python values:

| PDF type         | Python value |
|------------------|--------------|
| null             | `None` |
| boolean          | `bool` |
| integer          | `int` |
| real number      | `float` |
| string           | `PdfString` |
| name             | `Name` |
| array            | `list` |
| dictionary       | `Dictionary` |
| stream           | `PdfStream` |
| indirect reference | `PlainRef` |

```python
from pdfcore.primitive import Dictionary, as_integer, serialize
from pdfcore.strings import Name

catalog = Dictionary()
catalog["Type"] = Name("Catalog")
catalog["Count"] = 3

catalog.expect("Catalog", "Type", "Catalog", True)   # raises on mismatch
print(as_integer(catalog["Count"]))                   # 3
print(serialize(catalog))   # b'<<\n/Type /Catalog\n/Count 3\n>>\n'
```

`Dictionary.require(typ, key)` removes and returns an entry. It raises `MissingEntry` when the
entry is absent.

## Lexing

```python
from pdfcore.lexer import Lexer

lexer = Lexer(b"<</Length 42>>")
print(lexer.next().to_string())   # <<
print(lexer.next().to_string())   # /Length
print(lexer.next().to(int))       # 42
print(lexer.peek().to_string())   # >>
```

`next_expect` raises `UnexpectedLexeme` when the next lexeme is not the expected word.
`next_stream` consumes `stream` and its end-of-line marker.

## Dates

```python
from pdfcore.dates import Date
from pdfcore.primitive import NoResolve
from pdfcore.strings import PdfString

date = Date.from_primitive(PdfString(b"D:199812231952-08'00"), NoResolve())
print(date.year, date.month, date.day, date.rel)   # 1998 12 23 TimeRel.EARLIER
print(date.to_primitive().data)                    # b"D:19981223195200-08'00"
```

## Cross-reference tables

```python
from pdfcore.xref import XRefSection, XRefTable

table = XRefTable(3)
section = XRefSection(1)
section.add_inuse_entry(15, 0)
table.add_entries_from(section)
print(list(table.object_ids()))   # [1]
print(table)
```

`XRefTable.write_stream(size)` builds a cross-reference stream as a `PdfStream` with pending data.
The first `size` entries must all be free, raw or in-stream entries. Any other entry kind raises
`PdfError`.

## Paths

```python
import io
from pdfcore.path import FillMode, PathBuilder

out = io.StringIO()
builder = PathBuilder(out, (0, 0))
builder.line_to((10, 0))
builder.line_to((10, 10))
builder.close()
builder.fill(FillMode.NON_ZERO)
print(out.getvalue())   # "10 0 l\n10 10 l\nh\nf\n"
```

`quadratic` writes a quadratic curve as the equivalent cubic `c` operator. `cubic` uses the short
forms `v` and `y` when a control point equals the current point.

## What this package does not do

The package does not read whole PDF files. It splits bytes into lexemes, but it has no object
parser that turns those lexemes into primitives. It does not decode the contents of literal
`( … )` or hex `< … >` strings found in a file. It does not read cross-reference tables or
streams out of a file. Primitives and xref tables are built in code with the classes above, and
they can be serialized from there.