import pytest

from pdfcore.errors import (
    DecodeError,
    EndOfFile,
    HexDecodeError,
    KeyValueMismatch,
    MaxDepthExceeded,
    MissingEntry,
    NotFound,
    ParseError,
    PdfError,
    PrimitiveNotAllowed,
    UnexpectedLexeme,
    UnexpectedPrimitive,
    UnknownType,
    UnspecifiedXRefEntry,
    XRefStreamTypeError,
)


def test_unexpected_primitive_fields():
    err = UnexpectedPrimitive("Integer", "Name")
    assert err.expected == "Integer"
    assert err.found == "Name"
    assert "Integer" in str(err) and "Name" in str(err)


def test_missing_entry_fields():
    err = MissingEntry("<Stream>", "Length")
    assert (err.typ, err.field) == ("<Stream>", "Length")
    assert "Length" in str(err)


def test_key_value_mismatch_fields():
    err = KeyValueMismatch("Type", "XRef", "Page")
    assert (err.key, err.value, err.found) == ("Type", "XRef", "Page")
    assert "XRef" in str(err) and "Page" in str(err)


def test_unexpected_lexeme_fields():
    err = UnexpectedLexeme(12, "foo", "f or n")
    assert err.pos == 12
    assert err.lexeme == "foo"
    assert err.expected == "f or n"


def test_hex_decode_keeps_bytes():
    err = HexDecodeError(3, b"zq")
    assert err.data == b"zq"
    assert err.pos == 3


def test_unknown_type_fields():
    err = UnknownType(5, "@", "rest")
    assert (err.pos, err.first_lexeme, err.rest) == (5, "@", "rest")


def test_not_found_word():
    err = NotFound("startxref")
    assert err.word == "startxref"
    assert "startxref" in str(err)


def test_xref_errors_fields():
    assert XRefStreamTypeError(7).found == 7
    assert UnspecifiedXRefEntry(42).id == 42


def test_primitive_not_allowed_fields():
    err = PrimitiveNotAllowed("DICT", "ARRAY")
    assert err.allowed == "DICT"
    assert err.found == "ARRAY"


@pytest.mark.parametrize(
    "error",
    [
        EndOfFile(),
        MaxDepthExceeded(),
        ParseError("bad number"),
        DecodeError("bad utf-8"),
        NotFound("x"),
        UnspecifiedXRefEntry(1),
    ],
)
def test_all_errors_are_pdf_errors(error):
    with pytest.raises(PdfError) as info:
        raise error
    assert info.value is error


def test_default_messages():
    assert "end of file" in str(EndOfFile())
    assert "depth" in str(MaxDepthExceeded())