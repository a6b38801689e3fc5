import pytest

from pdfcore.errors import (
    DecodeError,
    EndOfFile,
    NotFound,
    ParseError,
    PdfError,
    UnexpectedLexeme,
)
from pdfcore.lexer import Lexer, Substr, boundary, boundary_rev, is_whitespace


def _not_ws(b):
    return not is_whitespace(b)


def test_boundary_rev():
    assert boundary_rev(b" hello", 3, _not_ws) == 1
    assert boundary_rev(b" hello", 3, is_whitespace) == 3


def test_boundary():
    assert boundary(b" hello ", 3, _not_ws) == 6
    assert boundary(b" hello ", 3, is_whitespace) == 3
    assert boundary(b"01234  7orld", 5, is_whitespace) == 7
    assert boundary(b"01234  7orld", 7, is_whitespace) == 7
    assert boundary(b"q\n", 1, is_whitespace) == 2


def test_substr_numbers():
    assert Substr("123", 0).is_real_number()
    assert Substr("123.", 0).is_real_number()
    assert Substr("123.45", 0).is_real_number()
    assert Substr(".45", 0).is_real_number()
    assert Substr("-.45", 0).is_real_number()
    assert not Substr("123.45", 0).is_integer()
    assert Substr("123", 0).is_integer()


def test_is_integer_edge_cases():
    assert not Substr(b"", 0).is_integer()
    assert not Substr(b"-", 0).is_integer()
    assert Substr(b"-5", 0).is_integer()
    assert not Substr(b"+5", 0).is_integer()


def test_real_number_prefix():
    assert Substr(b"12abc", 0).real_number().data == b"12"
    assert Substr(b"abc", 0).real_number() is None
    assert Substr(b"-", 0).real_number() is None


def test_substr_conversions():
    assert Substr(b"42", 0).to(int) == 42
    assert Substr(b"1.5", 0).to(float) == 1.5
    with pytest.raises(ParseError):
        Substr(b"4x", 0).to(int)
    with pytest.raises(ParseError):
        Substr(b"\xff", 0).as_str()
    assert Substr(b"Type", 0).to_name() == "Type"
    with pytest.raises(DecodeError):
        Substr(b"\xff", 0).to_name()
    assert Substr(b"a\xffb", 0).to_string() == "a\ufffdb"


def test_substr_ranges():
    s = Substr(b"abc", 10)
    assert s.file_range() == range(10, 13)
    r = s.reslice(1)
    assert r.data == b"bc"
    assert r.file_offset == 11
    assert s.equals("abc")
    assert s == b"abc"


def test_dictionary_tokens():
    lx = Lexer(b"<</Type /Page>>")
    assert [lx.next().data for _ in range(4)] == [b"<<", b"/Type", b"/Page", b">>"]
    with pytest.raises(EndOfFile):
        lx.next()


def test_comment_is_skipped():
    lx = Lexer(b"% comment\n 12 0 obj")
    assert lx.next() == b"12"
    assert lx.next() == b"0"
    assert lx.next() == b"obj"


def test_back_returns_previous_word():
    lx = Lexer(b"12 0 obj")
    for _ in range(3):
        lx.next()
    word = lx.back()
    assert word == b"obj"
    assert lx.pos == 5
    assert lx.next() == b"obj"


def test_peek_does_not_move():
    lx = Lexer(b"abc def")
    assert lx.peek() == b"abc"
    assert lx.pos == 0
    lx.next()
    lx.next()
    assert lx.peek() == b""


def test_next_expect():
    lx = Lexer(b"obj endobj")
    lx.next_expect("obj")
    with pytest.raises(UnexpectedLexeme) as info:
        lx.next_expect("obj")
    assert info.value.lexeme == "endobj"


def test_next_as():
    lx = Lexer(b" 17 x")
    assert lx.next_as(int) == 17
    with pytest.raises(ParseError):
        lx.next_as(int)


def test_file_offset():
    lx = Lexer(b"  xy", 100)
    assert lx.next().file_range() == range(102, 104)


def test_next_stream():
    lx = Lexer(b"stream\r\ndata")
    lx.next_stream()
    assert lx.pos == 8
    assert lx.remaining() == b"data"
    lf = Lexer(b"  stream\nxyz")
    lf.next_stream()
    assert lf.remaining() == b"xyz"
    with pytest.raises(PdfError):
        Lexer(b"stream\rX").next_stream()
    with pytest.raises(EndOfFile):
        Lexer(b"stream").next_stream()


def test_seek_substr():
    lx = Lexer(b"1 0 obj\n<<>>\nendobj\n2 0 obj")
    found = lx.seek_substr("endobj")
    assert found == b"1 0 obj\n<<>>\n"
    assert lx.pos == 19
    assert lx.next() == b"2"
    assert Lexer(b"nothing here").seek_substr("endobj") is None


def test_seek_substr_back():
    data = b"abc startxref 123 %%EOF"
    lx = Lexer(data)
    lx.set_pos(len(data))
    after = lx.seek_substr_back(b"startxref")
    assert after == b" 123 %%EOF"
    assert lx.pos == 13
    assert lx.next() == b"123"
    with pytest.raises(NotFound):
        Lexer(b"abc").seek_substr_back(b"startxref")


def test_seek_newline():
    lx = Lexer(b"line1\nline2")
    assert lx.seek_newline() == b"line1\n"
    assert lx.pos == 6


def test_read_n():
    lx = Lexer(b"hello world")
    assert lx.read_n(5) == b"hello"
    assert lx.pos == 5
    assert lx.read_n(100) == b" worl"
    assert lx.pos == 10


def test_set_pos_returns_traversed():
    lx = Lexer(b"0123456789")
    assert lx.set_pos(4) == b"0123"
    assert lx.set_pos(2) == b"23"
    lx.set_pos(100)
    assert lx.pos == 10
    lx.set_pos_from_end(0)
    assert lx.pos == 9
    lx.set_pos(3)
    assert lx.offset_pos(2) == b"34"
    assert lx.pos == 5


def test_new_substr_backward_range():
    lx = Lexer(b"0123456789", 50)
    s = lx.new_substr(5, 2)
    assert s.data == b"345"
    assert s.file_offset == 53


def test_ctx():
    assert Lexer(b"abc").ctx() == "abc"
    assert is_whitespace(0)
    assert not is_whitespace(ord("a"))