"""Splitting PDF data into lexemes at whitespace and delimiters."""

from __future__ import annotations

import re
from typing import Callable, Optional, Union

from pdfcore.errors import (
    DecodeError,
    EndOfFile,
    NotFound,
    ParseError,
    PdfError,
    UnexpectedLexeme,
)
from pdfcore.strings import Name

_WHITESPACE = frozenset(b"\x00 \r\n\t")
_DELIMITERS = frozenset(b"()<>[]{}/%")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_DIGITS = frozenset(b"0123456789")

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def is_whitespace(b: int) -> bool:
    """Whether the byte is PDF whitespace as the lexer sees it."""
    return b in _WHITESPACE


def _not_whitespace(b: int) -> bool:
    return b not in _WHITESPACE


def boundary(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """First index at or after `pos` where `condition` stops holding, or len(data)."""
    for index in range(pos, len(data)):
        if not condition(data[index]):
            return index
    return len(data)


def boundary_rev(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """Start of the run before `pos` on which `condition` holds."""
    for index in range(pos - 1, -1, -1):
        if not condition(data[index]):
            return index + 1
    return 0


def _is_int(data: bytes) -> bool:
    return all(b in _DIGITS for b in data)


class Substr:
    """A lexeme: a slice of the input together with its offset in the file."""

    __slots__ = ("data", "file_offset")

    def __init__(self, data: BytesLike, file_offset: int = 0) -> None:
        self.data = _as_bytes(data)
        self.file_offset = file_offset

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Substr):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray, memoryview, str)):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Substr({self.data!r}, {self.file_offset})"

    def startswith(self, prefix: BytesLike) -> bool:
        return self.data.startswith(_as_bytes(prefix))

    def to_string(self) -> str:
        """The lexeme as text, replacing invalid UTF-8."""
        return self.data.decode("utf-8", errors="replace")

    def to_name(self) -> Name:
        """The lexeme as a name; it must be valid UTF-8."""
        try:
            return Name(self.data.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise DecodeError("name is not valid UTF-8") from exc

    def to(self, kind: Callable[[str], object]):
        """Convert the lexeme with `kind` (such as int or float), raising ParseError."""
        text = self.as_str()
        if kind is int and not _INT_RE.fullmatch(text):
            raise ParseError(f"invalid integer {text!r}")
        if kind is float and (
            "_" in text or text != text.strip() or not text
        ):
            raise ParseError(f"invalid number {text!r}")
        try:
            return kind(text)
        except (ValueError, TypeError, OverflowError) as exc:
            raise ParseError(f"cannot parse {text!r}: {exc}") from exc

    def is_integer(self) -> bool:
        data = self.data
        if not data:
            return False
        if data[0] == ord("-"):
            if len(data) < 2:
                return False
            data = data[1:]
        return _is_int(data)

    def is_real_number(self) -> bool:
        return self.real_number() is not None

    def real_number(self) -> Optional["Substr"]:
        """The leading part that forms a real number, or None."""
        data = self.data
        if not data:
            return None
        rest = data
        if rest[0] == ord("-"):
            if len(rest) < 2:
                return None
            rest = rest[1:]
        dot = rest.find(b".")
        if dot >= 0:
            if not _is_int(rest[:dot]):
                return None
            rest = rest[dot + 1:]
        length = next((i for i, b in enumerate(rest) if b not in _DIGITS), None)
        if length is None:
            return self
        if length == 0:
            return None
        end = len(data) - len(rest) + length
        return Substr(data[:end], self.file_offset)

    def as_str(self) -> str:
        """The lexeme as text; it must be valid UTF-8."""
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError("lexeme is not valid UTF-8") from exc

    def equals(self, other: BytesLike) -> bool:
        return self.data == _as_bytes(other)

    def reslice(self, start: int) -> "Substr":
        """The lexeme from `start` on, with its file offset adjusted."""
        return Substr(self.data[start:], self.file_offset + start)

    def file_range(self) -> range:
        return range(self.file_offset, self.file_offset + len(self.data))


class Lexer:
    """Walks the lexemes of a buffer forwards and backwards."""

    def __init__(self, buf: BytesLike, file_offset: int = 0) -> None:
        self._buf = _as_bytes(buf)
        self._pos = 0
        self._file_offset = file_offset

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def buf(self) -> bytes:
        return self._buf

    def _is_whitespace(self, pos: int) -> bool:
        return pos < len(self._buf) and self._buf[pos] in _WHITESPACE

    def _is_delimiter(self, pos: int) -> bool:
        return pos < len(self._buf) and self._buf[pos] in _DELIMITERS

    def _skip_whitespace(self, pos: int) -> int:
        pos = boundary(self._buf, pos, is_whitespace)
        if pos >= len(self._buf):
            raise EndOfFile()
        return pos

    def _read_word_end(self, pos: int) -> int:
        while (
            pos < len(self._buf)
            and not self._is_whitespace(pos)
            and not self._is_delimiter(pos)
        ):
            pos += 1
        return pos

    def _next_word(self) -> tuple[Substr, int]:
        buf = self._buf
        if self._pos == len(buf):
            raise EndOfFile()
        pos = self._skip_whitespace(self._pos)
        while buf[pos] == ord("%"):
            pos += 1
            newline = buf.find(b"\n", pos)
            if newline >= 0:
                pos = newline + 1
            pos = self._skip_whitespace(pos)

        start = pos
        if self._is_delimiter(pos):
            if buf[pos] == ord("/"):
                pos = self._read_word_end(pos + 1)
                return self.new_substr(start, pos), pos
            if buf[pos:pos + 2] in (b"<<", b">>"):
                pos += 1
            pos += 1
            return self.new_substr(start, pos), pos

        pos = self._read_word_end(pos)
        return self.new_substr(start, pos), pos

    def next(self) -> Substr:
        """Return the next lexeme and move past it."""
        lexeme, self._pos = self._next_word()
        return lexeme

    def next_stream(self) -> None:
        """Consume `stream` and the end-of-line marker that follows it."""
        pos = self._skip_whitespace(self._pos)
        buf = self._buf
        if pos + 6 >= len(buf):
            raise EndOfFile()
        b0 = buf[pos + 6]
        if b0 == ord("\n"):
            self._pos = pos + 7
        elif b0 == ord("\r"):
            if pos + 7 >= len(buf):
                raise EndOfFile()
            if buf[pos + 7] != ord("\n"):
                raise PdfError("invalid whitespace following 'stream'")
            self._pos = pos + 8
        else:
            raise PdfError("invalid whitespace")

    def back(self) -> Substr:
        """Return the previous word and move to its first byte."""
        end_pos = boundary_rev(self._buf, self._pos, is_whitespace)
        start_pos = boundary_rev(self._buf, end_pos, _not_whitespace)
        self._pos = start_pos
        return self.new_substr(start_pos, end_pos)

    def peek(self) -> Substr:
        """The next lexeme without moving; empty at the end of the input."""
        try:
            return self._next_word()[0]
        except EndOfFile:
            return self.new_substr(self._pos, self._pos)

    def next_expect(self, expected: str) -> None:
        """Consume the next lexeme, raising UnexpectedLexeme unless it is `expected`."""
        word = self.next()
        if not word.equals(expected):
            raise UnexpectedLexeme(self._pos, word.to_string(), expected)

    def next_as(self, kind: Callable[[str], object]):
        return self.next().to(kind)

    def new_substr(self, start: int, end: int) -> Substr:
        """Slice of the buffer; a backward range is turned around."""
        if start > end:
            start, end = end + 1, start + 1
        return Substr(self._buf[start:end], self._file_offset + start)

    def set_pos(self, wanted_pos: int) -> Substr:
        """Move to `wanted_pos` (at most the end); return the bytes passed over."""
        new_pos = min(wanted_pos, len(self._buf))
        if self._pos < new_pos:
            start, end = self._pos, new_pos
        else:
            start, end = new_pos, self._pos
        self._pos = new_pos
        return self.new_substr(start, end)

    def set_pos_from_end(self, new_pos: int) -> Substr:
        return self.set_pos(max(0, max(0, len(self._buf) - new_pos) - 1))

    def offset_pos(self, offset: int) -> Substr:
        return self.set_pos(max(0, self._pos + offset))

    def _incr_pos(self) -> bool:
        if self._pos >= len(self._buf) - 1:
            return False
        self._pos += 1
        return True

    def seek_newline(self) -> Substr:
        """Move to the start of the next line; return the skipped bytes."""
        if self._pos >= len(self._buf):
            raise EndOfFile()
        start = self._pos
        while self._buf[self._pos] != ord("\n") and self._incr_pos():
            pass
        self._incr_pos()
        return self.new_substr(start, self._pos)

    def seek_substr(self, substr: BytesLike) -> Optional[Substr]:
        """Move past the next occurrence of `substr`; return the text before it, or None."""
        needle = _as_bytes(substr)
        buf = self._buf
        start = self._pos
        matched = 0
        while True:
            if self._pos >= len(buf):
                return None
            if buf[self._pos] == needle[matched]:
                matched += 1
            else:
                matched = 0
            if matched == len(needle):
                break
            self._pos += 1
        self._pos += 1
        return self.new_substr(start, self._pos - len(needle))

    def seek_substr_back(self, substr: BytesLike) -> Substr:
        """Search backwards for `substr` and move past it; return the text after it."""
        needle = _as_bytes(substr)
        end = self._pos
        start = self._buf.rfind(needle, 0, end)
        if start < 0:
            raise NotFound(needle.decode("utf-8", errors="replace"))
        self._pos = start + len(needle)
        return self.new_substr(self._pos, end)

    def read_n(self, n: int) -> Substr:
        """Read at most `n` bytes."""
        start_pos = self._pos
        self._pos += n
        if self._pos >= len(self._buf):
            self._pos = max(len(self._buf) - 1, 0)
        if start_pos < len(self._buf):
            return self.new_substr(start_pos, self._pos)
        return self.new_substr(0, 0)

    def remaining(self) -> bytes:
        """The bytes from the current position to the end."""
        return self._buf[self._pos:]

    def ctx(self) -> str:
        """Text around the current position, for messages."""
        start = max(0, self._pos - 40)
        end = min(len(self._buf), self._pos + 40)
        return self._buf[start:end].decode("utf-8", errors="replace")