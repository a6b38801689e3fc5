"""PDF names and strings, with text decoding and serialization."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from pdfcore.errors import DecodeError

_REPLACEMENT = "\ufffd"
_BOM_UTF16BE = b"\xfe\xff"


class Name(str):
    """A PDF name; compares and hashes like the plain text it holds."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


def serialize_name(name: str) -> bytes:
    """Serialize a name as `/name`, escaping backslashes and parentheses."""
    out = ["/"]
    for ch in name:
        if ch in "\\()":
            out.append("\\")
        elif ch > "~":
            raise ValueError("only ASCII names can be serialized")
        out.append(ch)
    return "".join(out).encode("ascii")


def _code_units(data: bytes) -> tuple[int, ...]:
    count = len(data) // 2
    return struct.unpack(f">{count}H", data[: count * 2])


def _decode_utf16(units: Iterable[int]) -> Iterator[Optional[int]]:
    """Yield code points, or None for every unpaired surrogate."""
    pending = None
    for unit in units:
        if pending is not None:
            if 0xDC00 <= unit <= 0xDFFF:
                yield 0x10000 + ((pending - 0xD800) << 10) + (unit - 0xDC00)
                pending = None
                continue
            yield None
            pending = None
        if 0xD800 <= unit <= 0xDBFF:
            pending = unit
        elif 0xDC00 <= unit <= 0xDFFF:
            yield None
        else:
            yield unit
    if pending is not None:
        yield None


def utf16be_to_string_lossy(data: bytes) -> str:
    """Decode UTF-16BE, replacing invalid sequences; a trailing odd byte is dropped."""
    return "".join(
        _REPLACEMENT if cp is None else chr(cp)
        for cp in _decode_utf16(_code_units(bytes(data)))
    )


def utf16be_to_string(data: bytes) -> str:
    """Decode UTF-16BE strictly, raising DecodeError on invalid input."""
    data = bytes(data)
    if len(data) % 2:
        raise DecodeError("UTF-16BE data has an odd number of bytes")
    chars = []
    for cp in _decode_utf16(_code_units(data)):
        if cp is None:
            raise DecodeError("unpaired surrogate in UTF-16BE data")
        chars.append(chr(cp))
    return "".join(chars)


@dataclass(frozen=True)
class PdfString:
    """A PDF string: raw bytes without encoding information."""

    data: bytes = b""

    def __post_init__(self) -> None:
        value = self.data
        if isinstance(value, str):
            value = value.encode("utf-8")
        object.__setattr__(self, "data", bytes(value))

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        parts = ['"']
        for b in self.data:
            if b == 0x22:
                parts.append('\\"')
            elif 0x20 <= b <= 0x7E:
                parts.append(chr(b))
            elif b <= 7:
                parts.append(f"\\{b}")
            else:
                parts.append(f"\\x{b:02x}")
        parts.append('"')
        return "".join(parts)

    def serialize(self) -> bytes:
        """Literal form `(...)`, or hex form `<...>` when any byte is non-ASCII."""
        if any(b >= 0x80 for b in self.data):
            return b"<" + self.data.hex().encode("ascii") + b">"
        escaped = (
            self.data.replace(b"\\", b"\\\\")
            .replace(b"(", b"\\(")
            .replace(b")", b"\\)")
        )
        return b"(" + escaped + b")"

    def to_string_lossy(self) -> str:
        """Decode as UTF-16BE when it has a byte order mark, else as UTF-8, replacing errors."""
        if self.data.startswith(_BOM_UTF16BE):
            return utf16be_to_string_lossy(self.data[2:])
        return self.data.decode("utf-8", errors="replace")

    def to_text(self) -> str:
        """Decode like to_string_lossy but raise DecodeError on invalid bytes."""
        if self.data.startswith(_BOM_UTF16BE):
            return utf16be_to_string(self.data[2:])
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("invalid UTF-8 in string") from exc