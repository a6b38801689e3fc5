"""PDF primitive objects: dictionaries, streams, references and conversions.

Primitives are plain Python values:

* ``None`` is the null object
* ``bool``, ``int`` and ``float`` are booleans, integers and real numbers
* :class:`~pdfcore.strings.PdfString` and :class:`~pdfcore.strings.Name`
  are strings and names
* ``list`` is an array
* :class:`Dictionary`, :class:`PdfStream` and :class:`PlainRef` are
  dictionaries, streams and indirect references
"""

from __future__ import annotations

import math
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from pdfcore.errors import MissingEntry, KeyValueMismatch, PdfError, UnexpectedPrimitive
from pdfcore.strings import Name, PdfString, serialize_name


@dataclass(frozen=True, order=True)
class PlainRef:
    """An indirect reference: object number and generation number."""

    id: int
    gen: int = 0


@dataclass(frozen=True)
class ParseOptions:
    """Leniency switches used while reading a file."""

    allow_missing_endobj: bool = False
    allow_xref_error: bool = False


class Resolver(ABC):
    """Looks up indirect objects and stream contents."""

    options: ParseOptions = ParseOptions()

    @abstractmethod
    def resolve(self, ref: PlainRef) -> Any:
        """Return the primitive that `ref` points to."""

    @abstractmethod
    def stream_data(self, id: PlainRef, file_range: range) -> bytes:
        """Return the raw bytes of a stream stored in the file."""


class NoResolve(Resolver):
    """A resolver for contexts where no references can be followed."""

    def resolve(self, ref: PlainRef) -> Any:
        raise PdfError(f"cannot resolve reference {ref.id} {ref.gen} R without a resolver")

    def stream_data(self, id: PlainRef, file_range: range) -> bytes:
        raise PdfError(f"cannot read stream data of {id.id} {id.gen} R without a resolver")


def _f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_number(value: float) -> str:
    """Shortest plain decimal that reads back as the same single-precision value."""
    v = _f32(value)
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    text = repr(v)
    for precision in range(1, 10):
        candidate = f"{v:.{precision}g}"
        if _f32(float(candidate)) == v:
            text = candidate
            break
    return format(Decimal(text), "f")


class Dictionary(dict):
    """An ordered PDF dictionary whose keys are names."""

    def __init__(self, items: Union[Mapping, Iterable, None] = None, **kwargs: Any) -> None:
        super().__init__()
        if items is not None:
            self.update(items)
        if kwargs:
            self.update(kwargs)

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(Name(key), value)

    def update(self, items: Union[Mapping, Iterable] = (), **kwargs: Any) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def copy(self) -> "Dictionary":
        return Dictionary(self)

    def require(self, typ: str, key: str) -> Any:
        """Remove and return `key`, raising MissingEntry if it is absent."""
        if key not in self:
            raise MissingEntry(typ, key)
        return self.pop(key)

    def expect(self, typ: str, key: str, value: str, required: bool) -> None:
        """Check that `key` holds the name `value`, or is absent when not required."""
        if key in self:
            found = as_name(self[key])
            if found != value:
                raise KeyValueMismatch(key, value, found)
        elif required:
            raise MissingEntry(typ, key)

    def serialize(self) -> bytes:
        """The dictionary in PDF syntax, one entry per line."""
        parts = [b"<<\n"]
        for key, val in self.items():
            parts.append(f"/{key} ".encode("utf-8"))
            parts.append(serialize(val))
            parts.append(b"\n")
        parts.append(b">>\n")
        return b"".join(parts)

    def __str__(self) -> str:
        entries = ", ".join(f"/{k}={display(v)}" for k, v in self.items())
        return f"<{entries}>"

    def __repr__(self) -> str:
        lines = ["{"]
        lines.extend(f"{'/' + k:>15}: {display(v)}" for k, v in self.items())
        lines.append("}")
        return "\n".join(lines)


@dataclass
class PdfStream:
    """A stream: its dictionary plus either pending data or a location in the file."""

    info: Dictionary = field(default_factory=Dictionary)
    data: Optional[bytes] = None
    ref: Optional[PlainRef] = None
    file_range: Optional[range] = None

    def __post_init__(self) -> None:
        if not isinstance(self.info, Dictionary):
            self.info = Dictionary(self.info)
        if self.data is not None:
            self.data = bytes(self.data)
        elif self.ref is None or self.file_range is None:
            raise ValueError("a stream needs either data or a file location")

    @classmethod
    def in_file(cls, info: Dictionary, ref: PlainRef, file_range: range) -> "PdfStream":
        """A stream whose bytes still lie in the file at `file_range`."""
        return cls(info=info, ref=ref, file_range=file_range)

    @classmethod
    def from_primitive(cls, primitive: Any, resolver: Resolver) -> "PdfStream":
        """Accept a stream, following references."""
        while isinstance(primitive, PlainRef):
            primitive = resolver.resolve(primitive)
        return as_stream(primitive)

    def serialize(self) -> bytes:
        """The stream in PDF syntax; only streams with pending data can be written."""
        if self.data is None:
            raise PdfError("cannot serialize a stream whose data is still in the file")
        return self.info.serialize() + b"stream\n" + self.data + b"\nendstream\n"

    def raw_data(self, resolver: Resolver) -> bytes:
        """The undecoded stream bytes."""
        if self.data is not None:
            return self.data
        return resolver.stream_data(self.ref, self.file_range)


def debug_name(primitive: Any) -> str:
    """The name of the primitive's kind, for messages."""
    if primitive is None:
        return "Null"
    if isinstance(primitive, bool):
        return "Boolean"
    if isinstance(primitive, int):
        return "Integer"
    if isinstance(primitive, float):
        return "Number"
    if isinstance(primitive, PdfString):
        return "String"
    if isinstance(primitive, PdfStream):
        return "Stream"
    if isinstance(primitive, Dictionary):
        return "Dictionary"
    if isinstance(primitive, list):
        return "Array"
    if isinstance(primitive, PlainRef):
        return "Reference"
    if isinstance(primitive, Name):
        return "Name"
    raise TypeError(f"not a PDF primitive: {primitive!r}")


def serialize(primitive: Any) -> bytes:
    """The primitive in PDF syntax."""
    kind = debug_name(primitive)
    if kind == "Null":
        return b"null"
    if kind == "Boolean":
        return b"true" if primitive else b"false"
    if kind == "Integer":
        return str(primitive).encode("ascii")
    if kind == "Number":
        return _format_number(primitive).encode("ascii")
    if kind == "Array":
        return b"[" + b" ".join(serialize(p) for p in primitive) + b"]"
    if kind == "Reference":
        return f"{primitive.id} {primitive.gen} R".encode("ascii")
    if kind == "Name":
        return serialize_name(primitive)
    return primitive.serialize()


def display(primitive: Any) -> str:
    """A short human-readable form of the primitive."""
    kind = debug_name(primitive)
    if kind == "Null":
        return "null"
    if kind == "Boolean":
        return "true" if primitive else "false"
    if kind == "Integer":
        return str(primitive)
    if kind == "Number":
        return _format_number(primitive)
    if kind == "String":
        return str(primitive)
    if kind == "Stream":
        return "stream"
    if kind == "Dictionary":
        return str(primitive)
    if kind == "Array":
        return "[" + ", ".join(display(p) for p in primitive) + "]"
    if kind == "Reference":
        return f"@{primitive.id}"
    return f"/{primitive}"


def resolve(primitive: Any, resolver: Resolver) -> Any:
    """Follow the primitive once if it is a reference."""
    if isinstance(primitive, PlainRef):
        return resolver.resolve(primitive)
    return primitive


def _unexpected(expected: str, primitive: Any) -> UnexpectedPrimitive:
    return UnexpectedPrimitive(expected, debug_name(primitive))


def as_integer(primitive: Any) -> int:
    if debug_name(primitive) != "Integer":
        raise _unexpected("Integer", primitive)
    return primitive


def as_u8(primitive: Any) -> int:
    n = as_integer(primitive)
    if not 0 <= n < 256:
        raise PdfError("invalid integer")
    return n


def as_u32(primitive: Any) -> int:
    n = as_integer(primitive)
    if n < 0:
        raise PdfError("negative integer")
    return n


def as_usize(primitive: Any) -> int:
    return as_u32(primitive)


def as_number(primitive: Any) -> float:
    kind = debug_name(primitive)
    if kind == "Integer":
        return float(primitive)
    if kind == "Number":
        return primitive
    raise _unexpected("Number", primitive)


def as_bool(primitive: Any) -> bool:
    if debug_name(primitive) != "Boolean":
        raise _unexpected("Boolean", primitive)
    return primitive


def as_name(primitive: Any) -> Name:
    if debug_name(primitive) != "Name":
        raise _unexpected("Name", primitive)
    return primitive


def as_string(primitive: Any) -> PdfString:
    if debug_name(primitive) != "String":
        raise _unexpected("String", primitive)
    return primitive


def as_array(primitive: Any) -> list:
    if debug_name(primitive) != "Array":
        raise _unexpected("Array", primitive)
    return primitive


def as_reference(primitive: Any) -> PlainRef:
    if debug_name(primitive) != "Reference":
        raise _unexpected("Reference", primitive)
    return primitive


def as_dictionary(primitive: Any) -> Dictionary:
    if debug_name(primitive) != "Dictionary":
        raise _unexpected("Dictionary", primitive)
    return primitive


def as_stream(primitive: Any) -> PdfStream:
    if debug_name(primitive) != "Stream":
        raise _unexpected("Stream", primitive)
    return primitive


def as_text(primitive: Any) -> str:
    """Text of a name, or the lossy decoding of a string."""
    kind = debug_name(primitive)
    if kind == "Name":
        return str(primitive)
    if kind == "String":
        return primitive.to_string_lossy()
    raise _unexpected("Name or String", primitive)


def to_string_lossy(primitive: Any) -> str:
    """Lossy decoding of a string primitive."""
    return as_string(primitive).to_string_lossy()