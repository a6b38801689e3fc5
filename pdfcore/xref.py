"""Cross-reference tables: where each object of a file is stored."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from pdfcore.errors import PdfError, UnspecifiedXRefEntry
from pdfcore.primitive import (
    Dictionary,
    PdfStream,
    as_array,
    as_integer,
    as_u32,
)
from pdfcore.strings import Name


@dataclass(frozen=True)
class XRefFree:
    """An entry that is not currently used."""

    next_obj_nr: int
    gen_nr: int


@dataclass(frozen=True)
class XRefRaw:
    """An object in use, stored at byte offset `pos`."""

    pos: int
    gen_nr: int


@dataclass(frozen=True)
class XRefStream:
    """An object in use, compressed inside an object stream."""

    stream_id: int
    index: int


@dataclass(frozen=True)
class XRefPromised:
    """An object number reserved for an object not yet written."""


@dataclass(frozen=True)
class XRefInvalid:
    """An entry no section has specified."""


XRef = Union[XRefFree, XRefRaw, XRefStream, XRefPromised, XRefInvalid]


def gen_nr(entry: XRef) -> int:
    """The generation number of an entry; objects in streams have generation 0."""
    if isinstance(entry, (XRefFree, XRefRaw)):
        return entry.gen_nr
    if isinstance(entry, XRefStream):
        return 0
    raise PdfError(f"entry {entry!r} has no generation number")


def byte_len(n: int) -> int:
    """Number of bytes needed to store `n` big-endian; at least one."""
    return max(1, (n.bit_length() + 7) // 8)


def _fields(entry: XRef) -> Optional[Tuple[int, int, int]]:
    if isinstance(entry, XRefFree):
        return 0, entry.next_obj_nr, entry.gen_nr
    if isinstance(entry, XRefRaw):
        return 1, entry.pos, entry.gen_nr
    if isinstance(entry, XRefStream):
        return 2, entry.stream_id, entry.index
    return None


@dataclass
class XRefInfo:
    """The dictionary of a cross-reference stream."""

    size: int
    index: Optional[List[int]] = None
    prev: Optional[int] = None
    w: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.index is None:
            self.index = [0, self.size]

    @classmethod
    def from_dictionary(cls, dictionary: Dictionary) -> "XRefInfo":
        """Read the fields from a stream dictionary whose /Type is /XRef."""
        dictionary.expect("XRefInfo", "Type", "XRef", True)
        if "Size" not in dictionary:
            raise PdfError("missing entry 'Size' in XRefInfo")
        size = as_u32(dictionary["Size"])
        index = dictionary.get("Index")
        prev = dictionary.get("Prev")
        w = dictionary.get("W")
        return cls(
            size=size,
            index=None if index is None else [as_u32(p) for p in as_array(index)],
            prev=None if prev is None else as_integer(prev),
            w=[] if w is None else [as_u32(p) for p in as_array(w)],
        )

    def to_dictionary(self) -> Dictionary:
        """The fields as a stream dictionary."""
        result = Dictionary()
        result["Type"] = Name("XRef")
        result["Size"] = self.size
        result["Index"] = list(self.index)
        if self.prev is not None:
            result["Prev"] = self.prev
        result["W"] = list(self.w)
        return result


@dataclass
class XRefSection:
    """A run of consecutive entries as found in a file."""

    first_id: int
    entries: List[XRef] = field(default_factory=list)

    def add_free_entry(self, next_obj_nr: int, gen_nr: int) -> None:
        self.entries.append(XRefFree(next_obj_nr, gen_nr))

    def add_inuse_entry(self, pos: int, gen_nr: int) -> None:
        self.entries.append(XRefRaw(pos, gen_nr))

    def numbered_entries(self) -> Iterator[Tuple[int, XRef]]:
        """Pairs of object number and entry."""
        for offset, entry in enumerate(self.entries):
            yield self.first_id + offset, entry


class XRefTable:
    """Lookup table of all objects of a file, by object number."""

    def __init__(self, num_objects: int) -> None:
        self._entries: List[XRef] = [XRefInvalid()] * num_objects
        self._entries.append(XRefFree(0, 0xFFFF))

    def object_ids(self) -> Iterator[int]:
        """Numbers of the objects in use."""
        for i, entry in enumerate(self._entries):
            if isinstance(entry, (XRefRaw, XRefStream)):
                yield i

    def get(self, id: int) -> XRef:
        if not 0 <= id < len(self._entries):
            raise UnspecifiedXRefEntry(id)
        return self._entries[id]

    def set(self, id: int, entry: XRef) -> None:
        self._entries[id] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[XRef]:
        return iter(self._entries)

    def push(self, entry: XRef) -> None:
        self._entries.append(entry)

    def max_field_widths(self) -> Tuple[int, int]:
        """The largest values of the second and third stream fields."""
        max_a = max_b = 0
        for entry in self._entries:
            fields = _fields(entry)
            if fields is None:
                continue
            _, a, b = fields
            max_a = max(max_a, a)
            max_b = max(max_b, b)
        return max_a, max_b

    def add_entries_from(self, section: XRefSection) -> None:
        """Take entries from `section` where they are newer than what is held."""
        for i, entry in section.numbered_entries():
            if i >= len(self._entries):
                continue
            dst = self._entries[i]
            if isinstance(dst, (XRefRaw, XRefFree)):
                update = gen_nr(entry) > dst.gen_nr
            elif isinstance(dst, (XRefStream, XRefInvalid)):
                update = True
            else:
                raise PdfError(f"found {dst!r}")
            if update:
                self._entries[i] = entry

    def write_stream(self, size: int) -> PdfStream:
        """A cross-reference stream holding the first `size` entries."""
        max_a, max_b = self.max_field_widths()
        a_w, b_w = byte_len(max_a), byte_len(max_b)
        data = bytearray()
        for entry in self._entries[:size]:
            fields = _fields(entry)
            if fields is None:
                raise PdfError(f"invalid xref entry: {entry!r}")
            t, a, b = fields
            data.append(t)
            data += a.to_bytes(8, "big")[8 - a_w:]
            data += b.to_bytes(8, "big")[8 - b_w:]
        info = XRefInfo(size=size, index=[0, size], prev=None, w=[1, a_w, b_w])
        return PdfStream(info=info.to_dictionary(), data=bytes(data))

    def __str__(self) -> str:
        lines = []
        for i, entry in enumerate(self._entries):
            if isinstance(entry, XRefFree):
                lines.append(f"{i:4}: {entry.next_obj_nr:010} {entry.gen_nr:05} f")
            elif isinstance(entry, XRefRaw):
                lines.append(f"{i:4}: {entry.pos:010} {entry.gen_nr:05} n")
            elif isinstance(entry, XRefStream):
                lines.append(f"{i:4}: in stream {entry.stream_id}, index {entry.index}")
            elif isinstance(entry, XRefPromised):
                lines.append(f"{i:4}: Promised?")
            else:
                lines.append(f"{i:4}: Invalid!")
        return "".join(line + "\n" for line in lines)