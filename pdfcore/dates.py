"""PDF date strings of the form D:YYYYMMDDHHmmSSOHH'mm."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pdfcore.errors import DecodeError, ParseError, PdfError, UnexpectedPrimitive
from pdfcore.primitive import Resolver, debug_name, resolve
from pdfcore.strings import PdfString


class TimeRel(Enum):
    """Relation of local time to universal time; the value is the PDF marker."""

    EARLIER = "-"
    LATER = "+"
    UNIVERSAL = "Z"


def _parse_uint(text: str, limit: int) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not an unsigned integer: {text!r}")
    value = int(digits)
    if value > limit:
        raise ValueError(f"{text!r} is out of range")
    return value


def _parse_or(text: str, start: int, end: int, default: int) -> int:
    if end > len(text):
        return default
    try:
        return _parse_uint(text[start:end], 0xFF)
    except ValueError:
        return default


@dataclass(frozen=True)
class Date:
    """A calendar date and time with its offset from universal time."""

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    rel: TimeRel = TimeRel.UNIVERSAL
    tz_hour: int = 0
    tz_minute: int = 0

    @classmethod
    def from_primitive(cls, primitive: Any, resolver: Resolver) -> "Date":
        """Parse a date from a string primitive, following a reference."""
        primitive = resolve(primitive, resolver)
        if debug_name(primitive) != "String":
            raise UnexpectedPrimitive("String", debug_name(primitive))
        try:
            s = primitive.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("date is not valid UTF-8") from exc
        if not s.startswith("D:"):
            raise PdfError("Failed parsing date")
        if len(s) < 6:
            raise PdfError("Missing obligatory year in date")
        try:
            year = _parse_uint(s[2:6], 0xFFFF)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc

        cut = next((i for i, ch in enumerate(s) if ch in "+-Z"), None)
        if cut is None:
            time, rel, zone = s, TimeRel.UNIVERSAL, ""
        else:
            time, rel, zone = s[:cut], TimeRel(s[cut]), s[cut + 1:]

        return cls(
            year=year,
            month=_parse_or(time, 6, 8, 1),
            day=_parse_or(time, 8, 10, 1),
            hour=_parse_or(time, 10, 12, 0),
            minute=_parse_or(time, 12, 14, 0),
            second=_parse_or(time, 14, 16, 0),
            rel=rel,
            tz_hour=_parse_or(zone, 0, 2, 0),
            tz_minute=_parse_or(zone, 3, 5, 0),
        )

    def to_primitive(self) -> PdfString:
        """The date as a PDF string primitive."""
        if (
            self.year > 9999
            or self.day > 99
            or self.hour > 23
            or self.minute >= 60
            or self.second >= 60
            or self.tz_hour >= 24
            or self.tz_minute >= 60
        ):
            raise PdfError("not a valid date")
        text = (
            f"D:{self.year:04}{self.month:02}{self.day:02}"
            f"{self.hour:02}{self.minute:02}{self.second:02}"
            f"{self.rel.value}{self.tz_hour:02}'{self.tz_minute:02}"
        )
        return PdfString(text.encode("ascii"))