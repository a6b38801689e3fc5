"""Writing PDF path construction operators to a text stream."""

from __future__ import annotations

import math
import struct
from decimal import Decimal
from enum import Enum
from typing import TextIO


class FillMode(Enum):
    """Rule for filling a path; the value is the PDF operator."""

    NON_ZERO = "f"
    EVEN_ODD = "f*"


def _f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _fmt(value: float) -> str:
    """Shortest decimal that reads back as the same single-precision value."""
    v = _f32(value)
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    text = repr(v)
    for precision in range(1, 18):
        candidate = f"{v:.{precision}g}"
        if _f32(float(candidate)) == v:
            text = candidate
            break
    return format(Decimal(text), "f")


def _point(p) -> tuple[float, float]:
    if hasattr(p, "x") and hasattr(p, "y"):
        x, y = p.x, p.y
    else:
        x, y = p
    return (_f32(x), _f32(y))


class PathBuilder:
    """Emits path operators, tracking the current point."""

    def __init__(self, out: TextIO, start) -> None:
        self._out = out
        self._current = _point(start)

    @property
    def current(self) -> tuple[float, float]:
        return self._current

    def _emit(self, *values: float, op: str) -> None:
        self._out.write(" ".join([*(_fmt(v) for v in values), op]) + "\n")

    def move_to(self, p) -> None:
        """Begin a new subpath at `p` without a connecting segment."""
        x, y = self._current = _point(p)
        self._emit(x, y, op="m")

    def line_to(self, p) -> None:
        """Append a straight segment from the current point to `p`."""
        x, y = self._current = _point(p)
        self._emit(x, y, op="l")

    def quadratic(self, c, p) -> None:
        """Append a quadratic Bézier curve, written as the equivalent cubic."""
        cx, cy = _point(c)
        px, py = _point(p)
        sx, sy = self._current
        c1 = (2.0 / 3.0 * cx + 1.0 / 3.0 * sx, 2.0 / 3.0 * cy + 1.0 / 3.0 * sy)
        c2 = (2.0 / 3.0 * cx + 1.0 / 3.0 * px, 2.0 / 3.0 * cy + 1.0 / 3.0 * py)
        self._emit(*c1, *c2, px, py, op="c")
        self._current = (px, py)

    def cubic(self, c1, c2, p) -> None:
        """Append a cubic Bézier curve, using the short forms where they apply."""
        c1, c2, p = _point(c1), _point(c2), _point(p)
        if c1 == self._current:
            self._emit(*c2, *p, op="v")
        elif c2 == self._current:
            self._emit(*c1, *p, op="y")
        else:
            self._emit(*c1, *c2, *p, op="c")
        self._current = p

    def close(self) -> None:
        """Close the current subpath."""
        self._out.write("h\n")

    def fill(self, mode: FillMode) -> None:
        """Fill the path with the given rule."""
        self._out.write(FillMode(mode).value + "\n")