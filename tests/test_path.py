import io
from collections import namedtuple

import pytest

from pdfcore.path import FillMode, PathBuilder


@pytest.fixture
def out():
    return io.StringIO()


def test_move_to_writes_and_updates_current(out):
    builder = PathBuilder(out, (0, 0))
    builder.move_to((1, 2))
    assert out.getvalue() == "1 2 m\n"
    assert builder.current == (1.0, 2.0)


def test_start_point_is_not_written(out):
    PathBuilder(out, (5, 5))
    assert out.getvalue() == ""


def test_line_to_formats_fractions(out):
    builder = PathBuilder(out, (0, 0))
    builder.line_to((0.1, 2.5))
    assert out.getvalue() == "0.1 2.5 l\n"


def test_integral_floats_have_no_fraction(out):
    builder = PathBuilder(out, (0, 0))
    builder.move_to((3.0, -0.5))
    assert out.getvalue() == "3 -0.5 m\n"


def test_cubic_general(out):
    builder = PathBuilder(out, (0, 0))
    builder.cubic((1, 2), (3, 4), (5, 6))
    assert out.getvalue() == "1 2 3 4 5 6 c\n"
    assert builder.current == (5.0, 6.0)


def test_cubic_first_control_at_current(out):
    builder = PathBuilder(out, (0, 0))
    builder.cubic((0, 0), (3, 4), (5, 6))
    assert out.getvalue() == "3 4 5 6 v\n"


def test_cubic_second_control_at_current(out):
    builder = PathBuilder(out, (0, 0))
    builder.cubic((1, 2), (0, 0), (5, 6))
    assert out.getvalue() == "1 2 5 6 y\n"


def test_quadratic_to_cubic(out):
    builder = PathBuilder(out, (0, 0))
    builder.quadratic((3, 3), (6, 0))
    assert out.getvalue() == "2 2 4 2 6 0 c\n"
    assert builder.current == (6.0, 0.0)


def test_quadratic_degenerate_point(out):
    builder = PathBuilder(out, (1, 1))
    builder.quadratic((1, 1), (1, 1))
    assert out.getvalue() == "1 1 1 1 1 1 c\n"


def test_close_and_fill(out):
    builder = PathBuilder(out, (0, 0))
    builder.close()
    builder.fill(FillMode.NON_ZERO)
    builder.fill(FillMode.EVEN_ODD)
    assert out.getvalue() == "h\nf\nf*\n"


def test_accepts_point_objects(out):
    Point = namedtuple("Point", "x y")
    builder = PathBuilder(out, Point(0, 0))
    builder.line_to(Point(7, 8))
    assert out.getvalue() == "7 8 l\n"
    assert builder.current == (7.0, 8.0)


def test_sequence_of_operations(out):
    builder = PathBuilder(out, (0, 0))
    builder.move_to((1, 1))
    builder.line_to((2, 1))
    builder.close()
    lines = out.getvalue().splitlines()
    assert lines == ["1 1 m", "2 1 l", "h"]