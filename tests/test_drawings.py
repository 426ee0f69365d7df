"""Tests for krill.drawings."""
import pytest

from krill.drawings import CIRCLE, KRILL, Drawing, fun_drawings


def test_glyph_rows_are_even():
    assert {len(row) for row in KRILL} == {23}
    assert {len(row) for row in CIRCLE} == {22}


def test_size():
    drawing = Drawing(["ab", "abcd", ""])
    assert drawing.height == 3
    assert drawing.width == 4


@pytest.mark.parametrize("anchors,expected", [
    ({}, (0, 0)),
    ({"top": 2, "left": 3}, (2, 3)),
    ({"bottom": 0, "right": 0}, (22, 77)),
    ({"bottom": 3, "right": 5}, (19, 72)),
    ({"top": 1, "bottom": 9}, (1, 0)),
    ({"left": 4, "right": 9}, (0, 4)),
])
def test_origin(anchors, expected):
    drawing = Drawing(["abc", "def"], **anchors)
    assert drawing.origin(24, 80) == expected


def test_segments_skip_spaces():
    drawing = Drawing(["ab  c", "   ", " d"])
    assert list(drawing.segments()) == [(0, 0, "ab"), (0, 4, "c"), (2, 1, "d")]


def test_fun_drawings():
    logo, circle = fun_drawings()
    assert logo.glyphs is KRILL and logo.color == "blue"
    assert logo.origin(24, 80) == (0, 57)
    assert circle.glyphs is CIRCLE and circle.color == "red"
    assert circle.origin(24, 80) == (10, 58)


def test_fun_drawings_are_independent():
    first, _ = fun_drawings()
    second, _ = fun_drawings()
    assert first is not second
