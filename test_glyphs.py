#!/usr/bin/env python3
"""
Tests for the block glyph table.
"""
import pytest

from ringmesh.glyphs import GLYPHS, glyph_rects, is_supported


def test_digits_and_label_letters_are_supported():
    for ch in "0123456789IDOMm":
        assert is_supported(ch)
        assert glyph_rects(ch), f"no geometry for {ch!r}"


def test_space_and_unknown_characters_are_empty():
    assert glyph_rects(" ") == ()
    assert is_supported(" ")
    for ch in "#.xZ⠀":
        assert not is_supported(ch)
        assert glyph_rects(ch) == ()


def test_rectangles_fit_the_unit_square():
    for ch, rects in GLYPHS.items():
        for x1, y1, x2, y2 in rects:
            assert 0.0 <= x1 < x2 <= 1.0, ch
            assert 0.0 <= y1 < y2 <= 1.0, ch


def test_digits_are_distinguishable():
    digits = [frozenset(GLYPHS[d]) for d in "0123456789"]
    assert len(set(digits)) == 10


def test_table_is_read_only():
    with pytest.raises(TypeError):
        GLYPHS["X"] = ((0.0, 0.0, 1.0, 1.0),)
