"""Tests for Border."""

import pytest
from term_surfaces import Border, FailedAssertion
from term_surfaces import native

FIELDS = ('left', 'right', 'top', 'bottom',
          'upper_left', 'upper_right', 'lower_left', 'lower_right')


def glyphs(border):
    return [getattr(border, name) for name in FIELDS]


class TestBorder:
    """Tests for the Border constructors."""

    def test_uniform(self):
        """Test that a single glyph fills all eight slots."""
        assert glyphs(Border.uniform('X')) == ['X'] * 8

    def test_symmetric_single_corner(self):
        """Test vertical, horizontal and one corner glyph."""
        border = Border.symmetric('|', '-', '+')
        assert glyphs(border) == ['|', '|', '-', '-', '+', '+', '+', '+']

    def test_symmetric_four_corners(self):
        """Test vertical, horizontal and four distinct corners."""
        border = Border.symmetric('|', '-', '1', '2', '3', '4')
        assert glyphs(border) == ['|', '|', '-', '-', '1', '2', '3', '4']

    def test_symmetric_wrong_corner_count(self):
        """Test that two corner glyphs are rejected."""
        with pytest.raises(FailedAssertion):
            Border.symmetric('|', '-', '1', '2')

    def test_explicit(self):
        """Test the eight-glyph form maps one to one."""
        border = Border(*'abcdefgh')
        assert glyphs(border) == list('abcdefgh')

    def test_integer_glyphs(self):
        """Test that code points are accepted as glyphs."""
        assert glyphs(Border.uniform(ord('*'))) == [ord('*')] * 8

    def test_blank(self):
        """Test the blank preset."""
        assert glyphs(Border.blank()) == [' '] * 8

    def test_line(self):
        """Test the line preset uses the line-drawing glyphs."""
        border = Border.line()
        assert border.left == border.right == native.ACS_VLINE
        assert border.top == border.bottom == native.ACS_HLINE
        assert border.upper_left == native.ACS_ULCORNER
        assert border.upper_right == native.ACS_URCORNER
        assert border.lower_left == native.ACS_LLCORNER
        assert border.lower_right == native.ACS_LRCORNER
        assert len({border.left, border.top, border.upper_left, border.lower_right}) == 4
