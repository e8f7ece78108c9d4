"""Eight-glyph frame specifications."""

from dataclasses import dataclass
from typing import Union

from . import native
from .errors import ensure

# A glyph is a single character or its code point.
Glyph = Union[str, int]


@dataclass(frozen=True)
class Border:
    """The glyphs used for the four edges and four corners of a frame."""
    left: Glyph
    right: Glyph
    top: Glyph
    bottom: Glyph
    upper_left: Glyph
    upper_right: Glyph
    lower_left: Glyph
    lower_right: Glyph

    @classmethod
    def uniform(cls, glyph: Glyph) -> "Border":
        """Use one glyph for all eight slots."""
        return cls(glyph, glyph, glyph, glyph, glyph, glyph, glyph, glyph)

    @classmethod
    def symmetric(cls, vertical: Glyph, horizontal: Glyph, *corners: Glyph) -> "Border":
        """Use one glyph for both verticals and one for both horizontals.

        ``corners`` is either a single glyph for all four corners, or four
        glyphs in upper-left, upper-right, lower-left, lower-right order.
        """
        ensure(len(corners) in (1, 4), "expected one or four corner glyphs")
        if len(corners) == 1:
            corners = corners * 4
        return cls(vertical, vertical, horizontal, horizontal, *corners)

    @classmethod
    def blank(cls) -> "Border":
        return cls.uniform(' ')

    @classmethod
    def line(cls) -> "Border":
        return cls(
            native.ACS_VLINE, native.ACS_VLINE,
            native.ACS_HLINE, native.ACS_HLINE,
            native.ACS_ULCORNER, native.ACS_URCORNER,
            native.ACS_LLCORNER, native.ACS_LRCORNER,
        )
