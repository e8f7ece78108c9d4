"""
Color and display-attribute model.

An :class:`Attr` keeps the color-pair selection and the reverse-video flag as
separate fields. They are only combined into native attribute bits when a
window applies them to its surface, so changing one never clobbers the other.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterator, List

from . import native
from .errors import ensure


class Color(IntEnum):
    """The eight base terminal colors."""
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass(frozen=True)
class ColorPair:
    """A registered (index, foreground, background) triple."""
    index: int
    fg: Color
    bg: Color


class Colors:
    """An append-only table of color pairs, indexed from 1.

    Attributes:
        MAX_PAIRS: Capacity of the table.
    """

    MAX_PAIRS = 8

    def __init__(self):
        self._pairs: List[ColorPair] = []

    def add_pair(self, fg: Color, bg: Color) -> ColorPair:
        """Append a pair and give it the next index.

        Raises:
            FailedAssertion: The table already holds MAX_PAIRS pairs.
        """
        ensure(len(self._pairs) < self.MAX_PAIRS, "color pair table is full")
        pair = ColorPair(len(self._pairs) + 1, Color(fg), Color(bg))
        self._pairs.append(pair)
        return pair

    def copy(self) -> "Colors":
        """An independent table with the same pairs."""
        dup = Colors()
        dup._pairs = list(self._pairs)
        return dup

    def __getitem__(self, idx: int) -> ColorPair:
        ensure(0 < idx <= len(self._pairs), f"color pair index {idx} out of range")
        return self._pairs[idx - 1]

    def __len__(self):
        return len(self._pairs)

    def __iter__(self) -> Iterator[ColorPair]:
        return iter(self._pairs)

    def __repr__(self):
        return f"Colors({self._pairs!r})"


@dataclass
class Attr:
    """Pending draw attributes of a window.

    ``pair`` is the selected color-pair index (0 means the terminal default)
    and ``is_reverse`` the reverse-video flag. Both mutators return the
    attribute itself so calls can be chained::

        win.attrs.color(2).reverse(True)
    """
    pair: int = 0
    is_reverse: bool = False

    def color(self, idx: int) -> "Attr":
        """Select color pair ``idx``, keeping the other modifiers."""
        ensure(0 <= idx <= 0xFF, f"color pair index {idx} out of range")
        self.pair = idx
        return self

    def reverse(self, enable=None) -> "Attr":
        """Set reverse video, or toggle it when called without an argument."""
        self.is_reverse = (not self.is_reverse) if enable is None else bool(enable)
        return self

    def copy(self) -> "Attr":
        """An independent Attr with the same fields."""
        return replace(self)

    def encode(self) -> int:
        """Combine the fields into native attribute bits."""
        bits = native.color_pair(self.pair)
        if self.is_reverse:
            bits |= native.A_REVERSE
        return bits

    @classmethod
    def decode(cls, bits: int) -> "Attr":
        """Build an Attr from native attribute bits."""
        return cls(native.pair_number(bits), bool(bits & native.A_REVERSE))
