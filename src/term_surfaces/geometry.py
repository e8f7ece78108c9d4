"""Cell coordinates and rectangles on the terminal grid."""

from dataclasses import dataclass

from .errors import ensure


@dataclass(frozen=True, order=True)
class Coord:
    """A terminal cell, ordered row-major (row first, then column)."""
    row: int
    col: int

    def __post_init__(self):
        ensure(self.row >= 0 and self.col >= 0, f"negative coordinate {self!r}")


@dataclass(frozen=True)
class Rect:
    """A region given by its top-left and bottom-right corners.

    The top-left corner must strictly precede the bottom-right corner in
    row-major order.
    """
    topleft: Coord
    bottomright: Coord

    def __post_init__(self):
        ensure(
            self.topleft < self.bottomright,
            f"malformed rectangle {self.topleft!r} -> {self.bottomright!r}",
        )

    @property
    def width(self):
        """Number of columns covered."""
        return self.bottomright.col - self.topleft.col

    @property
    def height(self):
        """Number of rows covered."""
        return self.bottomright.row - self.topleft.row
