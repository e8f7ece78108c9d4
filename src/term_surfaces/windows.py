"""
Window classes for terminal surfaces.

This module provides the resource-owning :class:`Window`, the
:class:`StandardScreen` session that owns global terminal state, and
:class:`AttrRestorer` for scoped attribute changes.

Typical use::

    with StandardScreen(InputMode.RAW) as scr:
        with Window.create(10, 40, 0, 0) as win:
            win.border(Border.line())
            win.print("Str: 1", 1, 5)
            win.refresh()
"""

import logging
import weakref
from enum import Enum
from typing import Optional

from .attributes import Attr, Colors
from .border import Border, Glyph
from .errors import FailedAssertion, TerminalError, check, ensure
from .geometry import Coord, Rect
from .native import ERR, Surface, TerminalService


class InputMode(Enum):
    """How keyboard input reaches the program.

    LINE delivers whole lines, CBREAK single keys with interrupt keys still
    handled by the terminal, RAW single keys including interrupt keys.
    """
    LINE = 'line'
    CBREAK = 'cbreak'
    RAW = 'raw'


class Window:
    """A drawing surface and the attributes pending for its next draw.

    A window either owns its surface, releasing it exactly once on
    :meth:`close`, or merely observes it (the full-screen surface of the
    session). An owned surface that was never closed is released when the
    window is garbage collected. Windows cannot be copied; :meth:`transfer`
    moves ownership.

    Attributes:
        attrs: The pending :class:`Attr`, applied before every draw call.
    """

    def __init__(self, service: TerminalService, surface: Surface, owns: bool = True):
        ensure(surface is not None, "window needs a surface")
        self._service = service
        self._surface = surface
        self._owns = owns
        self._logger = logging.getLogger(self.__class__.__name__)
        self.attrs = Attr.decode(service.wattr_get(surface))
        self._release = None
        if owns:
            self._release = weakref.finalize(self, service.delwin, surface)
            self._release.atexit = False

    @classmethod
    def create(cls, height: int, width: int, row: int, col: int) -> "Window":
        """Allocate an owned window of the given size at (row, col).

        Raises:
            TerminalError: The terminal could not allocate the surface.
            FailedAssertion: No terminal session is active.
        """
        screen = StandardScreen.active()
        ensure(screen is not None, "no active terminal session")
        service = screen._service
        surface = service.newwin(height, width, row, col)
        if surface is None:
            raise TerminalError()
        return Window(service, surface, owns=True)

    @classmethod
    def from_rect(cls, bounds: Rect) -> "Window":
        """Allocate an owned window covering ``bounds``."""
        return cls.create(bounds.height, bounds.width,
                          bounds.topleft.row, bounds.topleft.col)

    @property
    def owns(self) -> bool:
        """Whether closing this window releases its surface."""
        return self._owns

    @property
    def closed(self) -> bool:
        """Whether the surface was released or moved away."""
        return self._surface is None

    def _ptr(self) -> Surface:
        ensure(self._surface is not None, "window has no surface")
        screen = StandardScreen.active()
        ensure(screen is not None and screen._service is self._service,
               "terminal session has ended")
        return self._surface

    def _apply_attrs(self, surface: Surface):
        check(self._service.wattrset(surface, self.attrs.encode()))

    # Accessors

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._ptr().width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._ptr().height

    def beg(self) -> Coord:
        """Origin of the window on the screen."""
        surface = self._ptr()
        return Coord(surface.beg_y, surface.beg_x)

    def cur(self) -> Coord:
        """Cursor position inside the window."""
        surface = self._ptr()
        return Coord(surface.cur_y, surface.cur_x)

    # Drawing

    def print(self, text: str, row: Optional[int] = None, col: Optional[int] = None):
        """Write ``text`` at the cursor, or at (row, col) when both are given."""
        ensure((row is None) == (col is None), "row and col must be given together")
        surface = self._ptr()
        self._apply_attrs(surface)
        if row is None:
            check(self._service.waddstr(surface, text))
        else:
            check(self._service.mvwaddstr(surface, row, col, text))

    def box(self, vertical: Glyph, horizontal: Glyph):
        """Frame the window with two glyphs; corners use the default glyphs."""
        surface = self._ptr()
        self._apply_attrs(surface)
        check(self._service.box(surface, vertical, horizontal))

    def border(self, spec: Border):
        """Frame the window with the eight glyphs of ``spec``."""
        surface = self._ptr()
        self._apply_attrs(surface)
        check(self._service.wborder(
            surface,
            spec.left, spec.right, spec.top, spec.bottom,
            spec.upper_left, spec.upper_right, spec.lower_left, spec.lower_right,
        ))

    def hline(self, glyph: Glyph, start: Coord, length: int):
        """Draw ``length`` glyphs rightwards from ``start``; the cursor stays put."""
        surface = self._ptr()
        self._apply_attrs(surface)
        check(self._service.mvwhline(surface, start.row, start.col, glyph, length))

    def fill(self, glyph: Glyph):
        """Cover the interior, leaving a one-cell margin for a border."""
        width = max(self.width - 2, 0)
        for row in range(1, self.height - 1):
            self.hline(glyph, Coord(row, 1), width)

    def addch(self, glyph: Glyph, pos: Optional[Coord] = None):
        """Write one glyph at the cursor, or at ``pos``."""
        surface = self._ptr()
        self._apply_attrs(surface)
        if pos is None:
            check(self._service.waddch(surface, glyph))
        else:
            check(self._service.mvwaddch(surface, pos.row, pos.col, glyph))

    def refresh(self):
        """Flush pending draws on this window to the terminal."""
        check(self._service.wrefresh(self._ptr()))

    # Input

    def getch(self) -> int:
        """Block until a key arrives and return its code."""
        return check(self._service.wgetch(self._ptr()))

    def keypad(self, enable: bool):
        """Decode special-key sequences into single key codes."""
        check(self._service.keypad(self._ptr(), enable))

    # Ownership

    def transfer(self) -> "Window":
        """Move the surface into a new Window; this one is left empty."""
        surface = self._ptr()
        if self._release is not None:
            self._release.detach()
            self._release = None
        moved = Window(self._service, surface, self._owns)
        moved.attrs = self.attrs
        self._surface = None
        self._owns = False
        return moved

    def close(self):
        """Release the surface if this window owns it. Safe to call twice."""
        surface, self._surface = self._surface, None
        if surface is not None and self._owns:
            self._owns = False
            self._release.detach()
            self._release = None
            check(self._service.delwin(surface))
            self._logger.debug("closed %r", surface)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __copy__(self):
        raise TypeError(f"{self.__class__.__name__} cannot be copied; use transfer()")

    def __deepcopy__(self, memo):
        return self.__copy__()

    def __repr__(self):
        return (f"{self.__class__.__name__}({self._surface!r}, "
                f"owns={self._owns}, attrs={self.attrs!r})")


class StandardScreen(Window):
    """The terminal session and its full-screen window.

    Construction starts the terminal, applies the input mode, keypad and echo
    settings, and enables color when the terminal supports it. :meth:`close`
    (or leaving the ``with`` block) restores the terminal. Only one session
    may be active at a time.
    """

    _active: Optional["StandardScreen"] = None

    def __init__(self, input_mode: InputMode = InputMode.CBREAK, keypad: bool = True,
                 echo: bool = False, service: Optional[TerminalService] = None):
        ensure(StandardScreen._active is None, "a terminal session is already active")
        service = service or TerminalService()
        surface = service.initscr()
        if surface is None:
            raise TerminalError()
        super().__init__(service, surface, owns=False)
        self._colors = Colors()
        self._ended = False
        StandardScreen._active = self
        try:
            self.input_mode(input_mode)
            self.keypad(keypad)
            self.echo(echo)
            if service.has_colors():
                check(service.start_color())
        except BaseException:
            try:
                self.close()
            except TerminalError:
                self._logger.warning("terminal could not be restored after failed start")
            raise
        self._logger.debug("session active: mode=%s keypad=%s echo=%s",
                           input_mode.value, keypad, echo)

    @classmethod
    def create(cls, height: int, width: int, row: int, col: int):
        raise FailedAssertion("the terminal session is started by StandardScreen()")

    def transfer(self):
        raise FailedAssertion("the terminal session cannot be moved")

    @classmethod
    def active(cls) -> Optional["StandardScreen"]:
        """The current session, if one is active."""
        return cls._active

    @property
    def colors(self) -> Colors:
        """A copy of the registered color-pair table."""
        return self._colors.copy()

    @colors.setter
    def colors(self, table: Colors):
        """Replace the color table and register each pair with the terminal."""
        self._ptr()
        self._colors = table.copy()
        for pair in self._colors:
            check(self._service.init_pair(pair.index, int(pair.fg), int(pair.bg)))
        self._logger.debug("registered %d color pairs", len(self._colors))

    def input_mode(self, mode: InputMode):
        """Switch between line, cbreak and raw input."""
        self._ptr()
        if mode is InputMode.LINE:
            check(self._service.noraw())
            check(self._service.nocbreak())
        elif mode is InputMode.CBREAK:
            check(self._service.cbreak())
        else:
            check(self._service.raw())

    def echo(self, enable: bool):
        """Turn echo of typed characters on or off."""
        self._ptr()
        check(self._service.echo() if enable else self._service.noecho())

    def has_colors(self) -> bool:
        """Whether the terminal can show color pairs."""
        self._ptr()
        return bool(self._service.has_colors())

    def has_key(self, code: int) -> bool:
        """Whether the terminal can deliver the special key ``code``."""
        self._ptr()
        return bool(self._service.has_key(code))

    def close(self):
        """End the session and restore the terminal. Safe to call twice."""
        if self._ended:
            return
        self._ended = True
        self._surface = None
        if StandardScreen._active is self:
            StandardScreen._active = None
        if self._service.endwin() == ERR:
            self._logger.warning("terminal could not be restored")
            raise TerminalError()
        self._logger.debug("session closed")


class AttrRestorer:
    """Restore a window's attributes when the ``with`` block ends.

    The snapshot is taken on construction and written back on exit, whether
    the block finished normally or raised::

        with AttrRestorer(win) as attrs:
            attrs.color(3).reverse(True)
            win.print("warning", 1, 1)
    """

    def __init__(self, window: Window):
        self._window = window
        self._saved = window.attrs.copy()

    def __enter__(self) -> Attr:
        return self._window.attrs

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._window.attrs = self._saved.copy()
        return False
