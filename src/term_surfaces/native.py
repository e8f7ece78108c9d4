"""
Curses-style terminal service built on blessed.

This module is the low-level library the window classes wrap. It hands out
:class:`Surface` buffers, draws into them, flushes them to the terminal and
reads keys. Like curses, primitives never raise for ordinary failures: they
return ``ERR`` (or ``None`` from :meth:`TerminalService.newwin`) and leave it
to the caller to decide what a failure means.
"""

import collections
import contextlib
import itertools
import logging
import os
from typing import Dict, Optional, Tuple, Union

from blessed import Terminal
from blessed.keyboard import get_curses_keycodes, get_keyboard_sequences

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import termios

    _TTY_ERRORS = (OSError, termios.error)
else:
    _TTY_ERRORS = (OSError,)

OK = 0
ERR = -1

# Attribute bits, laid out like curses: pair number in bits 8-15.
A_NORMAL = 0
A_COLOR = 0xFF << 8
A_REVERSE = 1 << 18

COLOR_PAIRS = 256

ACS_VLINE = '│'
ACS_HLINE = '─'
ACS_ULCORNER = '┌'
ACS_URCORNER = '┐'
ACS_LLCORNER = '└'
ACS_LRCORNER = '┘'

_KEYCODES = get_curses_keycodes()
KEY_UP = _KEYCODES['KEY_UP']
KEY_DOWN = _KEYCODES['KEY_DOWN']
KEY_LEFT = _KEYCODES['KEY_LEFT']
KEY_RIGHT = _KEYCODES['KEY_RIGHT']
KEY_HOME = _KEYCODES['KEY_HOME']
KEY_END = _KEYCODES['KEY_END']
KEY_PPAGE = _KEYCODES['KEY_PPAGE']
KEY_NPAGE = _KEYCODES['KEY_NPAGE']
KEY_BACKSPACE = _KEYCODES['KEY_BACKSPACE']
KEY_ENTER = _KEYCODES['KEY_ENTER']
KEY_DC = _KEYCODES['KEY_DC']
KEY_IC = _KEYCODES['KEY_IC']


def color_pair(n: int) -> int:
    """Attribute bits selecting color pair ``n``."""
    return (n << 8) & A_COLOR


def pair_number(attrs: int) -> int:
    """Color pair number stored in attribute bits."""
    return (attrs & A_COLOR) >> 8


def _glyph(ch: Union[str, int, None], default: Optional[str] = None) -> str:
    if not ch and default is not None:
        return default
    if isinstance(ch, int):
        return chr(ch)
    return str(ch)[:1] or ' '


class Surface:
    """A rectangular cell buffer with its own cursor and attribute state.

    Cells hold ``(glyph, attrs)`` tuples. Rows written since the last flush
    are kept in ``touched``.
    """

    def __init__(self, height: int, width: int, beg_y: int, beg_x: int):
        self.height = height
        self.width = width
        self.beg_y = beg_y
        self.beg_x = beg_x
        self.cur_y = 0
        self.cur_x = 0
        self.attrs = A_NORMAL
        self.keypad = False
        self.released = False
        self.cells = [[(' ', A_NORMAL)] * width for _ in range(height)]
        self.touched = set(range(height))

    def contains(self, y: int, x: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.width

    def put(self, y: int, x: int, ch: str, attrs: int):
        self.cells[y][x] = (ch, attrs)
        self.touched.add(y)

    def text(self, y: int) -> str:
        """Glyphs of row ``y`` as a string."""
        return ''.join(ch for ch, _ in self.cells[y])

    def __repr__(self):
        return (f"Surface({self.height}x{self.width} at "
                f"({self.beg_y}, {self.beg_x}))")


class TerminalService:
    """Curses-style primitives over a blessed Terminal.

    Only one session may be active per service: :meth:`initscr` starts it and
    returns the full-screen surface, :meth:`endwin` undoes every terminal mode
    the session entered.

    Attributes:
        stdscr: The full-screen surface while a session is active, else None.
    """

    def __init__(self, term: Optional[Terminal] = None):
        self._term = term
        self._logger = logging.getLogger(self.__class__.__name__)
        self._session: Optional[contextlib.ExitStack] = None
        self._mode = contextlib.ExitStack()
        self._keypad_xmit = False
        self._echo = True
        self._color_started = False
        self._pairs: Dict[int, Tuple[int, int]] = {}
        self._sgr_cache: Dict[int, str] = {}
        self._pending = collections.deque()
        self.stdscr: Optional[Surface] = None

    @property
    def term(self) -> Terminal:
        """The blessed Terminal, created on first use."""
        if self._term is None:
            self._term = Terminal()
        return self._term

    @property
    def started(self) -> bool:
        """Whether a session is active."""
        return self.stdscr is not None

    def _keyboard_fd(self) -> Optional[int]:
        # The descriptor blessed puts into raw/cbreak; None when stdin is not a tty.
        if _IS_WINDOWS:
            return None
        return getattr(self.term, '_keyboard_fd', None)

    def _write(self, text: str):
        self.term.stream.write(text)

    def _usable(self, surface: Surface) -> bool:
        return self.started and surface is not None and not surface.released

    # Session lifecycle

    def initscr(self) -> Optional[Surface]:
        """Start the session; return the full-screen surface, or None on failure."""
        if self.started:
            return None
        term = self.term
        session = contextlib.ExitStack()
        try:
            session.enter_context(term.fullscreen())
            fd = self._keyboard_fd()
            if fd is not None:
                saved = termios.tcgetattr(fd)
                session.callback(termios.tcsetattr, fd, termios.TCSADRAIN, saved)
        except _TTY_ERRORS:
            self._logger.warning("could not start terminal session", exc_info=True)
            session.close()
            return None
        self._session = session
        self._echo = True
        self.stdscr = Surface(term.height, term.width, 0, 0)
        self._write(term.normal + term.clear)
        self._logger.debug("session started on %dx%d terminal", term.height, term.width)
        return self.stdscr

    def endwin(self) -> int:
        """End the session and restore every terminal mode it entered."""
        if not self.started:
            return ERR
        try:
            self._mode.close()
            self._write(self.term.normal)
            self._session.close()
        except _TTY_ERRORS:
            self._logger.warning("could not restore terminal", exc_info=True)
            return ERR
        finally:
            self._mode = contextlib.ExitStack()
            self._session = None
            self.stdscr = None
            self._keypad_xmit = False
            self._color_started = False
            self._pairs.clear()
            self._sgr_cache.clear()
            self._pending.clear()
        self._logger.debug("session ended")
        return OK

    # Input modes

    def _enter_mode(self, name, mode=None) -> int:
        if not self.started:
            return ERR
        self._mode.close()
        self._mode = contextlib.ExitStack()
        try:
            if mode is not None:
                self._mode.enter_context(mode())
            self._apply_echo()
        except _TTY_ERRORS:
            self._logger.warning("could not enter %s mode", name, exc_info=True)
            return ERR
        self._logger.debug("input mode: %s", name)
        return OK

    def raw(self) -> int:
        """Deliver single keys, interrupt keys included."""
        return self._enter_mode('raw', self.term.raw)

    def noraw(self) -> int:
        """Return to line-buffered input."""
        return self._enter_mode('line')

    def cbreak(self) -> int:
        """Deliver single keys; the terminal still handles interrupt keys."""
        return self._enter_mode('cbreak', self.term.cbreak)

    def nocbreak(self) -> int:
        """Return to line-buffered input."""
        return self._enter_mode('line')

    def _apply_echo(self):
        fd = self._keyboard_fd()
        if fd is None:
            return
        attrs = termios.tcgetattr(fd)
        if self._echo:
            attrs[3] |= termios.ECHO
        else:
            attrs[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    def _set_echo(self, enable: bool) -> int:
        if not self.started:
            return ERR
        self._echo = enable
        try:
            self._apply_echo()
        except _TTY_ERRORS:
            self._logger.warning("could not change echo", exc_info=True)
            return ERR
        return OK

    def echo(self) -> int:
        """Echo typed characters."""
        return self._set_echo(True)

    def noecho(self) -> int:
        """Stop echoing typed characters."""
        return self._set_echo(False)

    # Colors

    def has_colors(self) -> bool:
        """Whether the terminal supports at least eight colors."""
        return self.started and self.term.number_of_colors >= 8

    def start_color(self) -> int:
        """Enable color pairs for this session."""
        if not self.started:
            return ERR
        self._color_started = True
        return OK

    def init_pair(self, pair: int, fg: int, bg: int) -> int:
        """Define color pair ``pair`` as ``fg`` on ``bg``."""
        if not self._color_started or not 0 < pair < COLOR_PAIRS:
            return ERR
        ncolors = self.term.number_of_colors
        if not (0 <= fg < ncolors and 0 <= bg < ncolors):
            return ERR
        self._pairs[pair] = (fg, bg)
        self._sgr_cache.clear()
        self._logger.debug("color pair %d = (%d, %d)", pair, fg, bg)
        return OK

    def _sgr(self, attrs: int) -> str:
        sgr = self._sgr_cache.get(attrs)
        if sgr is None:
            term = self.term
            sgr = term.normal
            pair = self._pairs.get(pair_number(attrs)) if self._color_started else None
            if pair is not None:
                fg, bg = pair
                sgr += term.color(fg) + term.on_color(bg)
            if attrs & A_REVERSE:
                sgr += term.reverse
            self._sgr_cache[attrs] = sgr
        return sgr

    # Surfaces

    def newwin(self, nlines: int, ncols: int, begin_y: int, begin_x: int) -> Optional[Surface]:
        """Allocate a surface; a zero size extends it to the screen edge."""
        if not self.started:
            return None
        screen = self.stdscr
        nlines = nlines or screen.height - begin_y
        ncols = ncols or screen.width - begin_x
        if (begin_y < 0 or begin_x < 0 or nlines <= 0 or ncols <= 0
                or begin_y + nlines > screen.height
                or begin_x + ncols > screen.width):
            self._logger.debug("rejected %dx%d surface at (%d, %d)",
                               nlines, ncols, begin_y, begin_x)
            return None
        surface = Surface(nlines, ncols, begin_y, begin_x)
        self._logger.debug("allocated %r", surface)
        return surface

    def delwin(self, surface: Surface) -> int:
        """Release a surface. The full-screen surface cannot be released."""
        if surface is None or surface.released or surface is self.stdscr:
            return ERR
        surface.released = True
        self._logger.debug("released %r", surface)
        return OK

    # Drawing

    def wattrset(self, surface: Surface, attrs: int) -> int:
        """Set the attributes used by later draws on ``surface``."""
        if not self._usable(surface):
            return ERR
        surface.attrs = attrs
        return OK

    def wattr_get(self, surface: Surface) -> int:
        """Current attribute bits of ``surface``."""
        return surface.attrs

    def wmove(self, surface: Surface, y: int, x: int) -> int:
        """Move the cursor of ``surface`` to (y, x)."""
        if not self._usable(surface) or not surface.contains(y, x):
            return ERR
        surface.cur_y, surface.cur_x = y, x
        return OK

    def _advance(self, surface: Surface, ch: str) -> int:
        y, x = surface.cur_y, surface.cur_x
        if ch == '\n':
            for col in range(x, surface.width):
                surface.put(y, col, ' ', surface.attrs)
            if y + 1 >= surface.height:
                return ERR
            surface.cur_y, surface.cur_x = y + 1, 0
            return OK
        surface.put(y, x, ch, surface.attrs)
        if x + 1 < surface.width:
            surface.cur_x = x + 1
        elif y + 1 < surface.height:
            surface.cur_y, surface.cur_x = y + 1, 0
        else:
            # Last cell: the glyph is stored but the cursor cannot advance.
            return ERR
        return OK

    def waddstr(self, surface: Surface, text: str) -> int:
        """Write ``text`` at the cursor, wrapping at the right edge."""
        if not self._usable(surface):
            return ERR
        for ch in text:
            if self._advance(surface, ch) == ERR:
                return ERR
        return OK

    def mvwaddstr(self, surface: Surface, y: int, x: int, text: str) -> int:
        """Move to (y, x), then write ``text``."""
        if self.wmove(surface, y, x) == ERR:
            return ERR
        return self.waddstr(surface, text)

    def waddch(self, surface: Surface, ch) -> int:
        """Write one glyph at the cursor."""
        if not self._usable(surface):
            return ERR
        return self._advance(surface, _glyph(ch))

    def mvwaddch(self, surface: Surface, y: int, x: int, ch) -> int:
        """Move to (y, x), then write one glyph."""
        if self.wmove(surface, y, x) == ERR:
            return ERR
        return self.waddch(surface, ch)

    def wborder(self, surface: Surface, ls, rs, ts, bs, tl, tr, bl, br) -> int:
        """Frame the surface. A false glyph selects the default line glyph."""
        if not self._usable(surface):
            return ERR
        ls, rs = _glyph(ls, ACS_VLINE), _glyph(rs, ACS_VLINE)
        ts, bs = _glyph(ts, ACS_HLINE), _glyph(bs, ACS_HLINE)
        h, w, a = surface.height, surface.width, surface.attrs
        for x in range(1, w - 1):
            surface.put(0, x, ts, a)
            surface.put(h - 1, x, bs, a)
        for y in range(1, h - 1):
            surface.put(y, 0, ls, a)
            surface.put(y, w - 1, rs, a)
        surface.put(0, 0, _glyph(tl, ACS_ULCORNER), a)
        surface.put(0, w - 1, _glyph(tr, ACS_URCORNER), a)
        surface.put(h - 1, 0, _glyph(bl, ACS_LLCORNER), a)
        surface.put(h - 1, w - 1, _glyph(br, ACS_LRCORNER), a)
        return OK

    def box(self, surface: Surface, verch, horch) -> int:
        """Frame the surface with default corners."""
        return self.wborder(surface, verch, verch, horch, horch, 0, 0, 0, 0)

    def mvwhline(self, surface: Surface, y: int, x: int, ch, n: int) -> int:
        """Draw up to ``n`` glyphs rightwards from (y, x); the cursor stays put."""
        if self.wmove(surface, y, x) == ERR:
            return ERR
        ch = _glyph(ch, ACS_HLINE)
        for col in range(x, min(x + n, surface.width)):
            surface.put(y, col, ch, surface.attrs)
        return OK

    def wrefresh(self, surface: Surface) -> int:
        """Write the touched rows of ``surface`` to the terminal."""
        if not self._usable(surface):
            return ERR
        term = self.term
        out = []
        for y in sorted(surface.touched):
            out.append(term.move_yx(surface.beg_y + y, surface.beg_x))
            for attrs, run in itertools.groupby(surface.cells[y], key=lambda cell: cell[1]):
                out.append(self._sgr(attrs))
                out.append(''.join(ch for ch, _ in run))
            out.append(term.normal)
        surface.touched.clear()
        out.append(term.move_yx(surface.beg_y + surface.cur_y, surface.beg_x + surface.cur_x))
        self._write(''.join(out))
        term.stream.flush()
        return OK

    # Input

    def keypad(self, surface: Surface, enable: bool) -> int:
        """Turn special-key decoding on or off for ``surface``."""
        if not self._usable(surface):
            return ERR
        surface.keypad = bool(enable)
        if enable and not self._keypad_xmit:
            self._session.enter_context(self.term.keypad())
            self._keypad_xmit = True
        return OK

    def wgetch(self, surface: Surface) -> int:
        """Block for the next key.

        With keypad decoding on, a multi-character sequence such as an arrow
        key comes back as its key code; otherwise its characters are
        delivered one per call.
        """
        if not self._usable(surface):
            return ERR
        if self._pending:
            return ord(self._pending.popleft())
        key = self.term.inkey()
        if not key:
            return ERR
        if surface.keypad and key.code is not None and len(key) > 1:
            return key.code
        self._pending.extend(key[1:])
        return ord(key[0])

    def has_key(self, code: int) -> bool:
        """Whether the terminal has a sequence for key ``code``."""
        if not self.started:
            return False
        return code in get_keyboard_sequences(self.term).values()
