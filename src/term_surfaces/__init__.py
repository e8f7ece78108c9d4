"""
Terminal Surfaces Library

Resource-safe windows over a curses-style terminal service built on the Blessed library.
Provides the terminal session, owned sub-windows, color and attribute handling, borders
and blocking keyboard input.
"""

from .attributes import Attr, Color, ColorPair, Colors
from .border import Border
from .errors import FailedAssertion, SurfaceError, TerminalError
from .geometry import Coord, Rect
from .native import (
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    TerminalService,
)
from .windows import AttrRestorer, InputMode, StandardScreen, Window

__all__ = [
    'Attr',
    'AttrRestorer',
    'Border',
    'Color',
    'ColorPair',
    'Colors',
    'Coord',
    'FailedAssertion',
    'InputMode',
    'KEY_DOWN',
    'KEY_LEFT',
    'KEY_RIGHT',
    'KEY_UP',
    'Rect',
    'StandardScreen',
    'SurfaceError',
    'TerminalError',
    'TerminalService',
    'Window',
]

__version__ = '0.1.0'
