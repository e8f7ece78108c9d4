"""Shared fixtures: mock blessed terminals and mock terminal services."""

import io
from unittest.mock import MagicMock, Mock

import pytest
from blessed import Terminal

from term_surfaces.native import OK, Surface, TerminalService
from term_surfaces.windows import StandardScreen

SERVICE_CALLS_RETURNING_OK = (
    'endwin', 'raw', 'noraw', 'cbreak', 'nocbreak', 'echo', 'noecho',
    'start_color', 'init_pair', 'delwin', 'wattrset', 'waddstr', 'mvwaddstr',
    'waddch', 'mvwaddch', 'wborder', 'box', 'mvwhline', 'wrefresh', 'keypad',
)


def create_mock_terminal(height=24, width=80, colors=256):
    """Create a mock Terminal that renders capabilities as readable markers."""
    term = MagicMock(spec=Terminal)
    term.height = height
    term.width = width
    term.number_of_colors = colors
    term.normal = '<normal>'
    term.clear = '<clear>'
    term.reverse = '<reverse>'
    term.color = Mock(side_effect=lambda n: f'<fg{n}>')
    term.on_color = Mock(side_effect=lambda n: f'<bg{n}>')
    term.move_yx = Mock(side_effect=lambda y, x: f'<{y},{x}>')
    term.stream = io.StringIO()
    return term


def create_mock_service(height=24, width=80, colors=True):
    """Create a mock TerminalService whose calls all succeed."""
    service = Mock(spec=TerminalService)
    service.initscr.return_value = Surface(height, width, 0, 0)
    service.newwin.side_effect = lambda h, w, y, x: Surface(h, w, y, x)
    service.wattr_get.side_effect = lambda surface: surface.attrs
    service.has_colors.return_value = colors
    service.has_key.return_value = True
    service.wgetch.return_value = ord('q')
    for name in SERVICE_CALLS_RETURNING_OK:
        getattr(service, name).return_value = OK
    return service


@pytest.fixture(autouse=True)
def no_active_session():
    """Make sure no session leaks from one test into the next."""
    StandardScreen._active = None
    yield
    StandardScreen._active = None
