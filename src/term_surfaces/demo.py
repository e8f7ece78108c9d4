"""
Toy scene built on the surface API.

Three windows: player statistics at the top, the world in the middle and a
status bar at the bottom. Arrow keys move the player around the floor; ``q``
quits.
"""

import contextlib
import sys

from .attributes import Color, Colors
from .border import Border
from .errors import SurfaceError
from .geometry import Coord, Rect
from .native import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP
from .windows import InputMode, StandardScreen, Window

STATS, WORLD, BAR, PLAYER = 1, 2, 3, 4

STATS_HEIGHT = 10
BAR_HEIGHT = 3
MIN_WORLD_HEIGHT = 5
MIN_WIDTH = 30

MOVES = {
    KEY_UP: (-1, 0),
    KEY_DOWN: (1, 0),
    KEY_LEFT: (0, -1),
    KEY_RIGHT: (0, 1),
}


def _palette():
    cs = Colors()
    cs.add_pair(Color.RED, Color.BLACK)
    cs.add_pair(Color.BLUE, Color.BLACK)
    cs.add_pair(Color.GREEN, Color.BLACK)
    cs.add_pair(Color.YELLOW, Color.BLACK)
    return cs


def _draw_stats(stats):
    stats.attrs.color(STATS)
    stats.border(Border.line())
    stats.print("Str: 1", 1, 5)
    stats.print("Dex: 1", 1, 16)
    stats.print("Spd: 1", 2, 5)
    stats.print("Mag: 1", 2, 16)


def _draw_world(world):
    """Draw walls and a floor; return the floor bounds."""
    world.attrs.color(WORLD)
    world.border(Border.line())
    world.fill('#')
    rows = min(30, world.height - 2)
    cols = min(60, world.width - 2)
    top = (world.height - rows) // 2
    left = (world.width - cols) // 2
    for row in range(top, top + rows):
        world.hline('.', Coord(row, left), cols)
    return Rect(Coord(top, left), Coord(top + rows, left + cols))


def _on_floor(floor, pos):
    return (floor.topleft.row <= pos.row < floor.bottomright.row
            and floor.topleft.col <= pos.col < floor.bottomright.col)


def _draw_status(bar, scr, player):
    text = (f"Screen is {scr.height}x{scr.width}     "
            f"Player at: ({player.row},{player.col})")
    # Keep clear of the right border.
    bar.print(text[:bar.width - 5], 1, 4)


def run(scr):
    """Draw the scene on an active session and process keys until ``q``."""
    if not scr.has_key(KEY_UP):
        scr.print("No UP key :(")
        scr.refresh()
        scr.getch()
        return 0

    if scr.height < STATS_HEIGHT + MIN_WORLD_HEIGHT + BAR_HEIGHT or scr.width < MIN_WIDTH:
        scr.print("Terminal too small :(")
        scr.refresh()
        scr.getch()
        return 0

    if scr.has_colors():
        scr.colors = _palette()
    world_height = scr.height - STATS_HEIGHT - BAR_HEIGHT

    with contextlib.ExitStack() as stack:
        stats = stack.enter_context(Window.create(STATS_HEIGHT, scr.width, 0, 0))
        world = stack.enter_context(Window.create(world_height, scr.width, STATS_HEIGHT, 0))
        bar = stack.enter_context(
            Window.create(BAR_HEIGHT, scr.width, scr.height - BAR_HEIGHT, 0))

        _draw_stats(stats)

        world.keypad(True)
        floor = _draw_world(world)
        player = Coord(world.height // 2, world.width // 2)
        world.attrs.color(PLAYER)
        world.addch('@', player)

        bar.attrs.color(BAR)
        bar.border(Border.line())
        _draw_status(bar, scr, player)

        stats.refresh()
        world.refresh()
        bar.refresh()

        while True:
            ch = world.getch()
            if ch == ord('q'):
                break
            last = player
            if ch in MOVES:
                drow, dcol = MOVES[ch]
                target = Coord(max(player.row + drow, 0), max(player.col + dcol, 0))
                if _on_floor(floor, target):
                    player = target
            elif ch < 0x100 and chr(ch).isprintable():
                bar.print("Pressed: " + chr(ch), 1, bar.width - 14)

            world.attrs.color(WORLD)
            world.addch('.', last)
            world.attrs.color(PLAYER)
            world.addch('@', player)
            world.refresh()

            _draw_status(bar, scr, player)
            bar.refresh()

    return 0


def main():
    try:
        with StandardScreen(InputMode.RAW) as scr:
            return run(scr)
    except SurfaceError as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
