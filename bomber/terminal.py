"""
curses presentation layer

Maps keys to Commands and draws GameView snapshots. Holds no game state.
"""
import curses
from typing import Dict, Optional

from bomber.models import Command
from bomber.state import GameView
from bomber.config import WIDTH, HEIGHT, PLAYER, EXIT_DOOR

COLOR_EXIT = 1

KEYMAP: Dict[int, Command] = {
    ord("w"): Command.MOVE_UP,
    curses.KEY_UP: Command.MOVE_UP,
    ord("s"): Command.MOVE_DOWN,
    curses.KEY_DOWN: Command.MOVE_DOWN,
    ord("a"): Command.MOVE_LEFT,
    curses.KEY_LEFT: Command.MOVE_LEFT,
    ord("d"): Command.MOVE_RIGHT,
    curses.KEY_RIGHT: Command.MOVE_RIGHT,
    ord(" "): Command.PLANT_BOMB,
    ord("e"): Command.SAVE,
    ord("q"): Command.QUIT,
    ord("Q"): Command.QUIT,
}

MENU_KEYS: Dict[int, Command] = {
    ord("1"): Command.MENU_NEW,
    ord("2"): Command.MENU_LOAD,
    ord("3"): Command.MENU_EXIT,
}


def key_to_command(key: int) -> Optional[Command]:
    """In-game key lookup; unknown keys and 'no key' (-1) give None"""
    return KEYMAP.get(key)


def key_to_menu_choice(key: int) -> Optional[Command]:
    return MENU_KEYS.get(key)


class TerminalFrontend:
    """Draws the menu, the arena and the final screen on a curses window"""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        curses.cbreak()
        curses.noecho()
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(COLOR_EXIT, curses.COLOR_GREEN, curses.COLOR_BLACK)

    def _put(self, y: int, x: int, text: str, attr: int = 0):
        # Writes past the window edge are clipped by curses with an error
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def show_menu(self, message: str = ""):
        self.stdscr.nodelay(False)
        self.stdscr.clear()
        self._put(HEIGHT // 2 - 2, WIDTH // 2 - 10, "1. Start a new game")
        self._put(HEIGHT // 2 - 1, WIDTH // 2 - 10, "2. Load previous game")
        self._put(HEIGHT // 2, WIDTH // 2 - 10, "3. Exit")
        if message:
            self._put(HEIGHT // 2 + 2, WIDTH // 2 - 15, message)
        self.stdscr.refresh()

    def wait_menu_choice(self) -> Optional[Command]:
        return key_to_menu_choice(self.stdscr.getch())

    def poll(self) -> Optional[Command]:
        self.stdscr.nodelay(True)
        return key_to_command(self.stdscr.getch())

    def render(self, view: GameView, message: str = ""):
        self.stdscr.erase()
        exit_attr = curses.color_pair(COLOR_EXIT) if curses.has_colors() else curses.A_BOLD
        for y, row in enumerate(view.rows):
            self._put(y, 0, row)
        if view.exit_carrier is not None:
            ex, ey = view.exit_carrier
            self._put(ey, ex, view.rows[ey][ex], exit_attr)

        px, py = view.player
        self._put(py, px, PLAYER)
        for x, y, symbol in view.enemies:
            self._put(y, x, symbol)
        for x, y, symbol in view.bombs:
            self._put(y, x, symbol)
        if view.exit_visible:
            ex, ey = view.exit_pos
            self._put(ey, ex, EXIT_DOOR, exit_attr)

        self._put(view.height, 0, f"Bombs planted: {view.bombs_planted}")
        if message:
            self._put(view.height + 1, 0, message)
        self.stdscr.refresh()

    def show_final(self, message: str):
        self.stdscr.clear()
        self._put(HEIGHT // 2, WIDTH // 2 - 5, message)
        self.stdscr.refresh()
        self.stdscr.nodelay(False)
        self.stdscr.getch()
