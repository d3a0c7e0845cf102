"""Interactive terminal display built on :mod:`curses`.

Keys: ``S`` solves, ``V`` validates, ``Q`` quits. Drawing is split from the
key handling so both can be exercised without a terminal.
"""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from project_config import get_section
from sudoku_generator import print_grid
from sudoku_grid import Grid
from sudoku_solver import SolveOutcome

from .session import Session

DISPLAY_CONFIG = get_section("display", {})
START_Y = int(DISPLAY_CONFIG.get("start_y", 2))
START_X = int(DISPLAY_CONFIG.get("start_x", 4))

TITLE = "SUDOKU SOLVER"
HELP_LINES = (
    "Press 'S' to solve the puzzle",
    "Press 'V' to validate the solution",
    "Press 'Q' to quit",
)
MSG_SOLVING = "Solving... Please wait"
MSG_SOLVED = "Puzzle solved successfully!"
MSG_UNSOLVABLE = "No solution exists for this puzzle!"
MSG_BUDGET = "Search stopped: solver budget exhausted."
MSG_VALID = "Solution is valid!"
MSG_INVALID = "Solution is invalid!"
MSG_TOO_SMALL = "Terminal too small, enlarge it or press Q"

PAIR_NORMAL, PAIR_GIVEN, PAIR_OK, PAIR_ERROR = 1, 2, 3, 4


@dataclass(frozen=True)
class KeyResult:
    """What the display should do after a key press."""

    message: Optional[str] = None
    ok: Optional[bool] = None
    quit: bool = False


def cell_position(grid: Grid, row: int, col: int) -> Tuple[int, int]:
    """Offset of a cell's digit inside the :func:`print_grid` block."""
    b = grid.box_size
    return 1 + row + row // b, 2 + 2 * col + 2 * (col // b)


def render_lines(grid: Grid) -> List[str]:
    """Full screen content for ``grid`` without colours, top to bottom."""
    lines = [TITLE, f"{grid.size}x{grid.size} Grid"]
    lines.extend(print_grid(grid).splitlines())
    lines.append("")
    lines.extend(HELP_LINES)
    return lines


def required_size(grid: Grid) -> Tuple[int, int]:
    """Rows and columns the screen needs to show ``grid`` with its status line."""
    lines = render_lines(grid)
    messages = [MSG_SOLVING, MSG_SOLVED, MSG_UNSOLVABLE, MSG_BUDGET, MSG_VALID, MSG_INVALID]
    width = START_X + max(len(text) for text in lines + messages)
    # the status line is the last row
    height = START_Y + len(lines)
    return height, width + 1


def _normalise_key(key: Union[int, str]) -> str:
    if isinstance(key, int):
        if not 0 <= key < 0x110000:
            return ""
        key = chr(key)
    return key.lower()


def handle_key(session: Session, key: Union[int, str]) -> KeyResult:
    ch = _normalise_key(key)
    if ch == "s":
        solved = session.solve()
        if solved:
            return KeyResult(MSG_SOLVED, True)
        report = session.last_report
        if report is not None and report.outcome is SolveOutcome.BUDGET_EXHAUSTED:
            return KeyResult(MSG_BUDGET, False)
        return KeyResult(MSG_UNSOLVABLE, False)
    if ch == "v":
        valid = session.validate()
        return KeyResult(MSG_VALID if valid else MSG_INVALID, valid)
    if ch == "q":
        return KeyResult(quit=True)
    return KeyResult()


class _Screen:
    def __init__(self, stdscr, session: Session) -> None:
        self.stdscr = stdscr
        self.session = session
        self.colors = False

    def init(self) -> None:
        curses.cbreak()
        curses.noecho()
        self.stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(PAIR_NORMAL, curses.COLOR_WHITE, curses.COLOR_BLACK)
            curses.init_pair(PAIR_GIVEN, curses.COLOR_CYAN, curses.COLOR_BLACK)
            curses.init_pair(PAIR_OK, curses.COLOR_GREEN, curses.COLOR_BLACK)
            curses.init_pair(PAIR_ERROR, curses.COLOR_RED, curses.COLOR_BLACK)
            self.colors = True

    def _status_y(self) -> int:
        # one blank row below the help lines
        return START_Y + len(render_lines(self.session.grid)) - 1

    def _attr(self, pair: int) -> int:
        return curses.color_pair(pair) if self.colors else curses.A_NORMAL

    def fits(self) -> bool:
        rows, cols = self.stdscr.getmaxyx()
        need_rows, need_cols = required_size(self.session.grid)
        return rows >= need_rows and cols >= need_cols

    def _draw_too_small(self) -> None:
        self.stdscr.erase()
        cols = self.stdscr.getmaxyx()[1]
        try:
            self.stdscr.addstr(0, 0, MSG_TOO_SMALL[: max(0, cols - 1)])
        except curses.error:
            pass
        self.stdscr.refresh()

    def draw(self, status: KeyResult | None = None) -> None:
        if not self.fits():
            self._draw_too_small()
            return
        grid = self.session.grid
        self.stdscr.erase()
        lines = render_lines(grid)
        self.stdscr.addstr(0, START_X, lines[0])
        self.stdscr.addstr(1, START_X, lines[1])
        grid_lines = lines[2:]
        for offset, text in enumerate(grid_lines):
            self.stdscr.addstr(START_Y + offset, START_X, text)

        # redraw digits so given cells stand out from solver placements
        for r in range(grid.size):
            for c in range(grid.size):
                value = grid.get_value(r, c)
                if value == 0:
                    continue
                dy, dx = cell_position(grid, r, c)
                pair = PAIR_GIVEN if self.session.is_given(r, c) else PAIR_NORMAL
                self.stdscr.addstr(START_Y + dy, START_X + dx, str(value), self._attr(pair))

        if status is not None and status.message:
            status_y = self._status_y()
            pair = PAIR_OK if status.ok else PAIR_ERROR
            self.stdscr.addstr(status_y, START_X, status.message, self._attr(pair))
        self.stdscr.refresh()

    def show_busy(self) -> None:
        if not self.fits():
            return
        status_y = self._status_y()
        self.stdscr.addstr(status_y, START_X, MSG_SOLVING)
        self.stdscr.refresh()

    def loop(self) -> int:
        self.init()
        status: KeyResult | None = None
        while True:
            self.draw(status)
            key = self.stdscr.getch()
            if _normalise_key(key) == "s":
                self.show_busy()
            result = handle_key(self.session, key)
            if result.quit:
                return 0
            if result.message:
                status = result


def run(session: Session) -> int:
    """Run the interactive display until the user quits."""
    return curses.wrapper(lambda stdscr: _Screen(stdscr, session).loop())


__all__ = ["KeyResult", "cell_position", "handle_key", "render_lines", "required_size", "run"]
