from __future__ import annotations

import curses

import pytest

from conftest import CLASSIC_PUZZLE
from driver import terminal
from driver.session import Session, resolve_settings
from sudoku_generator import print_grid
from sudoku_grid import Grid


@pytest.fixture
def session(classic_grid) -> Session:
    return Session(classic_grid, resolve_settings({}, profile="prod"))


def test_render_lines_layout(classic_grid):
    lines = terminal.render_lines(classic_grid)
    assert lines[0] == "SUDOKU SOLVER"
    assert lines[1] == "9x9 Grid"
    assert lines[2:15] == print_grid(classic_grid).splitlines()
    assert lines[-3:] == list(terminal.HELP_LINES)


@pytest.mark.parametrize("size_lines", [CLASSIC_PUZZLE, ["1234", "3412", "2143", "4321"]])
def test_cell_position_points_at_digit(size_lines):
    grid = Grid.from_lines(size_lines)
    block = print_grid(grid).splitlines()
    for r in range(grid.size):
        for c in range(grid.size):
            dy, dx = terminal.cell_position(grid, r, c)
            value = grid.get_value(r, c)
            assert block[dy][dx] == (str(value) if value else ".")


def test_solve_key(session):
    result = terminal.handle_key(session, ord("S"))
    assert result == terminal.KeyResult(terminal.MSG_SOLVED, True)
    assert session.grid.to_lines()[0] == "534678912"


def test_validate_key_before_and_after_solving(session):
    assert terminal.handle_key(session, "v") == terminal.KeyResult(terminal.MSG_INVALID, False)
    terminal.handle_key(session, "s")
    assert terminal.handle_key(session, "V") == terminal.KeyResult(terminal.MSG_VALID, True)


def test_unsolvable_message():
    grid = Grid.from_lines(["1...", ".2..", ".3..", ".4.."])
    session = Session(grid, resolve_settings({}, profile="prod"))
    assert terminal.handle_key(session, "s") == terminal.KeyResult(terminal.MSG_UNSOLVABLE, False)


def test_budget_message(classic_grid):
    session = Session(classic_grid, resolve_settings({}, profile="prod", cli={"max_steps": 2}))
    assert terminal.handle_key(session, "s") == terminal.KeyResult(terminal.MSG_BUDGET, False)


def test_quit_and_unknown_keys(session):
    assert terminal.handle_key(session, "q").quit is True
    assert terminal.handle_key(session, ord("Q")).quit is True
    assert terminal.handle_key(session, "x") == terminal.KeyResult()
    assert terminal.handle_key(session, -1) == terminal.KeyResult()


class FakeScreen:
    """Records writes and fails like curses when text runs off the window."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows, self.cols = rows, cols
        self.writes = []

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.writes.clear()

    def refresh(self):
        pass

    def addstr(self, y, x, text, attr=0):
        if y >= self.rows or x + len(text) >= self.cols:
            raise curses.error("addwstr() returned ERR")
        self.writes.append((y, x, text))


def test_required_size_covers_grid_and_status(classic_grid):
    rows, cols = terminal.required_size(classic_grid)
    lines = terminal.render_lines(classic_grid)
    assert rows == terminal.START_Y + len(lines)
    assert cols > terminal.START_X + len(terminal.MSG_BUDGET)


def test_draw_fits_exactly_in_required_size(session):
    rows, cols = terminal.required_size(session.grid)
    screen = FakeScreen(rows, cols)
    terminal._Screen(screen, session).draw(terminal.KeyResult(terminal.MSG_BUDGET, False))
    assert (0, terminal.START_X, terminal.TITLE) in screen.writes
    assert any(text == terminal.MSG_BUDGET for _, _, text in screen.writes)


def test_small_terminal_shows_notice_instead_of_crashing(session):
    screen = FakeScreen(10, 30)
    view = terminal._Screen(screen, session)
    view.draw(terminal.KeyResult(terminal.MSG_SOLVED, True))
    view.show_busy()
    assert screen.writes == [(0, 0, terminal.MSG_TOO_SMALL[:29])]
