from __future__ import annotations

import random

import pytest

from conftest import CLASSIC_PUZZLE
from contracts.errors import ConfigError, FormatError
from sudoku_grid import Grid


def test_new_grid_is_empty_with_matching_box_size():
    for size, box in ((4, 2), (9, 3)):
        grid = Grid(size)
        assert grid.size == size
        assert grid.box_size == box
        assert grid.filled_count() == 0
        assert grid.find_empty_cell() == (0, 0)


@pytest.mark.parametrize("size", [0, 3, 5, 6, 16, "9", 9.0, 4.0, None])
def test_unsupported_size_is_config_error(size):
    with pytest.raises(ConfigError):
        Grid(size)


def test_load_reads_back_digits_and_blanks(classic_grid):
    for r, line in enumerate(CLASSIC_PUZZLE):
        for c, ch in enumerate(line):
            expected = 0 if ch == "." else int(ch)
            assert classic_grid.get_value(r, c) == expected
    assert classic_grid.to_lines() == CLASSIC_PUZZLE


def test_load_accepts_zero_as_blank_and_strips_line_endings():
    grid = Grid.from_lines(["1200\r\n", "0.4.\n", "....\n", "...1\n"])
    assert grid.rows() == [[1, 2, 0, 0], [0, 0, 4, 0], [0, 0, 0, 0], [0, 0, 0, 1]]


def test_load_ignores_lines_after_last_row():
    grid = Grid.from_lines(["1234", "....", "....", "....", "garbage", ""])
    assert grid.size == 4
    assert grid.get_value(0, 3) == 4


def test_load_resizes_existing_grid():
    grid = Grid(9)
    grid.set_value(0, 0, 9)
    grid.load_from_lines(["1...", "....", "....", "...."])
    assert grid.size == 4
    assert grid.box_size == 2
    assert grid.get_value(0, 0) == 1
    assert grid.get_value(5, 5) == 0


def test_load_does_not_check_duplicates():
    grid = Grid.from_lines(["11..", "....", "....", "...."])
    assert grid.get_value(0, 0) == grid.get_value(0, 1) == 1


@pytest.mark.parametrize(
    "lines, code, line",
    [
        ([], "empty_input", None),
        (["12345"], "header_size", 1),
        (["123"], "header_size", 1),
        (["1234567890"], "header_size", 1),
        (CLASSIC_PUZZLE[:3] + ["8...6..3"] + CLASSIC_PUZZLE[4:], "line_length", 4),
        (["12x4", "....", "....", "...."], "bad_char", 1),
        (["1234", "..5.", "....", "...."], "digit_range", 2),
        (["5...", "....", "....", "...."], "digit_range", 1),
        (CLASSIC_PUZZLE[:8], "row_count", None),
        (["1234", "", "....", "...."], "line_length", 2),
    ],
)
def test_malformed_input_raises_format_error(lines, code, line):
    with pytest.raises(FormatError) as excinfo:
        Grid.from_lines(lines)
    assert excinfo.value.code == code
    assert excinfo.value.issue.line == line


def test_bad_character_reports_column():
    with pytest.raises(FormatError) as excinfo:
        Grid.from_lines(["12x4", "....", "....", "...."])
    assert excinfo.value.issue.column == 3
    assert "line 1, column 3" in str(excinfo.value)


def test_failed_load_leaves_grid_unchanged(classic_grid):
    before = classic_grid.rows()
    with pytest.raises(FormatError):
        classic_grid.load_from_lines(["1234", "..", "....", "...."])
    assert classic_grid.size == 9
    assert classic_grid.rows() == before


def test_is_valid_checks_row_column_and_box(classic_grid):
    # (0, 2) is empty; 5 and 3 are in its row, 8 in its column, 6 and 9 in its box
    assert not classic_grid.is_valid(0, 2, 5)
    assert not classic_grid.is_valid(0, 2, 8)
    assert not classic_grid.is_valid(0, 2, 9)
    assert classic_grid.is_valid(0, 2, 4)
    assert classic_grid.is_valid(0, 2, 1)


def _brute_force_valid(grid: Grid, row: int, col: int, num: int) -> bool:
    b = grid.box_size
    peers = set()
    for i in range(grid.size):
        peers.add((row, i))
        peers.add((i, col))
    for r in range(row - row % b, row - row % b + b):
        for c in range(col - col % b, col - col % b + b):
            peers.add((r, c))
    return all(grid.get_value(r, c) != num for r, c in peers)


def test_is_valid_matches_peer_scan_on_random_states():
    rng = random.Random(11)
    for size in (4, 9):
        grid = Grid(size)
        for _ in range(size * 3):
            grid.set_value(rng.randrange(size), rng.randrange(size), rng.randrange(size) + 1)
        for r in range(size):
            for c in range(size):
                for num in range(1, size + 1):
                    assert grid.is_valid(r, c, num) == _brute_force_valid(grid, r, c, num)


def test_find_empty_cell_uses_row_major_order():
    grid = Grid.from_lines(["1234", "34.2", "....", "...."])
    assert grid.find_empty_cell() == (1, 2)
    grid.set_value(1, 2, 1)
    assert grid.find_empty_cell() == (2, 0)


def test_find_empty_cell_on_full_grid(small_solution):
    assert small_solution.find_empty_cell() is None


def test_out_of_range_access_is_ignored(small_solution):
    assert small_solution.get_value(-1, 0) == 0
    assert small_solution.get_value(0, 4) == 0
    before = small_solution.rows()
    small_solution.set_value(4, 0, 1)
    small_solution.set_value(0, -1, 1)
    assert small_solution.rows() == before


def test_generate_random_fills_exact_count_with_legal_digits():
    grid = Grid(9)
    grid.generate_random(30, random.Random(2024))
    assert grid.filled_count() == 81 * 30 // 100 == 24
    for r in range(9):
        for c in range(9):
            value = grid.get_value(r, c)
            if value:
                grid.set_value(r, c, 0)
                assert grid.is_valid(r, c, value)
                grid.set_value(r, c, value)


def test_generate_random_clears_previous_contents(classic_grid):
    classic_grid.generate_random(10, random.Random(1))
    assert classic_grid.filled_count() == 8


def test_generate_random_is_deterministic_for_a_seed():
    a, b = Grid(4), Grid(4)
    a.generate_random(25, random.Random(5))
    b.generate_random(25, random.Random(5))
    assert a == b
    assert a.filled_count() == 4


def test_copy_is_independent(classic_grid):
    clone = classic_grid.copy()
    assert clone == classic_grid
    clone.set_value(0, 2, 4)
    assert clone != classic_grid


def test_is_valid_rejects_cells_outside_the_grid(small_solution):
    empty = Grid(9)
    # row -1 would otherwise alias the last row
    empty.set_value(8, 0, 5)
    assert not empty.is_valid(-1, 0, 1)
    assert not empty.is_valid(0, -1, 1)
    assert not empty.is_valid(9, 0, 1)
    assert not small_solution.is_valid(0, 4, 1)
    assert empty.is_valid(0, 1, 1)
