from __future__ import annotations

from pathlib import Path

import pytest

from sudoku_grid import Grid

CLASSIC_PUZZLE = [
    "53..7....",
    "6..195...",
    ".98....6.",
    "8...6...3",
    "4..8.3..1",
    "7...2...6",
    ".6....28.",
    "...419..5",
    "....8..79",
]

CLASSIC_SOLUTION = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

SMALL_SOLUTION = ["1234", "3412", "2143", "4321"]


@pytest.fixture
def classic_grid() -> Grid:
    return Grid.from_lines(CLASSIC_PUZZLE)


@pytest.fixture
def classic_file(tmp_path: Path) -> Path:
    path = tmp_path / "classic.txt"
    path.write_text("\n".join(CLASSIC_PUZZLE) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def small_solution() -> Grid:
    return Grid.from_lines(SMALL_SOLUTION)
