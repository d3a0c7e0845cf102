# sudoku_grid.py
# Grid state for 4x4 and 9x9 Sudoku: cell access, legality checks,
# loading from text rows and random partial fills.

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Tuple

from contracts.errors import (
    CODE_BAD_CHAR,
    CODE_DIGIT_RANGE,
    CODE_EMPTY_INPUT,
    CODE_HEADER_SIZE,
    CODE_LINE_LENGTH,
    CODE_ROW_COUNT,
    ConfigError,
    make_format_error,
)

_LOGGER = logging.getLogger(__name__)

BOX_SIZES = {4: 2, 9: 3}
SUPPORTED_SIZES = tuple(sorted(BOX_SIZES))
EMPTY_CHARS = frozenset(".0")

Cell = Tuple[int, int]


def box_size_for(size: int) -> int:
    """Return the box edge for ``size`` or raise :class:`ConfigError`."""
    if isinstance(size, int) and not isinstance(size, bool) and size in BOX_SIZES:
        return BOX_SIZES[size]
    raise ConfigError(f"grid size must be one of {SUPPORTED_SIZES}, got {size!r}")


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def _parse_row(line: str, size: int, lineno: int) -> List[int]:
    if len(line) != size:
        raise make_format_error(
            CODE_LINE_LENGTH,
            f"expected {size} characters, got {len(line)}",
            line=lineno,
        )
    row = []
    for col, ch in enumerate(line, start=1):
        if ch in EMPTY_CHARS:
            row.append(0)
        elif "1" <= ch <= "9":
            value = ord(ch) - ord("0")
            if value > size:
                raise make_format_error(
                    CODE_DIGIT_RANGE,
                    f"digit {ch} is out of range for a {size}x{size} grid",
                    line=lineno,
                    column=col,
                )
            row.append(value)
        else:
            raise make_format_error(
                CODE_BAD_CHAR, f"invalid character {ch!r}", line=lineno, column=col
            )
    return row


class Grid:
    """Mutable ``size x size`` Sudoku grid where ``0`` marks an empty cell."""

    def __init__(self, size: int = 9) -> None:
        self.box_size = box_size_for(size)
        self.size = size
        self._cells: List[List[int]] = [[0] * size for _ in range(size)]

    # ---------- Construction / loading ----------

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Grid":
        """Build a grid sized by the first line of ``lines`` and load it."""
        grid = cls()
        grid.load_from_lines(lines)
        return grid

    def load_from_lines(self, lines: Iterable[str]) -> None:
        """Replace the grid contents with rows read from ``lines``.

        The first line selects the size (exactly 4 or 9 characters). Rows
        are parsed into a scratch matrix, so a :class:`FormatError` leaves the
        grid untouched. Lines after the last expected row are ignored.
        """
        it = iter(lines)
        first = next(it, None)
        if first is None:
            raise make_format_error(CODE_EMPTY_INPUT, "puzzle input is empty")
        first = _strip_eol(first)
        if len(first) not in BOX_SIZES:
            raise make_format_error(
                CODE_HEADER_SIZE,
                f"first row must have 4 or 9 characters, got {len(first)}",
                line=1,
            )
        size = len(first)
        rows = [_parse_row(first, size, 1)]
        for lineno, line in enumerate(it, start=2):
            if len(rows) == size:
                break
            rows.append(_parse_row(_strip_eol(line), size, lineno))
        if len(rows) != size:
            raise make_format_error(
                CODE_ROW_COUNT, f"expected {size} rows, got {len(rows)}"
            )

        if size != self.size:
            _LOGGER.debug("resizing grid from %d to %d on load", self.size, size)
        self.size = size
        self.box_size = BOX_SIZES[size]
        self._cells = rows

    def generate_random(self, filled_percentage: int, rng: Optional[random.Random] = None) -> None:
        """Clear the grid and place random legal digits until the fill target is met.

        Each attempt draws a cell and a digit; the placement is kept only
        when the cell is empty and the digit is legal there. The percentage
        bound is the caller's concern.
        """
        rng = rng or random.Random()
        self.clear()
        target = (self.size * self.size * filled_percentage) // 100
        filled = 0
        attempts = 0
        while filled < target:
            attempts += 1
            row = rng.randrange(self.size)
            col = rng.randrange(self.size)
            num = rng.randrange(self.size) + 1
            if self._cells[row][col] == 0 and self.is_valid(row, col, num):
                self._cells[row][col] = num
                filled += 1
        _LOGGER.debug("placed %d cells in %d attempts", filled, attempts)

    def clear(self) -> None:
        for row in self._cells:
            row[:] = [0] * self.size

    # ---------- Queries ----------

    def is_valid(self, row: int, col: int, num: int) -> bool:
        """Return ``True`` when ``num`` is absent from the row, column and box of the cell.

        Cells outside the grid never accept a digit.
        """
        if not self.in_bounds(row, col):
            return False
        cells = self._cells
        if num in cells[row]:
            return False
        for r in range(self.size):
            if cells[r][col] == num:
                return False
        b = self.box_size
        box_row = row - row % b
        box_col = col - col % b
        for r in range(box_row, box_row + b):
            for c in range(box_col, box_col + b):
                if cells[r][c] == num:
                    return False
        return True

    def find_empty_cell(self) -> Optional[Cell]:
        """Return the first empty cell in row-major order, or ``None`` when full."""
        for r, row in enumerate(self._cells):
            for c, value in enumerate(row):
                if value == 0:
                    return (r, c)
        return None

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_value(self, row: int, col: int) -> int:
        if self.in_bounds(row, col):
            return self._cells[row][col]
        return 0

    def set_value(self, row: int, col: int, value: int) -> None:
        if self.in_bounds(row, col):
            self._cells[row][col] = value

    def filled_count(self) -> int:
        return sum(1 for row in self._cells for value in row if value != 0)

    # ---------- Snapshots ----------

    def rows(self) -> List[List[int]]:
        return [row[:] for row in self._cells]

    def to_lines(self) -> List[str]:
        return ["".join(str(v) if v else "." for v in row) for row in self._cells]

    def copy(self) -> "Grid":
        clone = Grid(self.size)
        clone._cells = self.rows()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, filled={self.filled_count()})"


__all__ = ["BOX_SIZES", "SUPPORTED_SIZES", "Grid", "box_size_for"]
