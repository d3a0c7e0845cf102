"""Backtracking solver and full-solution validator for :class:`sudoku_grid.Grid`."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from sudoku_grid import Grid

_LOGGER = logging.getLogger(__name__)


class SolveOutcome(str, enum.Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass(frozen=True)
class SolveReport:
    """Outcome and counters of a single search run."""

    outcome: SolveOutcome
    placements: int
    backtracks: int
    elapsed_ms: int

    @property
    def solved(self) -> bool:
        return self.outcome is SolveOutcome.SOLVED

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "placements": self.placements,
            "backtracks": self.backtracks,
            "elapsed_ms": self.elapsed_ms,
        }


def solve_with_report(
    grid: Grid,
    *,
    max_steps: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> SolveReport:
    """Fill ``grid`` in place by depth-first search over its empty cells.

    Cells are visited in the row-major order of :meth:`Grid.find_empty_cell`
    and digits are tried in ascending order, so the first solution found is
    deterministic. The search keeps an explicit stack of
    ``[row, col, next_digit]`` frames instead of recursing.

    ``max_steps`` caps the number of placements and ``time_limit`` the wall
    clock seconds; ``None`` or ``0`` means unbounded. Whenever the outcome is
    not :attr:`SolveOutcome.SOLVED`, every trial placement has been undone and
    the grid holds exactly its original values.
    """
    start = time.monotonic()
    size = grid.size
    placements = 0
    backtracks = 0

    def report(outcome: SolveOutcome) -> SolveReport:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        _LOGGER.debug(
            "solve finished: %s after %d placements, %d backtracks",
            outcome.value, placements, backtracks,
        )
        return SolveReport(outcome, placements, backtracks, elapsed_ms)

    first = grid.find_empty_cell()
    if first is None:
        return report(SolveOutcome.SOLVED)

    stack: List[List[int]] = [[first[0], first[1], 1]]
    while stack:
        if (max_steps and placements >= max_steps) or (
            time_limit and time.monotonic() - start > time_limit
        ):
            # unwind: every frame on the stack owns one trial placement
            for r, c, _ in stack:
                grid.set_value(r, c, 0)
            return report(SolveOutcome.BUDGET_EXHAUSTED)

        frame = stack[-1]
        r, c, num = frame
        grid.set_value(r, c, 0)
        while num <= size and not grid.is_valid(r, c, num):
            num += 1
        if num > size:
            stack.pop()
            backtracks += 1
            continue

        grid.set_value(r, c, num)
        frame[2] = num + 1
        placements += 1

        nxt = grid.find_empty_cell()
        if nxt is None:
            return report(SolveOutcome.SOLVED)
        stack.append([nxt[0], nxt[1], 1])

    return report(SolveOutcome.UNSOLVABLE)


def solve(grid: Grid) -> bool:
    """Solve ``grid`` in place; ``False`` leaves it unchanged."""
    return solve_with_report(grid).solved


def _has_duplicate(values: List[int], size: int) -> bool:
    seen = [False] * (size + 1)
    for v in values:
        if seen[v]:
            return True
        seen[v] = True
    return False


def validate_solution(grid: Grid) -> bool:
    """Return ``True`` only for a completely filled grid with no duplicates.

    Any empty (or out-of-range) cell fails the check outright. Rows, columns
    and boxes are then checked in that order; the first duplicate found ends
    the check.
    """
    size = grid.size
    rows = grid.rows()
    if any(not 1 <= v <= size for row in rows for v in row):
        return False

    for row in rows:
        if _has_duplicate(row, size):
            return False

    for c in range(size):
        if _has_duplicate([rows[r][c] for r in range(size)], size):
            return False

    b = grid.box_size
    for br in range(0, size, b):
        for bc in range(0, size, b):
            box = [rows[br + r][bc + c] for r in range(b) for c in range(b)]
            if _has_duplicate(box, size):
                return False

    return True


__all__ = [
    "SolveOutcome",
    "SolveReport",
    "solve",
    "solve_with_report",
    "validate_solution",
]
