# sudoku_generator.py
# Validate generation requests, produce randomly pre-filled grids and
# convert grids to and from their row-major string form.

from typing import List, Optional

import logging
import random

from contracts.errors import CODE_HEADER_SIZE, ConfigError, make_format_error
from project_config import get_section
from sudoku_grid import BOX_SIZES, SUPPORTED_SIZES, Grid

_LOGGER = logging.getLogger(__name__)

GRID_CONFIG = get_section("grid", {})
GENERATOR_CONFIG = get_section("generator", {})

DEFAULT_SIZE = int(GRID_CONFIG.get("default_size", 9))
MIN_PERCENTAGE = int(GENERATOR_CONFIG.get("min_percentage", 10))
MAX_PERCENTAGE = int(GENERATOR_CONFIG.get("max_percentage", 50))
DEFAULT_PERCENTAGE = int(GENERATOR_CONFIG.get("default_percentage", 30))

# ---------- Utils ----------

def to_string(grid: Grid) -> str:
    return ''.join(str(grid.get_value(r, c)) for r in range(grid.size) for c in range(grid.size))

def from_string(s: str) -> Grid:
    s = s.strip().replace("\n", "").replace(" ", "")
    size = {16: 4, 81: 9}.get(len(s))
    if size is None:
        raise make_format_error(CODE_HEADER_SIZE, f"grid string must have 16 or 81 cells, got {len(s)}")
    return Grid.from_lines(s[r * size:(r + 1) * size] for r in range(size))

def print_grid(grid: Grid) -> str:
    size, b = grid.size, grid.box_size
    border = "+" + "+".join(["-" * (2 * b + 1)] * b) + "+"
    lines: List[str] = []
    for r in range(size):
        if r % b == 0:
            lines.append(border)
        row = []
        for c in range(size):
            v = grid.get_value(r, c)
            row.append(str(v) if v != 0 else ".")
            if c % b == b - 1:
                row.append("|")
        lines.append("| " + " ".join(row[:-1]) + " |")
    lines.append(border)
    return "\n".join(lines)

# ---------- Generation ----------

def check_request(percentage: int, size: int = DEFAULT_SIZE) -> None:
    """Raise :class:`ConfigError` unless ``size`` and ``percentage`` are supported."""
    if size not in BOX_SIZES:
        raise ConfigError(f"grid size must be one of {SUPPORTED_SIZES}, got {size!r}")
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise ConfigError(f"fill percentage must be an integer, got {percentage!r}")
    if not MIN_PERCENTAGE <= percentage <= MAX_PERCENTAGE:
        raise ConfigError(
            f"fill percentage must be between {MIN_PERCENTAGE} and {MAX_PERCENTAGE}, got {percentage}"
        )


def generate_puzzle(
    percentage: int = DEFAULT_PERCENTAGE,
    size: int = DEFAULT_SIZE,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Build a ``size x size`` grid with ``percentage`` percent of its cells
    holding random legal digits.

    Pass ``rng`` to share a random source, or ``seed`` for a reproducible
    grid; with neither, the system entropy source is used. The result is
    not guaranteed to be solvable.
    """
    check_request(percentage, size)
    rng = rng or random.Random(seed)
    grid = Grid(size)
    grid.generate_random(percentage, rng)
    _LOGGER.debug("generated %dx%d grid with %d clues", size, size, grid.filled_count())
    return grid


__all__ = [
    "DEFAULT_PERCENTAGE",
    "DEFAULT_SIZE",
    "MAX_PERCENTAGE",
    "MIN_PERCENTAGE",
    "check_request",
    "from_string",
    "generate_puzzle",
    "print_grid",
    "to_string",
]
