"""Read and write puzzle files in the plain row format or as JSON grid artifacts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from contracts.errors import CODE_BAD_CHAR, CODE_EMPTY_INPUT, CODE_SCHEMA, make_format_error
from sudoku_grid import Grid

_LOGGER = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})

PathLike = Union[str, Path]


def _is_json(path: Path) -> bool:
    return path.suffix.lower() in JSON_SUFFIXES


def read_puzzle(path: PathLike) -> Grid:
    """Load ``path`` into a new :class:`Grid` sized by the file contents.

    ``.json`` files are read as grid artifacts; anything else is the row
    format, one line per grid row with ``.`` or ``0`` for blanks.
    """
    path = Path(path)
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line_start = data.rfind(b"\n", 0, exc.start) + 1
        raise make_format_error(
            CODE_BAD_CHAR,
            f"byte 0x{data[exc.start]:02x} is not valid UTF-8",
            line=data.count(b"\n", 0, exc.start) + 1,
            column=exc.start - line_start + 1,
        ) from exc
    if not text.strip():
        raise make_format_error(CODE_EMPTY_INPUT, f"puzzle file '{path}' is empty")

    if _is_json(path):
        from contracts.artifacts import artifact_to_grid

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise make_format_error(
                CODE_SCHEMA, f"invalid JSON: {exc.msg}", line=exc.lineno, column=exc.colno
            ) from exc
        grid = artifact_to_grid(payload)
    else:
        grid = Grid.from_lines(text.splitlines())

    _LOGGER.debug("loaded %dx%d puzzle from %s", grid.size, grid.size, path)
    return grid


def write_puzzle(grid: Grid, path: PathLike, *, state: str | None = None) -> Path:
    """Write ``grid`` to ``path`` in the format implied by its suffix."""
    path = Path(path)
    if _is_json(path):
        from contracts.artifacts import grid_to_artifact

        payload = grid_to_artifact(grid, state=state)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    else:
        path.write_text("\n".join(grid.to_lines()) + "\n", encoding="utf-8")
    return path


__all__ = ["read_puzzle", "write_puzzle"]
