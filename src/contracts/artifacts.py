"""JSON grid artifacts: canonical export, schema validation and import.

An artifact is a flat JSON object describing one grid::

    {"type": "SudokuGrid", "schema_version": "1.0", "size": 9, "box_size": 3,
     "state": "puzzle", "grid": "530070000...", "artifact_id": "sha256-..."}

``grid`` is the row-major cell string with ``0`` for empty cells and
``artifact_id`` is the SHA-256 of the canonical JSON form of the object with
the ``artifact_id`` field removed.
"""

from __future__ import annotations

import hashlib
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema.exceptions import best_match

from sudoku_grid import BOX_SIZES, Grid

from .errors import CODE_SCHEMA, make_format_error

ARTIFACT_TYPE = "SudokuGrid"
SCHEMA_VERSION = "1.0"
STATE_PUZZLE = "puzzle"
STATE_SOLVED = "solved"

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "sudoku_grid.schema.json"


def canonicalize(obj: Dict[str, Any]) -> bytes:
    """Serialise the flat artifact *obj* as sorted-key JSON without whitespace."""

    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_artifact_id(obj: Dict[str, Any]) -> str:
    """Hash the canonical form of *obj* without its ``artifact_id`` field."""

    base = {key: value for key, value in obj.items() if key != "artifact_id"}
    digest = hashlib.sha256(canonicalize(base)).hexdigest()
    return f"sha256-{digest}"


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    return json.loads(_SCHEMA_PATH.read_text("utf-8"))


@lru_cache(maxsize=1)
def _validator() -> Any:
    schema = load_schema()
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _error_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def grid_to_artifact(grid: Grid, *, state: str | None = None) -> Dict[str, Any]:
    """Describe ``grid`` as an artifact; ``state`` defaults to ``solved`` for valid solutions."""

    if state is None:
        from sudoku_solver import validate_solution

        state = STATE_SOLVED if validate_solution(grid) else STATE_PUZZLE

    cells = "".join(str(v) for row in grid.rows() for v in row)
    artifact: Dict[str, Any] = {
        "type": ARTIFACT_TYPE,
        "schema_version": SCHEMA_VERSION,
        "size": grid.size,
        "box_size": grid.box_size,
        "state": state,
        "grid": cells,
    }
    artifact["artifact_id"] = compute_artifact_id(artifact)
    validate_artifact(artifact)
    return artifact


def validate_artifact(obj: Any) -> None:
    """Raise :class:`FormatError` unless ``obj`` is a well-formed grid artifact."""

    error = best_match(_validator().iter_errors(obj))
    if error is not None:
        raise make_format_error(CODE_SCHEMA, f"{_error_path(error)}: {error.message}")

    # JSON Schema treats 4.0 as equal to 4
    for field in ("size", "box_size"):
        value = obj[field]
        if isinstance(value, bool) or not isinstance(value, int):
            raise make_format_error(CODE_SCHEMA, f"$.{field}: {value!r} is not an integer")

    size = obj["size"]
    if obj["box_size"] != BOX_SIZES[size]:
        raise make_format_error(
            CODE_SCHEMA, f"$.box_size: {obj['box_size']} does not match size {size}"
        )
    if len(obj["grid"]) != size * size:
        raise make_format_error(
            CODE_SCHEMA, f"$.grid: expected {size * size} cells, got {len(obj['grid'])}"
        )
    expected_id = compute_artifact_id(obj)
    if obj["artifact_id"] != expected_id:
        raise make_format_error(CODE_SCHEMA, "$.artifact_id: digest does not match contents")


def artifact_to_grid(obj: Any) -> Grid:
    """Validate ``obj`` and build the :class:`Grid` it describes."""

    validate_artifact(obj)
    size = obj["size"]
    cells = obj["grid"]
    return Grid.from_lines(cells[r * size:(r + 1) * size] for r in range(size))


__all__ = [
    "ARTIFACT_TYPE",
    "SCHEMA_VERSION",
    "STATE_PUZZLE",
    "STATE_SOLVED",
    "artifact_to_grid",
    "canonicalize",
    "compute_artifact_id",
    "grid_to_artifact",
    "load_schema",
    "validate_artifact",
]
