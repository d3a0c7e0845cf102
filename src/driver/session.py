"""Run-level driver: owns one grid, resolves settings and records run events."""

from __future__ import annotations

import hashlib
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from contracts.errors import ConfigError
from feature_flags import coerce_bool, get_event_log_feature, is_event_log_enabled
from project_config import get_section
from sudoku_generator import generate_puzzle, to_string
from sudoku_grid import BOX_SIZES, Grid
from sudoku_solver import SolveReport, solve_with_report, validate_solution

from . import log as event_log

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROFILE = "dev"


@dataclass(frozen=True)
class SessionSettings:
    """Finalised run settings after precedence resolution."""

    profile: str
    default_size: int
    max_steps: Optional[int]
    time_limit: Optional[float]
    event_log: bool
    log_dir: Path
    log_max_bytes: int


def _parse_int(value: Any) -> Optional[int]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_float(value: Any) -> Optional[float]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and value.strip():
            return float(value)
    except (TypeError, ValueError):
        return None
    return None


def _first_override(env: Mapping[str, str], keys: Tuple[str, ...], parse) -> Any:
    for key in keys:
        parsed = parse(env.get(key))
        if parsed is not None:
            return parsed
    return None


def _positive_or_none(value: Any) -> Any:
    if value is None or value <= 0:
        return None
    return value


def resolve_settings(
    env: Mapping[str, str] | None = None,
    *,
    profile: str | None = None,
    cli: Mapping[str, Any] | None = None,
) -> SessionSettings:
    """Resolve settings with CLI > ``CLI_*`` env > plain env > ``config.toml``."""

    env = dict(os.environ if env is None else env)
    cli = dict(cli or {})
    grid_cfg = get_section("grid", {})
    solver_cfg = get_section("solver", {})
    log_cfg = get_section("log", {})

    resolved_profile = (profile or env.get("SUDOKU_PROFILE") or DEFAULT_PROFILE).lower()

    default_size = _parse_int(cli.get("size"))
    if default_size is None:
        default_size = _first_override(env, ("SUDOKU_GRID_SIZE",), _parse_int)
    if default_size is None:
        default_size = int(grid_cfg.get("default_size", 9))
    if default_size not in BOX_SIZES:
        raise ConfigError(f"grid size must be 4 or 9, got {default_size}")

    max_steps = _parse_int(cli.get("max_steps"))
    if max_steps is None:
        max_steps = _first_override(
            env, ("CLI_SUDOKU_SOLVER_MAX_STEPS", "SUDOKU_SOLVER_MAX_STEPS"), _parse_int
        )
    if max_steps is None:
        max_steps = _parse_int(solver_cfg.get("max_steps", 0))

    time_limit = _parse_float(cli.get("time_limit"))
    if time_limit is None:
        time_limit = _first_override(
            env, ("CLI_SUDOKU_SOLVER_TIME_LIMIT", "SUDOKU_SOLVER_TIME_LIMIT"), _parse_float
        )
    if time_limit is None:
        time_limit = _parse_float(solver_cfg.get("time_limit", 0.0))

    event_log_enabled = coerce_bool(cli.get("event_log"))
    if event_log_enabled is None:
        event_log_enabled = is_event_log_enabled(env, profile=resolved_profile)

    feature = get_event_log_feature(resolved_profile)
    log_dir = Path(str(feature.get("dir") or log_cfg.get("dir", "logs/events")))
    log_max_bytes = _parse_int(log_cfg.get("max_bytes")) or 10 * 1024 * 1024

    return SessionSettings(
        profile=resolved_profile,
        default_size=default_size,
        max_steps=_positive_or_none(max_steps),
        time_limit=_positive_or_none(time_limit),
        event_log=event_log_enabled,
        log_dir=log_dir,
        log_max_bytes=log_max_bytes,
    )


def grid_digest(grid: Grid) -> str:
    return hashlib.sha256(to_string(grid).encode("utf-8")).hexdigest()


class Session:
    """One run over one grid.

    The session is the only owner of its grid; :meth:`solve` and
    :meth:`validate` hand the grid to the solver for the duration of the
    call and return the boolean outcome the display reports.
    """

    def __init__(
        self,
        grid: Grid,
        settings: SessionSettings | None = None,
        *,
        source: str | None = None,
    ) -> None:
        self.grid = grid
        self.settings = settings or resolve_settings()
        self.source = source
        self.run_id = f"run-{uuid.uuid4().hex[:12]}"
        self.givens: FrozenSet[Tuple[int, int]] = frozenset(
            (r, c)
            for r in range(grid.size)
            for c in range(grid.size)
            if grid.get_value(r, c) != 0
        )
        self.last_report: SolveReport | None = None
        self._seq = 0
        if self.settings.event_log:
            event_log.configure(self.settings.log_dir, max_bytes=self.settings.log_max_bytes)

    @classmethod
    def from_file(cls, path: str | Path, settings: SessionSettings | None = None) -> "Session":
        from puzzle_source import read_puzzle

        grid = read_puzzle(path)
        session = cls(grid, settings, source=str(path))
        session._record("sudoku.loaded", clues=len(session.givens))
        return session

    @classmethod
    def generate(
        cls,
        percentage: int,
        size: int | None = None,
        *,
        seed: int | None = None,
        settings: SessionSettings | None = None,
    ) -> "Session":
        settings = settings or resolve_settings()
        grid = generate_puzzle(percentage, size or settings.default_size, seed=seed)
        session = cls(grid, settings, source="random")
        session._record("sudoku.generated", percentage=percentage, seed=seed, clues=len(session.givens))
        return session

    def is_given(self, row: int, col: int) -> bool:
        return (row, col) in self.givens

    def solve(self) -> bool:
        report = solve_with_report(
            self.grid,
            max_steps=self.settings.max_steps,
            time_limit=self.settings.time_limit,
        )
        self.last_report = report
        _LOGGER.info("solve %s: %s", self.run_id, report.outcome.value)
        self._record("sudoku.solved", **report.to_dict())
        return report.solved

    def validate(self) -> bool:
        valid = validate_solution(self.grid)
        _LOGGER.info("validate %s: %s", self.run_id, "valid" if valid else "invalid")
        self._record("sudoku.validated", valid=valid)
        return valid

    def _record(self, event: str, **fields: Any) -> Optional[Path]:
        if not self.settings.event_log:
            return None
        self._seq += 1
        payload: Dict[str, Any] = {
            "event": event,
            "run_id": self.run_id,
            "seq": self._seq,
            "profile": self.settings.profile,
            "source": self.source,
            "size": self.grid.size,
            "grid_digest": grid_digest(self.grid),
        }
        payload.update(fields)
        return event_log.append_event(payload)


__all__ = ["DEFAULT_PROFILE", "Session", "SessionSettings", "grid_digest", "resolve_settings"]
