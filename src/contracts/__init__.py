"""Error types and grid artifact contracts."""

from __future__ import annotations

from .errors import ConfigError, FormatError, FormatIssue, SudokuError

__all__ = [
    "ConfigError",
    "FormatError",
    "FormatIssue",
    "SudokuError",
]
