"""Shared error types for grid loading, generation and configuration."""

from __future__ import annotations


from dataclasses import dataclass
from typing import Optional

CODE_EMPTY_INPUT = "empty_input"
CODE_HEADER_SIZE = "header_size"
CODE_LINE_LENGTH = "line_length"
CODE_BAD_CHAR = "bad_char"
CODE_DIGIT_RANGE = "digit_range"
CODE_ROW_COUNT = "row_count"
CODE_SCHEMA = "schema"


@dataclass(frozen=True)
class FormatIssue:
    """Single finding produced while parsing puzzle input.

    ``line`` and ``column`` are 1-based and ``None`` when the issue is not
    tied to a position (for example a missing row).
    """

    code: str
    msg: str
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.line is None:
            return self.msg
        if self.column is None:
            return f"line {self.line}: {self.msg}"
        return f"line {self.line}, column {self.column}: {self.msg}"


class SudokuError(Exception):
    """Base class for errors raised by the grid core."""


class ConfigError(SudokuError, ValueError):
    """Raised for unsupported grid sizes, fill percentages or settings."""


class FormatError(SudokuError, ValueError):
    """Raised when puzzle input cannot be parsed into a grid."""

    def __init__(self, issue: FormatIssue) -> None:
        super().__init__(issue.describe())
        self.issue = issue

    @property
    def code(self) -> str:
        return self.issue.code


def make_format_error(
    code: str, msg: str, line: Optional[int] = None, column: Optional[int] = None
) -> FormatError:
    """Construct a :class:`FormatError` around a fresh :class:`FormatIssue`."""

    return FormatError(FormatIssue(code=code, msg=msg, line=line, column=column))


__all__ = [
    "CODE_BAD_CHAR",
    "CODE_DIGIT_RANGE",
    "CODE_EMPTY_INPUT",
    "CODE_HEADER_SIZE",
    "CODE_LINE_LENGTH",
    "CODE_ROW_COUNT",
    "CODE_SCHEMA",
    "ConfigError",
    "FormatError",
    "FormatIssue",
    "SudokuError",
    "make_format_error",
]
