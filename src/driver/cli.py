"""Command line entry point for loading, generating, solving and validating grids."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List

from contracts.errors import SudokuError
from sudoku_generator import DEFAULT_PERCENTAGE, print_grid
from sudoku_solver import SolveOutcome

from .session import Session, SessionSettings, resolve_settings

EXIT_OK = 0
EXIT_NEGATIVE = 1
EXIT_ERROR = 2

_LOGGER = logging.getLogger(__name__)


def _settings(args: argparse.Namespace) -> SessionSettings:
    cli: Dict[str, Any] = {
        "max_steps": getattr(args, "max_steps", None),
        "time_limit": getattr(args, "time_limit", None),
        "event_log": True if args.event_log else None,
    }
    if getattr(args, "size", None) is not None:
        cli["size"] = args.size
    return resolve_settings(profile=args.profile, cli=cli)


def _open(args: argparse.Namespace) -> Session:
    settings = _settings(args)
    if getattr(args, "file", None):
        return Session.from_file(args.file, settings)
    return Session.generate(args.random, args.size, seed=args.seed, settings=settings)


def cmd_show(args: argparse.Namespace) -> int:
    session = _open(args)
    print(print_grid(session.grid))
    return EXIT_OK


def cmd_solve(args: argparse.Namespace) -> int:
    session = _open(args)
    solved = session.solve()
    report = session.last_report
    print(print_grid(session.grid))
    if solved:
        print("Puzzle solved successfully!")
    elif report is not None and report.outcome is SolveOutcome.BUDGET_EXHAUSTED:
        print("Search stopped: solver budget exhausted.")
    else:
        print("No solution exists for this puzzle!")
    if args.out and solved:
        from puzzle_source import write_puzzle

        write_puzzle(session.grid, args.out)
    return EXIT_OK if solved else EXIT_NEGATIVE


def cmd_validate(args: argparse.Namespace) -> int:
    session = _open(args)
    valid = session.validate()
    print("Solution is valid!" if valid else "Solution is invalid!")
    return EXIT_OK if valid else EXIT_NEGATIVE


def cmd_random(args: argparse.Namespace) -> int:
    settings = _settings(args)
    session = Session.generate(args.percentage, args.size, seed=args.seed, settings=settings)
    if args.out:
        from puzzle_source import write_puzzle

        path = write_puzzle(session.grid, args.out)
        print(f"Saved {session.grid.size}x{session.grid.size} puzzle to {path}")
    else:
        print("\n".join(session.grid.to_lines()))
    return EXIT_OK


def cmd_play(args: argparse.Namespace) -> int:
    from .terminal import run

    return run(_open(args))


def cmd_export(args: argparse.Namespace) -> int:
    from puzzle_source import write_puzzle

    session = _open(args)
    path = write_puzzle(session.grid, args.out)
    print(f"Wrote {path}")
    return EXIT_OK


def cmd_pdf(args: argparse.Namespace) -> int:
    from make_sudoku_pdf import render_pdf, resolve_output_path

    settings = _settings(args)
    grids, labels = [], []
    for name in args.files:
        session = Session.from_file(name, settings)
        grids.append(session.grid.copy())
        labels.append(name)
        if args.solutions:
            if session.solve():
                grids.append(session.grid.copy())
                labels.append(f"{name} (solution)")
            else:
                _LOGGER.warning("no solution for %s; skipping solution page", name)
    out = render_pdf(grids, resolve_output_path(args.out), labels=labels)
    print(f"PDF with {len(grids)} grids saved to: {out.resolve()}")
    return EXIT_OK


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", default=None, help="Settings profile (default: SUDOKU_PROFILE or dev)")
    parser.add_argument(
        "--event-log",
        action="store_true",
        help="Append run events to the JSONL event log",
    )


def _add_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", nargs="?", help="Puzzle file (.txt rows or .json artifact)")
    source.add_argument("--random", type=int, metavar="PERCENT", help="Generate a grid instead of loading one")
    parser.add_argument("--size", type=int, choices=(4, 9), default=None)
    parser.add_argument("--seed", type=int, default=None)


def _add_limits(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max-steps", type=int, default=None, help="Placement budget (0 = unbounded)")
    parser.add_argument("--time-limit", type=float, default=None, help="Seconds before giving up (0 = unbounded)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sudoku", description="Backtracking Sudoku solver for 4x4 and 9x9 grids")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print a puzzle")
    _add_source(show)
    _add_common(show)
    show.set_defaults(func=cmd_show)

    solve = sub.add_parser("solve", help="Solve a puzzle and print the result")
    _add_source(solve)
    _add_common(solve)
    _add_limits(solve)
    solve.add_argument("--out", default=None, help="Write the solved grid to this file")
    solve.set_defaults(func=cmd_solve)

    validate = sub.add_parser("validate", help="Check that a filled grid is a valid solution")
    _add_source(validate)
    _add_common(validate)
    validate.set_defaults(func=cmd_validate)

    random_cmd = sub.add_parser("random", help="Generate a randomly pre-filled grid")
    random_cmd.add_argument("percentage", type=int, nargs="?", default=DEFAULT_PERCENTAGE)
    random_cmd.add_argument("--size", type=int, choices=(4, 9), default=None)
    random_cmd.add_argument("--seed", type=int, default=None)
    random_cmd.add_argument("--out", default=None, help="Write the grid to this file")
    _add_common(random_cmd)
    random_cmd.set_defaults(func=cmd_random)

    play = sub.add_parser("play", help="Interactive terminal display")
    _add_source(play)
    _add_common(play)
    _add_limits(play)
    play.set_defaults(func=cmd_play)

    export = sub.add_parser("export", help="Convert a puzzle to another file format")
    _add_source(export)
    _add_common(export)
    export.add_argument("--out", required=True, help="Target path; .json writes a grid artifact")
    export.set_defaults(func=cmd_export)

    pdf = sub.add_parser("pdf", help="Render puzzles to a PDF pack")
    pdf.add_argument("files", nargs="+")
    pdf.add_argument("--out", default=None)
    pdf.add_argument("--solutions", action="store_true", help="Add a solved copy after each puzzle")
    _add_common(pdf)
    pdf.set_defaults(func=cmd_pdf)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except SudokuError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
