"""Command-line interface: solve a tableau file and print the result."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .data import ProgressInfo, SolverOptions, SolveStatus
from .exceptions import InvalidTableauError, IterationLimitError, SolverConfigurationError
from .io import load_tableau, save_result
from .numeric import EPSILON
from .report import format_solution, format_tableau
from .simplex import TableauSimplex
from .tableau import Tableau

EXIT_INVALID_INPUT = 1
EXIT_ITERATION_LIMIT = 3


def exit_code(status: SolveStatus) -> int:
    """Map a SolveStatus onto a process exit code (0, 255 and 254)."""
    return int(status) % 256


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tableau-simplex",
        description="Solve a standard-form linear program with the two-phase tableau simplex method.",
    )
    parser.add_argument("path", help="Tableau input file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    display = parser.add_mutually_exclusive_group()
    display.add_argument(
        "--trace", action="store_true", help="Print the tableau after every pivot"
    )
    display.add_argument(
        "--step",
        action="store_true",
        help="Print the tableau after every pivot and wait for Enter before continuing",
    )
    display.add_argument("-q", "--quiet", action="store_true", help="Only print the status line")
    parser.add_argument(
        "--tolerance", type=float, default=EPSILON, help=f"Numerical tolerance (default: {EPSILON})"
    )
    parser.add_argument(
        "--max-iterations", type=int, default=None, help="Pivot budget (default: unlimited)"
    )
    parser.add_argument("-o", "--output", help="Write the result as JSON to this path")
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )


class _IterationPrinter:
    """Progress callback that renders every pivot and optionally waits for the user."""

    def __init__(self, tableau: Tableau, pause: bool):
        self.tableau = tableau
        self.pause = pause

    def __call__(self, info: ProgressInfo) -> None:
        row, column = info.pivot_row, info.pivot_column
        print(
            f"\nPhase {info.phase}, iteration {info.phase_iterations}: "
            f"pivot row c{row}, column {self.tableau.variable_name(column)}"
        )
        print(format_tableau(self.tableau))
        print(format_solution(self.tableau))
        if self.pause:
            try:
                input("Press Enter to continue . . .")
            except EOFError:
                self.pause = False


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        options = SolverOptions(tolerance=args.tolerance, max_iterations=args.max_iterations)
    except SolverConfigurationError as exc:
        parser.error(str(exc))

    try:
        tableau = load_tableau(args.path)
    except (OSError, InvalidTableauError) as exc:
        print(f"error: {args.path}: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if not args.quiet:
        print("Initial tableau:")
        print(format_tableau(tableau))

    callback = None
    if args.trace or args.step:
        callback = _IterationPrinter(tableau, pause=args.step)

    solver = TableauSimplex(tableau, options=options)
    try:
        result = solver.solve(progress_callback=callback)
    except IterationLimitError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ITERATION_LIMIT

    if not args.quiet and result.status is SolveStatus.OK:
        print("\nFinal tableau:")
        print(format_tableau(tableau))
        print("\nFinal solution:")
        print(format_solution(tableau))
    print(f"Status: {result.status.name} ({int(result.status)}), iterations={result.iterations}")

    if args.output:
        save_result(args.output, result)
    return exit_code(result.status)


if __name__ == "__main__":
    sys.exit(main())
