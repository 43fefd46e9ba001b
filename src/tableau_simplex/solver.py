"""Public solver entrypoints."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from .data import ProgressCallback, SolveResult, SolverOptions
from .io import load_tableau as load_tableau_file
from .io import save_result as save_result_file
from .simplex import TableauSimplex
from .tableau import Tableau


def solve_tableau(
    tableau: Tableau,
    options: SolverOptions | None = None,
    max_iterations: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> SolveResult:
    """Solve a standard-form LP tableau with the two-phase simplex method.

    The tableau is mutated in place: on return it holds the final tableau of the
    run (optimal, unbounded, or the phase-1 tableau for infeasible problems).

    Args:
        tableau: Tableau to solve, e.g. from load_tableau().
        options: Solver configuration options. If None, uses defaults.
        max_iterations: Pivot budget. Overrides options.max_iterations if provided.
        progress_callback: Optional callback invoked with ProgressInfo after every pivot.

    Returns:
        SolveResult containing:
        - status: SolveStatus.OK, INFEASIBLE or UNBOUNDED
        - objective: Final value of the objective row's const cell
        - values: Real and slack variable values (OK only)
        - iterations / phase_one_iterations: Pivot counts

    Raises:
        IterationLimitError: If the pivot budget is exhausted.

    Examples:
        >>> from tableau_simplex import load_tableau, solve_tableau
        >>> tableau = load_tableau("examples/canonical_problem.txt")
        >>> result = solve_tableau(tableau)
        >>> print(result.status.name, result.objective)
        OK 36.0
    """
    if options is None:
        options = SolverOptions(max_iterations=max_iterations)
    elif max_iterations is not None:
        options = replace(options, max_iterations=max_iterations)
    # Fresh driver per call so no state is shared across runs.
    solver = TableauSimplex(tableau, options=options)
    return solver.solve(progress_callback=progress_callback)


def load_tableau(path: str | Path) -> Tableau:
    """Load a tableau from a text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidTableauError: If the file content is malformed.
    """
    return load_tableau_file(path)


def save_result(path: str | Path, result: SolveResult) -> None:
    """Save a solve result to a JSON file."""
    save_result_file(path, result)
