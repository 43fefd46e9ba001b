"""Custom exceptions for the tableau simplex library."""

from __future__ import annotations


class TableauSolverError(Exception):
    """Base exception for all tableau solver errors.

    All custom exceptions in the tableau_simplex package inherit from this class,
    allowing users to catch all solver-related errors with a single except clause.

    Example:
        try:
            result = solve_tableau(tableau)
            result.raise_for_status()
        except TableauSolverError as e:
            print(f"Solver error: {e}")
    """


class InvalidTableauError(TableauSolverError):
    """Raised when a tableau description is malformed.

    This includes:
    - A header that is not three non-negative integers
    - Rows with the wrong number of cells
    - Cells that are not numbers
    - Basis indices that are out of range, fractional, or assigned twice

    Example:
        InvalidTableauError("line 3: expected 8 values, got 7", line=3)
    """

    def __init__(self, message: str, line: int | None = None):
        """Initialize with message and optional 1-based input line number."""
        super().__init__(message)
        self.line = line


class TableauStructureError(TableauSolverError):
    """Raised when a structural operation would break the tableau layout.

    Examples are deleting a column that is not an artificial variable, deleting
    the last objective row, or a basis that assigns one variable to two rows.
    """


class InfeasibleProblemError(TableauSolverError):
    """Raised when the constraints admit no non-negative solution.

    Phase 1 finished at an optimum of the auxiliary objective whose value is
    still below zero, so at least one artificial variable cannot be driven out.

    Example:
        InfeasibleProblemError(
            "Phase 1 ended with auxiliary objective -6.0; constraints are infeasible",
            iterations=2,
        )
    """

    def __init__(self, message: str, iterations: int = 0):
        """Initialize with message and optional iteration count."""
        super().__init__(message)
        self.iterations = iterations


class UnboundedProblemError(TableauSolverError):
    """Raised when the objective can increase without limit.

    The entering column chosen by the pricing rule has no positive entry in any
    constraint row, so the ratio test has no candidate.

    Example:
        UnboundedProblemError(
            "Unbounded problem detected: column x0 has no positive entry",
            entering_column=0,
            reduced_cost=-1.0,
        )
    """

    def __init__(
        self,
        message: str,
        entering_column: int | None = None,
        reduced_cost: float | None = None,
    ):
        """Initialize with message and optional diagnostic information."""
        super().__init__(message)
        self.entering_column = entering_column
        self.reduced_cost = reduced_cost


class NumericalInstabilityError(TableauSolverError):
    """Raised when a pivot is requested on a zero cell.

    The Gauss-Jordan step divides the pivot row by the pivot element, so a zero
    element leaves the basis undefined.
    """

    def __init__(self, message: str, pivot: tuple[int, int] | None = None):
        """Initialize with message and the offending (row, column)."""
        super().__init__(message)
        self.pivot = pivot


class IterationLimitError(TableauSolverError):
    """Raised when the iteration budget runs out before a phase terminates.

    The tableau pivoting rule has no anti-cycling guarantee, so an iteration
    budget is the only bound on degenerate inputs that cycle.

    Example:
        IterationLimitError(
            "Iteration limit reached: 100 iterations completed",
            iterations=100,
            phase=2,
            objective=12.5,
        )
    """

    def __init__(
        self,
        message: str,
        iterations: int = 0,
        phase: int | None = None,
        objective: float | None = None,
    ):
        """Initialize with message and solver state."""
        super().__init__(message)
        self.iterations = iterations
        self.phase = phase
        self.objective = objective


class SolverConfigurationError(TableauSolverError):
    """Raised when solver configuration or options are invalid.

    Example:
        SolverConfigurationError("max_iterations must be positive, got -1")
    """
