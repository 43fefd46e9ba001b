"""Configuration, status codes and result types for the tableau solver."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from .exceptions import InfeasibleProblemError, SolverConfigurationError, UnboundedProblemError
from .numeric import EPSILON


class SolveStatus(IntEnum):
    """Closed set of solver outcomes.

    The integer values are part of the public contract: ``OK = 0``,
    ``INFEASIBLE = -1`` and ``UNBOUNDED = -2``.
    """

    OK = 0
    INFEASIBLE = -1
    UNBOUNDED = -2


@dataclass
class SolverOptions:
    """Configuration options for the tableau simplex solver.

    Attributes:
        tolerance: Numerical tolerance for optimality, feasibility and ratio comparisons
                  (default: 1e-10).
        max_iterations: Pivot budget shared by both phases. None (default) means no limit;
                       since the pivoting rule does not prevent cycling, set this for
                       inputs that may be degenerate.
        use_vectorized_pivot: Eliminate the pivot column with one NumPy update (default: True).
                             False uses the row-by-row ``add_scaled_row_into`` loop.
        detect_cycling: Track basis history and log a warning when a basis repeats
                       (default: True). Detection never changes pivot choices.
        stall_window: Number of recent objective values kept for stall detection (default: 50).

    Examples:
        >>> options = SolverOptions()
        >>> options = SolverOptions(tolerance=1e-9, max_iterations=500)
    """

    tolerance: float = EPSILON
    max_iterations: int | None = None
    use_vectorized_pivot: bool = True
    detect_cycling: bool = True
    stall_window: int = 50

    def __post_init__(self) -> None:
        if self.tolerance <= 0:
            raise SolverConfigurationError(
                f"Tolerance must be positive, got {self.tolerance}. "
                f"Tolerance controls numerical precision for optimality and ratio checks."
            )
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise SolverConfigurationError(
                f"max_iterations must be positive or None, got {self.max_iterations}."
            )
        if self.stall_window <= 1:
            raise SolverConfigurationError(
                f"stall_window must be greater than 1, got {self.stall_window}."
            )


@dataclass
class SolveResult:
    """Represents the output of a two-phase simplex run.

    Attributes:
        status: SolveStatus of the run.
        objective: Value of the objective row's const cell. For INFEASIBLE results this is
                   the (negative) auxiliary objective reached by phase 1.
        values: Variable values keyed by name (``x0``, ``s1``, ...) for real and slack
                variables. Empty unless the status is OK.
        iterations: Total pivots performed in both phases.
        phase_one_iterations: Pivots performed in phase 1 (0 when it was skipped).
        basis: Basic variable column per constraint row of the final tableau.

    Examples:
        >>> result = solve_tableau(tableau)
        >>> if result.status is SolveStatus.OK:
        ...     print(result.objective, result.values["x0"])
    """

    status: SolveStatus
    objective: float = 0.0
    values: dict[str, float] = field(default_factory=dict)
    iterations: int = 0
    phase_one_iterations: int = 0
    basis: tuple[int | None, ...] = ()

    def raise_for_status(self) -> None:
        """Raise InfeasibleProblemError or UnboundedProblemError for a failed run."""
        if self.status == SolveStatus.INFEASIBLE:
            raise InfeasibleProblemError(
                f"Problem is infeasible: phase 1 ended with auxiliary objective "
                f"{self.objective:.6g}.",
                iterations=self.iterations,
            )
        if self.status == SolveStatus.UNBOUNDED:
            raise UnboundedProblemError(
                "Problem is unbounded: the entering column has no positive entry in any "
                "constraint row."
            )


@dataclass(frozen=True)
class ProgressInfo:
    """Progress information delivered after every pivot.

    Attributes:
        iteration: Total pivots performed so far.
        phase: Current phase (1 for feasibility, 2 for optimality).
        phase_iterations: Pivots performed in the current phase.
        pivot_row: Row of the pivot just performed.
        pivot_column: Column of the pivot just performed.
        objective_estimate: Const cell of the objective row driving the current phase.
        elapsed_time: Seconds since the solve started.
    """

    iteration: int
    phase: int
    phase_iterations: int
    pivot_row: int
    pivot_column: int
    objective_estimate: float
    elapsed_time: float


# Type alias for progress callback function
ProgressCallback = Callable[[ProgressInfo], None]
