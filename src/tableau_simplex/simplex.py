"""Two-phase tableau simplex driver."""

from __future__ import annotations

import logging
import time
from enum import Enum

from .data import ProgressCallback, ProgressInfo, SolveResult, SolverOptions, SolveStatus
from .diagnostics import BasisHistory, ConvergenceMonitor
from .exceptions import IterationLimitError, TableauStructureError
from .numeric import approx_equal, is_negative
from .phase_one import (
    build_artificial_problem,
    is_inside_feasible_region,
    normalize_negative_rhs,
    teardown_artificial_problem,
)
from .pivot import pivot
from .simplex_pricing import DantzigPricing, PricingStrategy
from .tableau import Tableau


class SimplexState(Enum):
    """States of the iteration state machine.

    ``CHECKING -> {OPTIMAL, SELECTING_PIVOT}``, ``SELECTING_PIVOT -> {UNBOUNDED, PIVOTING}``,
    ``PIVOTING -> CHECKING``. ``INFEASIBLE`` is entered only by phase 1.
    """

    CHECKING = "checking"
    SELECTING_PIVOT = "selecting_pivot"
    PIVOTING = "pivoting"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    INFEASIBLE = "infeasible"


TERMINAL_STATES = frozenset({SimplexState.OPTIMAL, SimplexState.UNBOUNDED, SimplexState.INFEASIBLE})


class TableauSimplex:
    """Two-phase simplex solver operating on one tableau in place.

    Phase 1 runs only when some constraint row has no basic variable: it builds
    the auxiliary problem, maximizes the negated sum of artificials and removes
    the augmentation again. Phase 2 then maximizes the real objective row.

    Both phases share ``perform_one_iteration``: check optimality, choose the
    entering column and leaving row, pivot. Batch callers use ``solve()``;
    interactive or test drivers can call ``perform_one_iteration`` directly
    together with ``is_optimal()`` and ``is_unbounded()``.

    Attributes:
        tableau: The tableau being solved. Mutated in place.
        options: Solver configuration.
        pricing: Pivot selection rule.
        state: Current SimplexState.
        phase: Phase currently running (1 or 2).
        iterations: Pivots performed so far across both phases.

    Examples:
        >>> solver = TableauSimplex(tableau)
        >>> result = solver.solve()
        >>> result.status, result.objective
        (<SolveStatus.OK: 0>, 36.0)
    """

    def __init__(
        self,
        tableau: Tableau,
        options: SolverOptions | None = None,
        pricing: PricingStrategy | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self.options = options if options is not None else SolverOptions()
        self.logger = logging.getLogger(__name__)
        self.tableau = tableau
        self.tolerance = self.options.tolerance
        self.pricing = pricing if pricing is not None else DantzigPricing(self.tolerance)
        self.progress_callback = progress_callback

        self.state = SimplexState.CHECKING
        self.phase = 1
        self.iterations = 0
        self.phase_iterations = 0
        self.phase_one_iterations = 0
        self.last_pivot: tuple[int, int] | None = None
        self._start_time = time.time()
        self._reset_diagnostics()

    # ============================================================================
    # Single-step primitive
    # ============================================================================

    def is_optimal(self) -> bool:
        """True when no variable column of the current objective row is negative."""
        return not any(is_negative(float(v), self.tolerance) for v in self.tableau.reduced_costs())

    def is_unbounded(self) -> bool:
        return self.state is SimplexState.UNBOUNDED

    def perform_one_iteration(self) -> SimplexState:
        """Advance the state machine by one pivot, or into a terminal state.

        Returns:
            ``CHECKING`` after a pivot, otherwise the terminal state reached.

        Raises:
            IterationLimitError: If ``options.max_iterations`` pivots were already performed.
        """
        if self.state in TERMINAL_STATES:
            return self.state

        self.state = SimplexState.CHECKING
        if self.is_optimal():
            self.state = SimplexState.OPTIMAL
            return self.state

        self._check_iteration_limit()

        self.state = SimplexState.SELECTING_PIVOT
        column = self.pricing.select_entering_column(self.tableau)
        if column is None:
            self.state = SimplexState.OPTIMAL
            return self.state
        row = self.pricing.select_leaving_row(self.tableau, column)
        if row is None:
            self.state = SimplexState.UNBOUNDED
            self.logger.error(
                "Unbounded problem detected: entering column has no positive entry",
                extra={
                    "phase": self.phase,
                    "entering": self.tableau.variable_name(column),
                    "reduced_cost": self.tableau.get(self.tableau.objective_row, column),
                },
            )
            return self.state

        self.state = SimplexState.PIVOTING
        degenerate = approx_equal(
            self.tableau.get(row, self.tableau.rhs_column), 0.0, self.tolerance
        )
        pivot(self.tableau, row, column, vectorized=self.options.use_vectorized_pivot)
        self.iterations += 1
        self.phase_iterations += 1
        self.last_pivot = (row, column)
        self._record_diagnostics(degenerate)
        self._report_progress(row, column)

        self.state = SimplexState.CHECKING
        return self.state

    def _check_iteration_limit(self) -> None:
        limit = self.options.max_iterations
        if limit is not None and self.iterations >= limit:
            self.logger.error(
                "Iteration limit reached before optimality",
                extra={"phase": self.phase, "iterations": self.iterations, "max_iterations": limit},
            )
            raise IterationLimitError(
                f"Iteration limit reached: {self.iterations} iterations completed in phase "
                f"{self.phase} without reaching an optimal tableau.",
                iterations=self.iterations,
                phase=self.phase,
                objective=self.tableau.objective_value,
            )

    def _iterate_to_optimality(self) -> SolveStatus:
        while True:
            state = self.perform_one_iteration()
            if state is SimplexState.OPTIMAL:
                return SolveStatus.OK
            if state is SimplexState.UNBOUNDED:
                return SolveStatus.UNBOUNDED

    # ============================================================================
    # Phases
    # ============================================================================

    def _begin_phase(self, phase: int) -> None:
        self.phase = phase
        self.phase_iterations = 0
        self.state = SimplexState.CHECKING
        self._reset_diagnostics()

    def run_phase_one(self) -> SolveStatus:
        """Find a feasible basis, or report the problem infeasible.

        Returns:
            OK when a feasible basis is in place (phase 1 may have been skipped),
            INFEASIBLE when the auxiliary objective stays negative, UNBOUNDED if the
            auxiliary problem reports unboundedness. On INFEASIBLE the augmentation is
            left in the tableau.
        """
        self._begin_phase(1)
        normalize_negative_rhs(self.tableau, self.tolerance)
        if is_inside_feasible_region(self.tableau):
            self.logger.info("Phase 1 skipped (initial basis is feasible)")
            return SolveStatus.OK

        self.logger.info(
            "Phase 1: Finding initial feasible basis",
            extra={"unassigned_rows": sum(1 for var in self.tableau.basis if var is None)},
        )
        build_artificial_problem(self.tableau)
        status = self._iterate_to_optimality()
        self.phase_one_iterations = self.phase_iterations
        if status is SolveStatus.UNBOUNDED:
            return status

        auxiliary_objective = self.tableau.objective_value
        if is_negative(auxiliary_objective, self.tolerance):
            self.state = SimplexState.INFEASIBLE
            self.logger.error(
                "Problem is infeasible - no feasible solution exists",
                extra={
                    "iterations": self.phase_iterations,
                    "auxiliary_objective": auxiliary_objective,
                },
            )
            return SolveStatus.INFEASIBLE

        teardown_artificial_problem(
            self.tableau, tolerance=self.tolerance, vectorized=self.options.use_vectorized_pivot
        )
        self.logger.info(
            "Phase 1 complete",
            extra={
                "iterations": self.phase_iterations,
                "elapsed_ms": (time.time() - self._start_time) * 1000,
            },
        )
        return SolveStatus.OK

    def run_phase_two(self) -> SolveStatus:
        """Maximize the real objective row from a feasible basis.

        Raises:
            TableauStructureError: If the tableau still has unassigned rows or
                                   artificial variables (phase 1 did not succeed).
        """
        if self.tableau.num_artificial_vars > 0 or not is_inside_feasible_region(self.tableau):
            raise TableauStructureError(
                "Phase 2 requires a feasible basis without artificial variables; "
                "run phase 1 first and check that it returned OK."
            )
        self._begin_phase(2)
        self.logger.info("Phase 2: Optimizing from feasible basis")
        status = self._iterate_to_optimality()
        self.logger.info(
            "Phase 2 complete",
            extra={
                "iterations": self.phase_iterations,
                "total_iterations": self.iterations,
                "objective": self.tableau.objective_value,
                "elapsed_ms": (time.time() - self._start_time) * 1000,
            },
        )
        return status

    def solve(self, progress_callback: ProgressCallback | None = None) -> SolveResult:
        """Run phase 1 and phase 2 and collect the result.

        Args:
            progress_callback: Optional callback invoked after every pivot. Overrides the
                               callback given to the constructor.

        Returns:
            SolveResult with status, objective, variable values and iteration counts.

        Raises:
            IterationLimitError: If ``options.max_iterations`` is exhausted.
        """
        if progress_callback is not None:
            self.progress_callback = progress_callback
        self._start_time = time.time()

        self.logger.info(
            "Starting tableau simplex solver",
            extra={
                "real_vars": self.tableau.num_real_vars,
                "slack_vars": self.tableau.num_slack_vars,
                "constraints": self.tableau.num_constraints,
                "max_iterations": self.options.max_iterations,
                "tolerance": self.tolerance,
            },
        )

        status = self.run_phase_one()
        if status is SolveStatus.OK:
            status = self.run_phase_two()

        result = self._build_result(status)
        self.logger.info(
            "Solver complete",
            extra={
                "status": result.status.name,
                "objective": result.objective,
                "iterations": result.iterations,
                "elapsed_ms": (time.time() - self._start_time) * 1000,
            },
        )
        return result

    def _build_result(self, status: SolveStatus) -> SolveResult:
        values: dict[str, float] = {}
        if status is SolveStatus.OK:
            solution = self.tableau.variable_values()
            for column in range(self.tableau.artificial_start):
                value = float(solution[column])
                values[self.tableau.variable_name(column)] = (
                    0.0 if abs(value) < self.tolerance else float(round(value, 12))
                )
        return SolveResult(
            status=status,
            objective=float(round(self.tableau.objective_value, 12)),
            values=values,
            iterations=self.iterations,
            phase_one_iterations=self.phase_one_iterations,
            basis=self.tableau.basis,
        )

    # ============================================================================
    # Diagnostics and progress
    # ============================================================================

    def _reset_diagnostics(self) -> None:
        self.monitor = ConvergenceMonitor(
            window_size=self.options.stall_window, stall_threshold=self.tolerance
        )
        self.basis_history = BasisHistory() if self.options.detect_cycling else None
        self._stall_reported = False
        self._cycling_reported = False

    def _record_diagnostics(self, degenerate: bool) -> None:
        self.monitor.record_iteration(
            self.tableau.objective_value, is_degenerate=degenerate, iteration=self.iterations
        )
        if self.monitor.is_stalled() and not self._stall_reported:
            self._stall_reported = True
            self.logger.warning(
                "Objective has not improved for several pivots (degenerate tableau)",
                extra={"phase": self.phase, **self.monitor.get_diagnostic_summary()},
            )
        if self.basis_history is None:
            return
        self.basis_history.record_basis(self.tableau.basis)
        if self.basis_history.is_cycling() and not self._cycling_reported:
            self._cycling_reported = True
            self.logger.warning(
                "Basis revisited: pivoting is cycling and will not terminate without "
                "an iteration limit",
                extra={
                    "phase": self.phase,
                    "iterations": self.iterations,
                    "cycle_length": self.basis_history.get_cycle_length(),
                },
            )

    def _report_progress(self, row: int, column: int) -> None:
        if self.progress_callback is None:
            return
        self.progress_callback(
            ProgressInfo(
                iteration=self.iterations,
                phase=self.phase,
                phase_iterations=self.phase_iterations,
                pivot_row=row,
                pivot_column=column,
                objective_estimate=self.tableau.objective_value,
                elapsed_time=time.time() - self._start_time,
            )
        )
