"""Phase 1 support: feasibility probe and the artificial (auxiliary) problem.

When some constraint row has no basic variable, phase 1 appends an auxiliary
objective row, gives every such row an artificial variable and maximizes the
negated sum of artificials. Once that sum reaches zero the artificial columns
and the auxiliary row are removed again, leaving a feasible basis for phase 2.
"""

from __future__ import annotations

import logging

from .numeric import EPSILON, is_negative
from .pivot import pivot
from .tableau import Tableau

logger = logging.getLogger(__name__)


def is_inside_feasible_region(tableau: Tableau) -> bool:
    """Return True when every constraint row already has a basic variable."""
    return all(var is not None for var in tableau.basis)


def normalize_negative_rhs(tableau: Tableau, tolerance: float = EPSILON) -> list[int]:
    """Negate constraint rows with a negative right-hand side.

    A basic variable read from a negative const cell would be infeasible, so the
    row loses its basis and phase 1 assigns it an artificial variable instead.

    Returns:
        Indices of the rows that were negated.
    """
    negated: list[int] = []
    rhs = tableau.rhs()
    for row in range(tableau.num_constraints):
        if is_negative(float(rhs[row]), tolerance):
            tableau.scale_row(-1.0, row)
            tableau.set_basis(row, None)
            negated.append(row)
    if negated:
        logger.info("Negated constraint rows with negative RHS", extra={"rows": negated})
    return negated


def build_artificial_problem(tableau: Tableau) -> list[int]:
    """Augment the tableau with artificial variables and an auxiliary objective row.

    Steps:
        1. Append the auxiliary objective row.
        2. Insert an artificial column for every unassigned row and put -1 in the
           auxiliary row under it.
        3. Add every artificially based row into the auxiliary row, which cancels
           the artificial coefficients and yields the initial reduced costs.
        4. Negate the auxiliary row so that the "most negative reduced cost" rule
           drives the sum of artificials towards zero.

    Returns:
        Column indices of the inserted artificial variables.
    """
    aux_row = tableau.append_objective_row()
    artificial_columns: list[int] = []

    for row in range(tableau.num_constraints):
        if tableau.basis_of(row) is None:
            column = tableau.insert_artificial_column(row)
            tableau.set(aux_row, column, -1.0)
            artificial_columns.append(column)

    for row in range(tableau.num_constraints):
        var = tableau.basis_of(row)
        if var is not None and tableau.is_artificial(var):
            tableau.add_rows(row, aux_row, aux_row)

    tableau.scale_row(-1.0, aux_row)

    logger.info(
        "Built auxiliary problem",
        extra={
            "artificial_vars": len(artificial_columns),
            "auxiliary_objective": tableau.objective_value,
        },
    )
    return artificial_columns


def drive_out_artificials(
    tableau: Tableau, tolerance: float = EPSILON, vectorized: bool = True
) -> int:
    """Pivot artificial variables that are still basic (at zero level) out of the basis.

    Each such row is pivoted on its first non-artificial column with a non-zero
    entry. A row with no such entry is a linear combination of the other
    constraints and is deleted.

    Returns:
        Number of redundant constraint rows deleted.
    """
    removed = 0
    row = 0
    while row < tableau.num_constraints:
        var = tableau.basis_of(row)
        if var is None or not tableau.is_artificial(var):
            row += 1
            continue
        column = next(
            (
                col
                for col in range(tableau.artificial_start)
                if abs(tableau.get(row, col)) > tolerance
            ),
            None,
        )
        if column is None:
            logger.info("Deleting redundant constraint row", extra={"row": row + removed})
            tableau.delete_row(row)
            removed += 1
            continue
        logger.debug(
            "Driving artificial variable out of basis",
            extra={"row": row, "artificial": tableau.variable_name(var), "column": column},
        )
        pivot(tableau, row, column, vectorized=vectorized)
        row += 1
    return removed


def teardown_artificial_problem(
    tableau: Tableau, tolerance: float = EPSILON, vectorized: bool = True
) -> None:
    """Remove the auxiliary objective row and every artificial column.

    Columns are deleted from the highest index down so the indices of columns
    not yet deleted stay valid.
    """
    drive_out_artificials(tableau, tolerance=tolerance, vectorized=vectorized)
    tableau.delete_row(tableau.rows - 1)
    for column in range(tableau.num_vars - 1, tableau.artificial_start - 1, -1):
        tableau.delete_column(column)
    logger.info("Removed auxiliary problem", extra={"rows": tableau.rows, "cols": tableau.cols})
