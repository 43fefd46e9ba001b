"""Gauss-Jordan pivot on a tableau cell."""

from __future__ import annotations

import logging

from .exceptions import NumericalInstabilityError
from .tableau import Tableau

logger = logging.getLogger(__name__)


def pivot(tableau: Tableau, pivot_row: int, pivot_column: int, vectorized: bool = True) -> None:
    """Exchange the basic variable of ``pivot_row`` for ``pivot_column``.

    The pivot row is scaled so the pivot cell becomes 1, then the pivot column is
    eliminated from every other row (objective rows included) with
    ``row_i = row_pivot * (-a_i) + row_i``. Afterwards the pivot column is a unit
    column and the pivot row's basis points at ``pivot_column``.

    Args:
        tableau: Tableau mutated in place.
        pivot_row: Constraint row leaving the basis.
        pivot_column: Variable column entering the basis.
        vectorized: Eliminate all rows with one NumPy outer-product update instead
                    of one ``add_scaled_row_into`` call per row.

    Raises:
        NumericalInstabilityError: If the pivot cell is exactly zero.
    """
    element = tableau.get(pivot_row, pivot_column)
    if element == 0.0:
        raise NumericalInstabilityError(
            f"Cannot pivot on zero element at row {pivot_row}, column {pivot_column}.",
            pivot=(pivot_row, pivot_column),
        )

    if logger.isEnabledFor(logging.DEBUG):
        leaving = tableau.basis_of(pivot_row)
        logger.debug(
            "Pivot",
            extra={
                "pivot_row": pivot_row,
                "pivot_column": pivot_column,
                "entering": tableau.variable_name(pivot_column),
                "leaving": tableau.variable_name(leaving) if leaving is not None else None,
                "element": element,
            },
        )

    tableau.set_basis(pivot_row, pivot_column)
    tableau.scale_row(1.0 / element, pivot_row)

    if vectorized:
        factors = -tableau.column_values(pivot_column)
        factors[pivot_row] = 0.0
        tableau.add_scaled_row_to_all(pivot_row, factors)
    else:
        for row in range(tableau.rows):
            if row != pivot_row:
                factor = -tableau.get(row, pivot_column)
                tableau.add_scaled_row_into(factor, pivot_row, row, row)

    # Remove elimination round-off from the entering column.
    for row in range(tableau.rows):
        tableau.set(row, pivot_column, 1.0 if row == pivot_row else 0.0)
