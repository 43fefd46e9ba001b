"""Plain-text rendering of tableau state and solutions.

Only the read-only Tableau accessors are used here, so the solver core never
depends on how its state is displayed.
"""

from __future__ import annotations

from .numeric import EPSILON, clean
from .tableau import Tableau

CELL_WIDTH = 10


def column_header(tableau: Tableau, column: int) -> str:
    if column < tableau.num_vars:
        return tableau.variable_name(column)
    if column == tableau.z_column:
        return "z"
    if column == tableau.rhs_column:
        return "const"
    return "basic"


def row_label(tableau: Tableau, row: int) -> str:
    if row < tableau.num_constraints:
        return f"c{row}"
    return f"obj{row - tableau.num_constraints}"


def _format_value(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def format_tableau(tableau: Tableau, precision: int = 4, tolerance: float = EPSILON) -> str:
    """Render every cell of the tableau with column headers and row labels.

    Examples:
        >>> print(format_tableau(tableau))  # doctest: +SKIP
                  x0        x1        s0         z     const     basic
        c0      1.0000    0.0000    1.0000    0.0000    4.0000        s0
        obj0   -3.0000   -5.0000    0.0000    1.0000    0.0000
    """
    cells = clean(tableau.to_array(), tolerance)
    label_width = max(len(row_label(tableau, row)) for row in range(tableau.rows)) + 1
    lines = [
        " " * label_width
        + "".join(column_header(tableau, col).rjust(CELL_WIDTH) for col in range(tableau.cols))
    ]
    for row in range(tableau.rows):
        parts = [row_label(tableau, row).ljust(label_width)]
        for col in range(tableau.basis_column):
            parts.append(_format_value(cells[row, col], precision).rjust(CELL_WIDTH))
        if row < tableau.num_constraints:
            var = tableau.basis_of(row)
            parts.append(("-" if var is None else tableau.variable_name(var)).rjust(CELL_WIDTH))
        lines.append("".join(parts).rstrip())
    return "\n".join(lines)


def format_solution(tableau: Tableau, precision: int = 4, tolerance: float = EPSILON) -> str:
    """List the basic variables with their values, followed by the objective value."""
    lines = []
    rhs = clean(tableau.rhs(), tolerance)
    for row, var in enumerate(tableau.basis):
        if var is not None:
            lines.append(f"{tableau.variable_name(var)}: {_format_value(rhs[row], precision)}")
    objective = tableau.objective_value
    if abs(objective) < tolerance:
        objective = 0.0
    lines.append(f"z: {_format_value(objective, precision)}")
    return "\n".join(lines)
