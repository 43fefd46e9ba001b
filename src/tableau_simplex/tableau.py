"""Dense tableau storage for the two-phase simplex method.

The tableau keeps one ``float64`` matrix with a row per equality constraint
followed by one objective row (two during phase 1). Columns are laid out as::

    x0 .. x{r-1} | s0 .. s{k-1} | a0 .. a{m-1} | z | const | basic

The ``z``, ``const`` and ``basic`` offsets are derived from the variable counts,
so inserting or deleting an artificial column moves them automatically.

The basic-variable assignment lives in a ``list[int | None]`` next to the numeric
matrix rather than in float cells. ``get``/``set`` still expose the ``basic``
column (``-1.0`` for an unassigned row) so callers can address every cell of the
documented layout.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .exceptions import TableauStructureError

UNASSIGNED = -1  # Basis-column value for a row with no basic variable.


class Tableau:
    """Simplex tableau with row arithmetic and structural resize operations.

    Attributes:
        num_real_vars: Number of decision variables in the original problem.
        num_slack_vars: Number of slack/surplus variables added by the modeller.
        num_artificial_vars: Number of phase-1 artificial variables currently present.

    Examples:
        >>> t = Tableau.from_array(
        ...     [[1.0, 1.0, 0.0, 4.0, 1], [-1.0, 0.0, 1.0, 0.0, -1]],
        ...     num_real_vars=1,
        ...     num_slack_vars=1,
        ...     num_constraints=1,
        ... )
        >>> t.rows, t.cols, t.rhs_column
        (2, 5, 3)
    """

    def __init__(
        self,
        values: np.ndarray | Sequence[Sequence[float]],
        num_real_vars: int,
        num_slack_vars: int,
        basis: Sequence[int | None],
        num_artificial_vars: int = 0,
    ):
        if num_real_vars < 0 or num_slack_vars < 0 or num_artificial_vars < 0:
            raise TableauStructureError(
                f"Variable counts must be non-negative, got real={num_real_vars}, "
                f"slack={num_slack_vars}, artificial={num_artificial_vars}."
            )
        self.num_real_vars = num_real_vars
        self.num_slack_vars = num_slack_vars
        self.num_artificial_vars = num_artificial_vars

        data = np.array(values, dtype=float)
        if data.ndim != 2 or data.shape[1] != self.num_vars + 2:
            raise TableauStructureError(
                f"Expected a 2-D array with {self.num_vars + 2} columns "
                f"(variables, z, const), got shape {data.shape}."
            )
        if data.shape[0] < len(basis) + 1:
            raise TableauStructureError(
                f"Tableau with {len(basis)} constraints needs at least {len(basis) + 1} rows, "
                f"got {data.shape[0]}."
            )
        self._values = data
        self._basis: list[int | None] = [None if b is None else int(b) for b in basis]
        for row, var in enumerate(self._basis):
            if var is not None and not 0 <= var < self.num_vars:
                raise TableauStructureError(
                    f"Row {row} names basic variable {var}, outside [0, {self.num_vars})."
                )

    @classmethod
    def from_array(
        cls,
        array: np.ndarray | Sequence[Sequence[float]],
        num_real_vars: int,
        num_slack_vars: int,
        num_constraints: int,
    ) -> Tableau:
        """Build a tableau from the full layout, basis column included.

        A negative basis cell marks a row without an initial basic variable.
        """
        data = np.array(array, dtype=float)
        width = num_real_vars + num_slack_vars + 3
        if data.ndim != 2 or data.shape[1] != width:
            raise TableauStructureError(
                f"Expected {width} columns (variables, z, const, basic), got shape {data.shape}."
            )
        basis: list[int | None] = []
        for row in range(num_constraints):
            cell = data[row, -1]
            basis.append(None if cell < 0 else int(cell))
        return cls(data[:, :-1], num_real_vars, num_slack_vars, basis)

    # ============================================================================
    # Layout
    # ============================================================================

    @property
    def num_vars(self) -> int:
        return self.num_real_vars + self.num_slack_vars + self.num_artificial_vars

    @property
    def num_constraints(self) -> int:
        return len(self._basis)

    @property
    def rows(self) -> int:
        return int(self._values.shape[0])

    @property
    def cols(self) -> int:
        return self.num_vars + 3

    @property
    def z_column(self) -> int:
        return self.num_vars

    @property
    def rhs_column(self) -> int:
        return self.num_vars + 1

    @property
    def basis_column(self) -> int:
        return self.num_vars + 2

    @property
    def objective_row(self) -> int:
        """Index of the objective row currently driving pivot selection."""
        return self.rows - 1

    @property
    def artificial_start(self) -> int:
        """Index of the first artificial column."""
        return self.num_real_vars + self.num_slack_vars

    def is_artificial(self, column: int) -> bool:
        return self.artificial_start <= column < self.num_vars

    def variable_name(self, column: int) -> str:
        """Return ``x#``, ``s#`` or ``a#`` for a variable column."""
        if 0 <= column < self.num_real_vars:
            return f"x{column}"
        if column < self.artificial_start:
            return f"s{column - self.num_real_vars}"
        if column < self.num_vars:
            return f"a{column - self.artificial_start}"
        raise IndexError(f"Column {column} is not a variable column (0..{self.num_vars - 1}).")

    # ============================================================================
    # Cell access
    # ============================================================================

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range [0, {self.rows}).")

    def _check_cell(self, row: int, col: int) -> None:
        self._check_row(row)
        if not 0 <= col < self.cols:
            raise IndexError(f"Column {col} out of range [0, {self.cols}).")

    def get(self, row: int, col: int) -> float:
        self._check_cell(row, col)
        if col == self.basis_column:
            if row >= self.num_constraints:
                return 0.0
            var = self._basis[row]
            return float(UNASSIGNED if var is None else var)
        return float(self._values[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        self._check_cell(row, col)
        if col == self.basis_column:
            # Objective rows carry no basic variable; their cell is ignored.
            if row < self.num_constraints:
                self.set_basis(row, None if value < 0 else int(value))
            return
        self._values[row, col] = value

    def basis_of(self, row: int) -> int | None:
        """Return the basic variable of a constraint row, or None if unassigned."""
        if not 0 <= row < self.num_constraints:
            raise IndexError(f"Row {row} is not a constraint row (0..{self.num_constraints - 1}).")
        return self._basis[row]

    def set_basis(self, row: int, column: int | None) -> None:
        if not 0 <= row < self.num_constraints:
            raise IndexError(f"Row {row} is not a constraint row (0..{self.num_constraints - 1}).")
        if column is not None and not 0 <= column < self.num_vars:
            raise IndexError(f"Column {column} is not a variable column (0..{self.num_vars - 1}).")
        self._basis[row] = column

    @property
    def basis(self) -> tuple[int | None, ...]:
        return tuple(self._basis)

    def column_values(self, col: int) -> np.ndarray:
        """Return a copy of a numeric column across every row."""
        if not 0 <= col < self.basis_column:
            raise IndexError(f"Column {col} is not a numeric column (0..{self.basis_column - 1}).")
        return self._values[:, col].copy()

    def row_values(self, row: int) -> np.ndarray:
        """Return a copy of a row's variable, z and const cells."""
        self._check_row(row)
        return self._values[row].copy()

    def reduced_costs(self) -> np.ndarray:
        """Objective-row entries of the variable columns."""
        return self._values[self.objective_row, : self.num_vars].copy()

    def rhs(self) -> np.ndarray:
        """Right-hand sides of the constraint rows."""
        return self._values[: self.num_constraints, self.rhs_column].copy()

    @property
    def objective_value(self) -> float:
        return float(self._values[self.objective_row, self.rhs_column])

    def variable_values(self) -> np.ndarray:
        """Current basic solution: basic variables read from const, the rest zero."""
        values = np.zeros(self.num_vars)
        for row, var in enumerate(self._basis):
            if var is not None:
                values[var] = self._values[row, self.rhs_column]
        return values

    def to_array(self) -> np.ndarray:
        """Return a copy of the full layout including the basis column."""
        basis_cells = np.zeros((self.rows, 1))
        for row in range(self.num_constraints):
            basis_cells[row, 0] = self.get(row, self.basis_column)
        return np.hstack([self._values, basis_cells])

    def copy(self) -> Tableau:
        return Tableau(
            self._values.copy(),
            self.num_real_vars,
            self.num_slack_vars,
            list(self._basis),
            num_artificial_vars=self.num_artificial_vars,
        )

    def check_invariants(self) -> None:
        """Raise TableauStructureError when two rows share a basic variable."""
        seen: dict[int, int] = {}
        for row, var in enumerate(self._basis):
            if var is None:
                continue
            if var in seen:
                raise TableauStructureError(
                    f"Variable {self.variable_name(var)} is basic in rows {seen[var]} and {row}."
                )
            seen[var] = row

    # ============================================================================
    # Row arithmetic (z marker and basis columns are never touched)
    # ============================================================================

    def _content_columns(self) -> np.ndarray:
        return np.r_[0 : self.num_vars, self.rhs_column]

    def add_scaled_row_into(
        self, scalar: float, source_row: int, target_row: int, dest_row: int
    ) -> None:
        """``dest = source * scalar + target``."""
        for row in (source_row, target_row, dest_row):
            self._check_row(row)
        cols = self._content_columns()
        self._values[dest_row, cols] = (
            self._values[source_row, cols] * scalar + self._values[target_row, cols]
        )

    def add_rows(self, x_row: int, y_row: int, dest_row: int) -> None:
        """``dest = x + y``."""
        self.add_scaled_row_into(1.0, x_row, y_row, dest_row)

    def subtract_rows(self, x_row: int, y_row: int, dest_row: int) -> None:
        """``dest = x - y``."""
        self.add_scaled_row_into(-1.0, y_row, x_row, dest_row)

    def scale_row(self, scalar: float, row: int) -> None:
        self._check_row(row)
        cols = self._content_columns()
        self._values[row, cols] *= scalar

    def add_scaled_row_to_all(self, source_row: int, scalars: np.ndarray) -> None:
        """Apply ``row_i += source * scalars[i]`` to every row in one update."""
        self._check_row(source_row)
        factors = np.asarray(scalars, dtype=float)
        if factors.shape != (self.rows,):
            raise TableauStructureError(
                f"Expected {self.rows} row factors, got shape {factors.shape}."
            )
        cols = self._content_columns()
        self._values[:, cols] += np.outer(factors, self._values[source_row, cols])

    # ============================================================================
    # Structural operations (each one replaces the backing array)
    # ============================================================================

    def append_objective_row(self) -> int:
        """Append a zero row whose z marker is 1 and return its index."""
        new_row = np.zeros((1, self._values.shape[1]))
        new_row[0, self.z_column] = 1.0
        self._values = np.vstack([self._values, new_row])
        return self.rows - 1

    def delete_row(self, target_row: int) -> None:
        self._check_row(target_row)
        if target_row >= self.num_constraints and self.rows - self.num_constraints <= 1:
            raise TableauStructureError("Cannot delete the only objective row.")
        self._values = np.delete(self._values, target_row, axis=0)
        if target_row < self.num_constraints:
            del self._basis[target_row]

    def insert_artificial_column(self, target_row: int) -> int:
        """Insert a unit artificial column basic in ``target_row`` and return its index."""
        if not 0 <= target_row < self.num_constraints:
            raise IndexError(
                f"Row {target_row} is not a constraint row (0..{self.num_constraints - 1})."
            )
        column = self.num_vars
        self._values = np.insert(self._values, column, 0.0, axis=1)
        self._values[target_row, column] = 1.0
        self.num_artificial_vars += 1
        self._basis[target_row] = column
        return column

    def delete_column(self, target_column: int) -> None:
        """Remove an artificial column, shifting later columns and basis indices left."""
        if not self.is_artificial(target_column):
            raise TableauStructureError(
                f"Column {target_column} is not an artificial variable column "
                f"({self.artificial_start}..{self.num_vars - 1}); only artificial columns "
                f"can be deleted."
            )
        self._values = np.delete(self._values, target_column, axis=1)
        self.num_artificial_vars -= 1
        for row, var in enumerate(self._basis):
            if var is None:
                continue
            if var == target_column:
                self._basis[row] = None
            elif var > target_column:
                self._basis[row] = var - 1

    def __repr__(self) -> str:
        return (
            f"Tableau(rows={self.rows}, cols={self.cols}, real={self.num_real_vars}, "
            f"slack={self.num_slack_vars}, artificial={self.num_artificial_vars}, "
            f"constraints={self.num_constraints})"
        )
