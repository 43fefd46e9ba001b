"""Pivot selection rules for the tableau simplex method.

A pricing strategy chooses the entering column from the current objective row
and the leaving row through the minimum ratio test. The driver only talks to the
``PricingStrategy`` interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .numeric import EPSILON, is_positive, less_than

if TYPE_CHECKING:
    from .tableau import Tableau


class PricingStrategy(ABC):
    """Abstract base class for pivot selection rules."""

    @abstractmethod
    def select_entering_column(self, tableau: Tableau) -> int | None:
        """Return the entering variable column, or None when the objective row is optimal."""

    @abstractmethod
    def select_leaving_row(self, tableau: Tableau, column: int) -> int | None:
        """Return the leaving constraint row, or None when ``column`` is unbounded."""


class DantzigPricing(PricingStrategy):
    """Dantzig pricing: most negative reduced cost, minimum ratio leaving row.

    Ties are broken by the first (lowest) index in both searches, so a run is
    reproducible. This is not Bland's rule: degenerate problems can cycle, which
    is why the driver exposes an iteration budget and cycling diagnostics.
    """

    def __init__(self, tolerance: float = EPSILON):
        self.tolerance = tolerance

    def select_entering_column(self, tableau: Tableau) -> int | None:
        """Find the variable column with the most negative objective-row entry."""
        best: int | None = None
        best_value = 0.0
        for column, value in enumerate(tableau.reduced_costs()):
            if not less_than(value, 0.0, self.tolerance):
                continue
            if best is None or less_than(value, best_value, self.tolerance):
                best = column
                best_value = float(value)
        return best

    def select_leaving_row(self, tableau: Tableau, column: int) -> int | None:
        """Run the minimum ratio test over the constraint rows."""
        entries = tableau.column_values(column)
        rhs = tableau.rhs()
        best: int | None = None
        best_ratio = 0.0
        for row in range(tableau.num_constraints):
            entry = float(entries[row])
            if not is_positive(entry, self.tolerance):
                continue
            ratio = float(rhs[row]) / entry
            if best is None or less_than(ratio, best_ratio, self.tolerance):
                best = row
                best_ratio = ratio
        return best
