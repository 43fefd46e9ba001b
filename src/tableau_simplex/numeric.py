"""Floating-point tolerance helpers shared by every simplex comparison.

Pivots accumulate round-off, so no decision in the solver compares raw floats.
Optimality, feasibility and ratio comparisons go through these helpers with the
configured tolerance instead.
"""

from __future__ import annotations

import numpy as np

EPSILON = 1.0e-10  # Well above double machine epsilon (2.22e-16).


def approx_equal(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Return True when ``|a - b| < tolerance``."""
    return abs(a - b) < tolerance


def less_than(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Return True when ``a`` is smaller than ``b`` by more than ``tolerance``."""
    return a + tolerance < b


def is_negative(value: float, tolerance: float = EPSILON) -> bool:
    return less_than(value, 0.0, tolerance)


def is_positive(value: float, tolerance: float = EPSILON) -> bool:
    return less_than(0.0, value, tolerance)


def clean(values: np.ndarray, tolerance: float = EPSILON) -> np.ndarray:
    """Return a copy of ``values`` with entries within tolerance of zero set to 0.0.

    Used when reporting results so ``-1e-17`` does not surface as ``-0.0000``.
    """
    cleaned = np.array(values, dtype=float, copy=True)
    cleaned[np.abs(cleaned) < tolerance] = 0.0
    return cleaned
