"""Convergence diagnostics for the tableau simplex driver.

Dantzig pricing with first-index tie-breaking can stall or cycle on degenerate
tableaus. These monitors make that visible without changing pivot choices.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class ConvergenceMonitor:
    """Tracks objective progress and degenerate pivots.

    A pivot is degenerate when the leaving row's const cell is zero, so the
    objective value does not move.

    Attributes:
        window_size: Number of recent objective values kept.
        stall_threshold: Absolute improvement below which an iteration counts as no progress.
        degeneracy_threshold: Degenerate-pivot ratio above which the run is highly degenerate.

    Examples:
        >>> monitor = ConvergenceMonitor(window_size=20)
        >>> monitor.record_iteration(12.0, is_degenerate=False, iteration=1)
        >>> monitor.record_iteration(12.0, is_degenerate=True, iteration=2)
        >>> monitor.get_degeneracy_ratio()
        0.5
    """

    window_size: int = 50
    stall_threshold: float = 1e-10
    degeneracy_threshold: float = 0.5

    objective_history: deque[float] = field(default_factory=lambda: deque(maxlen=50))
    degenerate_pivots: int = 0
    total_pivots: int = 0
    consecutive_no_improvement: int = 0
    last_significant_improvement_iter: int = 0

    def __post_init__(self) -> None:
        self.objective_history = deque(maxlen=self.window_size)

    def record_iteration(
        self,
        objective: float,
        is_degenerate: bool = False,
        iteration: int = 0,
    ) -> None:
        """Record the objective value reached after a pivot."""
        self.objective_history.append(objective)
        self.total_pivots += 1
        if is_degenerate:
            self.degenerate_pivots += 1

        if len(self.objective_history) >= 2:
            improvement = abs(self.objective_history[-1] - self.objective_history[-2])
            if improvement < self.stall_threshold:
                self.consecutive_no_improvement += 1
            else:
                self.consecutive_no_improvement = 0
                self.last_significant_improvement_iter = iteration

    def is_stalled(self, min_consecutive: int = 10) -> bool:
        return self.consecutive_no_improvement >= min_consecutive

    def get_degeneracy_ratio(self) -> float:
        if self.total_pivots == 0:
            return 0.0
        return self.degenerate_pivots / self.total_pivots

    def is_highly_degenerate(self) -> bool:
        if self.total_pivots < 10:
            return False
        return self.get_degeneracy_ratio() > self.degeneracy_threshold

    def get_recent_improvement(self) -> float | None:
        """Absolute objective change across the window, or None with fewer than two values."""
        if len(self.objective_history) < 2:
            return None
        return abs(self.objective_history[-1] - self.objective_history[0])

    def get_diagnostic_summary(self) -> dict[str, float | bool | int]:
        return {
            "total_pivots": self.total_pivots,
            "degenerate_pivots": self.degenerate_pivots,
            "degeneracy_ratio": self.get_degeneracy_ratio(),
            "is_stalled": self.is_stalled(),
            "is_highly_degenerate": self.is_highly_degenerate(),
            "consecutive_no_improvement": self.consecutive_no_improvement,
            "recent_improvement": self.get_recent_improvement() or 0.0,
        }


@dataclass
class BasisHistory:
    """Hash-based history of visited bases for cycling detection.

    Examples:
        >>> history = BasisHistory(max_history=100)
        >>> history.record_basis((2, 3))
        >>> history.record_basis((0, 3))
        >>> history.is_cycling()
        False
    """

    max_history: int = 100
    history: deque[int] = field(default_factory=lambda: deque(maxlen=100))
    visit_counts: dict[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.history = deque(maxlen=self.max_history)

    def record_basis(self, basis: Sequence[int | None]) -> None:
        """Record the basic variable per row after a pivot.

        Row order matters here: two tableaus with the same basic set assigned to
        different rows are different states of the pivoting sequence.
        """
        basis_hash = hash(tuple(basis))
        self.history.append(basis_hash)
        self.visit_counts[basis_hash] = self.visit_counts.get(basis_hash, 0) + 1

        if len(self.visit_counts) > self.max_history * 2:
            current_hashes = set(self.history)
            for key in [k for k in self.visit_counts if k not in current_hashes]:
                del self.visit_counts[key]

    def is_cycling(self, min_revisits: int = 2) -> bool:
        """True when some basis in the recent history was visited ``min_revisits`` times."""
        return any(
            self.visit_counts.get(basis_hash, 0) >= min_revisits
            for basis_hash in list(self.history)[-20:]
        )

    def get_cycle_length(self) -> int | None:
        """Length of the repeating suffix of the history, or None if there is none."""
        recent = list(self.history)[-20:]
        for pattern_len in range(1, len(recent) // 2 + 1):
            if recent[-pattern_len:] == recent[-2 * pattern_len : -pattern_len]:
                return pattern_len
        return None
