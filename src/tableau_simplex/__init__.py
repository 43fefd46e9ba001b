"""High-level entrypoints for the two-phase tableau simplex library."""

from .data import ProgressCallback, ProgressInfo, SolveResult, SolverOptions, SolveStatus
from .diagnostics import BasisHistory, ConvergenceMonitor
from .exceptions import (
    InfeasibleProblemError,
    InvalidTableauError,
    IterationLimitError,
    NumericalInstabilityError,
    SolverConfigurationError,
    TableauSolverError,
    TableauStructureError,
    UnboundedProblemError,
)
from .io import parse_tableau
from .numeric import EPSILON, approx_equal, less_than
from .pivot import pivot
from .report import format_solution, format_tableau
from .simplex import SimplexState, TableauSimplex
from .simplex_pricing import DantzigPricing, PricingStrategy
from .solver import load_tableau, save_result, solve_tableau
from .tableau import Tableau

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Tableau",
    "load_tableau",
    "parse_tableau",
    "solve_tableau",
    "save_result",
    "TableauSimplex",
    "SimplexState",
    # Configuration and results
    "SolverOptions",
    "SolveResult",
    "SolveStatus",
    # Progress tracking
    "ProgressCallback",
    "ProgressInfo",
    # Building blocks
    "pivot",
    "PricingStrategy",
    "DantzigPricing",
    "EPSILON",
    "approx_equal",
    "less_than",
    # Presentation
    "format_tableau",
    "format_solution",
    # Diagnostics
    "ConvergenceMonitor",
    "BasisHistory",
    # Exceptions
    "TableauSolverError",
    "InvalidTableauError",
    "TableauStructureError",
    "InfeasibleProblemError",
    "UnboundedProblemError",
    "NumericalInstabilityError",
    "IterationLimitError",
    "SolverConfigurationError",
    # Version
    "__version__",
]
