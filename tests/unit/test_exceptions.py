"""Tests for custom exception hierarchy."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tableau_simplex import (  # noqa: E402
    InfeasibleProblemError,
    InvalidTableauError,
    IterationLimitError,
    NumericalInstabilityError,
    SolverConfigurationError,
    SolverOptions,
    SolveResult,
    SolveStatus,
    TableauSolverError,
    TableauStructureError,
    UnboundedProblemError,
    parse_tableau,
)


def test_exception_hierarchy():
    """All custom exceptions should inherit from TableauSolverError."""
    for exc_type in (
        InvalidTableauError,
        TableauStructureError,
        InfeasibleProblemError,
        UnboundedProblemError,
        NumericalInstabilityError,
        IterationLimitError,
        SolverConfigurationError,
    ):
        assert issubclass(exc_type, TableauSolverError)
        assert issubclass(exc_type, Exception)


def test_invalid_tableau_error_carries_line_number():
    with pytest.raises(InvalidTableauError) as exc_info:
        parse_tableau("1 1 1\n1 1 0\n")

    assert exc_info.value.line == 2
    assert "line 2" in str(exc_info.value)


def test_infeasible_problem_error_attributes():
    exc = InfeasibleProblemError("no feasible point", iterations=4)

    assert str(exc) == "no feasible point"
    assert exc.iterations == 4


def test_unbounded_problem_error_attributes():
    exc = UnboundedProblemError("unbounded", entering_column=1, reduced_cost=-2.5)

    assert exc.entering_column == 1
    assert exc.reduced_cost == -2.5
    assert UnboundedProblemError("unbounded").entering_column is None


def test_iteration_limit_error_attributes():
    exc = IterationLimitError("limit", iterations=100, phase=2, objective=12.5)

    assert (exc.iterations, exc.phase, exc.objective) == (100, 2, 12.5)


def test_numerical_instability_error_attributes():
    exc = NumericalInstabilityError("zero pivot", pivot=(0, 3))

    assert exc.pivot == (0, 3)


def test_configuration_error_raised_by_options():
    with pytest.raises(SolverConfigurationError, match="Tolerance must be positive"):
        SolverOptions(tolerance=0.0)


def test_raise_for_status_maps_statuses_to_exceptions():
    SolveResult(status=SolveStatus.OK).raise_for_status()

    with pytest.raises(InfeasibleProblemError) as exc_info:
        SolveResult(status=SolveStatus.INFEASIBLE, objective=-6.0, iterations=1).raise_for_status()
    assert exc_info.value.iterations == 1
    assert "-6" in str(exc_info.value)

    with pytest.raises(UnboundedProblemError):
        SolveResult(status=SolveStatus.UNBOUNDED).raise_for_status()


def test_catch_all_with_base_class():
    with pytest.raises(TableauSolverError):
        parse_tableau("not a header")
