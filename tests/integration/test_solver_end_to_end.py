import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tableau_simplex import (  # noqa: E402
    InfeasibleProblemError,
    IterationLimitError,
    SolveStatus,
    UnboundedProblemError,
    load_tableau,
    save_result,
    solve_tableau,
)

EXAMPLES_DIR = PROJECT_ROOT / "examples"


def _solve_example(name: str, **kwargs):
    tableau = load_tableau(EXAMPLES_DIR / name)
    return tableau, solve_tableau(tableau, **kwargs)


def test_canonical_problem_end_to_end(tmp_path):
    tableau, result = _solve_example("canonical_problem.txt")

    assert result.status is SolveStatus.OK
    assert result.objective == pytest.approx(36.0)
    assert result.values["x0"] == pytest.approx(2.0)
    assert result.values["x1"] == pytest.approx(6.0)
    assert result.iterations == 2
    assert tableau.basis == (2, 1, 0)

    output = tmp_path / "canonical.json"
    save_result(output, result)
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["status"] == "OK"
    assert payload["code"] == 0
    assert payload["objective"] == pytest.approx(36.0)


def test_phase_one_problem_end_to_end():
    tableau, result = _solve_example("phase_one_problem.txt")

    assert result.status is SolveStatus.OK
    assert result.objective == pytest.approx(12.0)
    assert result.values["x1"] == pytest.approx(4.0)
    assert result.phase_one_iterations == 1
    assert tableau.num_artificial_vars == 0
    # Constraints hold at the reported point.
    x0, x1 = result.values["x0"], result.values["x1"]
    assert x0 + x1 <= 4 + 1e-9
    assert x0 + 3 * x1 >= 6 - 1e-9
    assert x0 <= 3 + 1e-9


def test_infeasible_problem_end_to_end():
    _, result = _solve_example("infeasible_problem.txt")

    assert result.status is SolveStatus.INFEASIBLE
    assert int(result.status) == -1
    assert result.objective == pytest.approx(-6.0)
    with pytest.raises(InfeasibleProblemError):
        result.raise_for_status()


def test_unbounded_problem_end_to_end():
    _, result = _solve_example("unbounded_problem.txt")

    assert result.status is SolveStatus.UNBOUNDED
    assert int(result.status) == -2
    with pytest.raises(UnboundedProblemError):
        result.raise_for_status()


def test_degenerate_problem_stops_at_iteration_limit():
    tableau = load_tableau(EXAMPLES_DIR / "degenerate_cycling.txt")

    with pytest.raises(IterationLimitError) as exc_info:
        solve_tableau(tableau, max_iterations=50)

    assert exc_info.value.iterations == 50
    assert exc_info.value.objective == pytest.approx(0.0)


def test_solution_satisfies_equality_constraints():
    tableau = load_tableau(EXAMPLES_DIR / "canonical_problem.txt")
    original = tableau.to_array()

    result = solve_tableau(tableau)

    ordered = [result.values[name] for name in ("x0", "x1", "s0", "s1", "s2")]
    for row in range(3):
        lhs = sum(original[row, col] * ordered[col] for col in range(5))
        assert lhs == pytest.approx(original[row, 6])
