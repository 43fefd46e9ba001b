import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tableau_simplex.data import SolveResult, SolveStatus  # noqa: E402
from tableau_simplex.exceptions import InvalidTableauError  # noqa: E402
from tableau_simplex.io import load_tableau, parse_tableau, save_result  # noqa: E402

CANONICAL = """\
# maximize 3x0 + 5x1
2 3 3
1  0  1 0 0  0   4  2
0  2  0 1 0  0  12  3
3  2  0 0 1  0  18  4   # last constraint
-3 -5 0 0 0  1   0  0
"""


def test_parse_tableau_reads_layout_and_basis():
    tableau = parse_tableau(CANONICAL)

    assert tableau.num_real_vars == 2
    assert tableau.num_slack_vars == 3
    assert tableau.num_constraints == 3
    assert tableau.basis == (2, 3, 4)
    assert tableau.get(2, tableau.rhs_column) == 18.0
    assert tableau.get(3, tableau.z_column) == 1.0


def test_parse_tableau_unassigned_basis():
    tableau = parse_tableau("1 1 1\n1 -1 0 2 -1\n-1 0 1 0 0\n")

    assert tableau.basis == (None,)


def test_parse_tableau_accepts_floats_and_blank_lines():
    tableau = parse_tableau("1 1 1\n\n0.5 1 0 1.5 1\n\n-1e0 0 1 0 0\n")

    assert tableau.get(0, 0) == 0.5
    assert tableau.get(0, tableau.rhs_column) == 1.5


def test_parse_tableau_without_constraints():
    tableau = parse_tableau("1 0 0\n-1 1 0 0\n")

    assert tableau.num_constraints == 0
    assert tableau.rows == 1


@pytest.mark.parametrize(
    "text,line,fragment",
    [
        ("", None, "empty"),
        ("# only a comment\n", None, "empty"),
        ("2 3\n", 1, "header must hold 3 integers"),
        ("2 x 1\n", 1, "must be integers"),
        ("1 -1 1\n", 1, "non-negative"),
        ("1 1 1\n1 1 0 2\n-1 0 1 0 0\n", 2, "expected 5 values, got 4"),
        ("1 1 1\n1 one 0 2 1\n-1 0 1 0 0\n", 2, "non-numeric"),
        ("1 1 1\n1 1 0 nan 1\n-1 0 1 0 0\n", 2, "non-finite"),
        ("1 1 1\n1 1 0 2 5\n-1 0 1 0 0\n", 2, "basis index"),
        ("1 1 1\n1 1 0 2 0.5\n-1 0 1 0 0\n", 2, "basis index"),
        ("1 1 1\n1 1 0 2 -2\n-1 0 1 0 0\n", 2, "basis index"),
        ("1 1 2\n1 1 0 2 1\n1 1 0 3 1\n-1 0 1 0 0\n", 3, "already basic on line 2"),
        ("1 1 1\n1 1 0 2 1\n-1 0 1 0 0\n1 1 1 1 1\n", 4, "unexpected data"),
        ("1 1 2\n1 1 0 2 1\n-1 0 1 0 0\n", None, "expected 3 rows"),
    ],
)
def test_parse_tableau_rejects_malformed_input(text, line, fragment):
    with pytest.raises(InvalidTableauError, match=fragment) as exc_info:
        parse_tableau(text)

    assert exc_info.value.line == line


def test_objective_row_basis_cell_is_not_validated():
    # Only constraint rows carry a basis index.
    tableau = parse_tableau("1 1 1\n1 1 0 2 1\n-1 0 1 0 7\n")

    assert tableau.basis == (1,)


def test_load_tableau_from_file(tmp_path):
    path = tmp_path / "problem.txt"
    path.write_text(CANONICAL, encoding="utf-8")

    tableau = load_tableau(path)

    assert tableau.basis == (2, 3, 4)


def test_load_tableau_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tableau(tmp_path / "missing.txt")


def test_save_result_writes_json(tmp_path):
    result = SolveResult(
        status=SolveStatus.OK,
        objective=36.0,
        values={"x0": 2.0, "x1": 6.0},
        iterations=2,
        basis=(2, 1, 0),
    )
    path = tmp_path / "result.json"

    save_result(path, result)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "status": "OK",
        "code": 0,
        "objective": 36.0,
        "iterations": 2,
        "phase_one_iterations": 0,
        "values": {"x0": 2.0, "x1": 6.0},
        "basis": [2, 1, 0],
    }


def test_save_result_encodes_failure_codes_and_unassigned_rows(tmp_path):
    result = SolveResult(status=SolveStatus.UNBOUNDED, objective=1.0, basis=(0, None))
    path = tmp_path / "result.json"

    save_result(path, result)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["status"] == "UNBOUNDED"
    assert payload["code"] == -2
    assert payload["basis"] == [0, None]
