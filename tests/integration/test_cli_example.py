import json
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tableau_simplex.cli import (  # noqa: E402
    EXIT_INVALID_INPUT,
    EXIT_ITERATION_LIMIT,
    exit_code,
    main,
)
from tableau_simplex.data import SolveStatus  # noqa: E402

EXAMPLES_DIR = PROJECT_ROOT / "examples"


def _replicate_examples(tmp_path: Path) -> Path:
    # Copy the sample assets into an isolated workspace the subprocess can mutate.
    dest = tmp_path / "examples"
    dest.mkdir(parents=True, exist_ok=True)

    for name in (
        "solve_example.py",
        "canonical_problem.txt",
        "phase_one_problem.txt",
        "infeasible_problem.txt",
    ):
        shutil.copy2(EXAMPLES_DIR / name, dest / name)

    # Provide src/ so the example script can import using its relative path logic.
    src_symlink = tmp_path / "src"
    if not src_symlink.exists():
        src_symlink.symlink_to(PROJECT_ROOT / "src", target_is_directory=True)

    return dest


def test_exit_codes_follow_status_values():
    assert exit_code(SolveStatus.OK) == 0
    assert exit_code(SolveStatus.INFEASIBLE) == 255
    assert exit_code(SolveStatus.UNBOUNDED) == 254


def test_cli_solves_canonical_problem(capsys):
    code = main([str(EXAMPLES_DIR / "canonical_problem.txt")])

    out = capsys.readouterr().out
    assert code == 0
    assert "Initial tableau:" in out
    assert "Final tableau:" in out
    assert "Final solution:" in out
    assert "z: 36.0000" in out
    assert "Status: OK (0), iterations=2" in out


def test_cli_reports_infeasible(capsys):
    code = main([str(EXAMPLES_DIR / "infeasible_problem.txt")])

    out = capsys.readouterr().out
    assert code == 255
    assert "Final solution:" not in out
    assert "Status: INFEASIBLE (-1)" in out


def test_cli_reports_unbounded(capsys):
    code = main(["--quiet", str(EXAMPLES_DIR / "unbounded_problem.txt")])

    out = capsys.readouterr().out
    assert code == 254
    assert out.strip() == "Status: UNBOUNDED (-2), iterations=1"


def test_cli_trace_prints_every_pivot(capsys):
    code = main(["--trace", str(EXAMPLES_DIR / "canonical_problem.txt")])

    out = capsys.readouterr().out
    assert code == 0
    assert "Phase 2, iteration 1: pivot row c1, column x1" in out
    assert "Phase 2, iteration 2: pivot row c2, column x0" in out


def test_cli_step_waits_after_each_pivot(monkeypatch, capsys):
    prompts = []
    monkeypatch.setattr("builtins.input", lambda prompt="": prompts.append(prompt) or "")

    code = main(["--step", str(EXAMPLES_DIR / "canonical_problem.txt")])

    capsys.readouterr()
    assert code == 0
    assert len(prompts) == 2


def test_cli_step_continues_without_stdin(monkeypatch, capsys):
    calls = []

    def _closed_stdin(prompt=""):
        calls.append(prompt)
        raise EOFError

    monkeypatch.setattr("builtins.input", _closed_stdin)

    code = main(["--step", str(EXAMPLES_DIR / "phase_one_problem.txt")])

    capsys.readouterr()
    assert code == 0
    assert len(calls) == 1


def test_cli_writes_json_output(tmp_path, capsys):
    output = tmp_path / "result.json"

    code = main(["-q", "-o", str(output), str(EXAMPLES_DIR / "phase_one_problem.txt")])

    capsys.readouterr()
    assert code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["status"] == "OK"
    assert payload["objective"] == pytest.approx(12.0)
    assert payload["phase_one_iterations"] == 1


def test_cli_iteration_limit(capsys):
    code = main(["-q", "--max-iterations", "20", str(EXAMPLES_DIR / "degenerate_cycling.txt")])

    err = capsys.readouterr().err
    assert code == EXIT_ITERATION_LIMIT
    assert "Iteration limit reached" in err


def test_cli_rejects_malformed_file(tmp_path, capsys):
    problem = tmp_path / "bad.txt"
    problem.write_text("1 1 1\n1 1 0 2\n-1 0 1 0 0\n", encoding="utf-8")

    code = main([str(problem)])

    err = capsys.readouterr().err
    assert code == EXIT_INVALID_INPUT
    assert "line 2" in err


def test_cli_missing_file(tmp_path, capsys):
    code = main([str(tmp_path / "missing.txt")])

    assert code == EXIT_INVALID_INPUT
    assert "missing.txt" in capsys.readouterr().err


def test_cli_rejects_invalid_tolerance(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--tolerance", "0", str(EXAMPLES_DIR / "canonical_problem.txt")])

    assert exc_info.value.code == 2
    assert "Tolerance must be positive" in capsys.readouterr().err


def test_example_script_produces_solutions(tmp_path: Path):
    # Run the example script as a subprocess to mimic the documented usage.
    examples_dir = _replicate_examples(tmp_path)
    script_path = examples_dir / "solve_example.py"

    proc = subprocess.run(
        [sys.executable, str(script_path)],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        check=True,
    )

    assert "Solved canonical_problem.txt: status=OK" in proc.stdout
    assert "Solved infeasible_problem.txt: status=INFEASIBLE" in proc.stdout
    assert "Traceback" not in proc.stderr

    contents = json.loads((tmp_path / "canonical_problem.json").read_text(encoding="utf-8"))
    assert contents["status"] == "OK"
    assert pytest.approx(contents["objective"]) == 36.0
    assert contents["values"]["x1"] == pytest.approx(6.0)

    contents = json.loads((tmp_path / "phase_one_problem.json").read_text(encoding="utf-8"))
    assert pytest.approx(contents["objective"]) == 12.0

    contents = json.loads((tmp_path / "infeasible_problem.json").read_text(encoding="utf-8"))
    assert contents["code"] == -1
