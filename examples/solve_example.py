"""Example script demonstrating usage of the tableau simplex solver."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from tableau_simplex import (  # noqa: E402
    SolveStatus,
    format_solution,
    load_tableau,
    save_result,
    solve_tableau,
)


def main() -> None:
    base_dir = Path(__file__).resolve().parent
    output_dir = Path.cwd()

    for name in ("canonical_problem.txt", "phase_one_problem.txt", "infeasible_problem.txt"):
        problem_path = base_dir / name
        tableau = load_tableau(problem_path)
        result = solve_tableau(tableau)
        save_result(output_dir / problem_path.with_suffix(".json").name, result)

        print(f"Solved {name}: status={result.status.name}, objective={result.objective}")
        if result.status is SolveStatus.OK:
            print(format_solution(tableau))


if __name__ == "__main__":
    main()
