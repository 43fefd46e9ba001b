"""File I/O helpers for tableau problems and solver results.

Input format::

    <real vars> <slack vars> <constraints>
    <constraint row 0>
    ...
    <objective row>

Every row holds ``real + slack + 3`` numbers: the variable coefficients, the z
marker, the right-hand side and the basis index (``-1`` when the row has no
basic variable yet). Blank lines and text after ``#`` are ignored.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterator
from pathlib import Path

from .data import SolveResult
from .exceptions import InvalidTableauError
from .tableau import UNASSIGNED, Tableau


def _content_lines(text: str) -> Iterator[tuple[int, list[str]]]:
    # Yield (1-based line number, tokens) for every line that carries data.
    for number, raw in enumerate(text.splitlines(), start=1):
        tokens = raw.split("#", 1)[0].split()
        if tokens:
            yield number, tokens


def _parse_header(number: int, tokens: list[str]) -> tuple[int, int, int]:
    if len(tokens) != 3:
        raise InvalidTableauError(
            f"line {number}: header must hold 3 integers (real vars, slack vars, constraints), "
            f"got {len(tokens)} values.",
            line=number,
        )
    try:
        counts = tuple(int(token) for token in tokens)
    except ValueError:
        raise InvalidTableauError(
            f"line {number}: header values must be integers, got {' '.join(tokens)!r}.",
            line=number,
        ) from None
    if any(count < 0 for count in counts):
        raise InvalidTableauError(
            f"line {number}: header values must be non-negative, got {' '.join(tokens)!r}.",
            line=number,
        )
    real, slack, constraints = counts
    return real, slack, constraints


def _parse_row(number: int, tokens: list[str], width: int) -> list[float]:
    if len(tokens) != width:
        raise InvalidTableauError(
            f"line {number}: expected {width} values, got {len(tokens)}.", line=number
        )
    try:
        row = [float(token) for token in tokens]
    except ValueError:
        raise InvalidTableauError(
            f"line {number}: row contains a non-numeric value: {' '.join(tokens)!r}.",
            line=number,
        ) from None
    if not all(math.isfinite(value) for value in row):
        raise InvalidTableauError(f"line {number}: row contains a non-finite value.", line=number)
    return row


def _check_basis_cell(number: int, value: float, num_vars: int) -> None:
    if value == UNASSIGNED:
        return
    if not value.is_integer() or not 0 <= value < num_vars:
        raise InvalidTableauError(
            f"line {number}: basis index must be -1 or an integer in [0, {num_vars}), "
            f"got {value:g}.",
            line=number,
        )


def parse_tableau(text: str) -> Tableau:
    """Parse the textual tableau format into a Tableau.

    Raises:
        InvalidTableauError: If the header, row widths, values or basis indices are invalid.
    """
    lines = _content_lines(text)
    try:
        number, tokens = next(lines)
    except StopIteration:
        raise InvalidTableauError("input is empty; expected a header line.") from None
    real, slack, constraints = _parse_header(number, tokens)
    num_vars = real + slack
    width = num_vars + 3

    rows: list[list[float]] = []
    seen_basis: dict[int, int] = {}
    for number, tokens in lines:
        if len(rows) == constraints + 1:
            raise InvalidTableauError(
                f"line {number}: unexpected data after the objective row "
                f"(expected {constraints + 1} rows).",
                line=number,
            )
        row = _parse_row(number, tokens, width)
        if len(rows) < constraints:
            basis_cell = row[-1]
            _check_basis_cell(number, basis_cell, num_vars)
            if basis_cell != UNASSIGNED:
                var = int(basis_cell)
                if var in seen_basis:
                    raise InvalidTableauError(
                        f"line {number}: variable {var} is already basic on line "
                        f"{seen_basis[var]}.",
                        line=number,
                    )
                seen_basis[var] = number
        rows.append(row)

    if len(rows) != constraints + 1:
        raise InvalidTableauError(
            f"expected {constraints + 1} rows ({constraints} constraints + objective), "
            f"got {len(rows)}."
        )
    return Tableau.from_array(
        rows, num_real_vars=real, num_slack_vars=slack, num_constraints=constraints
    )


def load_tableau(path: str | Path) -> Tableau:
    """Load a tableau from a text file in the documented format."""
    return parse_tableau(Path(path).read_text(encoding="utf-8"))


def save_result(path: str | Path, result: SolveResult) -> None:
    """Persist a solver result to JSON."""
    data = {
        "status": result.status.name,
        "code": int(result.status),
        "objective": result.objective,
        "iterations": result.iterations,
        "phase_one_iterations": result.phase_one_iterations,
        "values": dict(result.values),
        "basis": list(result.basis),
    }
    with Path(path).open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, sort_keys=False)
