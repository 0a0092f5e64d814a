"""
results.py — Result pass-through.

Program output goes back to the host unchanged, except that output which is
already shaped like a table (tab- or comma-separated, same number of columns
on every line) is returned as a list of rows so the host can render it as
one. Result parameters such as `raw` or `verbatim` disable the conversion.
"""

from __future__ import annotations

import csv
import re
from typing import Iterable, Union

Cell = Union[str, int, float]
Table = list[list[Cell]]
TextOrTable = Union[str, Table]

# Result parameters that ask for the text exactly as produced.
VERBATIM_RESULT_PARAMS = frozenset({
    "raw",
    "verbatim",
    "scalar",
    "output",
    "code",
    "drawer",
    "html",
    "latex",
    "org",
    "file",
})


# Plain decimal only: no underscores, no leading zeros (007 stays text).
_INTEGER = re.compile(r"^-?(?:0|[1-9][0-9]*)$")
_DECIMAL = re.compile(r"^-?(?:0|[1-9][0-9]*)\.[0-9]+(?:[eE][-+]?[0-9]+)?$")


def _read_cell(cell: str) -> Cell:
    cell = cell.strip()
    if _INTEGER.match(cell):
        return int(cell)
    if _DECIMAL.match(cell):
        return float(cell)
    return cell


def _uniform(rows: list[list[str]]) -> bool:
    widths = {len(row) for row in rows}
    return len(widths) == 1 and widths.pop() > 1


def _split_table(lines: list[str]) -> list[list[str]] | None:
    if all("\t" in line for line in lines):
        rows = [line.split("\t") for line in lines]
        if _uniform(rows):
            return rows
    # A single line with a comma is more likely prose than a table.
    if len(lines) > 1 and all("," in line for line in lines):
        rows = list(csv.reader(lines))
        if _uniform(rows):
            return rows
    return None


def maybe_tabulate(text: str, result_params: Iterable[str] = ()) -> TextOrTable:
    """Return `text` as a table if it looks like one, otherwise unchanged."""
    if VERBATIM_RESULT_PARAMS.intersection(result_params):
        return text

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return text

    rows = _split_table(lines)
    if rows is None:
        return text
    return [[_read_cell(cell) for cell in row] for row in rows]


def format_result(value: TextOrTable) -> str:
    """Render a result for a plain-text consumer (tables as tab-joined rows)."""
    if isinstance(value, str):
        return value
    return "\n".join("\t".join(str(cell) for cell in row) for row in value) + "\n"
