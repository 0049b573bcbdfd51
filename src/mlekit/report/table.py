"""Aligned text tables for maximum likelihood estimates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from mlekit.estimation.intervals import validate_tail_probability

if TYPE_CHECKING:
    from mlekit.estimation.result import MLEstimate

COLUMN_SEP = "  "


def format_percent(p: float) -> str:
    """``0.025`` -> ``"2.5%"``."""
    return f"{round(100.0 * p, 1)}%"


def format_value(value: float) -> str:
    """Five significant digits."""
    return f"{value:.5g}"


def align_columns(rows: Sequence[Sequence[str]], sep: str = COLUMN_SEP) -> str:
    """Pad cells to a common width per column.

    The first column is left-aligned, the rest right-aligned. Every line,
    including the last, ends with a newline.
    """
    if not rows:
        return ""
    n_cols = max(len(row) for row in rows)
    widths = [0] * n_cols
    for row in rows:
        for j, cell in enumerate(row):
            widths[j] = max(widths[j], len(cell))

    lines = []
    for row in rows:
        cells = [
            cell.ljust(widths[j]) if j == 0 else cell.rjust(widths[j])
            for j, cell in enumerate(row)
        ]
        lines.append(sep.join(cells).rstrip() + "\n")
    return "".join(lines)


def summary_table(result: MLEstimate, p: float = 0.025) -> str:
    """Table with name, estimate and the ``p`` / ``1 - p`` interval bounds."""
    p = validate_tail_probability(p)
    rows = [["name", "est", format_percent(p), format_percent(1.0 - p)]]
    for name, theta, ci in zip(
        result.varnames, result.theta, result.confidence_intervals(p), strict=True
    ):
        rows.append([name, format_value(theta), format_value(ci.lo), format_value(ci.hi)])
    return align_columns(rows)
