"""Text rendering of estimation results."""

from mlekit.report.table import align_columns, format_percent, format_value, summary_table

__all__ = [
    "align_columns",
    "format_percent",
    "format_value",
    "summary_table",
]
