from __future__ import annotations

from dataclasses import dataclass

"""RowData model for the sheet2site importer.

RowData represents a single CSV row after the header has been applied.
row_number is the 1-based line in the sheet (header = 1, first data row = 2),
used for skip reporting.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single spreadsheet row.

    values keeps the spreadsheet column order; every value is a string
    (empty string for blank cells).
    """
    row_number: int  # Sheet line number (header is line 1)
    values: dict[str, str]  # Column name -> cell text

    def get(self, column: str, default: str = "") -> str:
        value = self.values.get(column)
        return value if value is not None else default

    def has(self, column: str) -> bool:
        """True when the column exists and the cell is non-empty."""
        return bool(self.values.get(column))
