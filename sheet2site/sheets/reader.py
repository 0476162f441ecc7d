from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.row_data import RowData

"""CSV sheet reader.

First line is the header, every following line one RowData. All cells are
read as text; pandas' NA conversion is switched off so that "NA", "null" or
blank cells stay strings (blank -> "").
"""

# Header is sheet line 1; first data row is line 2
FIRST_DATA_LINE = 2


class SheetReadError(Exception):
    """Raised when a downloaded sheet cannot be read."""


class MalformedSheetError(SheetReadError):
    """Raised when the CSV cannot be tokenized (e.g. ragged quoted rows)."""


def read_csv_frame(path: Path) -> pd.DataFrame:
    """Read a CSV export as an all-string DataFrame (empty file -> empty frame)."""
    if not path.exists():
        raise SheetReadError(f"sheet file not found: {path}")
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except pd.errors.ParserError as e:
        raise MalformedSheetError(f"malformed CSV {path.name}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SheetReadError(f"cannot read {path}: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return df


def read_sheet(path: Path) -> list[RowData]:
    """Read a CSV file into RowData records, preserving row and column order."""
    df = read_csv_frame(path)
    rows: list[RowData] = []
    # 空行は pandas 側で除外されるため、行番号はデータ行の順序から算出
    for offset, record in enumerate(df.to_dict(orient="records")):
        values = {str(k): ("" if v is None else str(v)) for k, v in record.items()}
        rows.append(RowData(row_number=offset + FIRST_DATA_LINE, values=values))
    return rows
