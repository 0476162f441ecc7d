from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import SkipRecord

"""Skipped-row log buffering.

- JSON Lines, fixed schema (see SkipRecord)
- One file per run: `<log_dir>/skipped-YYYYMMDD-HHMMSS.log` (UTC)
- Records are buffered and written on flush(); nothing is created when no
  row was skipped
"""

__all__ = [
    "SkipRecord",
    "SkipLogBuffer",
]

DEFAULT_LOG_DIR = Path("logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SkipLogBuffer:
    """In-memory buffer for skip records. Flush appends JSON Lines.

    The file path is fixed on first flush; single-threaded use only.
    """
    def __init__(self, log_dir: Path = DEFAULT_LOG_DIR) -> None:
        self.log_dir = log_dir
        self._records: list[SkipRecord] = []
        self._file_path: Path | None = None
        self.total = 0  # records appended over the buffer's lifetime

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_dir / f"skipped-{stamp}.log"
        return self._file_path

    def append(self, record: SkipRecord) -> None:
        self._records.append(record)
        self.total += 1

    def record(self, source: str, row: int, error_type: str, message: str) -> None:
        self.append(SkipRecord.create(source, row, error_type, message))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
