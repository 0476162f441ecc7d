from __future__ import annotations

from dataclasses import dataclass

"""Run result models for the sheet2site importer.

RunResult aggregates what one run produced; it feeds the SUMMARY line.
"""


@dataclass(frozen=True)
class SheetStat:
    """Per-sheet statistics (internal helper for RunResult)."""
    kind: str  # posts/services/projects/contact
    rows: int  # rows read from the CSV
    accepted: int  # documents written / records built
    skipped: int
    elapsed_seconds: float


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one import run."""
    posts_written: int
    skipped_rows: int
    services: int
    projects: int
    contact_fields: int
    images_downloaded: int
    image_failures: int
    elapsed_seconds: float
    sheet_stats: list[SheetStat] | None = None
