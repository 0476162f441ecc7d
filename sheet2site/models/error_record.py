from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""SkipRecord model for the skipped-row log.

Every row the transformers drop (missing required cells, empty slug) is
written as one JSON Lines record so an operator can see what was skipped
without grepping console output. Keys are fixed; no extra fields.
"""

__all__ = [
    "SkipRecord",
]


@dataclass(frozen=True)
class SkipRecord:
    """Structured skip record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Sheet kind the row came from (posts, services, ...)
        row: Sheet line number. -1 when the row is unknown
        error_type: Reason in UPPER_SNAKE_CASE (MISSING_FIELDS, EMPTY_SLUG)
        message: Human readable detail
    """
    timestamp: str  # ISO8601 UTC
    source: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(source: str, row: int, error_type: str, message: str) -> SkipRecord:
        """Create a new SkipRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return SkipRecord(
            timestamp=ts,
            source=source,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
