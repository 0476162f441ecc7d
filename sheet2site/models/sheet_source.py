from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Sheet source descriptors.

Each spreadsheet the importer reads is described by a SheetKind plus the
environment variable that carries its share link. The orchestrator walks
SHEET_SOURCES in order; the same fetch/parse path serves every kind.
"""

__all__ = [
    "SheetKind",
    "SheetSource",
    "SHEET_SOURCES",
]


class SheetKind(Enum):
    """Kind of spreadsheet source (drives which transformer runs).

    - POSTS: rows become Markdown content documents
    - SERVICES / PROJECTS: rows become [[params.*]] entries
    - CONTACT: field/value rows folded into [params.contact]
    """
    POSTS = "posts"
    SERVICES = "services"
    PROJECTS = "projects"
    CONTACT = "contact"


@dataclass(frozen=True)
class SheetSource:
    kind: SheetKind
    env_var: str  # Environment variable holding the share link
    required: bool

    @property
    def csv_filename(self) -> str:
        """Intermediate file name inside the temp directory."""
        return f"{self.kind.value}.csv"


# Processing order: posts first (optional), then the [params] sources
SHEET_SOURCES: tuple[SheetSource, ...] = (
    SheetSource(SheetKind.POSTS, "POST_URL", required=False),
    SheetSource(SheetKind.SERVICES, "SERVICE_URL", required=True),
    SheetSource(SheetKind.PROJECTS, "PROJECT_URL", required=True),
    SheetSource(SheetKind.CONTACT, "CONTACT_URL", required=True),
)
