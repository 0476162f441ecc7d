from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..drive.links import is_drive_link
from ..logging.error_log import SkipLogBuffer
from ..models.row_data import RowData
from ..models.site_entries import DEFAULT_PROJECT_URL, DEFAULT_SERVICE_ICON, ProjectEntry, ServiceEntry
from .documents import IMAGE_EXTENSION, ImageFetcher
from .slug import slugify

"""Service / project / contact rows -> structured records for [params]."""

logger = logging.getLogger(__name__)


def _entry_image(row: RowData, prefix: str, fetch_image: ImageFetcher) -> str | None:
    link = row.get("img")
    if not is_drive_link(link):
        return None
    slug = slugify(row.get("title"))
    if not slug:
        logger.warning(f"Row {row.row_number}: title {row.get('title')!r} yields an empty slug, image not downloaded")
        return None
    return fetch_image(link, f"{prefix}-{slug}{IMAGE_EXTENSION}")


def _qualifies(row: RowData, source: str, skip_log: SkipLogBuffer | None) -> bool:
    if row.has("title") and row.has("description"):
        return True
    logger.warning(f"Skipping {source} row {row.row_number} with missing title or description")
    if skip_log is not None:
        skip_log.record(source, row.row_number, "MISSING_FIELDS", "missing title or description")
    return False


def build_services(
    rows: Iterable[RowData],
    fetch_image: ImageFetcher,
    *,
    skip_log: SkipLogBuffer | None = None,
    on_row: Callable[[], None] | None = None,
) -> list[ServiceEntry]:
    services: list[ServiceEntry] = []
    for row in rows:
        if _qualifies(row, "services", skip_log):
            services.append(
                ServiceEntry(
                    title=row.get("title"),
                    description=row.get("description"),
                    icon=row.get("icon") or DEFAULT_SERVICE_ICON,
                    image=_entry_image(row, "service", fetch_image),
                )
            )
        if on_row is not None:
            on_row()
    return services


def build_projects(
    rows: Iterable[RowData],
    fetch_image: ImageFetcher,
    *,
    skip_log: SkipLogBuffer | None = None,
    on_row: Callable[[], None] | None = None,
) -> list[ProjectEntry]:
    projects: list[ProjectEntry] = []
    for row in rows:
        if _qualifies(row, "projects", skip_log):
            projects.append(
                ProjectEntry(
                    title=row.get("title"),
                    description=row.get("description"),
                    image=_entry_image(row, "project", fetch_image),
                    url=row.get("url") or DEFAULT_PROJECT_URL,
                )
            )
        if on_row is not None:
            on_row()
    return projects


def build_contact(rows: Iterable[RowData]) -> dict[str, str]:
    """Fold field/value rows into a mapping; a repeated field keeps the last value."""
    contact: dict[str, str] = {}
    for row in rows:
        if row.has("field") and row.has("value"):
            contact[row.get("field")] = row.get("value")
    return contact
