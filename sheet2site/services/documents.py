from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from ..drive.links import is_drive_link
from ..logging.error_log import SkipLogBuffer
from ..models.content_document import ContentDocument
from ..models.row_data import RowData
from .slug import slugify

"""Post rows -> Markdown content documents.

Each qualifying row becomes `<content_dir>/<slug>.md`: a YAML front matter
block followed by the row's `content` cell verbatim.
"""

logger = logging.getLogger(__name__)

# (drive link, file name) -> public path or None
ImageFetcher = Callable[[str, str], str | None]

RESERVED_FIELDS = ("title", "content", "date", "draft", "description", "tags", "image")
FRONT_MATTER_DELIMITER = "---"
# Drive links carry no usable extension
IMAGE_EXTENSION = ".jpg"


def current_timestamp() -> str:
    """UTC now as ISO8601 with milliseconds and a 'Z' suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def split_tags(raw: str) -> list[str]:
    return [t.strip() for t in raw.split(",") if t.strip()]


def build_metadata(row: RowData, image_path: str | None, now: str | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "title": row.get("title"),
        "date": row.get("date") or now or current_timestamp(),
        "draft": row.get("draft") == "true",
        "description": row.get("description"),
        "tags": split_tags(row.get("tags")),
    }
    if image_path:
        metadata["image"] = image_path
    # Extra columns pass through verbatim, in sheet order
    for key, value in row.values.items():
        if key not in RESERVED_FIELDS:
            metadata[key] = value
    return metadata


def _skip_reason(row: RowData) -> tuple[str, str]:
    if not row.has("title") or not row.has("content"):
        return "MISSING_FIELDS", "missing title or content"
    return "EMPTY_SLUG", f"empty slug for title {row.get('title')!r}"


def build_document(row: RowData, fetch_image: ImageFetcher, now: str | None = None) -> ContentDocument | None:
    """Build the document for one row, or None when the row is skipped."""
    if not row.has("title") or not row.has("content"):
        logger.warning(f"Skipping row {row.row_number} with missing title or content")
        return None

    slug = slugify(row.get("title"))
    if not slug:
        logger.warning(f"Skipping row {row.row_number}: title {row.get('title')!r} yields an empty slug")
        return None

    image_path = None
    image_link = row.get("image")
    if is_drive_link(image_link):
        image_path = fetch_image(image_link, f"{slug}{IMAGE_EXTENSION}")

    return ContentDocument(
        slug=slug,
        metadata=build_metadata(row, image_path, now=now),
        body=row.get("content"),
    )


def render_document(document: ContentDocument) -> str:
    front_matter = yaml.safe_dump(
        document.metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"{FRONT_MATTER_DELIMITER}\n{front_matter}{FRONT_MATTER_DELIMITER}\n\n{document.body}"


def write_document(document: ContentDocument, content_dir: Path) -> Path:
    """Write (or silently overwrite) `<content_dir>/<slug>.md`."""
    content_dir.mkdir(parents=True, exist_ok=True)
    path = content_dir / document.filename
    path.write_text(render_document(document), encoding="utf-8")
    logger.info(f"Generated content: {document.filename}")
    return path


def transform_row(
    row: RowData,
    content_dir: Path,
    fetch_image: ImageFetcher,
    now: str | None = None,
) -> Path | None:
    document = build_document(row, fetch_image, now=now)
    if document is None:
        return None
    return write_document(document, content_dir)


def generate_documents(
    rows: Iterable[RowData],
    content_dir: Path,
    fetch_image: ImageFetcher,
    *,
    skip_log: SkipLogBuffer | None = None,
    now: str | None = None,
    on_row: Callable[[], None] | None = None,
) -> list[Path]:
    """Write one document per qualifying row; skipped rows go to skip_log.

    Args:
        rows: Post rows in sheet order
        content_dir: Output directory for .md files
        fetch_image: Callable resolving a Drive link to a public image path
        skip_log: Optional buffer receiving one record per skipped row
        now: Fixed timestamp for rows without a date (tests / reproducible runs)
        on_row: Progress callback invoked after each row

    Returns:
        Paths written, in row order (a repeated slug appears twice)
    """
    written: list[Path] = []
    seen: dict[str, int] = {}
    for row in rows:
        document = build_document(row, fetch_image, now=now)
        if document is None:
            if skip_log is not None:
                skip_log.record("posts", row.row_number, *_skip_reason(row))
        else:
            if document.slug in seen:
                logger.warning(
                    f"Row {row.row_number} overwrites {document.filename} (first written by row {seen[document.slug]})"
                )
            seen[document.slug] = row.row_number
            written.append(write_document(document, content_dir))
        if on_row is not None:
            on_row()
    return written
