from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from ..drive.fetcher import AssetDownloader, FetchError, fetch_sheet
from ..logging.error_log import SkipLogBuffer
from ..models.config_models import SiteConfig
from ..models.processing_result import RunResult, SheetStat
from ..models.row_data import RowData
from ..models.sheet_source import SHEET_SOURCES, SheetKind, SheetSource
from ..models.site_entries import ProjectEntry, ServiceEntry
from ..sheets.reader import SheetReadError, read_sheet
from .documents import generate_documents
from .progress import ProgressTracker
from .records import build_contact, build_projects, build_services
from .site_config import patch_site_config

"""Pipeline orchestration.

Runs every configured sheet through the same fetch -> parse -> transform
path (the transformer is picked by SheetKind), patches the site config once
with the collected records, flushes the skip log and removes the temp
directory. Any fatal problem surfaces as ProcessingError; row-level problems
are logged and the run continues.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that aborts the run."""
    pass


@dataclass
class _RunContext:
    config: SiteConfig
    downloader: AssetDownloader
    skip_log: SkipLogBuffer
    now: str | None = None
    posts: list[Path] = field(default_factory=list)
    services: list[ServiceEntry] = field(default_factory=list)
    projects: list[ProjectEntry] = field(default_factory=list)
    contact: dict[str, str] = field(default_factory=dict)


def _handle_posts(ctx: _RunContext, rows: list[RowData], progress: ProgressTracker) -> int:
    ctx.posts = generate_documents(
        rows,
        ctx.config.paths.content_dir,
        ctx.downloader,
        skip_log=ctx.skip_log,
        now=ctx.now,
        on_row=progress.advance,
    )
    logger.info(f"Generated {len(ctx.posts)} posts")
    return len(ctx.posts)


def _handle_services(ctx: _RunContext, rows: list[RowData], progress: ProgressTracker) -> int:
    ctx.services = build_services(rows, ctx.downloader, skip_log=ctx.skip_log, on_row=progress.advance)
    logger.info(f"Processed {len(ctx.services)} services")
    return len(ctx.services)


def _handle_projects(ctx: _RunContext, rows: list[RowData], progress: ProgressTracker) -> int:
    ctx.projects = build_projects(rows, ctx.downloader, skip_log=ctx.skip_log, on_row=progress.advance)
    logger.info(f"Processed {len(ctx.projects)} projects")
    return len(ctx.projects)


def _handle_contact(ctx: _RunContext, rows: list[RowData], progress: ProgressTracker) -> int:
    ctx.contact = build_contact(rows)
    for _ in rows:
        progress.advance()
    logger.info("Processed contact information")
    return len(ctx.contact)


_HANDLERS: dict[SheetKind, Callable[[_RunContext, list[RowData], ProgressTracker], int]] = {
    SheetKind.POSTS: _handle_posts,
    SheetKind.SERVICES: _handle_services,
    SheetKind.PROJECTS: _handle_projects,
    SheetKind.CONTACT: _handle_contact,
}


def load_rows(source: SheetSource, url: str, config: SiteConfig) -> list[RowData]:
    """Download one sheet into the temp directory and parse it.

    Raises:
        ProcessingError: link invalid, download failed or CSV unreadable
    """
    csv_path = config.paths.temp_dir / source.csv_filename
    try:
        fetch_sheet(url, csv_path, timeout=config.request_timeout)
        return read_sheet(csv_path)
    except (FetchError, SheetReadError, OSError) as e:
        raise ProcessingError(f"{source.kind.value}: {e}") from e


def remove_temp_dir(temp_dir: Path) -> None:
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
        logger.debug(f"Removed temp directory: {temp_dir}")


def _process_source(ctx: _RunContext, source: SheetSource, url: str) -> SheetStat:
    kind = source.kind.value
    logger.info(f"Processing {kind}...")
    sheet_start = datetime.now(UTC)
    skipped_before = ctx.skip_log.total

    rows = load_rows(source, url, ctx.config)
    with ProgressTracker(len(rows), description=kind) as progress:
        try:
            accepted = _HANDLERS[source.kind](ctx, rows, progress)
        except OSError as e:
            raise ProcessingError(f"{kind}: {e}") from e

    return SheetStat(
        kind=kind,
        rows=len(rows),
        accepted=accepted,
        skipped=ctx.skip_log.total - skipped_before,
        elapsed_seconds=(datetime.now(UTC) - sheet_start).total_seconds(),
    )


def process_all(config: SiteConfig, now: str | None = None) -> RunResult:
    """Run the full import for the configured sheets.

    Args:
        config: Run configuration (sources, paths, site settings)
        now: Fixed timestamp for posts without a date; None = current time

    Returns:
        RunResult with the counters for the SUMMARY line

    Raises:
        ProcessingError: For fatal errors; the temp directory is left in place
    """
    started = datetime.now(UTC)
    ctx = _RunContext(
        config=config,
        downloader=AssetDownloader(
            config.paths.image_dir,
            url_prefix=config.paths.image_url_prefix,
            timeout=config.request_timeout,
        ),
        skip_log=SkipLogBuffer(config.paths.log_dir),
        now=now,
    )

    logger.info("Fetching content from Google Sheets...")
    sheet_stats: list[SheetStat] = []
    for source in SHEET_SOURCES:
        url = config.source_url(source.kind)
        if not url:
            if source.required:
                raise ProcessingError(f"{source.kind.value}: {source.env_var} is not configured")
            logger.info(f"Skipping {source.kind.value}: {source.env_var} not set")
            continue
        sheet_stats.append(_process_source(ctx, source, url))

    try:
        patch_site_config(config.paths.site_config, ctx.services, ctx.projects, ctx.contact, config.site)
    except OSError as e:
        raise ProcessingError(f"site config: {e}") from e

    try:
        skip_path = ctx.skip_log.flush()
    except OSError as e:
        logger.warning(f"Could not write skip log: {e}")
    else:
        if skip_path is not None:
            logger.info(f"Skipped rows recorded in: {skip_path}")

    try:
        remove_temp_dir(config.paths.temp_dir)
    except OSError as e:
        raise ProcessingError(f"cleanup: {e}") from e


    return RunResult(
        posts_written=len(ctx.posts),
        skipped_rows=ctx.skip_log.total,
        services=len(ctx.services),
        projects=len(ctx.projects),
        contact_fields=len(ctx.contact),
        images_downloaded=ctx.downloader.downloaded,
        image_failures=ctx.downloader.failed,
        elapsed_seconds=(datetime.now(UTC) - started).total_seconds(),
        sheet_stats=sheet_stats,
    )
