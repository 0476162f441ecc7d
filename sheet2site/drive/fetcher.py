from __future__ import annotations

import logging
from pathlib import Path

import requests

from .links import download_url, export_url, extract_file_id

"""Downloads from Google Sheets (CSV export) and Google Drive (assets).

fetch_sheet failures are fatal for the run (raised); fetch_asset failures
only cost the row its image (logged, None returned).
"""

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class FetchError(Exception):
    """Raised when a spreadsheet cannot be downloaded."""


class InvalidLinkError(FetchError):
    """Raised when a share link has no /d/<id> segment."""


def _looks_like_html(content: bytes) -> bool:
    # Private sheets answer 200 with the Google login page instead of CSV
    head = content.lstrip()[:64].lower()
    return head.startswith(b"<!doctype html") or head.startswith(b"<html")


def fetch_sheet(sheet_link: str, output_path: Path, timeout: float | None = None) -> Path:
    """Download a sheet's CSV export to output_path.

    Args:
        sheet_link: Share link containing /d/<id>
        output_path: Destination file (parent dirs are created)
        timeout: requests timeout in seconds (None = wait indefinitely)

    Returns:
        output_path

    Raises:
        InvalidLinkError: link has no file id
        FetchError: network / HTTP failure, or the sheet is not public
    """
    sheet_id = extract_file_id(sheet_link)
    if not sheet_id:
        raise InvalidLinkError(f"Invalid Google Sheets URL: {sheet_link}")

    url = export_url(sheet_id)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to download Google Sheet: {e}") from e

    if _looks_like_html(response.content):
        raise FetchError(f"Failed to download Google Sheet: sheet is not publicly viewable ({sheet_id})")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(response.content)
    logger.info(f"Downloaded sheet to: {output_path}")
    return output_path


def fetch_asset(
    drive_link: str,
    filename: str,
    image_dir: Path,
    url_prefix: str = "/images",
    timeout: float | None = None,
) -> str | None:
    """Stream a Drive file into image_dir/filename.

    Returns:
        Public path `<url_prefix>/<filename>`, or None when the link is not
        usable or the download failed (the caller carries on without image)
    """
    file_id = extract_file_id(drive_link)
    if not file_id:
        logger.warning(f"Invalid Google Drive file URL: {drive_link}")
        return None

    dest = image_dir / filename
    partial = False
    try:
        response = requests.get(download_url(file_id), stream=True, timeout=timeout)
        response.raise_for_status()
        dest.parent.mkdir(parents=True, exist_ok=True)
        partial = True
        with open(dest, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        logger.error(f"Failed to download {filename}: {e}")
        if partial:
            dest.unlink(missing_ok=True)
        return None

    logger.info(f"Downloaded image: {filename}")
    return f"{url_prefix}/{filename}"


class AssetDownloader:
    """fetch_asset bound to the run's image directory, with counters.

    Instances are passed to the transformers as their `fetch_image`
    callable: `downloader(link, filename) -> public path | None`.
    """

    def __init__(self, image_dir: Path, url_prefix: str = "/images", timeout: float | None = None) -> None:
        self.image_dir = image_dir
        self.url_prefix = url_prefix
        self.timeout = timeout
        self.downloaded = 0
        self.failed = 0

    def __call__(self, drive_link: str, filename: str) -> str | None:
        path = fetch_asset(
            drive_link,
            filename,
            self.image_dir,
            url_prefix=self.url_prefix,
            timeout=self.timeout,
        )
        if path is None:
            self.failed += 1
        else:
            self.downloaded += 1
        return path
