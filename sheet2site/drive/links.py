from __future__ import annotations

import re

"""Google Sheets / Drive share-link helpers.

Share links look like https://docs.google.com/spreadsheets/d/<id>/edit... or
https://drive.google.com/file/d/<id>/view; the id is the `/d/<id>` segment.
"""

DRIVE_HOST = "drive.google.com"

_FILE_ID_RE = re.compile(r"/d/([a-zA-Z0-9_-]+)")


def extract_file_id(url: str) -> str | None:
    """Return the file id from a share link, or None when there is no /d/<id> segment."""
    match = _FILE_ID_RE.search(url or "")
    return match.group(1) if match else None


def export_url(sheet_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"


def download_url(file_id: str) -> str:
    return f"https://drive.google.com/uc?export=download&id={file_id}"


def is_drive_link(value: str) -> bool:
    """True when a cell references a Drive-hosted asset."""
    return bool(value) and DRIVE_HOST in value
