from .fetcher import AssetDownloader, FetchError, InvalidLinkError, fetch_asset, fetch_sheet
from .links import DRIVE_HOST, download_url, export_url, extract_file_id

__all__ = [
    "AssetDownloader",
    "FetchError",
    "InvalidLinkError",
    "fetch_asset",
    "fetch_sheet",
    "DRIVE_HOST",
    "download_url",
    "export_url",
    "extract_file_id",
]
