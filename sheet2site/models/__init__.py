"""Domain models for the sheet2site content importer."""

from .config_models import PathsConfig, SiteConfig, SiteSettings
from .content_document import ContentDocument
from .error_record import SkipRecord
from .processing_result import RunResult, SheetStat
from .row_data import RowData
from .sheet_source import SHEET_SOURCES, SheetKind, SheetSource
from .site_entries import ProjectEntry, ServiceEntry

__all__ = [
    # Configuration models
    "PathsConfig",
    "SiteConfig",
    "SiteSettings",
    "SheetKind",
    "SheetSource",
    "SHEET_SOURCES",
    # Processing models
    "RowData",
    "ContentDocument",
    "ServiceEntry",
    "ProjectEntry",
    "SkipRecord",
    "RunResult",
    "SheetStat",
]
