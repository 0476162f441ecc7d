from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .sheet_source import SheetKind

"""Config dataclasses for the sheet2site importer.

Built once by sheet2site.config.loader at startup and passed explicitly
into the orchestrator; nothing downstream reads the process environment.
"""

DEFAULT_DESCRIPTION = "Website generated from Google Drive and Sheets"


@dataclass(frozen=True)
class SiteSettings:
    """Values written into hugo.toml.

    title / base_url / language_code / theme are only used when the skeleton
    config has to be synthesized (no existing hugo.toml).
    """
    title: str = "Sheet2Site"
    description: str = DEFAULT_DESCRIPTION
    base_url: str = "https://example.org/"
    language_code: str = "en-us"
    theme: str = "sheet2site-theme"
    hero_image: str = "/images/hero.jpg"


@dataclass(frozen=True)
class PathsConfig:
    """Filesystem layout, relative to the working directory (Hugo site root)."""
    content_dir: Path = Path("content")
    image_dir: Path = Path("static/images")
    image_url_prefix: str = "/images"
    temp_dir: Path = Path("temp")
    site_config: Path = Path("hugo.toml")
    log_dir: Path = Path("logs")


@dataclass(frozen=True)
class SiteConfig:
    """Root configuration object for one import run."""
    sources: dict[SheetKind, str]  # Only configured sources are present
    site: SiteSettings = field(default_factory=SiteSettings)
    paths: PathsConfig = field(default_factory=PathsConfig)
    request_timeout: float | None = None  # None = requests default (no timeout)

    def source_url(self, kind: SheetKind) -> str | None:
        return self.sources.get(kind)
