from __future__ import annotations

from dataclasses import dataclass

"""Structured records rendered into the generated [params] section."""

__all__ = [
    "ServiceEntry",
    "ProjectEntry",
    "DEFAULT_SERVICE_ICON",
    "DEFAULT_PROJECT_URL",
]

DEFAULT_SERVICE_ICON = "⚡"
DEFAULT_PROJECT_URL = "#"


@dataclass(frozen=True)
class ServiceEntry:
    title: str
    description: str
    icon: str = DEFAULT_SERVICE_ICON
    image: str | None = None  # public path (/images/...) when downloaded


@dataclass(frozen=True)
class ProjectEntry:
    title: str
    description: str
    image: str | None = None
    url: str = DEFAULT_PROJECT_URL
