from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ContentDocument",
]


@dataclass(frozen=True)
class ContentDocument:
    """One generated Markdown page: front matter metadata + raw body.

    The file name is derived from slug; metadata insertion order is the
    order written to the front matter block.
    """
    slug: str
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def filename(self) -> str:
        return f"{self.slug}.md"
