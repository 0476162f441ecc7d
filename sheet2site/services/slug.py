from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """URL-safe slug: lowercase ascii letters/digits joined by single hyphens.

    >>> slugify("Hello, World!")
    'hello-world'
    >>> slugify("  --Café  au   lait-- ")
    'caf-au-lait'

    May return "" when the title has no ascii letters or digits.
    """
    s = (title or "").lower()
    s = _DISALLOWED.sub("", s)
    s = _WHITESPACE.sub("-", s)
    s = _HYPHENS.sub("-", s)
    return s.strip("-")
