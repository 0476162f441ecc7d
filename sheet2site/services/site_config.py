from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..models.config_models import SiteSettings
from ..models.site_entries import ProjectEntry, ServiceEntry

"""hugo.toml patching.

The file is cut at its table headers. Every [params] / [params.*] table is
dropped and the freshly generated [params] section takes the place of the
first one (or goes before [markup], or at the end). All other tables keep
their text and order. A [markup] table is added when the file has none.
This is a text splice, not a TOML round-trip: comments and layout of the
untouched parts survive, except comment lines sitting inside an old
[params] table.
"""

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_EMAIL = "hello@example.com"
# Always rendered, in this order; other contact fields follow
CONTACT_FIELDS = ("email", "phone", "address")

DEFAULT_MARKUP = """[markup]
  [markup.goldmark]
    [markup.goldmark.renderer]
      unsafe = true
"""

# A table or array-of-tables header alone on its line. Values never start
# with "[" at line start (rendered strings are single-line), so text inside
# a string cannot look like a header.
_HEADER_RE = re.compile(r"^[ \t]*\[\[?([^\[\]\n,=]+)\]\]?[ \t]*(?:#[^\n]*)?\r?$", re.MULTILINE)
_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def toml_string(value: str) -> str:
    """Render a TOML basic string (JSON escapes are valid TOML escapes)."""
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007F")


def toml_key(key: str) -> str:
    return key if _BARE_KEY_RE.match(key) else toml_string(key)


def _service_block(service: ServiceEntry) -> list[str]:
    lines = [
        "  [[params.services]]",
        f"    title = {toml_string(service.title)}",
        f"    description = {toml_string(service.description)}",
        f"    icon = {toml_string(service.icon)}",
    ]
    if service.image:
        lines.append(f"    image = {toml_string(service.image)}")
    return lines


def _project_block(project: ProjectEntry) -> list[str]:
    lines = [
        "  [[params.projects]]",
        f"    title = {toml_string(project.title)}",
        f"    description = {toml_string(project.description)}",
    ]
    if project.image:
        lines.append(f"    image = {toml_string(project.image)}")
    lines.append(f"    url = {toml_string(project.url)}")
    return lines


def _contact_block(contact: Mapping[str, str]) -> list[str]:
    lines = [
        "  [params.contact]",
        f"    email = {toml_string(contact.get('email') or DEFAULT_CONTACT_EMAIL)}",
        f"    phone = {toml_string(contact.get('phone') or '')}",
        f"    address = {toml_string(contact.get('address') or '')}",
    ]
    for key, value in contact.items():
        if key not in CONTACT_FIELDS:
            lines.append(f"    {toml_key(key)} = {toml_string(value)}")
    return lines


def render_params_section(
    services: Sequence[ServiceEntry],
    projects: Sequence[ProjectEntry],
    contact: Mapping[str, str],
    site: SiteSettings,
) -> str:
    lines = [
        "[params]",
        f"  description = {toml_string(site.description)}",
        f"  hero_image = {toml_string(site.hero_image)}",
        "",
        "  # Services section",
    ]
    for service in services:
        lines.extend(_service_block(service))
        lines.append("")
    if not services:
        lines.append("")
    lines.append("  # Projects section")
    for project in projects:
        lines.extend(_project_block(project))
        lines.append("")
    if not projects:
        lines.append("")
    lines.append("  # Contact information")
    lines.extend(_contact_block(contact))
    return "\n".join(lines) + "\n"


def render_skeleton(site: SiteSettings) -> str:
    """Top-level settings used when there is no hugo.toml yet."""
    return (
        f"baseURL = {toml_string(site.base_url)}\n"
        f"languageCode = {toml_string(site.language_code)}\n"
        f"title = {toml_string(site.title)}\n"
        f"theme = {toml_string(site.theme)}\n"
    )


def _root_table(header: str) -> str:
    return header.split(".", 1)[0].strip().strip("\"'")


def split_tables(text: str) -> tuple[str, list[tuple[str, str]]]:
    """Split TOML text at its table headers.

    Returns:
        (preamble, [(root table name, segment text), ...]); each segment runs
        from its header line up to the next header
    """
    headers = list(_HEADER_RE.finditer(text))
    if not headers:
        return text, []
    ends = [h.start() for h in headers[1:]] + [len(text)]
    segments = [
        (_root_table(h.group(1)), text[h.start():end])
        for h, end in zip(headers, ends)
    ]
    return text[:headers[0].start()], segments


def splice_config(original: str, params_section: str, site: SiteSettings) -> str:
    """Return original with its [params] tables replaced by params_section.

    Sections are joined by exactly one blank line so that patching the
    output again with the same params yields identical bytes.
    """
    if not original.strip():
        before, after, markup = render_skeleton(site), "", DEFAULT_MARKUP
    else:
        preamble, segments = split_tables(original)
        roots = [root for root, _ in segments]
        if "params" in roots:
            at = roots.index("params")
        elif "markup" in roots:
            at = roots.index("markup")
        else:
            at = len(segments)
        kept = [(i, text) for i, (root, text) in enumerate(segments) if root != "params"]
        before = preamble + "".join(text for i, text in kept if i < at)
        after = "".join(text for i, text in kept if i >= at)
        markup = "" if "markup" in roots else DEFAULT_MARKUP
    parts = [p.strip("\n") for p in (before, params_section, after, markup)]
    return "\n\n".join(p for p in parts if p) + "\n"


def patch_site_config(
    path: Path,
    services: Sequence[ServiceEntry],
    projects: Sequence[ProjectEntry],
    contact: Mapping[str, str],
    site: SiteSettings,
) -> str:
    """Rewrite the site config at path with a freshly generated [params] section.

    Returns:
        The full text written
    """
    original = path.read_text(encoding="utf-8") if path.exists() else ""
    params_section = render_params_section(services, projects, contact, site)
    new_config = splice_config(original, params_section, site)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(new_config, encoding="utf-8")
    logger.info(f"Updated {path.name} with new configuration")
    return new_config
