from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import PathsConfig, SiteConfig, SiteSettings
from ..models.sheet_source import SHEET_SOURCES

"""Config loader.

Responsibilities:
- Load the optional YAML file (config/sheet2site.yml) and validate it
  against config_schema.json
- Read sheet share links from the environment (sources are env-only)
- Apply environment overrides for site title / description / base URL
- Fail fast listing every missing required variable
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/sheet2site.yml")

# env var -> SiteSettings field
SITE_ENV_OVERRIDES = {
    "SITE_TITLE": "title",
    "SITE_DESCRIPTION": "description",
    "BASE_URL": "base_url",
}


class ConfigError(Exception):
    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate YAML config data against the packaged JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    # ファイルは任意。無ければ既定値のみで動作
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def _build_paths(raw: dict[str, Any]) -> PathsConfig:
    kwargs: dict[str, Any] = {}
    for f in fields(PathsConfig):
        if f.name not in raw:
            continue
        value = raw[f.name]
        kwargs[f.name] = value.rstrip("/") if f.name == "image_url_prefix" else Path(value)
    return PathsConfig(**kwargs)


def _build_site(raw: dict[str, Any], environ: Mapping[str, str]) -> SiteSettings:
    values = dict(raw)
    for env_name, field_name in SITE_ENV_OVERRIDES.items():
        if environ.get(env_name):
            values[field_name] = environ[env_name]
    return SiteSettings(**values)


def _env_value(environ: Mapping[str, str], name: str) -> str:
    return (environ.get(name) or "").strip()


def missing_sources(environ: Mapping[str, str]) -> list[str]:
    """Names of required source variables that are unset or empty."""
    return [s.env_var for s in SHEET_SOURCES if s.required and not _env_value(environ, s.env_var)]


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> SiteConfig:
    if environ is None:
        environ = os.environ
    data = _read_yaml(path or DEFAULT_CONFIG_PATH)
    _validate_config_schema(data)

    missing = missing_sources(environ)
    if missing:
        raise ConfigError(
            f"missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )

    sources = {
        s.kind: _env_value(environ, s.env_var) for s in SHEET_SOURCES if _env_value(environ, s.env_var)
    }
    return SiteConfig(
        sources=sources,
        site=_build_site(data.get("site") or {}, environ),
        paths=_build_paths(data.get("paths") or {}),
        request_timeout=data.get("request_timeout"),
    )
