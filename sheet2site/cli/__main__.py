from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import get_logger, log_summary, setup_logging
from ..models.config_models import SiteConfig
from ..models.sheet_source import SHEET_SOURCES
from ..services.orchestrator import ProcessingError, load_rows, process_all, remove_temp_dir
from ..services.summary import render_sheet_lines, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (variables already in the environment win)
- Build the run config from config/sheet2site.yml + environment
- Fetch / transform every configured sheet, patch hugo.toml
- Print the SUMMARY line; exit 0 on success, 1 on any fatal error
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv.

    override=False: values exported by the shell / CI take precedence over
    the file, so a local .env never shadows GitHub Actions secrets.
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Google Sheets / Drive -> Hugo content importer")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Optional YAML config (default: {DEFAULT_CONFIG_PATH})",
    )
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _log_environment(environ: Mapping[str, str]) -> None:
    logger = get_logger()
    logger.debug(f"GitHub Actions: {'yes' if environ.get('GITHUB_ACTIONS') else 'no'}")
    status = " ".join(
        f"{s.kind.value}={'set' if (environ.get(s.env_var) or '').strip() else 'missing'}" for s in SHEET_SOURCES
    )
    logger.info(f"sources: {status}")


def _inspect_data(cfg: SiteConfig) -> int:
    try:
        for source in SHEET_SOURCES:
            url = cfg.source_url(source.kind)
            if not url:
                continue
            try:
                rows = load_rows(source, url, cfg)
            except ProcessingError as e:
                print(f"inspect: {e}")
                return EXIT_FATAL
            columns = list(rows[0].values) if rows else []
            print(f"SHEET: {source.kind.value} rows={len(rows)} cols={columns}")
            print("    sample_rows=", [r.values for r in rows[:INSPECT_SAMPLE_ROWS]])
    finally:
        remove_temp_dir(cfg.paths.temp_dir)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # 空リスト [] はそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    _log_environment(os.environ)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        for name in e.missing:
            logger.error(f"- {name} is missing")
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for line in render_sheet_lines(result):
        logger.debug(line)
    # log_summary adds the "SUMMARY " label itself
    summary_line = render_summary_line(result)
    log_summary(summary_line.removeprefix("SUMMARY "))
    logger.info("Content generation complete!")
    logger.info('Run "hugo server" to view your updated site')
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
