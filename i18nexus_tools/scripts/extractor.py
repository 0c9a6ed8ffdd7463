#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
extractor.py - collect t("...") keys from sources into per-language locale files.

Key points
- Finds t("key") and obj.t("key") calls with a plain string key.
- `defaultValue` from an options object becomes the default-language text.
- JSON mode merges into <localesDir>/<lang>.json (only new keys are added) and
  regenerates index.ts; --force rewrites every value.
- CSV mode writes a Key,English,Korean sheet for spreadsheet import.

Usage Examples
--------------

1. Update locales/en.json and locales/ko.json:
   i18n-extractor

2. Preview only:
   i18n-extractor --dry-run

3. CSV export:
   i18n-extractor --format csv -o translations.json
"""

from __future__ import annotations
import argparse
import logging
import pathlib
import sys

from i18nexus_tools.errors import ConfigurationError
from i18nexus_tools.extractor.core import OUTPUT_FORMATS, ExtractorConfig, TranslationExtractor
from i18nexus_tools.syntax.backends import BACKEND_NAMES
from i18nexus_tools.utils.config import CONFIG_FILE, load_config
from i18nexus_tools.utils.fs import DEFAULT_IGNORES
from i18nexus_tools.utils.logging import get_tools_logger

logger = get_tools_logger()


def build_config(args: argparse.Namespace, file_config: dict) -> ExtractorConfig:
	languages = file_config["languages"]
	if args.languages:
		languages = [a.strip() for a in args.languages.split(",") if a.strip()]
	return ExtractorConfig(
		source_pattern=args.pattern or file_config["sourcePattern"],
		output_file=args.output,
		output_dir=args.output_dir or file_config["localesDir"],
		include_line_numbers=args.include_lines,
		include_file_paths=args.include_paths,
		sort_keys=not args.no_sort,
		dry_run=args.dry_run,
		output_format=args.format,
		languages=tuple(languages),
		default_language=file_config["defaultLanguage"],
		force=args.force,
		parser_type=args.parser or file_config.get("parserType") or "tsx",
		ignore_globs=tuple([*DEFAULT_IGNORES, *(args.ignore or [])]),
	)


def run(args: argparse.Namespace) -> int:
	if args.verbose:
		logger.setLevel(logging.DEBUG)

	base = pathlib.Path(args.cwd).resolve() if args.cwd else pathlib.Path.cwd()
	config_path = pathlib.Path(args.config)
	if not config_path.is_absolute():
		config_path = base / config_path

	try:
		config = build_config(args, load_config(str(config_path), silent=True))
		extractor = TranslationExtractor(config, base=base)
	except ConfigurationError as e:
		print(f"Configuration error: {e}", file=sys.stderr)
		return 2

	try:
		extractor.extract()
	except OSError as e:
		logger.error("Extraction failed: %s", e)
		return 1
	return 0


def build_arg_parser() -> argparse.ArgumentParser:
	ap = argparse.ArgumentParser(prog="i18n-extractor", description="Extract t() keys into locale files")
	ap.add_argument("-p", "--pattern", help="Source glob (default: sourcePattern from the config file)")
	ap.add_argument("-o", "--output", default="extracted-translations.json", help="Output file name (CSV mode)")
	ap.add_argument("-d", "--output-dir", help="Locales directory (default: localesDir from the config file)")
	ap.add_argument("--format", choices=OUTPUT_FORMATS, default="json", help="Output format")
	ap.add_argument("--languages", help="Comma-separated language codes (default: from the config file)")
	ap.add_argument("--dry-run", action="store_true", help="Preview only; no writes")
	ap.add_argument("--force", action="store_true", help="Overwrite existing translations")
	ap.add_argument("--no-sort", action="store_true", help="Keep keys in discovery order")
	ap.add_argument("--include-paths", action="store_true", help="Record file paths of keys")
	ap.add_argument("--include-lines", action="store_true", help="Record line numbers of keys")
	ap.add_argument("--parser", choices=BACKEND_NAMES, help="Parser backend (default: tsx)")
	ap.add_argument("--config", default=CONFIG_FILE, help="Path to i18nexus.config.json")
	ap.add_argument("--cwd", help="Project root the pattern is resolved against (default: current directory)")
	ap.add_argument("--ignore", action="append", default=[], help="Glob patterns to exclude (repeatable)")
	ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	return ap


def main():
	args = build_arg_parser().parse_args()
	sys.exit(run(args))


if __name__ == "__main__":
	main()
