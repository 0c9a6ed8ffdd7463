#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
t_wrapper.py - wrap hardcoded Korean UI text in React/Next.js sources with t() calls.

Key points
- Rewrites only literals inside components (capitalized functions) and hooks (useXxx).
- Injects `const { t } = useTranslation();` (client) or
  `const { t } = await getServerTranslation();` (server) and the matching import.
- Adds "use client" for Next.js when running in client mode.
- Never double-wraps: a second run over the same files changes nothing.
- Everything else in a file is left byte-for-byte as it was.

Skip a literal with an ignore comment on the line(s) above it:

	// i18n-ignore
	const label = "내부용";

Usage Examples
--------------

1. Preview which files would change:
   i18n-wrapper --dry-run

2. Preview with a unified diff, custom pattern:
   i18n-wrapper -p "app/**/*.tsx" --dry-run --diff

3. Next.js client components:
   i18n-wrapper --mode client --framework nextjs

4. Server components with a custom server function:
   i18n-wrapper --mode server --server-fn getTranslation
"""

from __future__ import annotations
import argparse
import asyncio
import logging
import pathlib
import sys

from i18nexus_tools.errors import ConfigurationError
from i18nexus_tools.perf import PerformanceMonitor
from i18nexus_tools.syntax.backends import BACKEND_NAMES
from i18nexus_tools.utils.config import CONFIG_FILE, FRAMEWORKS, MODES, load_config, resolve_transform_config
from i18nexus_tools.utils.fs import DEFAULT_IGNORES
from i18nexus_tools.utils.logging import get_tools_logger
from i18nexus_tools.wrapper.orchestrator import run_translation_wrapper

logger = get_tools_logger()


def run(args: argparse.Namespace) -> int:
	if args.verbose:
		logger.setLevel(logging.DEBUG)

	base = pathlib.Path(args.cwd).resolve() if args.cwd else pathlib.Path.cwd()
	config_path = pathlib.Path(args.config)
	if not config_path.is_absolute():
		config_path = base / config_path

	try:
		file_config = load_config(str(config_path), silent=args.quiet_config)
		config = resolve_transform_config(
			file_config,
			source_pattern=args.pattern,
			translation_import_source=args.import_source,
			server_function=args.server_fn,
			mode=args.mode,
			framework=args.framework,
			parser_type=args.parser,
			dry_run=args.dry_run,
			emit_diff=args.diff,
			backup=args.backup,
			max_file_size=args.max_file_size or None,
			ignore_globs=[*DEFAULT_IGNORES, *(args.ignore or [])],
			enable_performance_monitoring=False if args.no_perf else None,
		)
	except ConfigurationError as e:
		print(f"Configuration error: {e}", file=sys.stderr)
		return 2

	monitor = PerformanceMonitor(
		enabled=config.enable_performance_monitoring,
		verbose=config.verbose_performance,
	)
	print(f"Pattern: {config.source_pattern}")
	if config.dry_run:
		print("Dry run: no files will be written")

	result = asyncio.run(run_translation_wrapper(config, monitor=monitor, base=base))

	if args.diff and result.diffs:
		sys.stdout.write("\n".join(d for d in result.diffs if d))

	if result.failed_files:
		print(f"\nFailed files ({len(result.failed_files)}):")
		for f in result.failed_files:
			print(f"  {f}")
	return 0


def build_arg_parser() -> argparse.ArgumentParser:
	ap = argparse.ArgumentParser(prog="i18n-wrapper", description="Wrap Korean UI text in t() calls")
	ap.add_argument("-p", "--pattern", help="Source glob (default: sourcePattern from the config file)")
	ap.add_argument("-d", "--dry-run", action="store_true", help="Report only; no writes")
	ap.add_argument("--mode", choices=MODES, help="Force client hook or server function injection")
	ap.add_argument("--framework", choices=FRAMEWORKS, help="Framework context (nextjs adds \"use client\" in client mode)")
	ap.add_argument("--server-fn", help="Server translation function name (default: getServerTranslation)")
	ap.add_argument("--import-source", help="Module to import the hook/function from (default: i18nexus)")
	ap.add_argument("--parser", choices=BACKEND_NAMES, help="Parser backend (default: tsx)")
	ap.add_argument("--config", default=CONFIG_FILE, help="Path to i18nexus.config.json")
	ap.add_argument("--cwd", help="Project root the pattern is resolved against (default: current directory)")
	ap.add_argument("--ignore", action="append", default=[], help="Glob patterns to exclude (repeatable)")
	ap.add_argument("--diff", action="store_true", help="Print unified diff for changes")
	ap.add_argument("--backup", action="store_true", help="Write <file>.<sha1>.bak before overwriting")
	ap.add_argument("--max-file-size", type=int, default=2*1024*1024, help="Skip files larger than this many bytes (0 to disable)")
	ap.add_argument("--no-perf", action="store_true", help="Disable performance monitoring")
	ap.add_argument("--quiet-config", action="store_true", help="Do not report a missing config file")
	ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	return ap


def main():
	args = build_arg_parser().parse_args()
	sys.exit(run(args))


if __name__ == "__main__":
	main()
