# -*- coding: utf-8 -*-
"""Translation-key extractor: scan sources for ``t()`` calls and write locale files."""
from __future__ import annotations

import dataclasses
import logging
import pathlib
from typing import Dict, List, Optional, Tuple

from ..errors import ConfigurationError, ParseFailure
from ..syntax.backends import get_backend
from ..utils.config import DEFAULT_CONFIG
from ..utils.fs import discover_files, read_source
from .keys import ExtractedKey, extract_keys
from .output import generate_output_data, write_output_file

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "csv")


@dataclasses.dataclass
class ExtractorConfig:
    source_pattern: str = DEFAULT_CONFIG["sourcePattern"]
    output_file: str = "extracted-translations.json"
    output_dir: str = DEFAULT_CONFIG["localesDir"]
    include_line_numbers: bool = False
    include_file_paths: bool = False
    sort_keys: bool = True
    dry_run: bool = False
    output_format: str = "json"
    languages: Tuple[str, ...] = tuple(DEFAULT_CONFIG["languages"])
    default_language: str = DEFAULT_CONFIG["defaultLanguage"]
    force: bool = False
    parser_type: str = "tsx"
    ignore_globs: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Invalid output format {self.output_format!r}")
        self.languages = tuple(self.languages)


class TranslationExtractor:
    def __init__(self, config: Optional[ExtractorConfig] = None, backend=None, base: Optional[pathlib.Path] = None) -> None:
        self.config = config or ExtractorConfig()
        self.backend = backend or get_backend(self.config.parser_type)
        self.base = base or pathlib.Path.cwd()
        self.extracted: Dict[str, ExtractedKey] = {}

    def _add(self, found: ExtractedKey) -> None:
        if found.key in self.extracted:
            logger.info('Duplicate key found: "%s"', found.key)
            return
        self.extracted[found.key] = found

    def parse_file(self, path: pathlib.Path) -> None:
        shown = str(path)
        try:
            tree = self.backend.parse(read_source(path), path=shown)
        except (ParseFailure, UnicodeDecodeError, OSError) as e:
            logger.warning("Failed to parse %s: %s", shown, e)
            return
        for found in extract_keys(
            tree,
            include_file_paths=self.config.include_file_paths,
            include_line_numbers=self.config.include_line_numbers,
        ):
            self._add(found)

    def _files(self) -> List[pathlib.Path]:
        return discover_files(self.config.source_pattern, self.base, list(self.config.ignore_globs))

    def extract_keys_only(self) -> List[ExtractedKey]:
        """Analyze files and return the keys without writing anything."""
        for path in self._files():
            self.parse_file(path)
        return list(self.extracted.values())

    def extract(self) -> List[pathlib.Path]:
        cfg = self.config
        print("Starting translation key extraction...")
        print(f"Pattern: {cfg.source_pattern}")
        files = self._files()
        if not files:
            logger.warning("No files found matching pattern: %s", cfg.source_pattern)
            return []
        print(f"Found {len(files)} files to analyze")
        for path in files:
            logger.debug("Analyzing: %s", path)
            self.parse_file(path)

        keys = list(self.extracted.values())
        data = generate_output_data(keys, cfg.output_format, cfg.sort_keys)
        print(f"Found {len(keys)} unique translation keys")

        output_dir = pathlib.Path(cfg.output_dir)
        if not output_dir.is_absolute():
            output_dir = self.base / output_dir
        written = write_output_file(
            data,
            output_format=cfg.output_format,
            languages=cfg.languages,
            default_language=cfg.default_language,
            output_dir=output_dir,
            output_file=cfg.output_file,
            force=cfg.force,
            dry_run=cfg.dry_run,
        )
        print("Translation extraction completed")
        return written


def run_translation_extractor(config: Optional[ExtractorConfig] = None, base: Optional[pathlib.Path] = None) -> List[pathlib.Path]:
    return TranslationExtractor(config, base=base).extract()
