# -*- coding: utf-8 -*-
"""
Output writers for extracted keys.

JSON: one ``<lang>.json`` per language plus an ``index.ts`` re-exporting them.
Existing files are merged (only new keys are added) unless ``force`` is set.
CSV: a single ``Key,English,Korean`` sheet ready for spreadsheet import.
"""
from __future__ import annotations

import json
import logging
import pathlib
from typing import Dict, Iterable, List, Sequence, Union

from ..utils.fs import atomic_write
from .keys import ExtractedKey

logger = logging.getLogger(__name__)

CSV_HEADER = "Key,English,Korean"
INDEX_FILE = "index.ts"
PREVIEW_CHARS = 500


def escape_csv_value(value: str) -> str:
    if any(ch in value for ch in (",", '"', "\n", "\r")):
        return '"' + value.replace('"', '""') + '"'
    return value


def sorted_keys(keys: Iterable[ExtractedKey], sort: bool = True) -> List[ExtractedKey]:
    keys = list(keys)
    return sorted(keys, key=lambda k: k.key) if sort else keys


def generate_output_data(
    keys: Sequence[ExtractedKey],
    output_format: str = "json",
    sort_keys: bool = True,
) -> Union[str, Dict[str, str]]:
    """CSV text, or a key -> default text mapping for JSON output."""
    ordered = sorted_keys(keys, sort_keys)
    if output_format == "csv":
        return generate_csv(ordered)
    return {k.key: k.default_value or k.key for k in ordered}


def generate_csv(keys: Sequence[ExtractedKey]) -> str:
    lines = [CSV_HEADER]
    for k in keys:
        korean = k.default_value or k.key
        lines.append(",".join([escape_csv_value(k.key), escape_csv_value(""), escape_csv_value(korean)]))
    return "\n".join(lines)


def index_file_content(languages: Sequence[str]) -> str:
    imports = "\n".join(f'import {lang} from "./{lang}.json";' for lang in languages)
    exports = "\n".join(f"  {lang}: {lang}," for lang in languages)
    return f"{imports}\n\nexport const translations = {{\n{exports}\n}};\n"


def _preview(path: pathlib.Path, content: str) -> None:
    print(f"Dry run - output would be written to: {path}")
    print("Content preview:")
    print(content[:PREVIEW_CHARS] + ("..." if len(content) > PREVIEW_CHARS else ""))


def generate_index_file(languages: Sequence[str], output_dir: pathlib.Path, dry_run: bool = False) -> pathlib.Path:
    path = output_dir / INDEX_FILE
    content = index_file_content(languages)
    if dry_run:
        print(f"Dry run - index file would be written to: {path}")
    else:
        atomic_write(path, content)
        print(f"Generated index file: {path}")
    return path


def _read_existing(path: pathlib.Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Failed to parse existing %s, will overwrite", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Existing %s is not a JSON object, will overwrite", path)
        return {}
    return data


def merge_translations(
    data: Dict[str, str],
    existing: Dict[str, str],
    lang: str,
    default_language: str,
    force: bool = False,
) -> Dict[str, str]:
    """Values for one language: the default language gets the text, others ``""``."""
    def value_for(key: str) -> str:
        return (data[key] or key) if lang == default_language else ""

    if force:
        return {key: value_for(key) for key in data}
    merged = dict(existing)
    for key in data:
        if key not in merged:
            merged[key] = value_for(key)
    return merged


def write_output_file(
    data: Union[str, Dict[str, str]],
    *,
    output_format: str,
    languages: Sequence[str],
    default_language: str,
    output_dir: pathlib.Path,
    output_file: str,
    force: bool = False,
    dry_run: bool = False,
) -> List[pathlib.Path]:
    """Write (or preview) the generated output. Returns the target paths."""
    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    if output_format == "csv":
        name = output_file[:-5] + ".csv" if output_file.endswith(".json") else output_file
        path = output_dir / name
        if dry_run:
            _preview(path, data)
        else:
            atomic_write(path, data)
            print(f"Extracted translations written to: {path}")
        return [path]

    written = []
    for lang in languages:
        path = output_dir / f"{lang}.json"
        existing = _read_existing(path)
        if force:
            print(f"Force mode: overwriting all translations in {path}")
        merged = merge_translations(data, existing, lang, default_language, force)
        if not force:
            added = len(merged) - len(existing)
            if added:
                print(f"Added {added} new keys to {path}")
            else:
                print(f"No new keys to add to {path}")
        content = json.dumps(merged, ensure_ascii=False, indent=2)
        if dry_run:
            _preview(path, content)
        else:
            atomic_write(path, content)
            print(f"Extracted translations written to: {path}")
        written.append(path)

    written.append(generate_index_file(languages, output_dir, dry_run))
    return written
