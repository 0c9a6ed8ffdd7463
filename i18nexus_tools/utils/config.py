# -*- coding: utf-8 -*-
"""
Project configuration (``i18nexus.config.json``) and the resolved run config.

The JSON file uses camelCase keys shared with the JavaScript tooling:

    {
      "languages": ["en", "ko"],
      "defaultLanguage": "ko",
      "localesDir": "./locales",
      "sourcePattern": "src/**/*.{js,jsx,ts,tsx}",
      "translationImportSource": "i18nexus",
      "clientTranslationHook": "useTranslation",
      "serverTranslationFunction": "getServerTranslation",
      "serverTranslationImportSource": null
    }

A missing file means "use the defaults"; a file that exists but cannot be read
or holds invalid values raises ``ConfigurationError``.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import os
import pathlib
import re
from typing import Any, Dict, Optional, Tuple

from ..errors import ConfigurationError
from ..wrapper.constants import (
    CLIENT_TRANSLATION_HOOK,
    DEFAULT_IMPORT_SOURCE,
    HANGUL_PATTERN,
    SERVER_TRANSLATION_FUNCTION,
    TRANSLATION_FUNCTION,
)

logger = logging.getLogger(__name__)

CONFIG_FILE = "i18nexus.config.json"

PERF_MONITOR_ENV = "I18N_PERF_MONITOR"
PERF_VERBOSE_ENV = "I18N_PERF_VERBOSE"

MODES = ("client", "server")
FRAMEWORKS = ("nextjs", "react", "other")
PARSER_TYPES = ("tsx", "javascript")

DEFAULT_CONFIG: Dict[str, Any] = {
    "languages": ["en", "ko"],
    "defaultLanguage": "ko",
    "localesDir": "./locales",
    "sourcePattern": "src/**/*.{js,jsx,ts,tsx}",
    "translationImportSource": DEFAULT_IMPORT_SOURCE,
    "clientTranslationHook": CLIENT_TRANSLATION_HOOK,
    "serverTranslationFunction": SERVER_TRANSLATION_FUNCTION,
    "serverTranslationImportSource": None,
}


def load_config(path: str = CONFIG_FILE, *, silent: bool = False) -> Dict[str, Any]:
    """Read the project config and merge it over ``DEFAULT_CONFIG``."""
    cfg_path = pathlib.Path(path)
    merged = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_CONFIG.items()}
    if not cfg_path.exists():
        if not silent:
            print(f"{cfg_path.name} not found, using default configuration")
        return merged

    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8") or "{}")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to read {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{cfg_path} must contain a JSON object")

    merged.update(data)
    if not isinstance(merged.get("languages"), list) or not merged["languages"]:
        raise ConfigurationError(f"{cfg_path}: 'languages' must be a non-empty list")
    logger.debug("Loaded config from %s", cfg_path)
    return merged


def _env_flag(name: str, default: bool) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() not in ("false", "0", "no", "off")


def _check_choice(name: str, value: Optional[str], choices: Tuple[str, ...]) -> None:
    if value is not None and value not in choices:
        raise ConfigurationError(f"Invalid {name} {value!r} (expected one of: {', '.join(choices)})")


@dataclasses.dataclass(frozen=True)
class TransformConfig:
    """Everything one wrapper run needs, resolved once."""

    source_pattern: str = DEFAULT_CONFIG["sourcePattern"]
    translation_import_source: str = DEFAULT_IMPORT_SOURCE
    server_import_source: Optional[str] = None
    client_hook: str = CLIENT_TRANSLATION_HOOK
    server_function: str = SERVER_TRANSLATION_FUNCTION
    translation_function: str = TRANSLATION_FUNCTION
    mode: Optional[str] = None
    framework: Optional[str] = None
    dry_run: bool = False
    parser_type: str = "tsx"
    target_script: str = HANGUL_PATTERN
    ignore_globs: Tuple[str, ...] = ()
    backup: bool = False
    emit_diff: bool = False
    max_file_size: Optional[int] = None
    enable_performance_monitoring: bool = True
    verbose_performance: bool = False

    def __post_init__(self) -> None:
        _check_choice("mode", self.mode, MODES)
        _check_choice("framework", self.framework, FRAMEWORKS)
        _check_choice("parser type", self.parser_type, PARSER_TYPES)
        try:
            re.compile(self.target_script)
        except re.error as e:
            raise ConfigurationError(f"Invalid target script pattern {self.target_script!r}: {e}") from e

    @property
    def server_source(self) -> str:
        return self.server_import_source or self.translation_import_source

    @property
    def target_pattern(self):
        return re.compile(self.target_script)


def resolve_transform_config(file_config: Optional[Dict[str, Any]] = None, **overrides: Any) -> TransformConfig:
    """Build a ``TransformConfig`` from the merged file config plus explicit overrides.

    Overrides whose value is None are ignored, so unset CLI flags fall through.
    """
    cfg = dict(DEFAULT_CONFIG)
    cfg.update(file_config or {})
    values: Dict[str, Any] = {
        "source_pattern": cfg["sourcePattern"],
        "translation_import_source": cfg["translationImportSource"],
        "server_import_source": cfg.get("serverTranslationImportSource"),
        "client_hook": cfg.get("clientTranslationHook") or CLIENT_TRANSLATION_HOOK,
        "server_function": cfg.get("serverTranslationFunction") or SERVER_TRANSLATION_FUNCTION,
        "mode": cfg.get("mode"),
        "framework": cfg.get("framework"),
        "parser_type": cfg.get("parserType") or "tsx",
        "enable_performance_monitoring": _env_flag(PERF_MONITOR_ENV, True),
        "verbose_performance": os.environ.get(PERF_VERBOSE_ENV, "").lower() == "true",
    }
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in values and key not in {f.name for f in dataclasses.fields(TransformConfig)}:
            raise ConfigurationError(f"Unknown option {key!r}")
        values[key] = tuple(value) if key == "ignore_globs" else value
    return TransformConfig(**values)
