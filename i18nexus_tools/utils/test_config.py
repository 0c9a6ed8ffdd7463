# -*- coding: utf-8 -*-
"""
Tests for project config loading and run-config resolution.
"""
from __future__ import annotations

import contextlib
import io
import json
import os
import pathlib
import tempfile
import unittest
from unittest import mock

from i18nexus_tools.errors import ConfigurationError
from i18nexus_tools.utils.config import (
    DEFAULT_CONFIG,
    PERF_MONITOR_ENV,
    PERF_VERBOSE_ENV,
    TransformConfig,
    load_config,
    resolve_transform_config,
)


class TestLoadConfig(unittest.TestCase):
    """i18nexus.config.json handling."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = pathlib.Path(self._tmp.name) / "i18nexus.config.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_uses_defaults(self):
        """A missing file is not an error."""
        with contextlib.redirect_stdout(io.StringIO()) as out:
            cfg = load_config(str(self.path))
        self.assertEqual(cfg, DEFAULT_CONFIG)
        self.assertIn("not found", out.getvalue())

    def test_silent(self):
        """silent=True suppresses the missing-file notice."""
        with contextlib.redirect_stdout(io.StringIO()) as out:
            load_config(str(self.path), silent=True)
        self.assertEqual(out.getvalue(), "")

    def test_merge_over_defaults(self):
        """File values override defaults; other keys keep their default."""
        self.path.write_text(json.dumps({"languages": ["ko", "ja"], "sourcePattern": "app/**/*.tsx"}), encoding="utf-8")
        cfg = load_config(str(self.path))
        self.assertEqual(cfg["languages"], ["ko", "ja"])
        self.assertEqual(cfg["sourcePattern"], "app/**/*.tsx")
        self.assertEqual(cfg["translationImportSource"], "i18nexus")

    def test_defaults_not_shared(self):
        """Mutating a loaded config leaves DEFAULT_CONFIG alone."""
        cfg = load_config(str(self.path), silent=True)
        cfg["languages"].append("fr")
        self.assertEqual(DEFAULT_CONFIG["languages"], ["en", "ko"])

    def test_malformed_json(self):
        """Malformed JSON is a configuration error."""
        self.path.write_text("{ languages: ", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(str(self.path))

    def test_not_an_object(self):
        """The top level must be an object."""
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(str(self.path))

    def test_empty_languages(self):
        """An empty language list is rejected."""
        self.path.write_text('{"languages": []}', encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(str(self.path))


class TestTransformConfig(unittest.TestCase):
    """The immutable run configuration."""

    def test_defaults(self):
        """File defaults flow into the resolved config."""
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(PERF_MONITOR_ENV, None)
            cfg = resolve_transform_config(DEFAULT_CONFIG)
        self.assertEqual(cfg.source_pattern, "src/**/*.{js,jsx,ts,tsx}")
        self.assertEqual(cfg.client_hook, "useTranslation")
        self.assertEqual(cfg.server_function, "getServerTranslation")
        self.assertEqual(cfg.server_source, "i18nexus")
        self.assertIsNone(cfg.mode)
        self.assertTrue(cfg.enable_performance_monitoring)

    def test_overrides_skip_none(self):
        """Unset (None) overrides fall through to file values."""
        cfg = resolve_transform_config(
            {"translationImportSource": "@/i18n", "serverTranslationImportSource": "@/i18n/server"},
            mode="server",
            framework=None,
            dry_run=True,
        )
        self.assertEqual(cfg.mode, "server")
        self.assertIsNone(cfg.framework)
        self.assertTrue(cfg.dry_run)
        self.assertEqual(cfg.translation_import_source, "@/i18n")
        self.assertEqual(cfg.server_source, "@/i18n/server")

    def test_invalid_values(self):
        """Bad mode, framework, parser or pattern values are rejected."""
        with self.assertRaises(ConfigurationError):
            TransformConfig(mode="edge")
        with self.assertRaises(ConfigurationError):
            TransformConfig(framework="vue")
        with self.assertRaises(ConfigurationError):
            TransformConfig(parser_type="babel")
        with self.assertRaises(ConfigurationError):
            TransformConfig(target_script="[")
        with self.assertRaises(ConfigurationError):
            resolve_transform_config({}, colour="red")

    def test_frozen(self):
        """Resolved configs cannot be changed."""
        cfg = TransformConfig()
        with self.assertRaises(Exception):
            cfg.mode = "client"

    def test_perf_env(self):
        """Performance monitoring follows the environment."""
        with mock.patch.dict(os.environ, {PERF_MONITOR_ENV: "false", PERF_VERBOSE_ENV: "true"}):
            cfg = resolve_transform_config({})
        self.assertFalse(cfg.enable_performance_monitoring)
        self.assertTrue(cfg.verbose_performance)

    def test_target_pattern(self):
        """target_pattern compiles the configured script class."""
        self.assertTrue(TransformConfig().target_pattern.search("한"))
        self.assertIsNone(TransformConfig(target_script="[ぁ-ん]").target_pattern.search("한"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
