# -*- coding: utf-8 -*-
"""
Tests for the translation-key extractor.
"""
from __future__ import annotations

import contextlib
import io
import json
import pathlib
import tempfile
import textwrap
import unittest

from i18nexus_tools.errors import ConfigurationError
from i18nexus_tools.extractor.core import ExtractorConfig, TranslationExtractor
from i18nexus_tools.extractor.keys import ExtractedKey, extract_keys
from i18nexus_tools.extractor.output import (
    escape_csv_value,
    generate_csv,
    generate_output_data,
    index_file_content,
    merge_translations,
)
from i18nexus_tools.syntax.backends import TsxBackend


def keys_of(code: str, **options):
    tree = TsxBackend().parse(textwrap.dedent(code), path="src/A.tsx")
    return extract_keys(tree, **options)


class TestKeyExtraction(unittest.TestCase):
    """Finding t() calls."""

    def test_plain_and_member_calls(self):
        """t("..") and obj.t("..") with a string key are found in order."""
        found = keys_of("""\
            const a = t("안녕");
            const b = i18n.t('잘 가');
            const c = t(name);
            const d = translate("무시");
        """)
        self.assertEqual([k.key for k in found], ["안녕", "잘 가"])

    def test_default_value(self):
        """defaultValue in an options object becomes the default text."""
        found = keys_of('t("greeting", { defaultValue: "안녕하세요", count: 1 });')
        self.assertEqual(found[0].default_value, "안녕하세요")
        self.assertIsNone(keys_of('t("x", { other: "y" });')[0].default_value)

    def test_paths_and_lines(self):
        """File paths and line numbers are recorded on request."""
        found = keys_of('\n\nt("셋째 줄");', include_file_paths=True, include_line_numbers=True)
        self.assertEqual(found[0], ExtractedKey("셋째 줄", None, "src/A.tsx", 3))
        self.assertIsNone(keys_of('t("x");')[0].line_number)


class TestOutputData(unittest.TestCase):

    def test_json_data(self):
        """JSON data maps keys to default text (or the key), sorted."""
        keys = [ExtractedKey("b"), ExtractedKey("a", "에이")]
        self.assertEqual(list(generate_output_data(keys).items()), [("a", "에이"), ("b", "b")])
        self.assertEqual(list(generate_output_data(keys, sort_keys=False)), ["b", "a"])

    def test_csv(self):
        """CSV has a header and escapes awkward values."""
        self.assertEqual(escape_csv_value('a,"b"'), '"a,""b"""')
        self.assertEqual(escape_csv_value("plain"), "plain")
        self.assertEqual(
            generate_csv([ExtractedKey("k, 1", "값")]),
            'Key,English,Korean\n"k, 1",,값',
        )

    def test_merge(self):
        """Merging keeps existing values and adds only new keys."""
        data = {"a": "에이", "b": "비"}
        self.assertEqual(merge_translations(data, {"a": "A!"}, "en", "ko"), {"a": "A!", "b": ""})
        self.assertEqual(merge_translations(data, {"a": "old"}, "ko", "ko"), {"a": "old", "b": "비"})
        self.assertEqual(merge_translations(data, {"a": "old", "z": "1"}, "ko", "ko", force=True), data)

    def test_index_file(self):
        """index.ts imports every language file."""
        content = index_file_content(["en", "ko"])
        self.assertIn('import en from "./en.json";', content)
        self.assertIn("  ko: ko,", content)


class TestExtractorRun(unittest.TestCase):
    """Whole extractor runs over a temporary project."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.base = pathlib.Path(self._tmp.name)
        src = self.base / "src"
        src.mkdir()
        (src / "A.tsx").write_text(
            'export function A() { return <p>{t("안녕")}{t("저장", { defaultValue: "저장하기" })}</p>; }\n',
            encoding="utf-8",
        )
        (src / "B.tsx").write_text('export function B() { return <p>{t("안녕")}{t("닫기")}</p>; }\n', encoding="utf-8")
        (src / "Broken.tsx").write_text("export function ( {\n", encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def extractor(self, **kw):
        kw.setdefault("source_pattern", "src/**/*.tsx")
        return TranslationExtractor(ExtractorConfig(**kw), base=self.base)

    def run_quietly(self, extractor):
        with contextlib.redirect_stdout(io.StringIO()) as out:
            with self.assertLogs("i18nexus_tools", level="WARNING"):
                written = extractor.extract()
        return written, out.getvalue()

    def test_keys_only(self):
        """Duplicates keep the first occurrence; broken files are skipped."""
        with self.assertLogs("i18nexus_tools", level="WARNING") as logs:
            keys = self.extractor().extract_keys_only()
        self.assertEqual(sorted(k.key for k in keys), ["닫기", "안녕", "저장"])
        self.assertTrue(any("Broken.tsx" in line for line in logs.output))

    def test_json_output(self):
        """JSON mode writes one file per language plus index.ts."""
        written, _ = self.run_quietly(self.extractor())
        locales = self.base / "locales"
        self.assertEqual(sorted(p.name for p in written), ["en.json", "index.ts", "ko.json"])
        ko = json.loads((locales / "ko.json").read_text(encoding="utf-8"))
        en = json.loads((locales / "en.json").read_text(encoding="utf-8"))
        self.assertEqual(ko, {"닫기": "닫기", "안녕": "안녕", "저장": "저장하기"})
        self.assertEqual(en, {"닫기": "", "안녕": "", "저장": ""})
        self.assertTrue((locales / "index.ts").exists())

    def test_merge_keeps_translations(self):
        """Existing translations survive a second run."""
        locales = self.base / "locales"
        locales.mkdir()
        (locales / "en.json").write_text(json.dumps({"안녕": "Hello"}), encoding="utf-8")
        _, out = self.run_quietly(self.extractor())
        en = json.loads((locales / "en.json").read_text(encoding="utf-8"))
        self.assertEqual(en["안녕"], "Hello")
        self.assertIn("Added 2 new keys", out)

    def test_csv_output(self):
        """CSV mode writes a single sheet next to the requested name."""
        written, _ = self.run_quietly(self.extractor(output_format="csv", output_dir="out"))
        self.assertEqual(written, [self.base / "out" / "extracted-translations.csv"])
        lines = written[0].read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[0], "Key,English,Korean")
        self.assertIn("저장,,저장하기", lines)

    def test_dry_run(self):
        """Dry run previews without writing."""
        _, out = self.run_quietly(self.extractor(dry_run=True))
        self.assertIn("Dry run", out)
        self.assertFalse((self.base / "locales").exists())

    def test_invalid_format(self):
        """Unknown output formats are configuration errors."""
        with self.assertRaises(ConfigurationError):
            ExtractorConfig(output_format="xml")


if __name__ == "__main__":
    unittest.main(verbosity=2)
