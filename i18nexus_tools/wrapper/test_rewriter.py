# -*- coding: utf-8 -*-
"""
Tests for the literal rewriter.
"""
from __future__ import annotations

import unittest

from i18nexus_tools.syntax.backends import TsxBackend
from i18nexus_tools.syntax.tree import iter_nodes
from i18nexus_tools.wrapper.classifier import STRING, TEMPLATE, Literal, string_value, template_parts
from i18nexus_tools.wrapper.orchestrator import FileState
from i18nexus_tools.wrapper.rewriter import (
    derived_name,
    interpolate,
    js_string_literal,
    placeholder_names,
    rewrite_literal,
    translation_call,
)


def parse(code: str, path: str = "t.tsx"):
    return TsxBackend().parse(code, path=path)


def expressions(code: str):
    tree = parse(f"const x = `${{{code}}}`;", "t.ts")
    node = next(n for n in iter_nodes(tree.root) if n.type == "template_string")
    return template_parts(node)[1]


def template_literal(tree):
    node = next(n for n in iter_nodes(tree.root) if n.type == "template_string")
    quasis, exprs = template_parts(node)
    return Literal(TEMPLATE, "".join(quasis), [node], quasis=quasis, expressions=exprs)


class TestStringOutput(unittest.TestCase):

    def test_js_string_literal(self):
        """Keys are emitted double-quoted with JSON escaping."""
        self.assertEqual(js_string_literal("안녕"), '"안녕"')
        self.assertEqual(js_string_literal('a"b\n'), '"a\\"b\\n"')

    def test_translation_call_without_options(self):
        """No interpolations means no options object."""
        self.assertEqual(translation_call("안녕").text, 't("안녕")')
        self.assertEqual(translation_call("안녕", [], "i18n").text, 'i18n("안녕")')


class TestPlaceholderNames(unittest.TestCase):
    """Placeholder naming for template interpolations."""

    def test_identifier_and_member_chain(self):
        """Identifiers keep their name; member chains are flattened with underscores."""
        self.assertEqual(derived_name(expressions("name")[0]), "name")
        self.assertEqual(derived_name(expressions("user.total")[0]), "user_total")
        self.assertEqual(derived_name(expressions("a.b.c")[0]), "a_b_c")

    def test_other_shapes_are_positional(self):
        """Calls, computed members and arithmetic get positional names."""
        self.assertIsNone(derived_name(expressions("f()")[0]))
        self.assertIsNone(derived_name(expressions("a[0]")[0]))
        tree = parse("const x = `${a + 1}개 ${f()}`;", "t.ts")
        self.assertEqual(placeholder_names(template_literal(tree).expressions), ["expr0", "expr1"])

    def test_collision_falls_back_to_positional(self):
        """A second, different expression with the same derived name becomes expr<i>."""
        tree = parse("const x = `${a.b} 그리고 ${a_b}`;", "t.ts")
        self.assertEqual(placeholder_names(template_literal(tree).expressions), ["a_b", "expr1"])

    def test_same_expression_reuses_name(self):
        """Repeating the same expression reuses its placeholder."""
        tree = parse("const x = `${n}개 중 ${n}개`;", "t.ts")
        self.assertEqual(placeholder_names(template_literal(tree).expressions), ["n", "n"])

    def test_positional_collision_gets_suffix(self):
        """A positional name already taken by an identifier gets a numeric suffix."""
        tree = parse("const x = `${expr2} ${a.b} ${a_b}`;", "t.ts")
        self.assertEqual(placeholder_names(template_literal(tree).expressions), ["expr2", "a_b", "expr2_1"])

    def test_interpolate(self):
        """Placeholders use double braces."""
        self.assertEqual(interpolate(["안녕 ", "!"], ["name"]), "안녕 {{name}}!")


class TestRewriteLiteral(unittest.TestCase):
    """rewrite_literal() replaces the node in place."""

    def test_plain_string(self):
        """A string becomes t("...")."""
        tree = parse('const a = "안녕";', "t.ts")
        node = next(n for n in iter_nodes(tree.root) if n.type == "string")
        state = FileState()
        rewrite_literal(Literal(STRING, string_value(node), [node]), state)
        self.assertTrue(state.modified)
        self.assertEqual(tree.print(), 'const a = t("안녕");')

    def test_jsx_attribute_gets_container(self):
        """Attribute strings are wrapped in an expression container."""
        tree = parse('const a = <input placeholder="이름" />;')
        node = next(n for n in iter_nodes(tree.root) if n.type == "string")
        rewrite_literal(Literal(STRING, string_value(node), [node]), FileState())
        self.assertEqual(tree.print(), 'const a = <input placeholder={t("이름")} />;')

    def test_template_with_interpolations(self):
        """Templates become a key with placeholders plus an options object."""
        tree = parse("const a = `합계: ${user.total}원 (${count}개)`;", "t.ts")
        rewrite_literal(template_literal(tree), FileState())
        self.assertEqual(
            tree.print(),
            'const a = t("합계: {{user_total}}원 ({{count}}개)", { user_total: user.total, count: count });',
        )

    def test_static_template(self):
        """A template without substitutions rewrites like a plain string."""
        tree = parse("const a = `안녕`;", "t.ts")
        rewrite_literal(template_literal(tree), FileState())
        self.assertEqual(tree.print(), 'const a = t("안녕");')

    def test_repeated_expression_listed_once(self):
        """Each placeholder appears once in the options object."""
        tree = parse("const a = `${n}/${n}`;", "t.ts")
        rewrite_literal(template_literal(tree), FileState())
        self.assertEqual(tree.print(), 'const a = t("{{n}}/{{n}}", { n: n });')


if __name__ == "__main__":
    unittest.main(verbosity=2)
