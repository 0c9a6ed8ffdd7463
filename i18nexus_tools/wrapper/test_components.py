# -*- coding: utf-8 -*-
"""
Tests for component detection and binding lookups.
"""
from __future__ import annotations

import textwrap
import unittest

from i18nexus_tools.syntax.backends import TsxBackend
from i18nexus_tools.syntax.tree import iter_nodes
from i18nexus_tools.wrapper.components import (
    binds_name,
    function_name,
    is_async,
    is_component_like,
    is_function,
    is_server_bound,
    pattern_names,
)


def parse(code: str, path: str = "t.tsx"):
    return TsxBackend().parse(textwrap.dedent(code), path=path)


def functions(tree):
    return [n for n in iter_nodes(tree.root) if is_function(n)]


def function_named(tree, name):
    for fn in functions(tree):
        if function_name(fn) == name:
            return fn
    raise AssertionError(f"no function {name}")


class TestNaming(unittest.TestCase):
    """Naming heuristics."""

    def test_component_like(self):
        """Capitalized names and useXxx hooks are component-like."""
        self.assertTrue(is_component_like("Greeting"))
        self.assertTrue(is_component_like("useGreeting"))
        self.assertFalse(is_component_like("greeting"))
        self.assertFalse(is_component_like("user"))
        self.assertFalse(is_component_like("use"))
        self.assertFalse(is_component_like(None))
        self.assertFalse(is_component_like(""))

    def test_function_names(self):
        """Declarations and declarator-bound arrows/expressions have names."""
        tree = parse("""\
            function A() {}
            const B = () => null;
            const C = function () {};
            export default function () {}
            items.map((x) => x);
        """)
        names = [function_name(fn) for fn in functions(tree)]
        self.assertEqual(names, ["A", "B", "C", None, None])

    def test_async(self):
        """async modifiers are detected on declarations and arrows."""
        tree = parse("""\
            async function A() {}
            const B = async () => 1;
            const C = () => 1;
        """)
        self.assertEqual([is_async(fn) for fn in functions(tree)], [True, True, False])

    def test_keyword_tokens_are_not_functions(self):
        """Only named function nodes count, never the bare `function` keyword."""
        tree = parse("const C = function () {};\nfunction* g() {}\n")
        keywords = [n for n in iter_nodes(tree.root) if n.type == "function" and not n.named]
        self.assertTrue(keywords)
        self.assertFalse(any(is_function(n) for n in keywords))
        self.assertEqual([fn.type for fn in functions(tree)], ["function_expression", "generator_function_declaration"])


class TestServerBound(unittest.TestCase):

    def test_awaited_or_not(self):
        """Any call to the server function marks the function, awaited or not."""
        tree = parse("""\
            async function A() { const { t } = await getServerTranslation(); }
            function B() { const p = getServerTranslation(); }
            function C() { return helper(() => getServerTranslation()); }
            function D() { return other(); }
        """)
        bound = [is_server_bound(fn) for fn in functions(tree) if function_name(fn)]
        self.assertEqual(bound, [True, True, True, False])

    def test_custom_server_function(self):
        """The server function name is configurable."""
        tree = parse("async function A() { await getTranslation(); }")
        fn = function_named(tree, "A")
        self.assertFalse(is_server_bound(fn))
        self.assertTrue(is_server_bound(fn, "getTranslation"))


class TestBindings(unittest.TestCase):
    """Scope lookups for the translation symbol."""

    def test_pattern_names(self):
        """Destructuring patterns bind their leaf identifiers, not keys or defaults."""
        tree = parse("const { a, b: c, d = e, ...f } = obj, [g, [h]] = arr;", "t.ts")
        decls = [n for n in iter_nodes(tree.root) if n.type == "variable_declarator"]
        names = [name for d in decls for name in pattern_names(d.child_by_field("name"))]
        self.assertEqual(names, ["a", "c", "d", "f", "g", "h"])

    def test_binding_sources(self):
        """Body declarations, parameters, enclosing scopes and imports all count."""
        tree = parse("""\
            import { t as tr } from "i18n";
            import { t } from "other";
            function Body() { const { t } = useTranslation(); return null; }
            function Param({ t }) { return null; }
            function Outer() {
              const t = (k) => k;
              const Inner = () => null;
            }
            function Plain() { return null; }
        """)
        self.assertTrue(binds_name(function_named(tree, "Body"), "t"))
        self.assertTrue(binds_name(function_named(tree, "Param"), "t"))
        self.assertTrue(binds_name(function_named(tree, "Inner"), "t"))
        # the module imports `t` from "other"
        self.assertTrue(binds_name(function_named(tree, "Plain"), "t"))

    def test_unbound(self):
        """Aliased imports bind the alias only."""
        tree = parse("""\
            import { t as tr } from "i18n";
            function Plain() { return tr("x"); }
        """)
        self.assertFalse(binds_name(function_named(tree, "Plain"), "t"))

    def test_injected_enclosing_function(self):
        """A binding injected into an enclosing function earlier in the pass counts."""
        tree = parse("""\
            function Outer() {
              const Inner = () => null;
              return null;
            }
        """)
        outer = function_named(tree, "Outer")
        inner = function_named(tree, "Inner")
        self.assertFalse(binds_name(inner, "t"))
        self.assertTrue(binds_name(inner, "t", injected=[outer]))


if __name__ == "__main__":
    unittest.main(verbosity=2)
