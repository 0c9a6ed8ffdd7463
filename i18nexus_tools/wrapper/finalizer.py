# -*- coding: utf-8 -*-
"""
Module finalizer: imports and the client directive.

After bindings are injected the module must import the hook (or the server
function) from the translation package, and Next.js client modules must start
with ``"use client"``. Existing imports are extended instead of duplicated.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..syntax.tree import Node, SyntaxTree
from .classifier import string_value
from .constants import CLIENT_DIRECTIVE

logger = logging.getLogger(__name__)


def _is_directive(stmt: Node) -> bool:
    if stmt.type != "expression_statement":
        return False
    inner = [c for c in stmt.named_children if c.type != "comment"]
    return len(inner) == 1 and inner[0].type == "string"


def prologue(program: Node) -> List[Node]:
    """Hashbang line plus leading directive statements, in order."""
    out: List[Node] = []
    for c in program.children:
        if c.type in ("hash_bang_line",) or _is_directive(c):
            out.append(c)
        elif c.type == "comment":
            continue
        else:
            break
    return out


def directives(program: Node) -> List[str]:
    values = []
    for stmt in prologue(program):
        if stmt.type == "expression_statement":
            values.append(string_value(stmt.first_child_of_type("string")))
    return values


def source_of(stmt: Node) -> Optional[str]:
    source = stmt.child_by_field("source")
    if source is None or source.type != "string":
        return None
    return string_value(source)


def is_type_only(stmt: Node) -> bool:
    return any(c.type == "type" and not c.named for c in stmt.children)


def imports_from(program: Node, source: str) -> List[Node]:
    return [
        c for c in program.children
        if c.type == "import_statement" and source_of(c) == source
    ]


def imported_names(named_imports: Node) -> List[str]:
    """Exported names pulled in by `{ a, b as c }`, i.e. `a` and `b`."""
    names = []
    for spec in named_imports.named_children:
        if spec.type == "import_specifier":
            imported = spec.child_by_field("name")
            if imported is not None:
                names.append(imported.text)
    return names


def has_named_import(program: Node, name: str, source: str) -> bool:
    for stmt in imports_from(program, source):
        if is_type_only(stmt):
            continue
        clause = stmt.first_child_of_type("import_clause")
        named = clause.first_child_of_type("named_imports") if clause is not None else None
        if named is not None and name in imported_names(named):
            return True
    return False


def _insert_statement(program: Node, text: str, after_prologue: bool) -> Node:
    lead = prologue(program) if after_prologue else [c for c in program.children[:1] if c.type == "hash_bang_line"]
    if lead:
        return program.insert_after(lead[-1], Node.leaf("\n" + text))
    return program.insert_child(0, Node.leaf(text + "\n"))


def ensure_named_import(tree: SyntaxTree, name: str, source: str) -> bool:
    """Make sure ``import { name } from "source"`` exists. Returns True on change."""
    program = tree.root
    if has_named_import(program, name, source):
        return False

    for stmt in imports_from(program, source):
        if is_type_only(stmt):
            continue
        clause = stmt.first_child_of_type("import_clause")
        if clause is None:
            continue
        named = clause.first_child_of_type("named_imports")
        if named is not None:
            specs = [c for c in named.children if c.type == "import_specifier"]
            if specs:
                named.insert_after(specs[-1], Node.leaf(f", {name}"))
            else:
                named.insert_child(1, Node.leaf(f" {name} "))
            logger.debug("Added %s to existing import from %s", name, source)
            return True
        kinds = [c.type for c in clause.named_children]
        if kinds == ["identifier"]:
            clause.insert_after(clause.named_children[0], Node.leaf(f", {{ {name} }}"))
            logger.debug("Added { %s } to default import from %s", name, source)
            return True

    _insert_statement(program, f'import {{ {name} }} from "{source}";', after_prologue=True)
    logger.debug("Inserted import of %s from %s", name, source)
    return True


def ensure_directive(tree: SyntaxTree, directive: str = CLIENT_DIRECTIVE) -> bool:
    """Make ``directive`` the first directive of the module unless already present."""
    program = tree.root
    if directive in directives(program):
        return False
    _insert_statement(program, f'"{directive}";', after_prologue=False)
    return True


def needs_client_directive(mode: Optional[str], framework: Optional[str]) -> bool:
    return mode == "client" and framework == "nextjs"


def finalize_module(
    tree: SyntaxTree,
    *,
    used_client: bool,
    used_server: bool,
    client_hook: str,
    server_function: str,
    import_source: str,
    server_import_source: str,
    mode: Optional[str],
    framework: Optional[str],
) -> List[str]:
    """Apply import/directive post-conditions; returns a list of what changed."""
    changes = []
    if used_client and ensure_named_import(tree, client_hook, import_source):
        changes.append(f"import {client_hook}")
    if used_server and ensure_named_import(tree, server_function, server_import_source):
        changes.append(f"import {server_function}")
    if needs_client_directive(mode, framework) and ensure_directive(tree, CLIENT_DIRECTIVE):
        changes.append(f'directive "{CLIENT_DIRECTIVE}"')
    return changes
