# -*- coding: utf-8 -*-
"""
Component detector.

Naming heuristics (``Greeting`` is a component, ``useGreeting`` a hook) and a
few scope lookups standing in for real semantic analysis. The predicates are
pure and work on the tree as parsed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from ..syntax.tree import Node, iter_nodes
from .constants import (
    BINDABLE_FUNCTION_TYPES,
    COMPONENT_NAME_RE,
    DECLARED_FUNCTION_TYPES,
    FUNCTION_TYPES,
    HOOK_NAME_RE,
    SERVER_TRANSLATION_FUNCTION,
)


@dataclass
class ComponentContext:
    """Per-function bookkeeping for one pass over a file."""

    name: str
    node: Node
    is_component: bool = True
    server_bound: bool = False
    binds_translation: bool = False
    modified: bool = False
    injected: Optional[str] = None  # "client" | "server"


def is_component_like(name: Optional[str]) -> bool:
    if not name:
        return False
    return bool(COMPONENT_NAME_RE.match(name) or HOOK_NAME_RE.match(name))


def is_function(node: Node) -> bool:
    return node.named and node.type in FUNCTION_TYPES


def function_name(fn: Node) -> Optional[str]:
    """Name a function is declared or bound with; None for anonymous functions."""
    if fn.type in DECLARED_FUNCTION_TYPES:
        name = fn.child_by_field("name")
        return name.text if name is not None else None
    if fn.type in BINDABLE_FUNCTION_TYPES:
        parent = fn.parent
        if parent is not None and parent.type == "variable_declarator" and fn.field == "value":
            name = parent.child_by_field("name")
            if name is not None and name.type == "identifier":
                return name.text
    return None


def calls_function(root: Node, name: str) -> bool:
    """Any call anywhere below ``root`` whose callee is the bare identifier ``name``."""
    for n in iter_nodes(root):
        if n.type != "call_expression":
            continue
        callee = n.child_by_field("function")
        if callee is not None and callee.type == "identifier" and callee.text == name:
            return True
    return False


def is_server_bound(fn: Node, server_function: str = SERVER_TRANSLATION_FUNCTION) -> bool:
    return calls_function(fn, server_function)


def is_async(fn: Node) -> bool:
    return any(c.type == "async" for c in fn.children)


# ── Bindings ─────────────────────────────────────────────────────────────────

_PATTERN_SKIP_FIELDS = {
    "pair_pattern": ("key",),
    "assignment_pattern": ("right",),
    "object_assignment_pattern": ("right",),
    "required_parameter": ("value", "type"),
    "optional_parameter": ("value", "type"),
}


def pattern_names(pattern: Node) -> List[str]:
    """Identifiers bound by a declarator or parameter pattern."""
    if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern.text]
    if pattern.type in ("type_annotation", "comment"):
        return []
    skip = _PATTERN_SKIP_FIELDS.get(pattern.type, ())
    out: List[str] = []
    for c in pattern.children:
        if c.field not in skip:
            out.extend(pattern_names(c))
    return out


def parameter_names(fn: Node) -> List[str]:
    single = fn.child_by_field("parameter")
    if single is not None:
        return pattern_names(single)
    params = fn.child_by_field("parameters")
    if params is None:
        return []
    names: List[str] = []
    for p in params.named_children:
        names.extend(pattern_names(p))
    return names


def declared_names(statement: Node) -> List[str]:
    """Names a single statement declares in its block."""
    t = statement.type
    if t in ("lexical_declaration", "variable_declaration"):
        names: List[str] = []
        for decl in statement.named_children:
            if decl.type == "variable_declarator":
                target = decl.child_by_field("name")
                if target is not None:
                    names.extend(pattern_names(target))
        return names
    if t in ("function_declaration", "generator_function_declaration", "class_declaration"):
        name = statement.child_by_field("name")
        return [name.text] if name is not None else []
    if t == "export_statement":
        decl = statement.child_by_field("declaration")
        return declared_names(decl) if decl is not None else []
    if t == "import_statement":
        return imported_names(statement)
    return []


def imported_names(statement: Node) -> List[str]:
    clause = statement.first_child_of_type("import_clause")
    if clause is None:
        return []
    names: List[str] = []
    for c in clause.named_children:
        if c.type == "identifier":
            names.append(c.text)
        elif c.type == "namespace_import":
            ident = c.first_child_of_type("identifier")
            if ident is not None:
                names.append(ident.text)
        elif c.type == "named_imports":
            for spec in c.named_children:
                if spec.type != "import_specifier":
                    continue
                local = spec.child_by_field("alias") or spec.child_by_field("name")
                if local is not None:
                    names.append(local.text)
    return names


def block_binds(block: Node, name: str) -> bool:
    return any(name in declared_names(s) for s in block.named_children)


def binds_name(fn: Node, name: str, injected: Iterable[Node] = ()) -> bool:
    """Whether ``name`` is bound in ``fn``'s scope or any enclosing scope.

    ``injected`` lists functions that received a binding earlier in this pass.
    """
    injected_ids: Set[int] = {id(n) for n in injected}
    scope: Optional[Node] = fn
    while scope is not None:
        if is_function(scope):
            if id(scope) in injected_ids or name in parameter_names(scope):
                return True
            body = scope.child_by_field("body")
            if body is not None and body.type == "statement_block" and block_binds(body, name):
                return True
        elif scope.type in ("statement_block", "program"):
            if block_binds(scope, name):
                return True
        scope = scope.parent
    return False
