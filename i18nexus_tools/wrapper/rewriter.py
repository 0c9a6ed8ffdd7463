# -*- coding: utf-8 -*-
"""
Literal rewriter: builds the replacement node for a classified literal.

    "안녕"            -> t("안녕")
    label="안녕"      -> label={t("안녕")}
    <p>안녕</p>       -> <p>{t("안녕")}</p>
    `합계: ${a.b}`    -> t("합계: {{a_b}}", { a_b: a.b })
"""
from __future__ import annotations

import json
import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..syntax.tree import Node
from .classifier import JSX_TEXT, STRING, TEMPLATE, Literal, run_source
from .constants import (
    EXPR_PREFIX,
    INTERPOLATION_CLOSE,
    INTERPOLATION_OPEN,
    MEMBER_SEPARATOR,
    TRANSLATION_FUNCTION,
)

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def js_string_literal(value: str) -> str:
    """Double-quoted JS string literal for ``value``."""
    s = json.dumps(value, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), s)


def translation_call(
    key: str,
    options: Optional[Sequence[Tuple[str, Node]]] = None,
    function: str = TRANSLATION_FUNCTION,
) -> Node:
    parts: List = [f"{function}(", js_string_literal(key)]
    if options:
        parts.append(", { ")
        for i, (name, expr) in enumerate(options):
            if i:
                parts.append(", ")
            parts.extend([f"{name}: ", expr])
        parts.append(" }")
    parts.append(")")
    return Node.synthetic(parts, type="call_expression")


# ── Template interpolation ───────────────────────────────────────────────────

def _member_chain(node: Node) -> Optional[List[str]]:
    if node.type == "identifier":
        return [node.text]
    if node.type != "member_expression":
        return None
    obj = node.child_by_field("object")
    prop = node.child_by_field("property")
    if obj is None or prop is None or prop.type != "property_identifier":
        return None
    head = _member_chain(obj)
    if head is None:
        return None
    return head + [prop.text]


def derived_name(expr: Node) -> Optional[str]:
    """``name`` for an identifier, ``a_b_c`` for ``a.b.c``; otherwise None."""
    chain = _member_chain(expr)
    if chain is None:
        return None
    return MEMBER_SEPARATOR.join(chain)


def placeholder_names(expressions: Sequence[Node]) -> List[str]:
    """One placeholder name per interpolated expression.

    The same expression text always gets the same name. When a different
    expression already holds a derived name, the later one takes the positional
    name ``expr<i>`` (with a ``_<n>`` suffix if that is taken as well).
    """
    owners: Dict[str, str] = {}
    names: List[str] = []
    for i, expr in enumerate(expressions):
        text = expr.text
        name = derived_name(expr) or f"{EXPR_PREFIX}{i}"
        if owners.get(name, text) != text:
            base = name = f"{EXPR_PREFIX}{i}"
            n = 1
            while owners.get(name, text) != text:
                name = f"{base}_{n}"
                n += 1
        owners.setdefault(name, text)
        names.append(name)
    return names


def interpolate(quasis: Sequence[str], names: Sequence[str]) -> str:
    out = [quasis[0]]
    for name, quasi in zip(names, quasis[1:]):
        out.append(f"{INTERPOLATION_OPEN}{name}{INTERPOLATION_CLOSE}")
        out.append(quasi)
    return "".join(out)


def rewrite_template(literal: Literal, function: str = TRANSLATION_FUNCTION) -> Node:
    names = placeholder_names(literal.expressions)
    options: List[Tuple[str, Node]] = []
    seen = set()
    for name, expr in zip(names, literal.expressions):
        if name in seen:
            continue
        seen.add(name)
        options.append((name, expr))
    return translation_call(interpolate(literal.quasis, names), options, function)


# ── Strings and JSX text ─────────────────────────────────────────────────────

def rewrite_string(literal: Literal, function: str = TRANSLATION_FUNCTION) -> Node:
    call = translation_call(literal.text, function=function)
    parent = literal.node.parent
    if parent is not None and parent.type == "jsx_attribute":
        return Node.synthetic(["{", call, "}"], type="jsx_expression")
    return call


def rewrite_jsx_text(literal: Literal, function: str = TRANSLATION_FUNCTION) -> Node:
    raw = run_source(literal.nodes)
    stripped = raw.strip()
    lead = raw[: len(raw) - len(raw.lstrip())]
    trail = raw[len(lead) + len(stripped):]
    call = translation_call(literal.text, function=function)
    container = Node.synthetic(["{", call, "}"], type="jsx_expression")
    return Node.synthetic([lead, container, trail])


_REWRITERS = {
    STRING: rewrite_string,
    TEMPLATE: rewrite_template,
    JSX_TEXT: rewrite_jsx_text,
}


def rewrite_literal(literal: Literal, state, function: str = TRANSLATION_FUNCTION) -> Node:
    """Replace ``literal`` in its tree and flag the file and component as modified."""
    replacement = _REWRITERS[literal.kind](literal, function)
    if len(literal.nodes) > 1:
        literal.node.parent.replace_run(literal.nodes, replacement)
    else:
        literal.node.replace_with(replacement)
    state.modified = True
    if literal.context is not None:
        literal.context.modified = True
    return replacement
