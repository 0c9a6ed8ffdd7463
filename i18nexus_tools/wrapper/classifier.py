# -*- coding: utf-8 -*-
"""
Text classifier: decides which literals are user-facing text.

All functions here are pure predicates over text or over the (unmodified) parts
of the tree around a literal, so the policy can be tested and swapped without
touching the rewriting code.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Pattern, Sequence, Union

from ..syntax.tree import Node
from .constants import (
    HANGUL_PATTERN,
    I18N_IGNORE,
    IGNORE_SCAN_LINES,
    NAME_FIELDS,
    TRANSLATION_FUNCTION,
    TYPE_CONTEXT_TYPES,
)

HANGUL_RE = re.compile(HANGUL_PATTERN)

STRING = "string"
TEMPLATE = "template"
JSX_TEXT = "jsx_text"


@dataclass
class Literal:
    """A candidate literal as seen by the classifier and the rewriter."""

    kind: str
    text: str
    nodes: List[Node]
    row: Optional[int] = None
    column: Optional[int] = None
    context: Any = None
    quasis: List[str] = field(default_factory=list)
    expressions: List[Node] = field(default_factory=list)

    @property
    def node(self) -> Node:
        return self.nodes[0]


# ── Content ──────────────────────────────────────────────────────────────────

def contains_target_script(text: str, pattern: Optional[Pattern] = None) -> bool:
    return bool((pattern or HANGUL_RE).search(text))


def is_translatable(text: Union[str, Sequence[str]], pattern: Optional[Pattern] = None) -> bool:
    """True when the trimmed content is non-empty and contains target-script text.

    ``text`` may be a sequence of template static parts; any part may qualify.
    """
    if isinstance(text, str):
        text = [text]
    return any(part.strip() and contains_target_script(part, pattern) for part in text)


# ── Literal values ───────────────────────────────────────────────────────────

_JS_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}


def _unescape(m: "re.Match[str]") -> str:
    esc = m.group(1)
    if esc in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[esc]
    if esc in _LINE_CONTINUATIONS:
        return ""
    if esc.startswith("u{"):
        return chr(int(esc[2:-1], 16))
    if esc[0] in "ux" and len(esc) > 1:
        return chr(int(esc[1:], 16))
    if esc[0] in "01234567":
        return chr(int(esc, 8))
    return esc


def decode_js_string(raw: str) -> str:
    """Cooked value of string or template text between the delimiters."""
    value = _JS_ESCAPE_RE.sub(_unescape, raw.replace("\r\n", "\n"))
    try:
        return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        return value


def string_value(node: Node) -> str:
    raw = node.text[1:-1]
    if node.parent is not None and node.parent.type == "jsx_attribute":
        return html.unescape(raw)
    return decode_js_string(raw)


def template_parts(node: Node):
    """Split a template literal into cooked static parts and substitution nodes."""
    src = node.source
    quasis: List[str] = []
    exprs: List[Node] = []
    cursor = node.start + 1
    for child in node.children:
        if child.type != "template_substitution":
            continue
        quasis.append(src[cursor:child.start].decode("utf-8"))
        inner = [c for c in child.named_children if c.type != "comment"]
        exprs.append(inner[0] if inner else child)
        cursor = child.end
    quasis.append(src[cursor:node.end - 1].decode("utf-8"))
    return [decode_js_string(q) for q in quasis], exprs


_JSX_LINE_BREAK_WS = re.compile(r"[ \t]*\r?\n\s*")


def run_source(run: Sequence[Node]) -> str:
    """Source text spanning a run of sibling nodes, gaps included."""
    first, last = run[0], run[-1]
    return first.source[first.start:last.end].decode("utf-8")


def jsx_text_value(run: Sequence[Node]) -> str:
    """Displayed text of a run of JSX text nodes, trimmed, line breaks collapsed."""
    raw = run_source(run)
    return _JSX_LINE_BREAK_WS.sub(" ", html.unescape(raw)).strip()


# ── Ignore markers ───────────────────────────────────────────────────────────

def comment_value(text: str) -> str:
    if text.startswith("//"):
        return text[2:].strip()
    if text.startswith("/*"):
        return text[2:-2].strip().lstrip("*").strip()
    return text.strip()


def is_ignore_comment(text: str, marker: str = I18N_IGNORE) -> bool:
    value = comment_value(text)
    return value == marker or value.startswith(marker)


def _comment_container(node: Node) -> Optional[List[Node]]:
    """Comments of a ``{/* ... */}`` JSX container that holds nothing else."""
    if node.type != "jsx_expression":
        return None
    named = node.named_children
    if named and all(c.type == "comment" for c in named):
        return named
    return None


def leading_comments(node: Node) -> List[Node]:
    """Comment siblings directly before ``node``; blank JSX text is skipped."""
    out: List[Node] = []
    sib = node.prev_sibling
    while sib is not None:
        if sib.type == "comment":
            out.append(sib)
        elif sib.type == "jsx_text" and not sib.text.strip():
            pass
        else:
            inner = _comment_container(sib)
            if inner is None:
                break
            out.extend(inner)
        sib = sib.prev_sibling
    return out


def _is_statement(node: Node) -> bool:
    return node.type.endswith(("_statement", "_declaration")) or node.type in ("program", "statement_block")


def has_ignore_comment(node: Node, marker: str = I18N_IGNORE) -> bool:
    """Leading marker comment on the node or an ancestor within its statement."""
    current: Optional[Node] = node
    while current is not None and current.type not in ("program", "statement_block"):
        if any(is_ignore_comment(c.text, marker) for c in leading_comments(current)):
            return True
        if _is_statement(current):
            break
        current = current.parent
    return False


def line_has_ignore_marker(lines: Sequence[str], row: Optional[int], marker: str = I18N_IGNORE) -> bool:
    """Scan the literal's line and the lines above it for the marker."""
    if row is None:
        return False
    first = max(0, row - IGNORE_SCAN_LINES)
    return any(marker in line for line in lines[first:row + 1])


def is_ignored(node: Node, lines: Sequence[str], marker: str = I18N_IGNORE) -> bool:
    return has_ignore_comment(node, marker) or line_has_ignore_marker(lines, node.start_row, marker)


# ── Structural exclusions ────────────────────────────────────────────────────

def is_translation_call(node: Optional[Node], name: str = TRANSLATION_FUNCTION) -> bool:
    """``t(...)`` or ``something.t(...)``."""
    if node is None or node.type != "call_expression":
        return False
    callee = node.child_by_field("function")
    if callee is None:
        return False
    if callee.type == "identifier":
        return callee.text == name
    if callee.type == "member_expression":
        prop = callee.child_by_field("property")
        return prop is not None and prop.text == name
    return False


def is_translation_argument(node: Node, name: str = TRANSLATION_FUNCTION) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "arguments" and is_translation_call(parent.parent, name)


def is_in_import(node: Node) -> bool:
    return any(a.type in ("import_statement", "import_require_clause") for a in node.ancestors())


def is_object_key(node: Node) -> bool:
    """Keys, names and module specifiers: a string in a naming position."""
    if node.field in NAME_FIELDS:
        return True
    parent = node.parent
    return parent is not None and parent.type == "computed_property_name"


def in_type_context(node: Node) -> bool:
    return any(a.type in TYPE_CONTEXT_TYPES for a in node.ancestors())


def is_tagged_template(node: Node) -> bool:
    parent = node.parent
    return node.type == "template_string" and parent is not None and parent.type == "call_expression"


def is_excluded(node: Node, lines: Sequence[str], translation_function: str = TRANSLATION_FUNCTION) -> bool:
    """Structural and marker exclusions; content is checked separately."""
    return (
        is_translation_argument(node, translation_function)
        or is_in_import(node)
        or is_object_key(node)
        or is_tagged_template(node)
        or in_type_context(node)
        or is_ignored(node, lines)
    )
