# -*- coding: utf-8 -*-
"""
Parser/printer backends built on tree-sitter.

Every backend satisfies the same small capability contract used by the wrapper
and the extractor:

    backend.parse(code, path=None) -> SyntaxTree    (raises ParseFailure)
    backend.print(tree) -> str

Two backends are available, selected by name with ``get_backend``:

- ``tsx``: tree-sitter-typescript; ``.ts`` files use the TypeScript grammar,
  everything else the TSX grammar (JSX + TypeScript).
- ``javascript``: tree-sitter-javascript (JSX, no type syntax).
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser

from ..errors import ConfigurationError, ParseFailure
from .tree import Node, SyntaxTree

logger = logging.getLogger(__name__)

BACKEND_NAMES = ("tsx", "javascript")


def _convert(ts_tree, source: bytes) -> Node:
    """Copy a tree-sitter tree into owned ``Node`` objects (iteratively)."""
    cursor = ts_tree.walk()

    def make(field: Optional[str]) -> Node:
        n = cursor.node
        row, col = n.start_point[0], n.start_point[1]
        return Node(
            n.type,
            start=n.start_byte,
            end=n.end_byte,
            start_row=row,
            start_col=col,
            named=n.is_named,
            field=field,
            source=source,
        )

    root = make(None)
    current = root
    while True:
        if cursor.goto_first_child():
            child = make(cursor.field_name)
            current.append(child)
            current = child
            continue
        while True:
            if cursor.goto_next_sibling():
                sibling = make(cursor.field_name)
                current.parent.append(sibling)
                current = sibling
                break
            if not cursor.goto_parent():
                return root
            current = current.parent


def _first_error(ts_node):
    """Depth-first search for the first ERROR or MISSING node."""
    stack = [ts_node]
    while stack:
        n = stack.pop()
        if n.is_error or n.is_missing:
            return n
        if n.has_error:
            stack.extend(reversed(n.children))
    return None


class TreeSitterBackend:
    """Base backend: subclasses pick a tree-sitter language per file."""

    name = ""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def language_for(self, path: Optional[str]) -> str:
        raise NotImplementedError

    def _load_language(self, key: str) -> Language:
        raise NotImplementedError

    def _parser(self, key: str) -> Parser:
        parser = self._parsers.get(key)
        if parser is None:
            parser = Parser(self._load_language(key))
            self._parsers[key] = parser
        return parser

    def parse(self, code: str, path: Optional[str] = None) -> SyntaxTree:
        key = self.language_for(path)
        source = code.encode("utf-8")
        ts_tree = self._parser(key).parse(source)
        root = ts_tree.root_node
        if root.has_error:
            bad = _first_error(root)
            if bad is not None and bad.is_missing:
                msg = f"Missing {bad.type}"
            else:
                msg = "Unexpected token"
            row, col = (bad.start_point[0], bad.start_point[1]) if bad is not None else (0, 0)
            raise ParseFailure(msg, path=path, line=row + 1, column=col)
        logger.debug("Parsed %s with %s/%s", path or "<source>", self.name, key)
        return SyntaxTree(source, _convert(ts_tree, source), path=path, language=key)

    def print(self, tree: SyntaxTree) -> str:
        return tree.print()


class TsxBackend(TreeSitterBackend):
    name = "tsx"

    def language_for(self, path: Optional[str]) -> str:
        if path and path.endswith((".ts", ".mts", ".cts")):
            return "typescript"
        return "tsx"

    def _load_language(self, key: str) -> Language:
        if key == "typescript":
            return Language(tsts.language_typescript())
        return Language(tsts.language_tsx())


class JavaScriptBackend(TreeSitterBackend):
    name = "javascript"

    def language_for(self, path: Optional[str]) -> str:
        return "javascript"

    def _load_language(self, key: str) -> Language:
        return Language(tsjs.language())


_BACKENDS = {
    "tsx": TsxBackend,
    "javascript": JavaScriptBackend,
}


def get_backend(name: str = "tsx") -> TreeSitterBackend:
    try:
        return _BACKENDS[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown parser backend {name!r} (expected one of: {', '.join(BACKEND_NAMES)})"
        ) from None
