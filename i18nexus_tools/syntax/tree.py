# -*- coding: utf-8 -*-
"""
Owned, mutable syntax tree with a lossless printer.

Parser backends convert their native trees into ``Node`` objects that only keep
byte offsets into the original source. Rewrites replace or insert nodes; the
printer then re-emits every untouched byte from the original source and only
renders the nodes that were changed, so formatting and comments elsewhere in
the file survive exactly.

Three kinds of nodes exist:

- parsed nodes: have a ``start``/``end`` span and print as their source slice
  until something below them changes (``dirty``);
- synthetic nodes: built from ``parts`` (strings and other nodes). A synthetic
  node that replaces a parsed node inherits its span;
- inserted nodes: synthetic nodes without a span, printed at the position of
  the preceding sibling's end.
"""
from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

Part = Union[str, "Node"]

# Returned by a visitor to stop descending into the current node.
SKIP = object()

SYNTHETIC = "synthetic"


class Node:
    __slots__ = (
        "type",
        "start",
        "end",
        "start_row",
        "start_col",
        "named",
        "field",
        "children",
        "parent",
        "parts",
        "dirty",
        "source",
    )

    def __init__(
        self,
        type: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        start_row: Optional[int] = None,
        start_col: Optional[int] = None,
        named: bool = True,
        field: Optional[str] = None,
        source: bytes = b"",
    ) -> None:
        self.type = type
        self.start = start
        self.end = end
        self.start_row = start_row
        self.start_col = start_col
        self.named = named
        self.field = field
        self.children: List[Node] = []
        self.parent: Optional[Node] = None
        self.parts: Optional[List[Part]] = None
        self.dirty = False
        self.source = source

    def __repr__(self) -> str:
        if self.start is None:
            return f"<Node {self.type} (inserted)>"
        return f"<Node {self.type} {self.start}:{self.end}>"

    # ── Construction ─────────────────────────────────────────────────────────

    @classmethod
    def synthetic(cls, parts: Sequence[Part], type: str = SYNTHETIC) -> "Node":
        """Build a node rendered from ``parts``; nodes in ``parts`` become its children."""
        node = cls(type)
        node.parts = list(parts)
        for p in node.parts:
            if isinstance(p, Node):
                p.parent = node
                node.children.append(p)
        return node

    @classmethod
    def leaf(cls, text: str) -> "Node":
        return cls.synthetic([text])

    def append(self, child: "Node") -> None:
        child.parent = self
        self.children.append(child)

    # ── Navigation ──────────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        if self.parts is None and not self.dirty and self.start is not None:
            return self.source[self.start:self.end].decode("utf-8")
        return render(self)

    @property
    def named_children(self) -> List["Node"]:
        return [c for c in self.children if c.named]

    def child_by_field(self, name: str) -> Optional["Node"]:
        for c in self.children:
            if c.field == name:
                return c
        return None

    def first_child_of_type(self, *types: str) -> Optional["Node"]:
        for c in self.children:
            if c.type in types:
                return c
        return None

    def index_in_parent(self) -> int:
        if self.parent is None:
            return -1
        for i, c in enumerate(self.parent.children):
            if c is self:
                return i
        return -1

    @property
    def prev_sibling(self) -> Optional["Node"]:
        i = self.index_in_parent()
        if i <= 0:
            return None
        return self.parent.children[i - 1]

    @property
    def next_sibling(self) -> Optional["Node"]:
        i = self.index_in_parent()
        if i < 0 or i + 1 >= len(self.parent.children):
            return None
        return self.parent.children[i + 1]

    def ancestors(self) -> Iterator["Node"]:
        p = self.parent
        while p is not None:
            yield p
            p = p.parent

    # ── Mutation ─────────────────────────────────────────────────────────────

    def mark_dirty(self) -> None:
        node: Optional[Node] = self
        while node is not None:
            node.dirty = True
            node = node.parent

    def replace_with(self, new: "Node") -> "Node":
        """Put ``new`` where this node is; ``new`` takes over the span when it has none."""
        parent = self.parent
        if parent is None:
            raise ValueError("cannot replace a detached node")
        i = self.index_in_parent()
        parent.children[i] = new
        if parent.parts is not None:
            parent.parts = [new if p is self else p for p in parent.parts]
        new.parent = parent
        new.field = self.field
        _inherit_span(new, self)
        self.parent = None
        parent.mark_dirty()
        return new

    def wrap(self, before: Sequence[Part], after: Sequence[Part], type: str = SYNTHETIC) -> "Node":
        """Replace this node with a synthetic node rendering ``before + self + after``."""
        parent = self.parent
        if parent is None:
            raise ValueError("cannot wrap a detached node")
        i = self.index_in_parent()
        new = Node(type)
        new.parts = [*before, self, *after]
        new.children = [self]
        parent.children[i] = new
        if parent.parts is not None:
            parent.parts = [new if p is self else p for p in parent.parts]
        new.parent = parent
        new.field = self.field
        _inherit_span(new, self)
        self.parent = new
        parent.mark_dirty()
        return new

    def replace_run(self, run: Sequence["Node"], new: "Node") -> "Node":
        """Replace consecutive children ``run`` of this node with one node spanning them."""
        first, last = run[0], run[-1]
        i = first.index_in_parent()
        self.children[i:i + len(run)] = [new]
        new.parent = self
        new.field = first.field
        _inherit_span(new, first)
        new.end = last.end
        for n in run:
            n.parent = None
        self.mark_dirty()
        return new

    def insert_child(self, index: int, child: "Node") -> "Node":
        child.parent = self
        self.children.insert(index, child)
        self.mark_dirty()
        return child

    def insert_after(self, anchor: "Node", child: "Node") -> "Node":
        return self.insert_child(anchor.index_in_parent() + 1, child)


def _inherit_span(new: Node, old: Node) -> None:
    if new.start is None:
        new.start, new.end = old.start, old.end
        new.start_row, new.start_col = old.start_row, old.start_col
    if not new.source:
        new.source = old.source


# ── Printing ─────────────────────────────────────────────────────────────────

def _render_into(node: Node, out: List[bytes]) -> None:
    if node.parts is not None:
        for p in node.parts:
            if isinstance(p, Node):
                _render_into(p, out)
            else:
                out.append(p.encode("utf-8"))
        return
    src = node.source
    if not node.dirty:
        if node.start is not None:
            out.append(src[node.start:node.end])
        return
    cursor = node.start
    for child in node.children:
        if child.start is not None:
            out.append(src[cursor:child.start])
            cursor = child.end
        _render_into(child, out)
    out.append(src[cursor:node.end])


def render(node: Node) -> str:
    out: List[bytes] = []
    _render_into(node, out)
    return b"".join(out).decode("utf-8")


class SyntaxTree:
    """One parsed file: the original bytes plus the owned root node."""

    def __init__(self, source: bytes, root: Node, path: Optional[str] = None, language: str = "") -> None:
        self.source = source
        self.root = root
        self.path = path
        self.language = language
        self._lines: Optional[List[str]] = None

    @property
    def modified(self) -> bool:
        return self.root.dirty

    @property
    def lines(self) -> List[str]:
        if self._lines is None:
            self._lines = self.source.decode("utf-8").split("\n")
        return self._lines

    def line_indent(self, row: Optional[int]) -> str:
        """Leading whitespace of an original source line."""
        if row is None or row >= len(self.lines):
            return ""
        line = self.lines[row]
        return line[: len(line) - len(line.lstrip(" \t"))]

    def print(self) -> str:
        src = self.source
        root = self.root
        if not root.dirty:
            return src.decode("utf-8")
        return src[: root.start].decode("utf-8") + render(root) + src[root.end:].decode("utf-8")


# ── Traversal ────────────────────────────────────────────────────────────────

Visitor = Callable[[Node, Any], Tuple[Any, Any]]


def rewrite(root: Node, visit: Visitor, context: Any = None) -> None:
    """Pre-order walk that lets ``visit`` replace nodes in place.

    ``visit(node, ctx)`` returns ``(result, child_ctx)``. ``result`` is ``None``
    to keep the node, a replacement ``Node`` (the walk continues into the
    replacement's children), or ``SKIP`` to leave the subtree alone. Nodes that
    an earlier replacement detached are not visited.
    """
    stack: List[Tuple[Node, Any]] = [(root, context)]
    while stack:
        node, ctx = stack.pop()
        if node is not root and node.parent is None:
            continue
        result, child_ctx = visit(node, ctx)
        if result is SKIP:
            continue
        if result is not None and result is not node:
            if result.parent is None:
                node.replace_with(result)
            node = result
        for child in reversed(node.children):
            stack.append((child, child_ctx))


def iter_nodes(node: Node) -> Iterator[Node]:
    """Pre-order iteration over ``node`` and its descendants."""
    stack = [node]
    while stack:
        n = stack.pop()
        yield n
        stack.extend(reversed(n.children))


def find_first(node: Node, predicate: Callable[[Node], bool]) -> Optional[Node]:
    for n in iter_nodes(node):
        if predicate(n):
            return n
    return None
