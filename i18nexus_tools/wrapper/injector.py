# -*- coding: utf-8 -*-
"""
Binding injector.

Puts the statement that obtains ``t`` at the top of a modified component:

    client:  const { t } = useTranslation();
    server:  const { t } = await getServerTranslation();   (function made async)
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..syntax.tree import Node, SyntaxTree
from .components import ComponentContext, binds_name, calls_function, is_async

logger = logging.getLogger(__name__)

CLIENT = "client"
SERVER = "server"

INDENT_UNIT = "  "


def choose_strategy(mode: Optional[str], server_bound: bool) -> str:
    """An explicit mode wins; otherwise server-bound functions use the server strategy."""
    if mode == SERVER:
        return SERVER
    if mode == CLIENT:
        return CLIENT
    return SERVER if server_bound else CLIENT


def client_statement(hook: str, function: str = "t") -> str:
    return f"const {{ {function} }} = {hook}();"


def server_statement(server_function: str, function: str = "t") -> str:
    return f"const {{ {function} }} = await {server_function}();"


def insert_first_statement(tree: SyntaxTree, block: Node, statement: str) -> Node:
    """Insert ``statement`` right after the opening brace of ``block``."""
    brace = block.children[0]
    following = block.children[1] if len(block.children) > 1 else None
    if following is None:
        text = f" {statement} "
    elif following.start_row is not None and following.start_row != brace.start_row:
        indent = tree.line_indent(following.start_row)
        if following.type == "}":
            indent += INDENT_UNIT
        text = f"\n{indent}{statement}"
    elif following.type == "}":
        text = f" {statement} "
    else:
        text = f" {statement}"
    return block.insert_child(1, Node.leaf(text))


def ensure_async(fn: Node) -> bool:
    if is_async(fn):
        return False
    fn.insert_child(0, Node.leaf("async "))
    return True


def convert_concise_body(tree: SyntaxTree, fn: Node, statement: str) -> Node:
    """``() => expr`` becomes ``() => { <statement> return expr; }``."""
    body = fn.child_by_field("body")
    indent = tree.line_indent(fn.start_row)
    inner = indent + INDENT_UNIT
    return body.wrap(
        ["{\n", inner, statement, "\n", inner, "return "],
        [";\n", indent, "}"],
        type="statement_block",
    )


def inject_binding(
    tree: SyntaxTree,
    ctx: ComponentContext,
    *,
    mode: Optional[str],
    client_hook: str,
    server_function: str,
    translation_function: str = "t",
    injected: Iterable[Node] = (),
) -> Optional[str]:
    """Inject the translation binding into ``ctx.node``.

    Returns the strategy used, or None when nothing was inserted.
    """
    fn = ctx.node
    if binds_name(fn, translation_function, injected):
        ctx.binds_translation = True
        logger.debug("%s already binds %s; skipping injection", ctx.name, translation_function)
        return None

    strategy = choose_strategy(mode, ctx.server_bound)
    body = fn.child_by_field("body")
    if body is None:
        return None
    is_block = body.type == "statement_block"

    if strategy == CLIENT:
        if not is_block:
            return None
        if calls_function(body, client_hook):
            logger.debug("%s already calls %s", ctx.name, client_hook)
            return None
        insert_first_statement(tree, body, client_statement(client_hook, translation_function))
    else:
        statement = server_statement(server_function, translation_function)
        ensure_async(fn)
        if is_block:
            insert_first_statement(tree, body, statement)
        else:
            convert_concise_body(tree, fn, statement)

    ctx.injected = strategy
    return strategy
