# -*- coding: utf-8 -*-
"""Finding translation keys: ``t("key")`` / ``i18n.t("key", { defaultValue: "..." })``."""
from __future__ import annotations

import dataclasses
from typing import List, Optional

from ..syntax.tree import Node, SyntaxTree, iter_nodes
from ..wrapper.classifier import is_translation_call, string_value
from ..wrapper.constants import TRANSLATION_FUNCTION

DEFAULT_VALUE = "defaultValue"


@dataclasses.dataclass
class ExtractedKey:
    key: str
    default_value: Optional[str] = None
    file_path: Optional[str] = None
    line_number: Optional[int] = None


def _arguments(call: Node) -> List[Node]:
    args = call.child_by_field("arguments")
    if args is None or args.type != "arguments":
        return []
    return [a for a in args.named_children if a.type != "comment"]


def get_default_value(args: List[Node]) -> Optional[str]:
    """``defaultValue`` string from an options object passed as the second argument."""
    if len(args) < 2 or args[1].type != "object":
        return None
    for prop in args[1].named_children:
        if prop.type != "pair":
            continue
        key = prop.child_by_field("key")
        value = prop.child_by_field("value")
        if key is None or value is None or value.type != "string":
            continue
        name = string_value(key) if key.type == "string" else key.text
        if name == DEFAULT_VALUE:
            return string_value(value)
    return None


def extract_translation_key(
    call: Node,
    file_path: Optional[str] = None,
    *,
    include_file_paths: bool = False,
    include_line_numbers: bool = False,
    function: str = TRANSLATION_FUNCTION,
) -> Optional[ExtractedKey]:
    if not is_translation_call(call, function):
        return None
    args = _arguments(call)
    if not args or args[0].type != "string":
        return None
    return ExtractedKey(
        key=string_value(args[0]),
        default_value=get_default_value(args),
        file_path=file_path if include_file_paths else None,
        line_number=(call.start_row or 0) + 1 if include_line_numbers else None,
    )


def extract_keys(tree: SyntaxTree, **options) -> List[ExtractedKey]:
    """Every translation key in ``tree`` in source order (duplicates included)."""
    out = []
    for node in iter_nodes(tree.root):
        if node.type != "call_expression":
            continue
        found = extract_translation_key(node, tree.path, **options)
        if found is not None:
            out.append(found)
    return out
