# -*- coding: utf-8 -*-
"""Names, markers and patterns used by the translation wrapper."""
from __future__ import annotations

import re

# ── Symbols ──────────────────────────────────────────────────────────────────
TRANSLATION_FUNCTION = "t"
CLIENT_TRANSLATION_HOOK = "useTranslation"
SERVER_TRANSLATION_FUNCTION = "getServerTranslation"
DEFAULT_IMPORT_SOURCE = "i18nexus"
CLIENT_DIRECTIVE = "use client"

# ── Markers ──────────────────────────────────────────────────────────────────
I18N_IGNORE = "i18n-ignore"
IGNORE_SCAN_LINES = 2  # lines above the literal scanned for the marker

# ── Interpolation ────────────────────────────────────────────────────────────
EXPR_PREFIX = "expr"
INTERPOLATION_OPEN = "{{"
INTERPOLATION_CLOSE = "}}"
MEMBER_SEPARATOR = "_"

# ── Patterns ─────────────────────────────────────────────────────────────────
HANGUL_PATTERN = "[가-힣]"
COMPONENT_NAME_RE = re.compile(r"^[A-Z]")
HOOK_NAME_RE = re.compile(r"^use[A-Z]")

# ── Node types (tree-sitter javascript/typescript grammars) ──────────────────
FUNCTION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "generator_function",
    "arrow_function",
    "method_definition",
})

# Functions whose name can make them component-like.
BINDABLE_FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "generator_function"})
DECLARED_FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

# Strings under these nodes are types, not runtime values.
TYPE_CONTEXT_TYPES = frozenset({
    "type_annotation",
    "literal_type",
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
    "type_arguments",
    "type_parameters",
    "ambient_declaration",
    "index_signature",
})

# A string in one of these fields names something rather than displaying it.
NAME_FIELDS = frozenset({"key", "name", "property", "source", "alias", "label"})

JSX_TEXT_TYPES = frozenset({"jsx_text", "html_character_reference"})
